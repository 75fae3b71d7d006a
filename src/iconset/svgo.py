# svgo.py
import json
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, List, Sequence


class OptimizerError(RuntimeError):
    """Raised when an optimizer backend cannot produce output."""


def svgo_available() -> bool:
    """Return *True* if the `svgo` CLI is in PATH."""
    return shutil.which("svgo") is not None


def _ensure_svgo() -> None:
    if not svgo_available():
        raise OptimizerError("'svgo' not found. Install with: npm i -g svgo")


def render_config(plugins: Sequence[Any]) -> str:
    """Render an ``svgo.config.mjs`` module for *plugins*."""
    return "export default " + json.dumps({"plugins": list(plugins)}, indent=2) + ";\n"


def _build_cmd(src: Path, dst: Path, config: Path | None) -> List[str]:
    cmd = ["svgo", str(src), "-o", str(dst)]
    if config is not None:
        cmd += ["--config", str(config)]
    return cmd


def optimize_svg(svg_text: str, plugins: Sequence[Any] | None = None) -> str:
    """
    Run the SVGO command on *svg_text* and return the optimized markup.

    :param svg_text: SVG document.
    :param plugins: SVGO plugin list. If provided, it is written to a temporary
                    ``svgo.config.mjs`` and passed with ``--config``.
    """
    _ensure_svgo()

    with tempfile.TemporaryDirectory(prefix="svgo_tmp_") as tmpdir:
        src = Path(tmpdir) / "icon.svg"
        dst = Path(tmpdir) / "icon.min.svg"
        src.write_text(svg_text, encoding="utf-8")

        config = None
        if plugins is not None:
            config = Path(tmpdir) / "svgo.config.mjs"
            config.write_text(render_config(plugins), encoding="utf-8")

        result = subprocess.run(
            _build_cmd(src, dst, config),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0 or not dst.exists():
            raise OptimizerError(f"svgo failed: {result.stderr.strip()}")

        # Read the optimized file while tmpdir still exists
        return dst.read_text(encoding="utf-8")


__all__ = [
    "OptimizerError",
    "optimize_svg",
    "render_config",
    "svgo_available",
]
