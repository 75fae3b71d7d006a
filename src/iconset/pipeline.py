import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from tqdm import tqdm

from .cleanup import cleanup_svg
from .colors import current_color_callback, parse_colors
from .icon_set import IconEntry, IconSet, entry_from_svg
from .importer import import_directory
from .optimization import run_optimizer
from .svg import SVG
from .util import _write_text

logger = logging.getLogger(__name__)


def process_icon(
    svg: SVG,
    cleanup_opts: Dict[str, Any] | None = None,
    color_opts: Dict[str, Any] | None = None,
    optimizer_opts: Dict[str, Any] | None = None,
) -> SVG:
    """Clean, recolor and optimise one icon. Errors propagate to the caller."""
    cleanup_opts = cleanup_opts or {}
    color_opts = color_opts or {}
    optimizer_opts = optimizer_opts or {}

    cleanup_svg(svg, **cleanup_opts)

    color_opts = dict(color_opts)
    color_opts.setdefault("default_color", "currentColor")
    color_opts.setdefault("callback", current_color_callback)
    parse_colors(svg, **color_opts)

    return run_optimizer(svg, **optimizer_opts)


def transform_icon_set(
    icon_set: IconSet,
    cleanup_opts: Dict[str, Any] | None = None,
    color_opts: Dict[str, Any] | None = None,
    optimizer_opts: Dict[str, Any] | None = None,
    quiet: bool = False,
) -> int:
    """
    Run :func:`process_icon` on every icon of *icon_set*.

    Icons that cannot be rebuilt or fail any step are dropped and logged;
    everything else is kept. The surviving entries replace the set's
    collection in one go. Returns the number of dropped icons.
    """
    survivors: Dict[str, IconEntry] = {}
    dropped = 0

    for name in tqdm(icon_set.names(), desc="Processing icons", unit="icon", disable=quiet):
        if icon_set.entry_type(name) != "icon":
            survivors[name] = icon_set.entries[name]
            continue

        svg = icon_set.to_svg(name)
        if svg is None:
            logger.warning(f"Invalid icon removed: {name}")
            dropped += 1
            continue

        try:
            entry = entry_from_svg(process_icon(svg, cleanup_opts, color_opts, optimizer_opts))
        except Exception as e:
            logger.error(f"Failed to process {name}: {e}")
            dropped += 1
            continue

        entry.hidden = icon_set.entries[name].hidden
        survivors[name] = entry

    icon_set.replace_entries(survivors)
    return dropped


def dump_icon_set(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_icon_set(data: Dict[str, Any], output_dir: Union[str, Path], prefix: str) -> Path:
    """Write *data* to ``<output_dir>/<prefix>.json``, replacing any old file."""
    return _write_text(dump_icon_set(data), Path(output_dir) / f"{prefix}.json")


async def run(
    source_dir: Union[str, Path],
    output_dir: Union[str, Path],
    prefix: str,
    info: Dict[str, Any] | None = None,
    cleanup_opts: Dict[str, Any] | None = None,
    color_opts: Dict[str, Any] | None = None,
    optimizer_opts: Dict[str, Any] | None = None,
    quiet: bool = False,
) -> Path:
    """
    Import, transform, export and write one icon set. Returns the output path.
    """
    icon_set = await asyncio.to_thread(import_directory, source_dir, prefix=prefix)
    if info:
        icon_set.info = info

    transform_icon_set(
        icon_set,
        cleanup_opts=cleanup_opts,
        color_opts=color_opts,
        optimizer_opts=optimizer_opts,
        quiet=quiet,
    )

    data = icon_set.export()
    output_path = await asyncio.to_thread(write_icon_set, data, output_dir, icon_set.prefix)

    logger.info(f"Exported {icon_set.count()} icons to {output_path}")
    return output_path


__all__ = [
    "dump_icon_set",
    "process_icon",
    "run",
    "transform_icon_set",
    "write_icon_set",
]
