# optimization.py
from typing import Any, Dict, Sequence, Tuple

from scour import scour

from . import svgo
from .svg import SVG
from .svgo import OptimizerError

DEFAULT_PLUGINS = [
    {"name": "preset-default", "params": {"overrides": {"removeViewBox": False}}},
    "sortAttrs",
]

# Output formatting; enable_viewboxing stays off so the viewBox is never rewritten
_SCOUR_FORMAT_OPTS: Dict[str, Any] = dict(
    strip_xml_prolog=True,
    enable_viewboxing=False,
    indent_type="none",
    newlines=False,
    quiet=True,
)

# What "preset-default" turns on
_SCOUR_PRESET_OPTS: Dict[str, Any] = dict(
    remove_metadata=True,
    remove_descriptive_elements=True,
    strip_comments=True,
    strip_ids=True,
    shorten_ids=True,
)

# preset-default overrides scour can honour, and the options they switch
_PRESET_OVERRIDES = {
    "removeMetadata": ("remove_metadata",),
    "removeComments": ("strip_comments",),
    "removeTitle": ("remove_descriptive_elements",),
    "removeDesc": ("remove_descriptive_elements",),
    "cleanupIds": ("strip_ids", "shorten_ids"),
}


def _plugin_spec(plugin) -> Tuple[str, bool, Dict[str, Any]]:
    if isinstance(plugin, str):
        return plugin, True, {}
    return plugin["name"], plugin.get("active", True), plugin.get("params") or {}


def scour_options_for(plugins: Sequence[Any]) -> Dict[str, Any]:
    """
    Translate an SVGO plugin list into scour options.

    scour always keeps the viewBox and always writes attributes in sorted
    order, so ``removeViewBox`` may only be disabled and ``sortAttrs`` only
    enabled. Anything scour cannot apply raises :class:`OptimizerError`.
    """
    options = {key: False for key in _SCOUR_PRESET_OPTS}
    for plugin in plugins:
        name, active, params = _plugin_spec(plugin)
        if name == "preset-default":
            if not active:
                continue
            options.update(_SCOUR_PRESET_OPTS)
            for key, enabled in params.get("overrides", {}).items():
                if key == "removeViewBox" and enabled is False:
                    continue
                if key not in _PRESET_OVERRIDES:
                    raise OptimizerError(f"scour backend cannot apply preset override {key!r}={enabled!r}")
                for option in _PRESET_OVERRIDES[key]:
                    options[option] = bool(enabled)
        elif name == "removeViewBox":
            if active:
                raise OptimizerError("scour backend always keeps the viewBox")
        elif name == "sortAttrs":
            if not active:
                raise OptimizerError("scour backend always sorts attributes")
        else:
            raise OptimizerError(f"scour backend cannot apply plugin {name!r}")
    return options


def _scour_options(**opts):
    options = scour.parse_args([])
    for key, value in {**_SCOUR_FORMAT_OPTS, **opts}.items():
        setattr(options, key, value)
    return options


def optimize_with_scour(svg_text: str, **opts) -> str:
    options = _scour_options(**opts)
    try:
        return scour.scourString(svg_text, options)
    except Exception as e:
        raise OptimizerError(f"scour failed: {type(e).__name__}: {e}") from e


def run_optimizer(
    svg: SVG,
    backend: str = "scour",
    plugins: Sequence[Any] | None = None,
) -> SVG:
    """
    Optimise **svg** and return a new document.

    ``backend`` is ``"scour"`` (in-process, ``plugins`` translated by
    :func:`scour_options_for`) or ``"svgo"`` (CLI, ``plugins`` passed
    verbatim). Raises :class:`OptimizerError` when the backend fails or
    cannot apply ``plugins``, and :class:`~iconset.svg.SVGError` when its
    output does not parse.
    """
    plugins = DEFAULT_PLUGINS if plugins is None else plugins
    svg_text = svg.to_string()

    if backend == "scour":
        result = optimize_with_scour(svg_text, **scour_options_for(plugins))
    elif backend == "svgo":
        result = svgo.optimize_svg(svg_text, plugins)
    else:
        raise ValueError(f"Unknown optimizer backend: {backend}")

    return SVG(result)


__all__ = [
    "DEFAULT_PLUGINS",
    "OptimizerError",
    "optimize_with_scour",
    "run_optimizer",
    "scour_options_for",
]
