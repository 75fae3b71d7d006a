from .icon_set import IconEntry, IconSet
from .importer import import_directory
from .pipeline import run, transform_icon_set, write_icon_set
from .svg import SVG, SVGError

__all__ = [
    "IconEntry",
    "IconSet",
    "SVG",
    "SVGError",
    "import_directory",
    "run",
    "transform_icon_set",
    "write_icon_set",
]
