# importer.py
import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Union

from .icon_set import IconSet
from .svg import SVG, SVGError

logger = logging.getLogger(__name__)

_VALID_NAME = re.compile(r'^[a-z0-9]+(-[a-z0-9]+)*$')


def cleanup_icon_name(name: str) -> str:
    """
    Turn a file name into an icon name: 'Arrow_Left.v2' -> 'arrow-left-v2'.
    """
    name = name.lower()
    name = re.sub(r'[\s_.:/\\]+', '-', name)
    name = re.sub(r'[^a-z0-9-]', '', name)
    name = re.sub(r'-{2,}', '-', name)
    return name.strip('-')


def _default_keyword(path: Path, root: Path) -> str:
    rel = path.relative_to(root).with_suffix('')
    return cleanup_icon_name('-'.join(rel.parts))


def _find_svg_files(root: Path, include_subdirs: bool) -> List[Path]:
    pattern = root.rglob('*') if include_subdirs else root.glob('*')
    return sorted(p for p in pattern if p.is_file() and p.suffix.lower() == '.svg')


def import_directory(
    path: Union[str, Path],
    prefix: str,
    include_subdirs: bool = True,
    keyword: Optional[Callable[[Path], Optional[str]]] = None,
    ignore_import_errors: Union[bool, str] = "warn",
) -> IconSet:
    """
    Import every ``.svg`` file under *path* into a new :class:`IconSet`.

    :param path: Directory to scan.
    :param prefix: Icon set prefix.
    :param include_subdirs: Recurse into subdirectories; nested files are
                            named ``<subdir>-<file>``.
    :param keyword: Optional callable mapping a file path to an icon name.
                    Returning a falsy value skips the file.
    :param ignore_import_errors: What to do with files that fail to parse:
                                 ``"warn"`` logs and skips, ``True`` skips
                                 silently, ``False`` raises.
    """
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"Icon directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    icon_set = IconSet(prefix)
    for file in _find_svg_files(root, include_subdirs):
        name = keyword(file) if keyword else _default_keyword(file, root)
        if not name or not _VALID_NAME.match(name):
            logger.warning(f"Skipping {file}: invalid icon name {name!r}")
            continue
        if name in icon_set.entries:
            logger.warning(f"Skipping {file}: duplicate icon name {name!r}")
            continue

        try:
            svg = SVG(file.read_text(encoding="utf-8"))
        except (SVGError, UnicodeDecodeError) as e:
            if ignore_import_errors is False:
                raise
            if ignore_import_errors == "warn":
                logger.warning(f"Invalid icon removed: {name} ({e})")
            continue

        icon_set.from_svg(name, svg)

    logger.debug(f"Imported {icon_set.count()} icons from {root}")
    return icon_set


__all__ = [
    "cleanup_icon_name",
    "import_directory",
]
