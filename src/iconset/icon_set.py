# icon_set.py
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

from .svg import SVG, SVGError, ViewBox, build_svg

logger = logging.getLogger(__name__)

ICON_TYPES = ("icon", "variation", "alias")

# Iconify defaults, omitted from exported icon objects
DEFAULT_ICON_PROPS = {
    "left": 0,
    "top": 0,
    "width": 16,
    "height": 16,
    "rotate": 0,
    "hFlip": False,
    "vFlip": False,
    "hidden": False,
}


@dataclass
class IconEntry:
    type: str = "icon"
    body: str = ""
    left: float = 0
    top: float = 0
    width: float = 16
    height: float = 16
    rotate: int = 0
    h_flip: bool = False
    v_flip: bool = False
    hidden: bool = False
    parent: Optional[str] = None
    props: Dict[str, Any] = field(default_factory=dict)

    @property
    def view_box(self) -> ViewBox:
        return ViewBox(self.left, self.top, self.width, self.height)


def entry_from_svg(svg: SVG) -> IconEntry:
    box = svg.view_box
    return IconEntry(
        body=svg.body(),
        left=box.left,
        top=box.top,
        width=box.width,
        height=box.height,
    )


def _number(value):
    return int(value) if float(value).is_integer() else value


def _export_props(entry: IconEntry) -> Dict[str, Any]:
    data = {
        "left": _number(entry.left),
        "top": _number(entry.top),
        "width": _number(entry.width),
        "height": _number(entry.height),
        "rotate": entry.rotate,
        "hFlip": entry.h_flip,
        "vFlip": entry.v_flip,
        "hidden": entry.hidden,
    }
    return {k: v for k, v in data.items() if DEFAULT_ICON_PROPS[k] != v}


class IconSet:
    """
    A prefixed collection of icons and aliases, exported as Iconify JSON.
    """

    def __init__(self, prefix: str, info: Optional[Dict[str, Any]] = None):
        self.prefix = prefix
        self.info = info
        self.entries: Dict[str, IconEntry] = {}

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def entry_type(self, name: str) -> Optional[str]:
        entry = self.entries.get(name)
        return entry.type if entry else None

    def names(self, types: Iterable[str] = ICON_TYPES) -> List[str]:
        """Snapshot of entry names, optionally filtered by type."""
        types = tuple(types)
        return [name for name, entry in self.entries.items() if entry.type in types]

    def count(self) -> int:
        """Number of icons, aliases excluded."""
        return len(self.names(("icon",)))

    def resolve(self, name: str) -> Optional[IconEntry]:
        """Follow aliases down to the icon entry; None for broken chains."""
        seen = set()
        entry = self.entries.get(name)
        while entry is not None and entry.type != "icon":
            if name in seen:
                return None
            seen.add(name)
            name = entry.parent
            entry = self.entries.get(name)
        return entry

    # ------------------------------------------------------------------
    # SVG conversion
    # ------------------------------------------------------------------

    def from_svg(self, name: str, svg: SVG) -> None:
        """Store *svg* as icon *name*, replacing any previous entry."""
        previous = self.entries.get(name)
        entry = entry_from_svg(svg)
        if previous is not None and previous.type == "icon":
            entry.hidden = previous.hidden
        self.entries[name] = entry

    def to_svg(self, name: str) -> Optional[SVG]:
        """Build an SVG document for icon *name*; None if missing or unparsable."""
        entry = self.entries.get(name)
        if entry is None or entry.type != "icon" or not entry.body:
            return None
        try:
            return SVG(build_svg(entry.body, entry.view_box))
        except SVGError as e:
            logger.debug(f"Cannot build SVG for {name}: {e}")
            return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_alias(self, name: str, parent: str, **transformations) -> bool:
        """Add alias *name* pointing to *parent*. Transformations make it a variation."""
        if parent not in self.entries or name == parent:
            return False
        entry = IconEntry(
            type="variation" if transformations else "alias",
            parent=parent,
            rotate=transformations.pop("rotate", 0),
            h_flip=transformations.pop("h_flip", False),
            v_flip=transformations.pop("v_flip", False),
        )
        entry.props.update(transformations)
        self.entries[name] = entry
        return True

    def remove(self, name: str, remove_dependencies: bool = True) -> int:
        """Remove *name*; aliases that depend on it go too. Returns removed count."""
        if name not in self.entries:
            return 0
        del self.entries[name]
        removed = 1
        if remove_dependencies:
            removed += self._drop_orphans()
        return removed

    def replace_entries(self, entries: Dict[str, IconEntry]) -> None:
        """Swap in a new collection, dropping aliases left without a parent."""
        self.entries = dict(entries)
        self._drop_orphans()

    def _drop_orphans(self) -> int:
        orphans = [
            name for name in self.names(("variation", "alias"))
            if self.resolve(name) is None
        ]
        for name in orphans:
            del self.entries[name]
        return len(orphans)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"prefix": self.prefix}
        if self.info:
            data["info"] = dict(self.info)

        icons: Dict[str, Any] = {}
        aliases: Dict[str, Any] = {}
        for name, entry in self.entries.items():
            if entry.type == "icon":
                item = {"body": entry.body}
                item.update(_export_props(entry))
                icons[name] = item
            else:
                item = {"parent": entry.parent}
                item.update(_export_props(replace(entry, width=16, height=16, left=0, top=0)))
                item.update(entry.props)
                aliases[name] = item

        data["icons"] = icons
        if aliases:
            data["aliases"] = aliases
        return data

    def __len__(self):
        return len(self.entries)


__all__ = [
    "DEFAULT_ICON_PROPS",
    "ICON_TYPES",
    "IconEntry",
    "IconSet",
    "entry_from_svg",
]
