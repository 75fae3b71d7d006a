# svg.py
import copy
import re
import xml.etree.ElementTree as etree
from typing import NamedTuple

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"


class SVGError(ValueError):
    """Raised when markup is not a usable SVG document."""


class ViewBox(NamedTuple):
    left: float
    top: float
    width: float
    height: float


def remove_namespaces(s):
    """
    Remove XML namespaces: {some-namespace}tag -> tag
    """
    return re.sub('{.*}', '', s)


def namespace_of(s):
    """
    Return the namespace URI of a qualified name, or None.
    """
    if s.startswith('{'):
        return s[1:].split('}', 1)[0]
    return None


def parse_float(s):
    """
    Attempt to parse a float from a string that may contain letters
    (e.g. '100px', '12pt'). We keep only digits, '.' and minus sign.
    """
    return float(''.join(i for i in s if (not i.isalpha())))


def format_number(value: float) -> str:
    """Shortest plain representation: 24.0 -> '24', 0.5 -> '0.5'."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def postfix_svg_root(root):
    """
    Remove any namespace from the tags (e.g., '{http://www.w3.org/2000/svg}svg' -> 'svg')
    And set the xmlns attribute back to "http://www.w3.org/2000/svg".
    """
    for elem in root.iter():
        if isinstance(elem.tag, str) and '}' in elem.tag:
            elem.tag = elem.tag.split('}', 1)[1]
    root.set("xmlns", SVG_NS)


class SVG:
    """
    A parsed SVG document.

    Cleanup, color and optimizer passes mutate ``root`` in place or hand back
    a new instance; ``body()`` and ``view_box`` are what an icon set stores.
    """

    def __init__(self, content: str):
        if not content or not content.strip():
            raise SVGError("empty SVG content")
        try:
            root = etree.fromstring(content)
        except etree.ParseError as e:
            raise SVGError(f"cannot parse SVG: {e}") from e
        if remove_namespaces(root.tag) != 'svg':
            raise SVGError(f"root element is <{remove_namespaces(root.tag)}>, expected <svg>")
        self.root = root
        # Fail early if the document has no usable dimensions
        self.view_box

    @property
    def view_box(self) -> ViewBox:
        attrib = self.root.attrib
        view_box = attrib.get('viewBox', attrib.get('viewbox'))
        try:
            if view_box is not None:
                values = [parse_float(v) for v in view_box.replace(",", " ").split()]
                if len(values) != 4:
                    raise SVGError(f"invalid viewBox: {view_box!r}")
                return ViewBox(*values)
            # If no viewBox, rely on width/height
            if 'width' in attrib and 'height' in attrib:
                return ViewBox(0.0, 0.0, parse_float(attrib['width']), parse_float(attrib['height']))
        except ValueError as e:
            if isinstance(e, SVGError):
                raise
            raise SVGError(f"invalid dimensions: {e}") from e
        raise SVGError("SVG has neither viewBox nor width/height")

    def body(self) -> str:
        """
        Inner markup of the root element, without namespace prefixes.

        Presentation attributes set on the root (fill, stroke, ...) would be
        lost with it, so they move onto a <g> wrapping the children.
        """
        postfix_svg_root(self.root)
        parts = [self.root.text or '']
        for child in self.root:
            parts.append(etree.tostring(child, encoding="unicode"))
        inner = ''.join(parts).strip()

        attrs = root_presentation_attrs(self.root)
        if not attrs or not inner:
            return inner
        group = etree.Element('g', attrs)
        group.text = self.root.text
        group.extend(copy.deepcopy(list(self.root)))
        return etree.tostring(group, encoding="unicode").strip()

    def to_string(self) -> str:
        postfix_svg_root(self.root)
        return etree.tostring(self.root, encoding="unicode")


# Root attributes describing the document itself rather than how it paints
_ROOT_ONLY_ATTRS = {
    'xmlns', 'version', 'baseProfile', 'id',
    'x', 'y', 'width', 'height', 'viewBox', 'viewbox',
    'preserveAspectRatio', 'zoomAndPan', 'enable-background',
    'contentScriptType', 'contentStyleType',
}


def root_presentation_attrs(root):
    """Attributes of the root <svg> that children inherit."""
    return {
        key: value for key, value in root.attrib.items()
        if key not in _ROOT_ONLY_ATTRS and not key.startswith(('{', 'xmlns'))
    }


def build_svg(body: str, view_box: ViewBox) -> str:
    """Wrap icon body markup into a standalone document."""
    box = " ".join(format_number(v) for v in view_box)
    width = format_number(view_box.width)
    height = format_number(view_box.height)
    return (
        f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" '
        f'width="{width}" height="{height}" viewBox="{box}">{body}</svg>'
    )


etree.register_namespace("xlink", XLINK_NS)


__all__ = [
    "SVG",
    "SVGError",
    "ViewBox",
    "build_svg",
    "format_number",
    "parse_float",
    "postfix_svg_root",
    "remove_namespaces",
    "root_presentation_attrs",
]
