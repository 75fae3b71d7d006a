# cleanup.py
import re

import svgelements

from .svg import SVG, SVG_NS, XLINK_NS, XML_NS, format_number, namespace_of, remove_namespaces

# Namespaces that may stay on attributes without an extra declaration
_KEPT_NAMESPACES = {None, SVG_NS, XML_NS, XLINK_NS}

SHAPE_TAGS = ('rect', 'circle', 'ellipse', 'line', 'polyline', 'polygon')


def my_float(x):
    return None if x is None else float(x)


def is_shape(tag):
    """
    Returns True if the tag is a basic shape that can become a <path>.
    """
    return tag in SHAPE_TAGS


def strip_svg_namespace(root):
    """
    Strip the SVG namespace from tags and rewrite xlink:href to href.
    The serializer writes a single xmlns back on the root.
    """
    for elem in root.iter():
        if namespace_of(elem.tag) == SVG_NS:
            elem.tag = remove_namespaces(elem.tag)
        href = f'{{{XLINK_NS}}}href'
        if href in elem.attrib:
            value = elem.attrib.pop(href)
            elem.attrib.setdefault('href', value)
    for key in [k for k in root.attrib if k.startswith('xmlns')]:
        root.attrib.pop(key)


def drop_foreign_namespaces(root):
    """
    Drop elements and attributes from foreign namespaces (editor data),
    so nothing but the SVG namespace needs declaring.
    """
    for parent in list(root.iter()):
        for child in list(parent):
            if namespace_of(child.tag) not in (None, SVG_NS):
                parent.remove(child)
        for key in list(parent.attrib):
            if namespace_of(key) not in _KEPT_NAMESPACES:
                parent.attrib.pop(key)


def _pop_attrs(node, *names):
    for name in names:
        node.attrib.pop(name, None)


def _points(value):
    pts = [float(x) for x in re.split(r'[\s,]+', value.strip()) if x]
    if len(pts) % 2:
        raise ValueError(f"odd number of coordinates in points: {value!r}")
    return list(zip(pts[0::2], pts[1::2]))


def shape_to_path_data(node) -> str:
    """
    Return path data equivalent to a basic shape element.
    """
    tag = remove_namespaces(node.tag)
    attrib = node.attrib

    if tag == 'rect':
        # Convert rect (with optional rx/ry) to path
        x = my_float(attrib.get('x', 0))
        y = my_float(attrib.get('y', 0))
        width = my_float(attrib.get('width', 0))
        height = my_float(attrib.get('height', 0))
        rx = my_float(attrib.get('rx', None))
        ry = my_float(attrib.get('ry', None))

        if rx is None and ry is not None:
            rx = ry
        elif rx is not None and ry is None:
            ry = rx
        elif rx is None and ry is None:
            rx = ry = 0

        segments = svgelements.Rect(x, y, width, height, rx, ry).segments()
        return str(svgelements.Path(segments))

    if tag in ('circle', 'ellipse'):
        cx = float(attrib.get('cx', 0))
        cy = float(attrib.get('cy', 0))
        if tag == 'circle':
            r = float(attrib['r'])
            segments = svgelements.Circle(cx, cy, r).segments()
        else:
            rx = float(attrib['rx'])
            ry = float(attrib['ry'])
            segments = svgelements.Ellipse(cx, cy, rx, ry).segments()
        return str(svgelements.Path(segments))

    if tag == 'line':
        x1 = float(attrib.get('x1', 0))
        y1 = float(attrib.get('y1', 0))
        x2 = float(attrib.get('x2', 0))
        y2 = float(attrib.get('y2', 0))
        return f"M{format_number(x1)} {format_number(y1)}L{format_number(x2)} {format_number(y2)}"

    if tag in ('polyline', 'polygon'):
        points = _points(attrib.get('points', ''))
        if not points:
            raise ValueError(f"<{tag}> without points")
        path_str = 'M' + 'L'.join(f"{format_number(x)} {format_number(y)}" for x, y in points)
        if tag == 'polygon':
            path_str += 'Z'
        return path_str

    raise ValueError(f"tag {tag} is not a basic shape")


_GEOMETRY_ATTRS = {
    'rect': ('x', 'y', 'width', 'height', 'rx', 'ry'),
    'circle': ('cx', 'cy', 'r'),
    'ellipse': ('cx', 'cy', 'rx', 'ry'),
    'line': ('x1', 'y1', 'x2', 'y2'),
    'polyline': ('points',),
    'polygon': ('points',),
}


def convert_shapes_to_paths(root):
    """
    Replace rect/circle/ellipse/line/polyline/polygon with <path>.
    Paint and presentation attributes stay on the node.
    """
    for node in root.iter():
        tag = remove_namespaces(node.tag) if isinstance(node.tag, str) else None
        if not is_shape(tag):
            continue
        d = shape_to_path_data(node)
        _pop_attrs(node, *_GEOMETRY_ATTRS[tag])
        node.tag = f'{{{SVG_NS}}}path' if namespace_of(node.tag) == SVG_NS else 'path'
        node.set('d', d)


def cleanup_svg(
    svg: SVG,
    remove_xmlns: bool = True,
    remove_unused_ns: bool = True,
    convert_shape_to_path: bool = True,
) -> SVG:
    """
    Structural cleanup of *svg*, in place. Returns the same document.

    Raises ``ValueError`` when a shape carries geometry that cannot be
    converted (percentages, missing radius, ...).
    """
    root = svg.root
    if remove_unused_ns:
        drop_foreign_namespaces(root)
    if convert_shape_to_path:
        convert_shapes_to_paths(root)
    if remove_xmlns:
        strip_svg_namespace(root)
    return svg


__all__ = [
    "cleanup_svg",
    "convert_shapes_to_paths",
    "shape_to_path_data",
]
