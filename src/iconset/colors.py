# colors.py
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import cssutils
from PIL import ImageColor

from .svg import SVG, remove_namespaces

cssutils.log.setLevel(logging.ERROR)

COLOR_ATTRIBUTES = ('fill', 'stroke', 'stop-color', 'flood-color', 'lighting-color', 'color')

# Shapes that paint with an implicit black fill
_FILLED_TAGS = ('path', 'rect', 'circle', 'ellipse', 'polygon', 'text', 'tspan', 'textPath')
# Containers whose content is not painted directly
_UNPAINTED_TAGS = ('defs', 'mask', 'clipPath', 'pattern', 'marker', 'symbol')


@dataclass(frozen=True)
class Color:
    type: str
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: float = 1.0


ColorCallback = Callable[[str, str, Optional[Color]], str]


def parse_color(value: str) -> Optional[Color]:
    """
    Parse a CSS color string. Returns None for anything that is not a plain
    color (gradients, ``inherit``, garbage).
    """
    text = value.strip()
    keyword = text.lower()
    if keyword == 'none':
        return Color('none', alpha=0.0)
    if keyword == 'transparent':
        return Color('transparent', alpha=0.0)
    if keyword == 'currentcolor':
        return Color('current')
    try:
        rgb = ImageColor.getrgb(text)
    except ValueError:
        return None
    alpha = rgb[3] / 255.0 if len(rgb) == 4 else 1.0
    return Color('rgb', rgb[0], rgb[1], rgb[2], alpha)


def is_empty_color(color: Color) -> bool:
    """True for colors that paint nothing: none, transparent, zero alpha."""
    if color.type in ('none', 'transparent'):
        return True
    return color.type == 'rgb' and color.alpha == 0


def parse_style_attribute(s):
    """
    Given a 'style' string, parse it into a dict: key -> value
    """
    style_dict = {}
    for e in s.split(';'):
        key_value = e.split(':', 1)
        if len(key_value) == 2:
            key = key_value[0].strip()
            value = key_value[1].strip()
            style_dict[key] = value
    return style_dict


def _apply(callback, attr, value):
    return callback(attr, value, parse_color(value))


def _recolor_style_attribute(node, callback):
    style_dict = parse_style_attribute(node.attrib['style'])
    for key in style_dict:
        if key in COLOR_ATTRIBUTES:
            style_dict[key] = _apply(callback, key, style_dict[key])
    node.set('style', ";".join([f"{key}:{style_dict[key]}" for key in style_dict]))


def _recolor_stylesheet(node, callback):
    if not node.text or not node.text.strip():
        return
    sheet = cssutils.parseString(node.text)
    for rule in sheet:
        if not hasattr(rule, 'style'):
            continue
        for prop in rule.style.getProperties():
            if prop.name in COLOR_ATTRIBUTES:
                new_value = _apply(callback, prop.name, prop.value)
                if new_value != prop.value:
                    rule.style.setProperty(prop.name, new_value, prop.priority)
    css = sheet.cssText
    node.text = css.decode('utf-8') if isinstance(css, bytes) else css


def _has_fill(node):
    if 'fill' in node.attrib:
        return True
    return 'style' in node.attrib and 'fill' in parse_style_attribute(node.attrib['style'])


def _apply_default_color(node, default_color, inherited=False):
    tag = remove_namespaces(node.tag)
    if tag in _UNPAINTED_TAGS:
        return
    inherited = inherited or _has_fill(node)
    if tag in _FILLED_TAGS and not inherited:
        node.set('fill', default_color)
    for child in node:
        _apply_default_color(child, default_color, inherited)


def parse_colors(
    svg: SVG,
    default_color: Optional[str] = None,
    callback: Optional[ColorCallback] = None,
) -> SVG:
    """
    Visit every color in *svg* and let *callback* decide its new value.

    Colors are looked up in presentation attributes, inline ``style`` and
    ``<style>`` sheets. ``callback(attr, color_str, color)`` gets the parsed
    :class:`Color` or None when the value is not a plain color, and returns
    the string to store. Shapes that inherit no fill at all get
    ``fill=default_color`` when one is given.
    """
    root = svg.root
    if callback is not None:
        for node in root.iter():
            tag = remove_namespaces(node.tag)
            for attr in COLOR_ATTRIBUTES:
                if attr in node.attrib:
                    node.set(attr, _apply(callback, attr, node.attrib[attr]))
            if 'style' in node.attrib:
                _recolor_style_attribute(node, callback)
            if tag == 'style':
                _recolor_stylesheet(node, callback)

    if default_color is not None:
        _apply_default_color(root, default_color)
    return svg


def current_color_callback(attr: str, color_str: str, color: Optional[Color]) -> str:
    """Keep transparent or unparsable colors, replace everything else with currentColor."""
    return color_str if color is None or is_empty_color(color) else "currentColor"


__all__ = [
    "COLOR_ATTRIBUTES",
    "Color",
    "current_color_callback",
    "is_empty_color",
    "parse_color",
    "parse_colors",
    "parse_style_attribute",
]
