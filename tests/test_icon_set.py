from iconset.icon_set import IconEntry, IconSet
from iconset.svg import SVG


def _set_with_icon() -> IconSet:
    icon_set = IconSet("test")
    icon_set.from_svg("home", SVG(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0h24v24H0z"/></svg>'
    ))
    return icon_set


def test_from_svg_and_to_svg() -> None:
    icon_set = _set_with_icon()
    entry = icon_set.entries["home"]
    assert entry.type == "icon"
    assert entry.width == 24 and entry.height == 24
    assert entry.body == '<path d="M0 0h24v24H0z" />'

    svg = icon_set.to_svg("home")
    assert svg is not None
    assert svg.root.get("viewBox") == "0 0 24 24"


def test_to_svg_returns_none_for_broken_body() -> None:
    icon_set = IconSet("test")
    icon_set.entries["broken"] = IconEntry(body='<path d="M0 0"')
    assert icon_set.to_svg("broken") is None
    assert icon_set.to_svg("missing") is None


def test_export_omits_default_props() -> None:
    icon_set = _set_with_icon()
    icon_set.from_svg("small", SVG(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 16 16"><path d="M0 0h16"/></svg>'
    ))
    data = icon_set.export()
    assert data["prefix"] == "test"
    assert "info" not in data
    assert "aliases" not in data
    assert data["icons"]["home"] == {"body": '<path d="M0 0h24v24H0z" />', "width": 24, "height": 24}
    assert data["icons"]["small"] == {"body": '<path d="M0 0h16" />'}


def test_export_info_and_aliases() -> None:
    icon_set = _set_with_icon()
    icon_set.info = {"author": {"name": "Icons"}, "license": {"title": "MIT"}, "version": "1.0.0"}
    assert icon_set.set_alias("house", "home")
    assert icon_set.set_alias("home-flipped", "home", h_flip=True)
    assert not icon_set.set_alias("nowhere", "missing")

    data = icon_set.export()
    assert data["info"]["license"] == {"title": "MIT"}
    assert data["aliases"] == {
        "house": {"parent": "home"},
        "home-flipped": {"parent": "home", "hFlip": True},
    }
    assert icon_set.entry_type("home-flipped") == "variation"
    assert icon_set.count() == 1
    assert len(icon_set) == 3


def test_remove_drops_dependent_aliases() -> None:
    icon_set = _set_with_icon()
    icon_set.set_alias("house", "home")
    icon_set.set_alias("building", "house")
    assert icon_set.resolve("building") is icon_set.entries["home"]

    assert icon_set.remove("home") == 3
    assert icon_set.entries == {}


def test_replace_entries_drops_orphans() -> None:
    icon_set = _set_with_icon()
    icon_set.set_alias("house", "home")
    icon_set.replace_entries({"house": icon_set.entries["house"]})
    assert icon_set.names() == []


def test_root_attributes_survive_round_trip() -> None:
    icon_set = IconSet("test")
    icon_set.from_svg("outline", SVG(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="#000">'
        '<path d="M4 4L20 20"/></svg>'
    ))
    group = icon_set.to_svg("outline").root[0]
    assert group.tag == "g"
    assert group.get("fill") == "none"
    assert group.get("stroke") == "#000"
