import logging
from pathlib import Path

import pytest

from iconset.importer import cleanup_icon_name, import_directory
from iconset.svg import SVGError

ICON = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M2 2h20v20H2z"/></svg>'


def _write(path: Path, text: str = ICON) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.mark.parametrize("raw, expected", [
    ("home", "home"),
    ("Arrow_Left", "arrow-left"),
    ("arrow left.v2", "arrow-left-v2"),
    ("--weird!!name--", "weirdname"),
    ("$$$", ""),
])
def test_cleanup_icon_name(raw: str, expected: str) -> None:
    assert cleanup_icon_name(raw) == expected


def test_import_directory(tmp_path: Path) -> None:
    _write(tmp_path / "home.svg")
    _write(tmp_path / "Arrow_Up.SVG")
    _write(tmp_path / "arrows" / "left.svg")
    _write(tmp_path / "readme.txt", "not an icon")

    icon_set = import_directory(tmp_path, prefix="custom")
    assert icon_set.prefix == "custom"
    assert icon_set.names() == ["arrow-up", "arrows-left", "home"]
    assert all(icon_set.entry_type(name) == "icon" for name in icon_set.names())
    assert icon_set.entries["home"].width == 24


def test_import_without_subdirs(tmp_path: Path) -> None:
    _write(tmp_path / "home.svg")
    _write(tmp_path / "arrows" / "left.svg")
    icon_set = import_directory(tmp_path, prefix="custom", include_subdirs=False)
    assert icon_set.names() == ["home"]


def test_custom_keyword(tmp_path: Path) -> None:
    _write(tmp_path / "home.svg")
    _write(tmp_path / "skip.svg")
    icon_set = import_directory(
        tmp_path,
        prefix="custom",
        keyword=lambda path: None if path.stem == "skip" else f"x-{path.stem}",
    )
    assert icon_set.names() == ["x-home"]


def test_invalid_files_are_skipped_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(tmp_path / "foo.svg")
    _write(tmp_path / "bad.svg", '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0"')

    with caplog.at_level(logging.WARNING):
        icon_set = import_directory(tmp_path, prefix="custom")

    assert icon_set.names() == ["foo"]
    messages = [r.getMessage() for r in caplog.records if "bad" in r.getMessage()]
    assert len(messages) == 1
    assert messages[0].startswith("Invalid icon removed: bad")


def test_invalid_files_raise_when_not_ignored(tmp_path: Path) -> None:
    _write(tmp_path / "bad.svg", "<svg")
    with pytest.raises(SVGError):
        import_directory(tmp_path, prefix="custom", ignore_import_errors=False)


def test_silently_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(tmp_path / "bad.svg", "<svg")
    with caplog.at_level(logging.WARNING):
        icon_set = import_directory(tmp_path, prefix="custom", ignore_import_errors=True)
    assert icon_set.names() == []
    assert not caplog.records


def test_duplicate_names(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(tmp_path / "a_b.svg")
    _write(tmp_path / "a-b.svg")
    with caplog.at_level(logging.WARNING):
        icon_set = import_directory(tmp_path, prefix="custom")
    assert icon_set.names() == ["a-b"]
    assert any("duplicate" in r.getMessage() for r in caplog.records)


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        import_directory(tmp_path / "missing", prefix="custom")

    _write(tmp_path / "file.svg")
    with pytest.raises(NotADirectoryError):
        import_directory(tmp_path / "file.svg", prefix="custom")
