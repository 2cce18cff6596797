from pathlib import Path

import pytest

from conftest import write_desktop
from deskfences.shortcuts.base import ShortcutError, ShortcutNotFoundError
from deskfences.shortcuts.desktop_entry import DesktopEntryShortcut


def test_reads_keys_from_entry_group_only(tmp_path: Path):
    p = tmp_path / "a.desktop"
    p.write_text("[Desktop Entry]\nName=Main\nIcon=main\n\n[Desktop Action X]\nName=Other\nIcon=other\n")
    sc = DesktopEntryShortcut(p)
    assert sc.name == "Main"
    assert sc.icon_location == "main"


def test_comments_and_localized_keys_survive(tmp_path: Path):
    p = tmp_path / "a.desktop"
    p.write_text("# header\n[Desktop Entry]\nName=App\nName[de]=Anwendung\nIcon=a\nExec=/bin/true\n")
    sc = DesktopEntryShortcut(p)
    sc.icon_location = "/tmp/b.png"
    sc.save()
    text = p.read_text()
    assert text.startswith("# header\n")
    assert "Name[de]=Anwendung" in text
    assert "Icon=/tmp/b.png" in text


def test_missing_group_is_an_error(tmp_path: Path):
    p = tmp_path / "a.desktop"
    p.write_text("Name=NoGroup\n")
    with pytest.raises(ShortcutError):
        DesktopEntryShortcut(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(ShortcutNotFoundError):
        DesktopEntryShortcut(tmp_path / "none.desktop")


def test_save_after_delete_fails(tmp_path: Path):
    p = write_desktop(tmp_path / "a.desktop")
    sc = DesktopEntryShortcut(p)
    p.unlink()
    sc.icon_location = "x"
    with pytest.raises(ShortcutNotFoundError):
        sc.save()
    assert not p.exists()


def test_target_prefers_tryexec(tmp_path: Path):
    p = write_desktop(tmp_path / "a.desktop", exec_line="/usr/bin/other", extra="TryExec=/opt/app/bin\n")
    assert DesktopEntryShortcut(p).target_path() == "/opt/app/bin"


def test_link_type_targets_url(tmp_path: Path):
    p = tmp_path / "l.desktop"
    p.write_text("[Desktop Entry]\nType=Link\nName=Docs\nURL=https://example.org\n")
    assert DesktopEntryShortcut(p).target_path() == "https://example.org"


def test_empty_exec_has_no_target(tmp_path: Path):
    p = tmp_path / "e.desktop"
    p.write_text("[Desktop Entry]\nName=Empty\n")
    assert DesktopEntryShortcut(p).target_path() == ""


def test_missing_trailing_newline_is_kept(tmp_path: Path):
    p = tmp_path / "a.desktop"
    p.write_bytes(b"[Desktop Entry]\r\nName=App\r\nIcon=a")
    sc = DesktopEntryShortcut(p)
    sc.icon_location = "b"
    sc.save()
    assert p.read_bytes() == b"[Desktop Entry]\r\nName=App\r\nIcon=b"
