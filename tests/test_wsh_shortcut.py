from pathlib import Path

import pytest

import deskfences.shortcuts.wsh as wsh
from deskfences.shortcuts.base import ShortcutError, ShortcutTargetError
from deskfences.shortcuts.editor import ShortcutEditor, DEFAULT_ICON
from deskfences.shortcuts.wsh import WshShortcut


class FakeLink:
    """Stands in for IWshShortcut; Save() rewrites the file it was created for."""

    def __init__(self, shell, path):
        self._shell = shell
        self._path = Path(path)
        self.IconLocation = shell.icons.get(self._path.name, "")

    @property
    def TargetPath(self):
        if self._shell.target_error:
            raise RuntimeError("target lookup failed")
        return self._shell.target

    def Save(self):
        if self._shell.save_error:
            raise RuntimeError("save failed")
        self._shell.saved_paths.append(self._path)
        self._path.write_text(f"icon={self.IconLocation}")


class FakeShell:
    def __init__(self):
        self.icons = {}
        self.target = ""
        self.target_error = False
        self.save_error = False
        self.open_error = False
        self.saved_paths = []

    def CreateShortcut(self, path):
        if self.open_error:
            raise RuntimeError("not a shell link")
        return FakeLink(self, path)


@pytest.fixture
def shell(monkeypatch):
    fake = FakeShell()
    monkeypatch.setattr(wsh, "_shell", lambda: fake)
    return fake


@pytest.fixture
def lnk(tmp_path: Path) -> Path:
    p = tmp_path / "Player.lnk"
    p.write_text("original")
    return p


def test_reads_icon_location(shell, lnk):
    shell.icons["Player.lnk"] = "C:\\icons\\p.ico,2"
    assert WshShortcut(lnk).icon_location == "C:\\icons\\p.ico,2"
    assert ShortcutEditor().read_icon(lnk) == "C:\\icons\\p.ico"


def test_save_edits_a_copy_and_replaces_original(shell, lnk, tmp_path):
    sc = WshShortcut(lnk)
    sc.icon_location = "C:\\new.ico"
    sc.save()
    assert shell.saved_paths == [tmp_path / "Player.tmp.lnk"]
    assert lnk.read_text() == "icon=C:\\new.ico"
    assert not (tmp_path / "Player.tmp.lnk").exists()


def test_failed_save_leaves_original_and_no_temp(shell, lnk, tmp_path):
    shell.save_error = True
    sc = WshShortcut(lnk)
    sc.icon_location = "C:\\new.ico"
    with pytest.raises(ShortcutError):
        sc.save()
    assert lnk.read_text() == "original"
    assert not (tmp_path / "Player.tmp.lnk").exists()


def test_open_failure_is_a_shortcut_error(shell, lnk):
    shell.open_error = True
    with pytest.raises(ShortcutError):
        WshShortcut(lnk)


def test_target_failure_is_a_target_error(shell, lnk):
    shell.target_error = True
    with pytest.raises(ShortcutTargetError):
        WshShortcut(lnk).target_path()


def test_restore_default_points_icon_at_target(shell, lnk, tmp_path):
    exe = tmp_path / "player.exe"
    exe.write_bytes(b"MZ")
    shell.target = str(exe)
    result = ShortcutEditor().restore_default(lnk)
    assert result.saved and result.icon_changed
    assert result.display_name == "Player" and result.icon == DEFAULT_ICON
    assert lnk.read_text() == f"icon={exe}"


def test_restore_default_with_unresolvable_target_keeps_file(shell, lnk):
    shell.target_error = True
    result = ShortcutEditor().restore_default(lnk)
    assert result.saved and not result.icon_changed
    assert lnk.read_text() == "original"


def test_set_custom_icon_failure_is_reported(shell, lnk, tmp_path):
    icon = tmp_path / "p.ico"
    icon.write_bytes(b"\0")
    shell.save_error = True
    result = ShortcutEditor().set_custom_icon(lnk, str(icon))
    assert not result.saved and "save failed" in result.error
    assert lnk.read_text() == "original"
