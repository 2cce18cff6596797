from pathlib import Path
import json

import pytest
from PyQt5.QtWidgets import QDialog

import deskfences.main as main_mod
from conftest import write_desktop
from deskfences.config.io import ConfigStore
from deskfences.config.model import FenceColor
from deskfences.fences.store import FenceStore
from deskfences.main import FenceApp, DEFAULT_FENCE_TITLE


@pytest.fixture
def app(qtbot, tmp_path: Path):
    fa = FenceApp(ConfigStore(tmp_path / "options.json"), FenceStore(tmp_path / "fences.json"))
    yield fa
    for w in fa.windows.values():
        w.close()
        w.deleteLater()


def _fences(tmp_path: Path, data):
    (tmp_path / "fences.json").write_text(json.dumps(data))


def test_first_start_creates_files_and_default_fence(app, tmp_path):
    app.start(log_dir=tmp_path, show=False)
    assert (tmp_path / "options.json").exists()
    assert [r["title"] for r in json.loads((tmp_path / "fences.json").read_text())] == [DEFAULT_FENCE_TITLE]
    w = app.windows[DEFAULT_FENCE_TITLE]
    assert w.current_style().color == "Gray" and w.current_style().tint == 60


def test_startup_applies_overrides(app, tmp_path):
    _fences(tmp_path, [{"title": "A", "customColor": "Red"}, {"title": "B"}])
    app.start(log_dir=tmp_path, show=False)
    assert app.windows["A"].current_style().color == "Red"
    assert app.windows["B"].current_style().color == "Gray"


def test_saved_settings_reach_open_fences(app, tmp_path):
    _fences(tmp_path, [{"title": "A", "customColor": "Red"}, {"title": "B"}])
    app.start(log_dir=tmp_path, show=False)
    app.settings.selected_color = FenceColor.BLUE
    app.settings.tint_value = 80
    app.on_settings_saved(app.settings)
    assert app.windows["A"].current_style()[::2] == ("Red", 80)
    assert app.windows["B"].current_style()[::2] == ("Blue", 80)


def test_fence_color_override_and_reset(app, tmp_path):
    _fences(tmp_path, [{"title": "A"}])
    app.start(log_dir=tmp_path, show=False)
    app.set_fence_color("A", "Purple")
    assert app.windows["A"].current_style().color == "Purple"
    assert json.loads((tmp_path / "fences.json").read_text())[0]["customColor"] == "Purple"
    app.set_fence_color("A", "")
    assert app.windows["A"].current_style().color == "Gray"


def test_edit_shortcut_stores_display_name(app, tmp_path, monkeypatch):
    sc = write_desktop(tmp_path / "Mail.desktop")
    _fences(tmp_path, [{"title": "A", "items": [{"filename": str(sc)}]}])
    app.start(log_dir=tmp_path, show=False)

    class FakeDialog:
        def __init__(self, path, current, editor=None):
            assert path == str(sc) and current == ""
            self.new_display_name = "Inbox"

        def exec_(self):
            return QDialog.Accepted

    monkeypatch.setattr(main_mod, "EditShortcutDialog", FakeDialog)
    app.edit_shortcut("A", str(sc))
    assert app.fence_store.find("A").items[0].display_name == "Inbox"
    assert app.windows["A"].button(str(sc)).item.label() == "Inbox"
    raw = json.loads((tmp_path / "fences.json").read_text())
    assert raw[0]["items"][0]["displayName"] == "Inbox"


def test_geometry_commit_persists(app, tmp_path):
    _fences(tmp_path, [{"title": "A", "x": 10, "y": 10}])
    app.start(log_dir=tmp_path, show=False)
    app.windows["A"].move(140, 90)
    app._on_geometry_committed("A")
    raw = json.loads((tmp_path / "fences.json").read_text())
    assert (raw[0]["x"], raw[0]["y"]) == (140, 90)


def test_cancelled_edit_still_refreshes_icon(app, tmp_path, monkeypatch):
    sc = write_desktop(tmp_path / "Mail.desktop")
    _fences(tmp_path, [{"title": "A", "items": [{"filename": str(sc), "displayName": "Post"}]}])
    app.start(log_dir=tmp_path, show=False)

    class CancelledDialog:
        def __init__(self, path, current, editor=None):
            self.new_display_name = None

        def exec_(self):
            return QDialog.Rejected

    refreshed = []
    monkeypatch.setattr(main_mod, "EditShortcutDialog", CancelledDialog)
    monkeypatch.setattr(app.windows["A"], "refresh_item", refreshed.append)
    app.edit_shortcut("A", str(sc))
    assert refreshed == [str(sc)]
    assert app.fence_store.find("A").items[0].display_name == "Post"
