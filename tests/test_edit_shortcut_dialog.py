from pathlib import Path

import pytest
from PyQt5.QtWidgets import QDialog, QMessageBox

import deskfences.edit_shortcut_ui as edit_mod
from conftest import write_desktop
from deskfences.edit_shortcut_ui import EditShortcutDialog
from deskfences.shortcuts.editor import ShortcutEditor, DEFAULT_ICON


@pytest.fixture
def target(tmp_path: Path) -> Path:
    exe = tmp_path / "tool"
    exe.write_text("#!/bin/sh\n")
    return exe


@pytest.fixture
def icon_file(tmp_path: Path) -> Path:
    p = tmp_path / "pic.png"
    p.write_bytes(b"\x89PNG\r\n")
    return p


@pytest.fixture
def make_dialog(qtbot):
    def _make(path, name=""):
        dlg = EditShortcutDialog(str(path), name, editor=ShortcutEditor())
        qtbot.addWidget(dlg)
        return dlg
    return _make


def test_initial_state(make_dialog, tmp_path):
    sc = write_desktop(tmp_path / "Notes.desktop", icon="accessories-text-editor")
    dlg = make_dialog(sc)
    assert dlg.le_name.text() == "Notes"
    assert dlg.icon_indicator == "accessories-text-editor"


def test_current_display_name_is_shown(make_dialog, tmp_path):
    sc = write_desktop(tmp_path / "Notes.desktop")
    dlg = make_dialog(sc, "My Notes")
    assert dlg.le_name.text() == "My Notes"
    assert dlg.icon_indicator == DEFAULT_ICON


def test_browse_only_changes_indicator(make_dialog, tmp_path, icon_file, monkeypatch):
    sc = write_desktop(tmp_path / "Notes.desktop", icon="old")
    before = sc.read_text()
    monkeypatch.setattr(edit_mod.QFileDialog, "getOpenFileName", lambda *a, **k: (str(icon_file), ""))
    dlg = make_dialog(sc)
    dlg.btn_browse.click()
    assert dlg.icon_indicator == str(icon_file)
    assert sc.read_text() == before


def test_save_writes_icon_and_resolves_name(make_dialog, tmp_path, icon_file, monkeypatch):
    sc = write_desktop(tmp_path / "Notes.desktop", icon="old")
    monkeypatch.setattr(edit_mod.QFileDialog, "getOpenFileName", lambda *a, **k: (str(icon_file), ""))
    dlg = make_dialog(sc, "Custom")
    dlg.btn_browse.click()
    dlg.le_name.setText("   ")
    dlg.btn_save.click()
    assert dlg.result() == QDialog.Accepted
    assert dlg.new_display_name == "Notes"
    assert f"Icon={icon_file}" in sc.read_text()


def test_default_restores_target_icon(make_dialog, tmp_path, target):
    sc = write_desktop(tmp_path / "Tool.desktop", icon="custom", exec_line=str(target))
    dlg = make_dialog(sc, "Renamed")
    dlg.btn_default.click()
    assert dlg.le_name.text() == "Tool"
    assert dlg.icon_indicator == DEFAULT_ICON
    assert f"Icon={target}" in sc.read_text()


def test_save_on_deleted_shortcut_reports(make_dialog, tmp_path, icon_file, monkeypatch):
    sc = write_desktop(tmp_path / "Temp.desktop")
    errors = []
    monkeypatch.setattr(QMessageBox, "critical", lambda *args: errors.append(args[2]) or QMessageBox.Ok)
    monkeypatch.setattr(edit_mod.QFileDialog, "getOpenFileName", lambda *a, **k: (str(icon_file), ""))
    dlg = make_dialog(sc)
    dlg.btn_browse.click()
    sc.unlink()
    dlg.btn_save.click()
    assert errors and errors[0].startswith("Failed to save changes:")
    assert dlg.new_display_name is None
    assert dlg.result() != QDialog.Accepted


def test_unreadable_shortcut_warns_on_open(make_dialog, tmp_path, monkeypatch):
    warnings = []
    monkeypatch.setattr(QMessageBox, "warning", lambda *args: warnings.append(args[2]) or QMessageBox.Ok)
    dlg = make_dialog(tmp_path / "missing.desktop")
    assert warnings
    assert dlg.icon_indicator == DEFAULT_ICON
