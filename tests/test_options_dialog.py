from pathlib import Path
import json

import pytest
from PyQt5.QtWidgets import QDialog, QMessageBox

from deskfences.config.io import ConfigStore
from deskfences.config.model import GlobalSettings, FenceColor, LaunchEffect, LogLevel, LogCategory
from deskfences.options_ui import OptionsDialog


@pytest.fixture
def store(tmp_path: Path):
    s = ConfigStore(tmp_path / "options.json")
    s.load()
    return s


@pytest.fixture
def saved_calls():
    return []


@pytest.fixture
def dialog(qtbot, store, saved_calls):
    dlg = OptionsDialog(store, on_saved=saved_calls.append)
    qtbot.addWidget(dlg)
    return dlg


def test_form_reflects_settings(qtbot, store):
    store.settings.tint_value = 42
    store.settings.selected_color = FenceColor.YELLOW
    store.settings.launch_effect = LaunchEffect.AGITATE
    dlg = OptionsDialog(store)
    qtbot.addWidget(dlg)
    assert dlg.sl_tint.value() == 42 and dlg.sb_tint.value() == 42
    assert dlg.cb_color.currentData() == "Yellow"
    assert dlg.cb_effect.currentData() == "Agitate"
    assert dlg.category_boxes[LogCategory.SETTINGS].isChecked()
    assert not dlg.category_boxes[LogCategory.UI].isChecked()


def test_tint_slider_and_spinbox_are_linked(dialog):
    dialog.sl_tint.setValue(17)
    assert dialog.sb_tint.value() == 17
    dialog.sb_tint.setValue(88)
    assert dialog.sl_tint.value() == 88


def test_save_commits_and_broadcasts_once(dialog, store, saved_calls, tmp_path):
    dialog.sb_tint.setValue(25)
    dialog.cb_color.setCurrentIndex(dialog.cb_color.findData("Green"))
    dialog.cb_log.setChecked(True)
    dialog.cb_level.setCurrentIndex(dialog.cb_level.findData("Debug"))
    dialog.category_boxes[LogCategory.UI].setChecked(True)
    dialog.btn_save.click()

    assert dialog.result() == QDialog.Accepted
    assert len(saved_calls) == 1 and saved_calls[0] is store.settings
    assert store.settings.tint_value == 25
    assert store.settings.selected_color is FenceColor.GREEN
    assert store.settings.min_log_level is LogLevel.DEBUG
    assert LogCategory.UI in store.settings.enabled_log_categories
    raw = json.loads((tmp_path / "options.json").read_text())
    assert raw["tintValue"] == 25 and raw["selectedColor"] == "Green" and raw["logEnabled"] is True


def test_cancel_discards_pending_edits(dialog, store, saved_calls):
    dialog.sb_tint.setValue(5)
    dialog.cb_snap.setChecked(False)
    dialog.btn_cancel.click()
    assert dialog.result() == QDialog.Rejected
    assert store.settings == GlobalSettings()
    assert saved_calls == []


def test_save_failure_shows_error_and_keeps_settings(dialog, store, saved_calls, tmp_path, monkeypatch):
    errors = []
    monkeypatch.setattr(QMessageBox, "critical", lambda *args: errors.append(args[1:]) or QMessageBox.Ok)
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store.path = blocker / "options.json"

    dialog.sb_tint.setValue(99)
    dialog.btn_save.click()

    assert errors and errors[0][0] == "Save Error"
    assert store.settings.tint_value == 60
    assert saved_calls == []
    assert dialog.result() != QDialog.Accepted


def test_restore_defaults_only_fills_form(dialog, store, monkeypatch):
    store.settings.tint_value = 10
    dialog.sb_tint.setValue(10)
    dialog.cb_single_click.setChecked(False)
    monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.Yes)
    dialog.btn_defaults.click()
    assert dialog.sb_tint.value() == 60
    assert dialog.cb_single_click.isChecked()
    assert store.settings.tint_value == 10


def test_restore_defaults_declined(dialog, monkeypatch):
    dialog.sb_tint.setValue(33)
    monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.No)
    dialog.btn_defaults.click()
    assert dialog.sb_tint.value() == 33


def test_apply_failure_is_reported_after_save(qtbot, store, monkeypatch):
    warnings = []
    monkeypatch.setattr(QMessageBox, "warning", lambda *args: warnings.append(args[1:]) or QMessageBox.Ok)

    def broken(_settings):
        raise RuntimeError("window gone")

    dlg = OptionsDialog(store, on_saved=broken)
    qtbot.addWidget(dlg)
    dlg.btn_save.click()
    assert warnings and "window gone" in warnings[0][1]
    assert dlg.result() == QDialog.Accepted
