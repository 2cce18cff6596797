import logging
import os

# Qt must pick the headless platform before any QApplication exists.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from deskfences.logsink import PACKAGE_LOGGER, SafeRotatingFileHandler


@pytest.fixture(autouse=True)
def _isolated_app_dir(tmp_path, monkeypatch):
    """Keep options.json, fences.json and logs of every test inside tmp_path."""
    monkeypatch.setenv("DESKFENCES_HOME", str(tmp_path))
    yield
    log = logging.getLogger(PACKAGE_LOGGER)
    for h in list(log.handlers):
        if isinstance(h, SafeRotatingFileHandler):
            log.removeHandler(h)
            h.close()


def write_desktop(path, icon=None, exec_line="/bin/true", extra=""):
    lines = ["[Desktop Entry]", "Type=Application", "Name=Sample", f"Exec={exec_line}"]
    if icon is not None:
        lines.append(f"Icon={icon}")
    path.write_text("\n".join(lines) + "\n" + extra, encoding="utf-8")
    return path


def write_url(path, url, icon_file=None, icon_index=None):
    lines = ["[InternetShortcut]", f"URL={url}"]
    if icon_file is not None:
        lines.append(f"IconFile={icon_file}")
    if icon_index is not None:
        lines.append(f"IconIndex={icon_index}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
