from deskfences.config.model import GlobalSettings, FenceColor, COLOR_HEX
from deskfences.fences.store import FenceRecord
from deskfences.styling import FenceStyle, effective_color, effective_tint, resolve_style


def test_override_wins_over_global():
    s = GlobalSettings(selected_color=FenceColor.GRAY)
    rec = FenceRecord(title="Work", custom_color="Red")
    assert effective_color(rec, s) == "Red"


def test_missing_or_empty_override_inherits():
    s = GlobalSettings(selected_color=FenceColor.BLUE)
    assert effective_color(FenceRecord(title="A"), s) == "Blue"
    assert effective_color(FenceRecord(title="B", custom_color=""), s) == "Blue"
    assert effective_color(FenceRecord(title="C", custom_color="   "), s) == "Blue"
    assert effective_color(None, s) == "Blue"


def test_tint_has_no_override():
    s = GlobalSettings(tint_value=25)
    rec = FenceRecord(title="A", custom_color="Green")
    assert effective_tint(s) == 25
    assert resolve_style(rec, s).tint == 25


def test_resolve_style_values():
    s = GlobalSettings(tint_value=100, selected_color=FenceColor.BLACK)
    style = resolve_style(FenceRecord(title="A", custom_color="Red"), s)
    assert style == FenceStyle("Red", COLOR_HEX[FenceColor.RED], 100, 255)

    low = resolve_style(None, GlobalSettings(tint_value=1))
    assert low.color == "Gray" and low.alpha == 3


def test_rgba_string():
    style = FenceStyle("Gray", "#6E6E6E", 60, 153)
    assert style.rgba() == "rgba(110, 110, 110, 153)"


def test_unknown_override_uses_global_hex():
    s = GlobalSettings(selected_color=FenceColor.PURPLE)
    style = resolve_style(FenceRecord(title="A", custom_color="Chartreuse"), s)
    assert style.hex == COLOR_HEX[FenceColor.PURPLE]
