from datetime import date
from types import SimpleNamespace

from core.desktop.devtools.interface.tui_date_picker import DatePicker, DatePickerAction
from core.desktop.devtools.interface.tui_display import display_width, pad_display, trim_display, wrap_display
from core.desktop.devtools.interface.tui_models import KeyEvent
from core.desktop.devtools.interface.tui_navigation import clamp_index, position_of, step_clamped, wrap_index
from core.desktop.devtools.interface.tui_tag_input import MAX_TAG_SUGGESTIONS, TagInput
from core.desktop.devtools.interface.tui_text_input import TextInput
from core.desktop.devtools.interface.tui_textarea import DescriptionTextArea, TextAreaAction


def test_text_input_editing_keys():
    field = TextInput()
    for ch in "hello world":
        field.handle_editing_key(KeyEvent(ch))
    assert field.value == "hello world"
    field.handle_editing_key(KeyEvent("w", ctrl=True))
    assert field.value == "hello "
    field.handle_editing_key(KeyEvent("a", ctrl=True))
    assert field.cursor == 0
    field.handle_editing_key(KeyEvent("delete"))
    assert field.value == "ello "
    field.handle_editing_key(KeyEvent("end"))
    field.handle_editing_key(KeyEvent("backspace"))
    assert field.value == "ello"
    assert field.handle_editing_key(KeyEvent("up")) is False


def test_text_input_word_motion():
    field = TextInput("one two three")
    field.handle_editing_key(KeyEvent("b", alt=True))
    assert field.cursor == len("one two ")
    field.handle_editing_key(KeyEvent("left", alt=True))
    assert field.cursor == len("one ")
    field.handle_editing_key(KeyEvent("f", alt=True))
    assert field.cursor == len("one two ")


def test_tag_input_commits_and_dedupes():
    tags = TagInput(["Work"])
    for ch in "work":
        tags.handle_key(KeyEvent(ch), [])
    tags.handle_key(KeyEvent("enter"), [])
    assert tags.tags == ["Work"]
    for ch in "home":
        tags.handle_key(KeyEvent(ch), [])
    tags.handle_key(KeyEvent(","), [])
    assert tags.tags == ["Work", "home"]
    assert tags.input_value == ""
    tags.handle_key(KeyEvent("backspace"), [])
    assert tags.tags == ["Work"]


def test_tag_input_suggestions_exclude_existing_and_cap():
    known = ["bug", "bugfix", "debug", "ui", "b1", "b2", "b3", "b4"]
    tags = TagInput(["bug"])
    tags.handle_key(KeyEvent("b"), known)
    assert "bug" not in tags.suggestions
    assert len(tags.suggestions) == MAX_TAG_SUGGESTIONS
    assert tags.current_suggestion() == "bugfix"
    tags.handle_key(KeyEvent("down"), known)
    assert tags.current_suggestion() == "debug"
    assert tags.handle_key(KeyEvent("tab"), known) is True
    assert tags.tags == ["bug", "debug"]


def test_tag_input_tab_without_suggestion_is_not_consumed():
    assert TagInput().handle_key(KeyEvent("tab"), ["x"]) is False


def test_textarea_multiline_and_links():
    area = DescriptionTextArea("see https://example.com/x")
    assert area.links[0].url == "https://example.com/x"
    area.handle_key(KeyEvent("left"))
    assert area.link_at_cursor() == "https://example.com/x"
    assert area.handle_key(KeyEvent("o", ctrl=True)) is TextAreaAction.OPEN_LINK
    area.handle_key(KeyEvent("end"))
    area.handle_key(KeyEvent("enter"))
    area.handle_key(KeyEvent("z"))
    assert area.text() == "see https://example.com/x\nz"
    area.handle_key(KeyEvent("home"))
    area.handle_key(KeyEvent("backspace"))
    assert area.lines == ["see https://example.com/xz"]
    assert area.handle_key(KeyEvent("tab")) is TextAreaAction.NEXT_FIELD
    assert area.handle_key(KeyEvent("backtab")) is TextAreaAction.PREV_FIELD


def test_textarea_up_down_clamp_column():
    area = DescriptionTextArea("long line\nab")
    area.handle_key(KeyEvent("up"))
    assert (area.cursor_row, area.cursor_col) == (0, 2)
    area.handle_key(KeyEvent("end"))
    area.handle_key(KeyEvent("down"))
    assert (area.cursor_row, area.cursor_col) == (1, 2)


def test_date_picker_moves_and_month_clamps():
    picker = DatePicker(date(2024, 1, 31))
    assert picker.handle_key(KeyEvent("L")) is DatePickerAction.NONE
    assert picker.selected == date(2024, 2, 29)
    picker.handle_key(KeyEvent("j"))
    assert picker.selected == date(2024, 3, 7)
    assert picker.view_month == date(2024, 3, 1)
    picker.handle_key(KeyEvent("pageup"))
    picker.handle_key(KeyEvent("pageup"))
    picker.handle_key(KeyEvent("pageup"))
    assert picker.selected == date(2023, 12, 7)
    assert picker.handle_key(KeyEvent("enter")) is DatePickerAction.SELECT
    assert picker.handle_key(KeyEvent("q")) is DatePickerAction.CANCEL


def test_date_picker_month_grid_starts_monday():
    picker = DatePicker(date(2024, 5, 15))
    grid = picker.month_grid()
    assert grid[0][:2] == [None, None]
    assert grid[0][2] == 1  # May 1st 2024 is a Wednesday


def test_navigation_helpers():
    assert wrap_index(None, 1, 3) == 0
    assert wrap_index(None, -1, 3) == 2
    assert wrap_index(2, 1, 3) == 0
    assert wrap_index(0, -1, 0) is None
    assert clamp_index(5, 3) == 2
    assert clamp_index(None, 3) == 0
    assert clamp_index(1, 0) is None
    assert step_clamped(1, 10, 4) == 3
    assert step_clamped(1, -10, 4) == 0
    assert step_clamped(None, 1, 0) is None
    items = [SimpleNamespace(id="a"), SimpleNamespace(id="b")]
    assert position_of(items, "b") == 1
    assert position_of(items, "zz") is None


def test_display_helpers_respect_wide_glyphs():
    assert display_width("日本") == 4
    assert trim_display("日本語", 5) == "日本"
    assert trim_display("abcdef", 4, "…") == "abc…"
    assert pad_display("日", 4) == "日  "
    assert wrap_display("abcdef\ngh", 4) == ["abcd", "ef", "gh"]


def test_named_keys_are_not_typed_into_fields():
    field = TextInput("ab")
    assert KeyEvent("x").char == "x"
    assert KeyEvent("home").char == ""
    field.handle_editing_key(KeyEvent("f5"))
    assert field.value == "ab"
    area = DescriptionTextArea()
    area.handle_key(KeyEvent("pagedown"))
    assert area.text() == ""
