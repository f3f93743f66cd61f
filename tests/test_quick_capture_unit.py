from core import Priority, Project

from core.desktop.devtools.interface.tui_models import KeyEvent
from core.desktop.devtools.interface.tui_quick_capture import (
    QuickCaptureAction,
    QuickCaptureDialog,
    SuggestionMode,
    build_project_tag_map,
)

from conftest import make_task


def _type(dialog, text):
    for ch in text:
        dialog.handle_key(KeyEvent(ch))


def _dialog():
    backend = Project(id="p-back", name="Backend")
    frontend = Project(id="p-front", name="Frontend")
    tasks = [make_task("t", project_id="p-back", tags=["api"])]
    return QuickCaptureDialog([backend, frontend], ["api", "bug", "ui"], tasks)


def test_typing_reparses_and_matches_project():
    dialog = _dialog()
    _type(dialog, "Fix it @back #bug !2")
    assert dialog.parsed.title == "Fix it"
    assert dialog.project.id == "p-back"
    task = dialog.to_task()
    assert task.project_id == "p-back"
    assert task.tags == ["bug"]
    assert task.priority is Priority.HIGH


def test_fuzzy_match_prefers_exact_then_prefix_then_substring():
    dialog = _dialog()
    assert dialog.fuzzy_match_project("frontend").id == "p-front"
    assert dialog.fuzzy_match_project("Fro").id == "p-front"
    assert dialog.fuzzy_match_project("end").id == "p-back"
    assert dialog.fuzzy_match_project("zzz") is None


def test_project_suggestions_and_accept():
    dialog = _dialog()
    _type(dialog, "Do @fr")
    assert dialog.suggestion_mode is SuggestionMode.PROJECTS
    assert dialog.suggestions == ["Frontend"]
    assert dialog.handle_key(KeyEvent("tab")) is QuickCaptureAction.NONE
    assert dialog.project.id == "p-front"
    assert dialog.input.value == "Do"


def test_tag_suggestions_scoped_to_project_first():
    dialog = _dialog()
    _type(dialog, "x @Backend #")
    assert dialog.suggestions[0] == "api"
    dialog.handle_key(KeyEvent("down"))
    assert dialog.current_suggestion() == dialog.suggestions[1 % len(dialog.suggestions)]


def test_priority_suggestions():
    dialog = _dialog()
    _type(dialog, "x !")
    assert dialog.suggestions == ["1", "2", "3", "4"]
    dialog.handle_key(KeyEvent("tab"))
    assert dialog.parsed.priority is Priority.URGENT


def test_enter_submits_and_empty_title_gives_no_task():
    dialog = _dialog()
    _type(dialog, "#only")
    assert dialog.handle_key(KeyEvent("enter")) is QuickCaptureAction.SUBMIT
    assert dialog.to_task() is None


def test_tab_without_suggestions_expands_to_full_dialog():
    dialog = _dialog()
    _type(dialog, "Write docs @Backend !4 due:tomorrow")
    dialog.handle_key(KeyEvent(" "))
    assert dialog.handle_key(KeyEvent("tab")) is QuickCaptureAction.EXPAND
    expanded = dialog.to_add_task_dialog()
    assert expanded.title.value == "Write docs"
    assert expanded.priority is Priority.LOW
    assert expanded.due_date.value == "tomorrow"
    assert expanded.project_id == "p-back"


def test_esc_cancels():
    assert _dialog().handle_key(KeyEvent("esc")) is QuickCaptureAction.CANCEL


def test_build_project_tag_map():
    tasks = [make_task("a", project_id="p", tags=["x", "y"]), make_task("b", project_id="p", tags=["x"]), make_task("c", tags=["z"])]
    mapping = build_project_tag_map(tasks)
    assert sorted(mapping["p"]) == ["x", "y"]


def test_new_at_token_replaces_chosen_project():
    dialog = _dialog()
    _type(dialog, "Do @fr")
    dialog.handle_key(KeyEvent("tab"))
    assert dialog.explicit_project.id == "p-front"
    _type(dialog, " @back")
    assert dialog.explicit_project is None
    assert dialog.project.id == "p-back"


def test_accepting_project_mid_line_removes_token_and_collapses_space():
    dialog = _dialog()
    _type(dialog, "Fix @Ba now")
    for _ in range(4):
        dialog.handle_key(KeyEvent("left"))
    assert dialog.suggestions == ["Backend"]
    dialog.handle_key(KeyEvent("tab"))
    assert dialog.input.value == "Fix now"
    assert dialog.input.cursor == 4
    assert dialog.project.id == "p-back"


def test_accepting_tag_puts_cursor_after_replacement():
    dialog = _dialog()
    _type(dialog, "x #b y")
    dialog.handle_key(KeyEvent("left"))
    dialog.handle_key(KeyEvent("left"))
    assert dialog.suggestions == ["bug"]
    dialog.handle_key(KeyEvent("tab"))
    assert dialog.input.value == "x #bug y"
    assert dialog.input.cursor == len("x #bug")
    assert dialog.parsed.tags == ["bug"]


def test_tag_suggestions_skip_tags_already_in_line():
    dialog = _dialog()
    _type(dialog, "x #api #")
    assert "api" not in dialog.suggestions
    assert sorted(dialog.suggestions) == ["bug", "ui"]


def test_out_of_range_due_text_is_ignored_while_typing():
    dialog = _dialog()
    _type(dialog, "x due:+99999999d")
    assert dialog.parsed.due_date is None
    assert dialog.parsed.due_date_text == "+99999999d"
    assert dialog.to_task().due_date is None


def test_repeated_tag_is_stored_once():
    dialog = _dialog()
    _type(dialog, "Ship #ui #bug #ui")
    assert dialog.to_task().tags == ["ui", "bug"]
