import logging
from datetime import timedelta

from prompt_toolkit.formatted_text import to_plain_text

from core import Filter, FilterKind, Priority, Project, SortOrder, TaskStatus
from core.dates import end_of_day_utc, local_today
from core.desktop.devtools.interface.tui_add_task import AddTaskDialog, AddTaskField
from core.desktop.devtools.interface.tui_confirm import ConfirmDialog
from core.desktop.devtools.interface.tui_delete_project import DeleteProjectDialog
from core.desktop.devtools.interface.tui_filter_sort import FilterSortDialog
from core.desktop.devtools.interface.tui_log_view import LogCaptureHandler, LogState
from core.desktop.devtools.interface.tui_models import FocusPanel, InputMode, KeyEvent
from core.desktop.devtools.interface.tui_move_project import MoveToProjectDialog
from core.desktop.devtools.interface.tui_project_dialog import ProjectDialog
from core.desktop.devtools.interface.tui_quick_capture import QuickCaptureDialog
from core.desktop.devtools.interface.tui_render import (
    render_calendar,
    render_debug_logs,
    render_dialog,
    render_help,
    render_input_line,
    render_search,
    render_sidebar,
    render_task_detail,
    render_task_list,
)
from core.desktop.devtools.interface.tui_search import search_tasks
from core.desktop.devtools.interface.tui_settings import SettingsDialog
from core.desktop.devtools.interface.tui_status import build_status_text, status_hint

from conftest import make_task


def styles_of(fragments, text):
    return [style for style, chunk in fragments if text in chunk]


def test_sidebar_lists_all_tasks_then_projects(app):
    text = to_plain_text(render_sidebar(app, 28))
    lines = [line.strip() for line in text.splitlines()]
    assert lines[0] == "Projects"
    assert lines[1].startswith("≡ All Tasks") and lines[1].endswith("3")
    assert "Inbox" in lines[2] and lines[2].endswith("1")
    assert "Work" in lines[3] and lines[3].endswith("2")


def test_sidebar_selection_style_follows_focus(app):
    fragments = render_sidebar(app, 28)
    assert styles_of(fragments, "All Tasks") == ["class:focused"]
    app.focus = FocusPanel.SIDEBAR
    assert styles_of(render_sidebar(app, 28), "All Tasks") == ["class:selected"]


def test_task_list_header_and_rows(app):
    text = to_plain_text(render_task_list(app, 60, 20))
    assert text.splitlines()[0].strip() == "Tasks: All Tasks [All]"
    assert "Write report #docs" in text
    assert "Buy milk" in text


def test_task_list_scrolls_to_selection(app):
    app.selected_task_index = 2
    text = to_plain_text(render_task_list(app, 60, 2))
    assert "Plan sprint" in text
    assert "Write report" not in text


def test_task_list_empty_state(app):
    app.filter = Filter(FilterKind.COMPLETED)
    assert "No tasks" in to_plain_text(render_task_list(app, 60, 10))


def test_completed_and_overdue_styles(app):
    app.storage.insert_task(make_task("Old", due_date=end_of_day_utc(local_today() - timedelta(days=3))))
    app.storage.insert_task(make_task("Finished", status=TaskStatus.COMPLETED))
    app.load_data()
    fragments = render_task_list(app, 80, 20)
    assert any("class:overdue" in style for style, _ in fragments)
    assert "class:done" in styles_of(fragments, "Finished")


def test_input_line_only_while_editing(app):
    assert to_plain_text(render_input_line(app, 40)) == ""
    app.input_mode = InputMode.EDITING
    app.input_buffer = "abc"
    app.input_cursor = 1
    assert to_plain_text(render_input_line(app, 40)) == "> abc"


def test_task_detail_shows_fields(app):
    task = app.selected_task()
    text = to_plain_text(render_task_detail(app, 60))
    assert task.title in text
    assert "Medium" in text
    assert "#docs" in text
    assert "Work" in text
    app.filter = Filter(FilterKind.COMPLETED)
    assert "No tasks" in to_plain_text(render_task_detail(app, 60))


def test_calendar_marks_days_and_lists_tasks(app):
    app.storage.insert_task(make_task("Demo", due_date=end_of_day_utc(local_today())))
    app.load_data()
    app.calendar_state.goto_today()
    text = to_plain_text(render_calendar(app, 84))
    assert "Weekly Calendar" in text
    assert "(1)" in text
    assert "Demo" in text
    app.calendar_state.next_week()
    assert "No tasks for this day" in to_plain_text(render_calendar(app, 84))


def test_search_highlights_match(app):
    app.input_buffer = "milk"
    app.search_results = search_tasks("milk", app.tasks)
    fragments = render_search(app, 60)
    assert ("class:match", "milk") in list(fragments)
    app.input_buffer = "zzz"
    app.search_results = []
    assert "No matching tasks" in to_plain_text(render_search(app, 60))


def test_help_lists_shortcuts(app):
    text = to_plain_text(render_help(app, 60))
    assert "Keyboard Shortcuts" in text
    assert "Quick capture" in text


def test_debug_logs_show_targets_and_lines(app):
    handler = LogCaptureHandler()
    handler.emit(logging.LogRecord("taskdeck.storage", logging.ERROR, __file__, 1, "write failed", None, None))
    app.log_state = LogState(handler)
    fragments = render_debug_logs(app, 60)
    text = to_plain_text(fragments)
    assert "taskdeck.storage" in text
    assert "write failed" in text
    assert ("class:log.error", "ERROR    ") in list(fragments)
    app.log_state.hide_targets = True
    assert "─" not in to_plain_text(render_debug_logs(app, 60))


def test_every_dialog_renders(app):
    dialogs = [
        (AddTaskDialog(), "Add Task"),
        (QuickCaptureDialog(app.projects, app.tags, app.tasks), "Quick Capture"),
        (ConfirmDialog.delete_task("Buy milk"), "Buy milk"),
        (DeleteProjectDialog("p", "Work", 2), "Move tasks to Inbox"),
        (ProjectDialog(), "Save"),
        (MoveToProjectDialog(app.projects, "t"), "Work"),
        (FilterSortDialog(Filter(FilterKind.ALL), SortOrder.DUE_DATE_ASC, app.tasks), "Due This Week"),
        (SettingsDialog(), "Delete all completed tasks"),
    ]
    for dialog, expected in dialogs:
        assert expected in to_plain_text(render_dialog(dialog, 60)), type(dialog).__name__
    assert to_plain_text(render_dialog(object(), 60)) == ""


def test_add_task_dialog_shows_date_picker():
    dialog = AddTaskDialog()
    dialog.focused_field = AddTaskField.DUE_DATE
    dialog.handle_key(KeyEvent("c"))
    text = to_plain_text(render_dialog(dialog, 60))
    assert local_today().strftime("%B %Y") in text
    assert "Mo Tu We Th Fr Sa Su" in text


def test_project_dialog_swatches_use_hex_colors():
    fragments = render_dialog(ProjectDialog(), 60)
    assert any(style.startswith("fg:#") for style, _ in fragments)


def test_settings_confirmation_renders():
    dialog = SettingsDialog()
    dialog.handle_key(KeyEvent("enter"))
    text = to_plain_text(render_dialog(dialog, 60))
    assert "This cannot be undone." in text


def test_quick_capture_preview():
    dialog = QuickCaptureDialog([Project(id="w", name="Work")], [], [])
    for ch in "Ship @work !2":
        dialog.handle_key(KeyEvent(ch))
    text = to_plain_text(render_dialog(dialog, 60))
    assert "Ship" in text
    assert "Work" in text
    assert Priority.HIGH.label in text


def test_status_bar_message_and_counts(app):
    fragments = build_status_text(app, 100)
    text = to_plain_text(fragments)
    assert text.startswith(" a:add")
    assert text.rstrip().endswith("All · Due Date · 0/3")
    assert len(text) == 100
    app.set_status("Task deleted")
    fragments = build_status_text(app, 100)
    assert fragments[0] == ("class:status-bar.message", " Task deleted")


def test_status_hint_while_editing(app):
    app.input_mode = InputMode.EDITING
    assert status_hint(app) == "Enter:save  Esc:cancel"
