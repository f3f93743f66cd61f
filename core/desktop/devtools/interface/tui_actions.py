"""Command dispatcher: applies a `Command` to `AppState`.

Every `CommandKind` has exactly one handler in `HANDLERS`. Handlers that
write to Storage reload the full snapshot afterwards; nothing is patched in
place. Storage errors propagate out of `execute` unchanged and leave the
state as it was before the write.
"""

import copy
import logging

from core import Filter, FilterKind, Task, TaskStatus, cycle_filter
from core.desktop.devtools.interface.constants import PAGE_SIZE
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_add_task import AddTaskDialog, AddTaskField
from core.desktop.devtools.interface.tui_calendar import (
    CalendarFocus,
    get_tasks_for_selected_day,
    selected_calendar_task,
)
from core.desktop.devtools.interface.tui_commands import Command, CommandKind
from core.desktop.devtools.interface.tui_confirm import ConfirmDialog
from core.desktop.devtools.interface.tui_delete_project import DeleteProjectDialog
from core.desktop.devtools.interface.tui_filter_sort import FilterSortDialog
from core.desktop.devtools.interface.tui_models import FocusPanel, InputMode, View
from core.desktop.devtools.interface.tui_move_project import MoveToProjectDialog
from core.desktop.devtools.interface.tui_navigation import position_of, step_clamped
from core.desktop.devtools.interface.tui_project_dialog import ProjectDialog
from core.desktop.devtools.interface.tui_quick_capture import QuickCaptureDialog
from core.desktop.devtools.interface.tui_search import search_tasks
from core.desktop.devtools.interface.tui_settings import SettingsDialog

logger = logging.getLogger("taskdeck.actions")


# ---------------------------------------------------------------- navigation


def _navigate_up(app, command: Command) -> None:
    if app.focus is FocusPanel.TASK_LIST:
        app.select_previous_task()
    else:
        app.select_previous_project()


def _navigate_down(app, command: Command) -> None:
    if app.focus is FocusPanel.TASK_LIST:
        app.select_next_task()
    else:
        app.select_next_project()


def _navigate_top(app, command: Command) -> None:
    if app.focus is FocusPanel.TASK_LIST:
        if app.visible_tasks():
            app.selected_task_index = 0
    else:
        app.selected_project_index = 0
        app.clamp_selection()


def _navigate_bottom(app, command: Command) -> None:
    if app.focus is FocusPanel.TASK_LIST:
        count = len(app.visible_tasks())
        if count:
            app.selected_task_index = count - 1
    else:
        app.selected_project_index = len(app.projects)
        app.clamp_selection()


def _page(delta: int):
    def handler(app, command: Command) -> None:
        if app.focus is FocusPanel.TASK_LIST:
            app.selected_task_index = step_clamped(app.selected_task_index, delta, len(app.visible_tasks()))

    return handler


def _switch_panel(app, command: Command) -> None:
    app.toggle_focus()


def _focus_sidebar(app, command: Command) -> None:
    app.focus = FocusPanel.SIDEBAR


def _focus_task_list(app, command: Command) -> None:
    app.focus = FocusPanel.TASK_LIST


# --------------------------------------------------------------------- tasks


def _add_task(app, command: Command) -> None:
    app.dialog = AddTaskDialog(all_tags=app.tags, project_id=app.selected_project_id())
    app.set_status(translate("STATUS_EDIT_HINT"))


def _edit_task(app, command: Command) -> None:
    task = app.selected_task()
    if task is None:
        return
    app.dialog = AddTaskDialog.from_task(task, app.tags)
    app.set_status(translate("STATUS_EDIT_HINT"))


def _delete_task(app, command: Command) -> None:
    task = app.selected_task()
    if task is not None:
        app.dialog = ConfirmDialog.delete_task(task.title)


def _toggle_status(app, task: Task) -> None:
    task = copy.deepcopy(task)
    if task.status is TaskStatus.COMPLETED:
        task.reopen()
        message = translate("STATUS_TASK_REOPENED")
    else:
        task.complete()
        message = translate("STATUS_TASK_COMPLETED")
    app.storage.update_task(task)
    app.load_data()
    app.set_status(message)


def _cycle_priority(app, task: Task) -> None:
    task = copy.deepcopy(task)
    task.priority = task.priority.next()
    task.touch()
    app.storage.update_task(task)
    app.load_data()
    app.set_status(translate("STATUS_PRIORITY", priority=task.priority.label))


def _toggle_task_status(app, command: Command) -> None:
    task = app.selected_task()
    if task is not None:
        _toggle_status(app, task)


def _cycle_task_priority(app, command: Command) -> None:
    task = app.selected_task()
    if task is not None:
        _cycle_priority(app, task)


def _move_to_project(app, command: Command) -> None:
    task = app.selected_task()
    if task is None:
        return
    app.dialog = MoveToProjectDialog(app.projects, task.id, task.project_id)
    app.set_status(translate("STATUS_MOVE_HINT"))


def _edit_tags(app, command: Command) -> None:
    task = app.selected_task()
    if task is None:
        return
    dialog = AddTaskDialog.from_task(task, app.tags)
    dialog.focused_field = AddTaskField.TAGS
    app.dialog = dialog
    app.set_status(translate("STATUS_TAGS_HINT"))


def _show_quick_capture(app, command: Command) -> None:
    dialog = QuickCaptureDialog(app.projects, app.tags, app.tasks)
    project = app.selected_project()
    if project is not None:
        dialog.set_project(project)
    app.dialog = dialog
    app.set_status(translate("STATUS_QUICK_CAPTURE_HINT"))


# ------------------------------------------------------------------ projects


def _add_project(app, command: Command) -> None:
    app.dialog = ProjectDialog()
    app.set_status(translate("STATUS_PROJECT_NAME_HINT"))


def _edit_project(app, command: Command) -> None:
    project = app.selected_project()
    if project is None:
        app.set_status(translate("STATUS_SELECT_PROJECT_EDIT"))
        return
    app.dialog = ProjectDialog.from_project(project)
    app.set_status(translate("STATUS_PROJECT_EDIT_HINT"))


def _delete_project(app, command: Command) -> None:
    project = app.selected_project()
    if project is None:
        app.set_status(translate("STATUS_SELECT_PROJECT_DELETE"))
        return
    if project.is_inbox:
        app.set_status(translate("STATUS_INBOX_PROTECTED"))
        return
    app.dialog = DeleteProjectDialog(project.id, project.name, app.task_count_for_project(project.id))


# --------------------------------------------------------------------- views


def _show_view(view: View):
    def handler(app, command: Command) -> None:
        app.current_view = view

    return handler


def _show_calendar(app, command: Command) -> None:
    app.current_view = View.CALENDAR
    app.calendar_state.goto_today()


def _show_search(app, command: Command) -> None:
    app.current_view = View.SEARCH
    app.input_mode = InputMode.SEARCH
    app.clear_input()
    app.search_results = []
    app.selected_search_index = 0
    project = app.selected_project()
    if project is not None:
        app.set_status(translate("STATUS_SEARCHING_IN", project=project.name))


def _show_debug_logs(app, command: Command) -> None:
    app.current_view = View.MAIN if app.current_view is View.DEBUG_LOGS else View.DEBUG_LOGS


def _show_task_detail(app, command: Command) -> None:
    if app.selected_task() is not None:
        app.current_view = View.TASK_DETAIL


def _show_settings(app, command: Command) -> None:
    app.dialog = SettingsDialog()


def _show_filter_sort(app, command: Command) -> None:
    app.dialog = FilterSortDialog(app.filter, app.sort, app.project_tasks())


# ------------------------------------------------------------------ calendar


def _calendar(method: str):
    def handler(app, command: Command) -> None:
        getattr(app.calendar_state, method)()

    return handler


def _calendar_select_day(app, command: Command) -> None:
    app.current_view = View.MAIN


def _calendar_task_down(app, command: Command) -> None:
    app.calendar_state.next_task(len(get_tasks_for_selected_day(app)))


def _calendar_toggle_task(app, command: Command) -> None:
    task = selected_calendar_task(app)
    if task is not None:
        _toggle_status(app, task)


def _calendar_cycle_priority(app, command: Command) -> None:
    task = selected_calendar_task(app)
    if task is not None:
        _cycle_priority(app, task)


def _calendar_edit_task(app, command: Command) -> None:
    task = selected_calendar_task(app)
    if task is None:
        return
    app.dialog = AddTaskDialog.from_task(task, app.tags)
    app.set_status(translate("STATUS_EDIT_HINT"))


def _calendar_go_to_task(app, command: Command) -> None:
    task = selected_calendar_task(app)
    if task is None:
        return
    app.current_view = View.MAIN
    app.focus = FocusPanel.TASK_LIST
    if task.project_id is None:
        app.selected_project_index = 0
    else:
        idx = position_of(app.projects, task.project_id)
        if idx is not None:
            app.selected_project_index = idx + 1
    app.filter = Filter(FilterKind.ALL)
    if not app.select_task_by_id(task.id):
        app.clamp_selection()
    app.calendar_state.focus = CalendarFocus.DAY_GRID


def _calendar_toggle_completed(app, command: Command) -> None:
    app.calendar_state.toggle_show_completed()
    key = "STATUS_CALENDAR_ALL" if app.calendar_state.show_completed else "STATUS_CALENDAR_ACTIVE"
    app.set_status(translate(key))


# -------------------------------------------------------------------- search


def _refresh_search(app) -> None:
    if app.input_mode is InputMode.SEARCH:
        app.search_results = search_tasks(app.input_buffer, app.project_tasks())
        app.selected_search_index = 0


def _search_navigate_up(app, command: Command) -> None:
    if app.search_results:
        app.selected_search_index = max(app.selected_search_index - 1, 0)


def _search_navigate_down(app, command: Command) -> None:
    if app.search_results:
        app.selected_search_index = min(app.selected_search_index + 1, len(app.search_results) - 1)


def _search_select_task(app, command: Command) -> None:
    if not 0 <= app.selected_search_index < len(app.search_results):
        return
    task = app.search_results[app.selected_search_index].task
    app.current_view = View.MAIN
    app.input_mode = InputMode.NORMAL
    app.clear_input()
    app.focus = FocusPanel.TASK_LIST
    if not app.select_task_by_id(task.id):
        # hidden by the current filter
        app.filter = Filter(FilterKind.ALL)
        app.select_task_by_id(task.id)
    app.set_status(translate("STATUS_SELECTED", title=task.title))


# ------------------------------------------------------------------- filters


def _set_filter(app, command: Command) -> None:
    app.filter = command.arg
    app.reset_selection()


def _cycle_filter(app, command: Command) -> None:
    app.filter = cycle_filter(app.filter)
    app.reset_selection()
    app.set_status(translate("STATUS_FILTER", filter=app.filter.label()))


def _filter_today(app, command: Command) -> None:
    app.filter = Filter(FilterKind.DUE_TODAY)
    app.reset_selection()
    app.set_status(translate("STATUS_FILTER_TODAY"))


def _filter_this_week(app, command: Command) -> None:
    app.filter = Filter(FilterKind.DUE_THIS_WEEK)
    app.reset_selection()
    app.set_status(translate("STATUS_FILTER_WEEK"))


def _filter_by_priority(app, command: Command) -> None:
    app.filter = Filter.by_priority(command.arg)
    app.reset_selection()
    app.set_status(translate("STATUS_FILTER_PRIORITY", priority=command.arg.label))


# --------------------------------------------------------------------- input


def _enter_edit_mode(app, command: Command) -> None:
    app.input_mode = InputMode.EDITING


def _exit_edit_mode(app, command: Command) -> None:
    app.input_mode = InputMode.NORMAL
    app.clear_input()
    app.editing_task = None
    app.clear_status()


def _submit_input(app, command: Command) -> None:
    if app.input_mode is InputMode.EDITING:
        title = app.input_buffer.strip()
        if title:
            if app.editing_task is not None:
                task = copy.deepcopy(app.editing_task)
                task.title = title
                task.touch()
                app.storage.update_task(task)
                message = translate("STATUS_TASK_UPDATED")
            else:
                task = Task.new(title)
                task.project_id = app.selected_project_id()
                app.storage.insert_task(task)
                message = translate("STATUS_TASK_ADDED")
            app.editing_task = None
            app.load_data()
            app.set_status(message)
    app.input_mode = InputMode.NORMAL
    app.clear_input()


def _cancel_input(app, command: Command) -> None:
    if app.current_view is View.SEARCH:
        app.current_view = View.MAIN
        app.search_results = []
        app.selected_search_index = 0
    app.input_mode = InputMode.NORMAL
    app.clear_input()
    app.editing_task = None
    app.clear_status()


def _insert_char(app, command: Command) -> None:
    buf, cursor = app.input_buffer, app.input_cursor
    app.input_buffer = buf[:cursor] + command.arg + buf[cursor:]
    app.input_cursor = cursor + len(command.arg)
    _refresh_search(app)


def _delete_char_backward(app, command: Command) -> None:
    if app.input_cursor == 0:
        return
    buf, cursor = app.input_buffer, app.input_cursor
    app.input_buffer = buf[: cursor - 1] + buf[cursor:]
    app.input_cursor = cursor - 1
    _refresh_search(app)


def _delete_char_forward(app, command: Command) -> None:
    buf, cursor = app.input_buffer, app.input_cursor
    if cursor < len(buf):
        app.input_buffer = buf[:cursor] + buf[cursor + 1:]
        _refresh_search(app)


def _move_cursor_left(app, command: Command) -> None:
    app.input_cursor = max(app.input_cursor - 1, 0)


def _move_cursor_right(app, command: Command) -> None:
    app.input_cursor = min(app.input_cursor + 1, len(app.input_buffer))


def _move_cursor_start(app, command: Command) -> None:
    app.input_cursor = 0


def _move_cursor_end(app, command: Command) -> None:
    app.input_cursor = len(app.input_buffer)


# ----------------------------------------------------------------- debug/app


def _logger_event(app, command: Command) -> None:
    app.log_state.transition(command.arg)


def _quit(app, command: Command) -> None:
    app.should_quit = True


def _refresh(app, command: Command) -> None:
    app.load_data()
    app.set_status(translate("STATUS_DATA_REFRESHED"))


K = CommandKind

HANDLERS = {
    K.NAVIGATE_UP: _navigate_up,
    K.NAVIGATE_DOWN: _navigate_down,
    K.NAVIGATE_TOP: _navigate_top,
    K.NAVIGATE_BOTTOM: _navigate_bottom,
    K.PAGE_UP: _page(-PAGE_SIZE),
    K.PAGE_DOWN: _page(PAGE_SIZE),
    K.SWITCH_PANEL: _switch_panel,
    K.FOCUS_SIDEBAR: _focus_sidebar,
    K.FOCUS_TASK_LIST: _focus_task_list,
    K.ADD_TASK: _add_task,
    K.EDIT_TASK: _edit_task,
    K.DELETE_TASK: _delete_task,
    K.TOGGLE_TASK_STATUS: _toggle_task_status,
    K.CYCLE_PRIORITY: _cycle_task_priority,
    K.MOVE_TO_PROJECT: _move_to_project,
    K.EDIT_TAGS: _edit_tags,
    K.SHOW_QUICK_CAPTURE: _show_quick_capture,
    K.ADD_PROJECT: _add_project,
    K.EDIT_PROJECT: _edit_project,
    K.DELETE_PROJECT: _delete_project,
    K.SHOW_MAIN: _show_view(View.MAIN),
    K.SHOW_HELP: _show_view(View.HELP),
    K.SHOW_CALENDAR: _show_calendar,
    K.SHOW_SEARCH: _show_search,
    K.SHOW_DEBUG_LOGS: _show_debug_logs,
    K.SHOW_TASK_DETAIL: _show_task_detail,
    K.SHOW_SETTINGS: _show_settings,
    K.SHOW_FILTER_SORT: _show_filter_sort,
    K.CALENDAR_PREV_DAY: _calendar("prev_day"),
    K.CALENDAR_NEXT_DAY: _calendar("next_day"),
    K.CALENDAR_PREV_WEEK: _calendar("prev_week"),
    K.CALENDAR_NEXT_WEEK: _calendar("next_week"),
    K.CALENDAR_TODAY: _calendar("goto_today"),
    K.CALENDAR_SELECT_DAY: _calendar_select_day,
    K.CALENDAR_TOGGLE_FOCUS: _calendar("toggle_focus"),
    K.CALENDAR_TASK_UP: _calendar("prev_task"),
    K.CALENDAR_TASK_DOWN: _calendar_task_down,
    K.CALENDAR_TOGGLE_TASK: _calendar_toggle_task,
    K.CALENDAR_CYCLE_PRIORITY: _calendar_cycle_priority,
    K.CALENDAR_EDIT_TASK: _calendar_edit_task,
    K.CALENDAR_GO_TO_TASK: _calendar_go_to_task,
    K.CALENDAR_TOGGLE_COMPLETED: _calendar_toggle_completed,
    K.SEARCH_NAVIGATE_UP: _search_navigate_up,
    K.SEARCH_NAVIGATE_DOWN: _search_navigate_down,
    K.SEARCH_SELECT_TASK: _search_select_task,
    K.SET_FILTER: _set_filter,
    K.CYCLE_FILTER: _cycle_filter,
    K.FILTER_TODAY: _filter_today,
    K.FILTER_THIS_WEEK: _filter_this_week,
    K.FILTER_BY_PRIORITY: _filter_by_priority,
    K.ENTER_EDIT_MODE: _enter_edit_mode,
    K.EXIT_EDIT_MODE: _exit_edit_mode,
    K.SUBMIT_INPUT: _submit_input,
    K.CANCEL_INPUT: _cancel_input,
    K.INSERT_CHAR: _insert_char,
    K.DELETE_CHAR_BACKWARD: _delete_char_backward,
    K.DELETE_CHAR_FORWARD: _delete_char_forward,
    K.MOVE_CURSOR_LEFT: _move_cursor_left,
    K.MOVE_CURSOR_RIGHT: _move_cursor_right,
    K.MOVE_CURSOR_START: _move_cursor_start,
    K.MOVE_CURSOR_END: _move_cursor_end,
    K.LOGGER_EVENT: _logger_event,
    K.QUIT: _quit,
    K.FORCE_QUIT: _quit,
    K.REFRESH: _refresh,
}

_STOP_KINDS = frozenset({K.QUIT, K.FORCE_QUIT})


def execute(command: Command, app) -> bool:
    """Run `command` against `app`; False means the event loop should stop."""
    logger.debug("Executing command: %s", command)
    HANDLERS[command.kind](app, command)
    return command.kind not in _STOP_KINDS


__all__ = ["execute", "HANDLERS"]
