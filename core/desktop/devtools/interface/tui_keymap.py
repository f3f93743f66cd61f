"""Key → Command mapping.

Resolution order: global keys, then the table of the current view (when not
Main), then the table of the current input mode. In Normal mode `a`,
`e`/Enter and `d` act on projects while the sidebar has focus and on tasks
otherwise. `map_key` never raises; unmapped keys return None.
"""

from typing import Optional

from core import Priority
from core.desktop.devtools.interface.tui_calendar import CalendarFocus
from core.desktop.devtools.interface.tui_commands import Command, CommandKind as K
from core.desktop.devtools.interface.tui_log_view import LogEvent
from core.desktop.devtools.interface.tui_models import FocusPanel, InputMode, KeyEvent, View


def _cmd(kind: K, arg=None) -> Command:
    return Command(kind, arg)


_DEBUG_KEYS = {
    " ": LogEvent.SPACE_BAR,
    "up": LogEvent.UP,
    "k": LogEvent.UP,
    "down": LogEvent.DOWN,
    "j": LogEvent.DOWN,
    "pageup": LogEvent.PREV_PAGE,
    "pagedown": LogEvent.NEXT_PAGE,
    "left": LogEvent.LEFT,
    "h": LogEvent.LEFT,
    "right": LogEvent.RIGHT,
    "l": LogEvent.RIGHT,
    "+": LogEvent.PLUS,
    "=": LogEvent.PLUS,
    "-": LogEvent.MINUS,
    "H": LogEvent.HIDE,
}

_CALENDAR_GRID_KEYS = {
    "esc": K.SHOW_MAIN,
    "left": K.CALENDAR_PREV_DAY,
    "h": K.CALENDAR_PREV_DAY,
    "right": K.CALENDAR_NEXT_DAY,
    "l": K.CALENDAR_NEXT_DAY,
    "up": K.CALENDAR_PREV_WEEK,
    "k": K.CALENDAR_PREV_WEEK,
    "down": K.CALENDAR_NEXT_WEEK,
    "j": K.CALENDAR_NEXT_WEEK,
    "t": K.CALENDAR_TODAY,
    "enter": K.CALENDAR_SELECT_DAY,
    "q": K.QUIT,
    "tab": K.CALENDAR_TOGGLE_FOCUS,
    "a": K.CALENDAR_TOGGLE_COMPLETED,
}

_CALENDAR_TASK_KEYS = {
    "k": K.CALENDAR_TASK_UP,
    "up": K.CALENDAR_TASK_UP,
    "j": K.CALENDAR_TASK_DOWN,
    "down": K.CALENDAR_TASK_DOWN,
    " ": K.CALENDAR_TOGGLE_TASK,
    "p": K.CALENDAR_CYCLE_PRIORITY,
    "e": K.CALENDAR_EDIT_TASK,
    "enter": K.CALENDAR_GO_TO_TASK,
}

_TASK_DETAIL_KEYS = {
    "esc": K.SHOW_MAIN,
    " ": K.TOGGLE_TASK_STATUS,
    "p": K.CYCLE_PRIORITY,
    "e": K.EDIT_TASK,
    "enter": K.EDIT_TASK,
    "d": K.DELETE_TASK,
    "q": K.QUIT,
}

_NORMAL_KEYS = {
    "q": K.QUIT,
    "j": K.NAVIGATE_DOWN,
    "down": K.NAVIGATE_DOWN,
    "k": K.NAVIGATE_UP,
    "up": K.NAVIGATE_UP,
    "g": K.NAVIGATE_TOP,
    "home": K.NAVIGATE_TOP,
    "G": K.NAVIGATE_BOTTOM,
    "end": K.NAVIGATE_BOTTOM,
    "tab": K.SWITCH_PANEL,
    "h": K.FOCUS_SIDEBAR,
    "left": K.FOCUS_SIDEBAR,
    "l": K.FOCUS_TASK_LIST,
    "right": K.FOCUS_TASK_LIST,
    " ": K.TOGGLE_TASK_STATUS,
    "p": K.CYCLE_PRIORITY,
    "t": K.EDIT_TAGS,
    "m": K.MOVE_TO_PROJECT,
    "?": K.SHOW_HELP,
    "/": K.SHOW_SEARCH,
    "c": K.SHOW_CALENDAR,
    "T": K.FILTER_TODAY,
    "W": K.FILTER_THIS_WEEK,
    "f": K.SHOW_FILTER_SORT,
    "S": K.SHOW_SETTINGS,
    "r": K.REFRESH,
    "n": K.SHOW_QUICK_CAPTURE,
    "F": K.CYCLE_FILTER,
    "v": K.SHOW_TASK_DETAIL,
    "i": K.ENTER_EDIT_MODE,
}

# (sidebar, task list)
_FOCUS_KEYS = {
    "a": (K.ADD_PROJECT, K.ADD_TASK),
    "e": (K.EDIT_PROJECT, K.EDIT_TASK),
    "enter": (K.EDIT_PROJECT, K.EDIT_TASK),
    "d": (K.DELETE_PROJECT, K.DELETE_TASK),
}

_PRIORITY_KEYS = {"1": Priority.LOW, "2": Priority.MEDIUM, "3": Priority.HIGH, "4": Priority.URGENT}

_EDITING_KEYS = {
    "esc": K.CANCEL_INPUT,
    "enter": K.SUBMIT_INPUT,
    "backspace": K.DELETE_CHAR_BACKWARD,
    "delete": K.DELETE_CHAR_FORWARD,
    "left": K.MOVE_CURSOR_LEFT,
    "right": K.MOVE_CURSOR_RIGHT,
    "home": K.MOVE_CURSOR_START,
    "end": K.MOVE_CURSOR_END,
}

_SEARCH_KEYS = dict(_EDITING_KEYS, enter=K.SEARCH_SELECT_TASK, down=K.SEARCH_NAVIGATE_DOWN, up=K.SEARCH_NAVIGATE_UP)


def _lookup(table, key: KeyEvent) -> Optional[Command]:
    kind = table.get(key.key)
    return _cmd(kind) if kind is not None else None


def _map_debug(key: KeyEvent) -> Optional[Command]:
    if key.key == "esc":
        return _cmd(K.SHOW_MAIN)
    event = _DEBUG_KEYS.get(key.key)
    return _cmd(K.LOGGER_EVENT, event) if event is not None else None


def _map_calendar(key: KeyEvent, app) -> Optional[Command]:
    if app.calendar_state.focus is CalendarFocus.TASK_LIST:
        command = _lookup(_CALENDAR_TASK_KEYS, key)
        if command is not None:
            return command
    return _lookup(_CALENDAR_GRID_KEYS, key)


def _map_normal(key: KeyEvent, app) -> Optional[Command]:
    if key.ctrl:
        if key.key == "d":
            return _cmd(K.PAGE_DOWN)
        if key.key == "u":
            return _cmd(K.PAGE_UP)
        return None
    if key.alt:
        return None
    if key.key in _FOCUS_KEYS:
        sidebar, task_list = _FOCUS_KEYS[key.key]
        return _cmd(sidebar if app.focus is FocusPanel.SIDEBAR else task_list)
    if key.key in _PRIORITY_KEYS:
        return _cmd(K.FILTER_BY_PRIORITY, _PRIORITY_KEYS[key.key])
    return _lookup(_NORMAL_KEYS, key)


def _map_editing(key: KeyEvent) -> Optional[Command]:
    if key.ctrl:
        if key.key == "a":
            return _cmd(K.MOVE_CURSOR_START)
        if key.key == "e":
            return _cmd(K.MOVE_CURSOR_END)
        return None
    if key.is_char:
        return _cmd(K.INSERT_CHAR, key.key)
    return _lookup(_EDITING_KEYS, key)


def _map_search(key: KeyEvent) -> Optional[Command]:
    if key.ctrl:
        ctrl_keys = {"a": K.MOVE_CURSOR_START, "e": K.MOVE_CURSOR_END, "n": K.SEARCH_NAVIGATE_DOWN, "p": K.SEARCH_NAVIGATE_UP}
        kind = ctrl_keys.get(key.key)
        return _cmd(kind) if kind is not None else None
    if key.is_char:
        return _cmd(K.INSERT_CHAR, key.key)
    return _lookup(_SEARCH_KEYS, key)


def map_key(key: KeyEvent, app) -> Optional[Command]:
    if key.ctrl and key.key == "c":
        return _cmd(K.FORCE_QUIT)
    if key.key == "f12":
        return _cmd(K.SHOW_DEBUG_LOGS)

    view = app.current_view
    if view is View.HELP:
        return _cmd(K.SHOW_MAIN)
    if view is View.DEBUG_LOGS:
        return _map_debug(key)
    if view is View.CALENDAR:
        return _map_calendar(key, app)
    if view is View.TASK_DETAIL:
        return _lookup(_TASK_DETAIL_KEYS, key)
    if view is View.SEARCH and app.input_mode is InputMode.SEARCH:
        return _map_search(key)

    mode = app.input_mode
    if mode is InputMode.EDITING:
        return _map_editing(key)
    if mode is InputMode.SEARCH:
        return _map_search(key)
    return _map_normal(key, app)


__all__ = ["map_key"]
