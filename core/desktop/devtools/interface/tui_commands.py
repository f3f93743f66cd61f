"""Command vocabulary: every action the TUI can perform.

A `Command` is a `CommandKind` plus an optional argument (the filter for
SET_FILTER, the priority for FILTER_BY_PRIORITY, the character for
INSERT_CHAR, the log event for LOGGER_EVENT).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CommandKind(Enum):
    # navigation
    NAVIGATE_UP = "navigate_up"
    NAVIGATE_DOWN = "navigate_down"
    NAVIGATE_TOP = "navigate_top"
    NAVIGATE_BOTTOM = "navigate_bottom"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    SWITCH_PANEL = "switch_panel"
    FOCUS_SIDEBAR = "focus_sidebar"
    FOCUS_TASK_LIST = "focus_task_list"
    # tasks
    ADD_TASK = "add_task"
    EDIT_TASK = "edit_task"
    DELETE_TASK = "delete_task"
    TOGGLE_TASK_STATUS = "toggle_task_status"
    CYCLE_PRIORITY = "cycle_priority"
    MOVE_TO_PROJECT = "move_to_project"
    EDIT_TAGS = "edit_tags"
    SHOW_QUICK_CAPTURE = "show_quick_capture"
    # projects
    ADD_PROJECT = "add_project"
    EDIT_PROJECT = "edit_project"
    DELETE_PROJECT = "delete_project"
    # views
    SHOW_MAIN = "show_main"
    SHOW_HELP = "show_help"
    SHOW_CALENDAR = "show_calendar"
    SHOW_SEARCH = "show_search"
    SHOW_DEBUG_LOGS = "show_debug_logs"
    SHOW_TASK_DETAIL = "show_task_detail"
    SHOW_SETTINGS = "show_settings"
    SHOW_FILTER_SORT = "show_filter_sort"
    # calendar
    CALENDAR_PREV_DAY = "calendar_prev_day"
    CALENDAR_NEXT_DAY = "calendar_next_day"
    CALENDAR_PREV_WEEK = "calendar_prev_week"
    CALENDAR_NEXT_WEEK = "calendar_next_week"
    CALENDAR_TODAY = "calendar_today"
    CALENDAR_SELECT_DAY = "calendar_select_day"
    CALENDAR_TOGGLE_FOCUS = "calendar_toggle_focus"
    CALENDAR_TASK_UP = "calendar_task_up"
    CALENDAR_TASK_DOWN = "calendar_task_down"
    CALENDAR_TOGGLE_TASK = "calendar_toggle_task"
    CALENDAR_CYCLE_PRIORITY = "calendar_cycle_priority"
    CALENDAR_EDIT_TASK = "calendar_edit_task"
    CALENDAR_GO_TO_TASK = "calendar_go_to_task"
    CALENDAR_TOGGLE_COMPLETED = "calendar_toggle_completed"
    # search
    SEARCH_NAVIGATE_UP = "search_navigate_up"
    SEARCH_NAVIGATE_DOWN = "search_navigate_down"
    SEARCH_SELECT_TASK = "search_select_task"
    # filters
    SET_FILTER = "set_filter"
    CYCLE_FILTER = "cycle_filter"
    FILTER_TODAY = "filter_today"
    FILTER_THIS_WEEK = "filter_this_week"
    FILTER_BY_PRIORITY = "filter_by_priority"
    # input
    ENTER_EDIT_MODE = "enter_edit_mode"
    EXIT_EDIT_MODE = "exit_edit_mode"
    SUBMIT_INPUT = "submit_input"
    CANCEL_INPUT = "cancel_input"
    INSERT_CHAR = "insert_char"
    DELETE_CHAR_BACKWARD = "delete_char_backward"
    DELETE_CHAR_FORWARD = "delete_char_forward"
    MOVE_CURSOR_LEFT = "move_cursor_left"
    MOVE_CURSOR_RIGHT = "move_cursor_right"
    MOVE_CURSOR_START = "move_cursor_start"
    MOVE_CURSOR_END = "move_cursor_end"
    # debug
    LOGGER_EVENT = "logger_event"
    # app
    QUIT = "quit"
    FORCE_QUIT = "force_quit"
    REFRESH = "refresh"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    arg: Any = None

    def __str__(self) -> str:
        if self.arg is None:
            return self.kind.value
        return f"{self.kind.value}({self.arg!r})"


__all__ = ["Command", "CommandKind"]
