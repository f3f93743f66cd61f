#!/usr/bin/env python3
"""TUI application - TaskDeckTUI class and cmd_tui command."""

import logging
import os
import time
from typing import Iterable, Optional, Tuple

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Float, FloatContainer, HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import ConditionalContainer, DynamicContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension

from application.errors import AppError
from core.desktop.devtools.interface.constants import TICK_INTERVAL
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_dialog_actions import handle_key
from core.desktop.devtools.interface.tui_models import NAMED_KEYS, InputMode, KeyEvent, View
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
from core.desktop.devtools.interface.tui_state import AppState
from core.desktop.devtools.interface.tui_status import build_status_text
from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("taskdeck.tui")

SIDEBAR_WIDTH = 28
DIALOG_WIDTH = 64

_RENAMED_KEYS = {
    "c-m": ("enter", False),
    "c-j": ("enter", True),
    "c-i": ("tab", False),
    "s-tab": ("backtab", False),
    "c-h": ("backspace", False),
    "escape": ("esc", False),
    "c-@": (" ", True),
}

# named keys prompt_toolkit already spells our way
_PASSTHROUGH_KEYS = NAMED_KEYS - {key for key, _ in _RENAMED_KEYS.values()}


def key_event_from_names(names: Iterable[str]) -> Optional[KeyEvent]:
    """Translate a prompt_toolkit key sequence (as key names) into a KeyEvent.

    A leading "escape" followed by another key means Alt. Unknown keys
    (terminal responses, mouse reports) yield None.
    """
    names = list(names)
    if not names:
        return None
    alt = False
    if len(names) == 2 and names[0] == "escape":
        alt = True
        names = names[1:]
    if len(names) != 1:
        return None
    name = names[0]
    if name in _RENAMED_KEYS:
        key, ctrl = _RENAMED_KEYS[name]
        return KeyEvent(key, ctrl=ctrl, alt=alt)
    if name in _PASSTHROUGH_KEYS:
        return KeyEvent(name, alt=alt)
    if name.startswith("s-") and name[2:] in _PASSTHROUGH_KEYS:
        return KeyEvent(name[2:], shift=True, alt=alt)
    if name.startswith("c-") and name[2:] in _PASSTHROUGH_KEYS:
        return KeyEvent(name[2:], ctrl=True, alt=alt)
    if name.startswith("c-") and len(name) == 3:
        return KeyEvent(name[2], ctrl=True, alt=alt)
    if len(name) == 1 and name.isprintable():
        return KeyEvent(name, alt=alt, shift=name.isupper())
    return None


def _key_name(key) -> str:
    return getattr(key, "value", key)


class TaskDeckTUI:
    """prompt_toolkit shell around AppState: renders views and feeds keys."""

    def __init__(self, state: AppState, theme: str = DEFAULT_THEME):
        self.state = state
        self.theme_name = theme
        self.style = build_style(theme)

        kb = KeyBindings()

        @kb.add(Keys.Any)
        def _(event):
            self.dispatch_names([_key_name(kp.key) for kp in event.key_sequence])

        @kb.add("escape", Keys.Any)
        def _(event):
            self.dispatch_names([_key_name(kp.key) for kp in event.key_sequence])

        @kb.add(Keys.BracketedPaste)
        def _(event):
            """Pasted text arrives as one chunk; feed it char by char."""
            for ch in event.data.replace("\r", ""):
                if ch == "\n":
                    continue
                if not self.dispatch(KeyEvent(ch)):
                    break

        self.status_bar = Window(content=FormattedTextControl(self.get_status_text), height=1, always_hide_cursor=True)
        self.input_line = ConditionalContainer(
            Window(content=FormattedTextControl(self.get_input_text), height=1, always_hide_cursor=True),
            filter=Condition(lambda: self.state.input_mode is InputMode.EDITING),
        )
        self.main_body = VSplit(
            [
                Window(content=FormattedTextControl(self.get_sidebar_text), width=Dimension.exact(SIDEBAR_WIDTH), always_hide_cursor=True),
                Window(width=1, char="│", style="class:border"),
                Window(content=FormattedTextControl(self.get_task_list_text), always_hide_cursor=True, wrap_lines=False),
            ],
            padding=0,
        )
        self.view_window = Window(content=FormattedTextControl(self.get_view_text), always_hide_cursor=True, wrap_lines=False)
        self.body_container = DynamicContainer(self._resolve_body_container)
        self.dialog_float = Float(
            content=ConditionalContainer(
                Window(
                    content=FormattedTextControl(self.get_dialog_text),
                    width=Dimension(preferred=DIALOG_WIDTH),
                    style="class:dialog",
                    always_hide_cursor=True,
                    wrap_lines=True,
                ),
                filter=Condition(lambda: self.state.dialog is not None),
            ),
        )
        root = FloatContainer(
            content=HSplit([self.body_container, self.input_line, self.status_bar]),
            floats=[self.dialog_float],
        )

        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            mouse_support=True,
            refresh_interval=TICK_INTERVAL,
            before_render=self._on_before_render,
        )
        # Esc must not wait half a second for a possible escape sequence.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TASKDECK_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    # ------------------------------------------------------------ sizes

    def _size(self) -> Tuple[int, int]:
        try:
            size = self.app.output.get_size()
            return size.columns, size.rows
        except (AttributeError, OSError):
            return 100, 30

    @property
    def width(self) -> int:
        return self._size()[0]

    @property
    def height(self) -> int:
        return self._size()[1]

    # ----------------------------------------------------------- render

    def get_status_text(self) -> FormattedText:
        return build_status_text(self.state, self.width)

    def get_input_text(self) -> FormattedText:
        return render_input_line(self.state, self.width)

    def get_sidebar_text(self) -> FormattedText:
        return render_sidebar(self.state, SIDEBAR_WIDTH)

    def get_task_list_text(self) -> FormattedText:
        extra = 2 if self.state.input_mode is InputMode.EDITING else 1
        return render_task_list(self.state, max(self.width - SIDEBAR_WIDTH - 1, 10), max(self.height - extra, 1))

    def get_dialog_text(self) -> FormattedText:
        if self.state.dialog is None:
            return FormattedText([])
        return render_dialog(self.state.dialog, min(DIALOG_WIDTH, self.width) - 2)

    def get_view_text(self) -> FormattedText:
        view = self.state.current_view
        width = self.width
        if view is View.TASK_DETAIL:
            return render_task_detail(self.state, width)
        if view is View.CALENDAR:
            return render_calendar(self.state, width)
        if view is View.SEARCH:
            return render_search(self.state, width)
        if view is View.HELP:
            return render_help(self.state, width)
        if view is View.DEBUG_LOGS:
            return render_debug_logs(self.state, width)
        return FormattedText([])

    def _resolve_body_container(self):
        if self.state.current_view is View.MAIN:
            return self.main_body
        return self.view_window

    def _on_before_render(self, _app) -> None:
        self.state.on_tick(time.time())

    # ------------------------------------------------------------- keys

    def dispatch_names(self, names) -> bool:
        key = key_event_from_names(names)
        if key is None:
            logger.debug("Ignoring key sequence %r", names)
            return True
        return self.dispatch(key)

    def dispatch(self, key: KeyEvent) -> bool:
        """Route one key; stops the application when the handler says so."""
        try:
            keep_running = handle_key(self.state, key)
        except AppError as exc:
            logger.warning("Storage operation failed: %s", exc)
            self.state.set_status(translate("STATUS_ERROR", error=exc))
            keep_running = True
        if not keep_running or self.state.should_quit:
            if self.app.is_running:
                self.app.exit()
            return False
        return True

    def run(self) -> None:
        self.state.load_data()
        self.state.reset_selection()
        logger.info("Starting TUI with %d task(s) in %d project(s)", len(self.state.tasks), len(self.state.projects))
        self.app.run()


def cmd_tui(args, storage, log_state=None) -> int:
    state = AppState(storage, status_ttl=args.status_ttl, log_state=log_state)
    tui = TaskDeckTUI(state, theme=getattr(args, "theme", None) or DEFAULT_THEME)
    tui.run()
    return 0


__all__ = ["TaskDeckTUI", "cmd_tui", "key_event_from_names"]
