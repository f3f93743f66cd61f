"""Settings dialog: destructive data maintenance behind a yes/no confirmation."""

from enum import Enum
from typing import Optional

from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent


class SettingsOption(Enum):
    DELETE_COMPLETED_TASKS = ("delete_completed", "Delete all completed tasks")
    RESET_DATABASE = ("reset_database", "Reset database (delete everything)")

    @property
    def label(self) -> str:
        return self.value[1]


class SettingsState(Enum):
    MENU = "menu"
    CONFIRMING = "confirming"


class SettingsDialog:
    def __init__(self):
        self.options = list(SettingsOption)
        self.selected_index = 0
        self.state = SettingsState.MENU
        self.confirming_option: Optional[SettingsOption] = None
        self.confirm_selected_yes = False

    def selected_option(self) -> Optional[SettingsOption]:
        if 0 <= self.selected_index < len(self.options):
            return self.options[self.selected_index]
        return None

    def confirmed_option(self) -> Optional[SettingsOption]:
        return self.confirming_option

    def _back_to_menu(self) -> None:
        self.state = SettingsState.MENU
        self.confirming_option = None

    def handle_key(self, key: KeyEvent) -> DialogAction:
        if self.state is SettingsState.CONFIRMING:
            return self._handle_confirm_key(key)
        return self._handle_menu_key(key)

    def _handle_menu_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        if k == "esc":
            return DialogAction.CANCEL
        if k in ("up", "k"):
            self.selected_index = max(self.selected_index - 1, 0)
        elif k in ("down", "j"):
            self.selected_index = min(self.selected_index + 1, len(self.options) - 1)
        elif k == "enter":
            option = self.selected_option()
            if option is not None:
                # Every option is destructive, so each goes through confirmation.
                self.state = SettingsState.CONFIRMING
                self.confirming_option = option
                self.confirm_selected_yes = False
        return DialogAction.NONE

    def _handle_confirm_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        if k in ("y", "Y"):
            return DialogAction.SUBMIT
        if k in ("n", "N", "esc"):
            self._back_to_menu()
        elif k in ("left", "right", "tab", "h", "l"):
            self.confirm_selected_yes = not self.confirm_selected_yes
        elif k == "enter":
            if self.confirm_selected_yes:
                return DialogAction.SUBMIT
            self._back_to_menu()
        return DialogAction.NONE


__all__ = ["SettingsDialog", "SettingsOption", "SettingsState"]
