"""Yes/No confirmation dialog."""

from core.desktop.devtools.interface.tui_models import DialogAction, KeyEvent


class ConfirmDialog:
    def __init__(
        self,
        title: str,
        message: str,
        confirm_label: str = "Yes",
        cancel_label: str = "No",
        destructive: bool = False,
    ):
        self.title = title
        self.message = message
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label
        self.destructive = destructive
        self.selected_yes = False

    @classmethod
    def delete_task(cls, task_title: str) -> "ConfirmDialog":
        return cls(
            "Delete Task?",
            f'"{task_title}"\n\nThis action cannot be undone.',
            confirm_label="Delete",
            cancel_label="Cancel",
            destructive=True,
        )

    def toggle(self) -> None:
        self.selected_yes = not self.selected_yes

    def handle_key(self, key: KeyEvent) -> DialogAction:
        k = key.key
        if k in ("y", "Y"):
            return DialogAction.SUBMIT
        if k in ("n", "N", "esc"):
            return DialogAction.CANCEL
        if k in ("left", "right", "tab", "h", "l"):
            self.toggle()
            return DialogAction.NONE
        if k == "enter":
            return DialogAction.SUBMIT if self.selected_yes else DialogAction.CANCEL
        return DialogAction.NONE


__all__ = ["ConfirmDialog"]
