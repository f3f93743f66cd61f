from dataclasses import dataclass, field
from datetime import datetime

from .dates import utc_now
from .ids import new_id

INBOX_ID = "inbox"
DEFAULT_PROJECT_COLOR = "#3498db"
DEFAULT_PROJECT_ICON = "📁"


@dataclass
class Project:
    id: str
    name: str
    color: str = DEFAULT_PROJECT_COLOR
    icon: str = DEFAULT_PROJECT_ICON
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def new(cls, name: str) -> "Project":
        return cls(id=new_id(), name=name)

    @classmethod
    def with_style(cls, name: str, color: str, icon: str) -> "Project":
        return cls(id=new_id(), name=name, color=color, icon=icon)

    @classmethod
    def inbox(cls) -> "Project":
        return cls(id=INBOX_ID, name="Inbox")

    @property
    def is_inbox(self) -> bool:
        return self.id == INBOX_ID


@dataclass
class Tag:
    id: str
    name: str

    @classmethod
    def new(cls, name: str) -> "Tag":
        return cls(id=new_id(), name=name)


__all__ = ["Project", "Tag", "INBOX_ID", "DEFAULT_PROJECT_COLOR", "DEFAULT_PROJECT_ICON"]
