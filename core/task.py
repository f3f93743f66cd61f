from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from .dates import local_date, utc_now
from .ids import new_id
from .status import Priority, TaskStatus


@dataclass
class Task:
    id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    project_id: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None

    @classmethod
    def new(cls, title: str) -> "Task":
        now = utc_now()
        return cls(id=new_id(), title=title, created_at=now, updated_at=now)

    def touch(self) -> None:
        self.updated_at = utc_now()

    def complete(self) -> None:
        now = utc_now()
        self.status = TaskStatus.COMPLETED
        self.completed_at = now
        self.updated_at = now

    def reopen(self) -> None:
        self.status = TaskStatus.PENDING
        self.completed_at = None
        self.touch()

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        if self.due_date is None or self.status.is_closed:
            return False
        return self.due_date < (now or utc_now())

    def is_due_today(self, now: Optional[datetime] = None) -> bool:
        if self.due_date is None:
            return False
        return local_date(self.due_date) == local_date(now or utc_now())

    def is_due_this_week(self, now: Optional[datetime] = None) -> bool:
        if self.due_date is None:
            return False
        current = now or utc_now()
        return current <= self.due_date <= current + timedelta(days=7)

    def has_tag(self, name: str) -> bool:
        needle = name.lower()
        return any(tag.lower() == needle for tag in self.tags)

    def add_tag(self, name: str) -> None:
        if name not in self.tags:
            self.tags.append(name)

    def remove_tag(self, name: str) -> None:
        self.tags = [tag for tag in self.tags if tag != name]


__all__ = ["Task"]
