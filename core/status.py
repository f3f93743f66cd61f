from enum import Enum
from typing import Final


class Priority(Enum):
    """Task priority. Value tuple: (code, rank, color, glyph)."""

    LOW = ("low", 0, "gray", "↓")
    MEDIUM = ("medium", 1, "blue", "•")
    HIGH = ("high", 2, "yellow", "↑")
    URGENT = ("urgent", 3, "red", "‼")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def rank(self) -> int:
        return self.value[1]

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def next(self) -> "Priority":
        """Low → Medium → High → Urgent → Low."""
        return _PRIORITY_CYCLE[(_PRIORITY_CYCLE.index(self) + 1) % len(_PRIORITY_CYCLE)]

    def __lt__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def from_string(cls, value: str) -> "Priority":
        token = (value or "").strip().lower()
        for priority in cls:
            if priority.code == token:
                return priority
        return cls.MEDIUM

    @classmethod
    def default(cls) -> "Priority":
        return cls.MEDIUM


_PRIORITY_CYCLE: Final = (Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.URGENT)


class TaskStatus(Enum):
    PENDING = ("pending", "red", "○")
    IN_PROGRESS = ("in_progress", "yellow", "◐")
    COMPLETED = ("completed", "green", "✓")
    ARCHIVED = ("archived", "gray", "▪")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_closed(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.ARCHIVED)

    @classmethod
    def from_string(cls, value: str) -> "TaskStatus":
        token = (value or "").strip().lower().replace(" ", "_").replace("-", "_")
        for status in cls:
            if status.code == token:
                return status
        return cls.PENDING


__all__ = ["Priority", "TaskStatus"]
