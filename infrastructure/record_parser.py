from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from application.errors import ConversionError
from core import Priority, Project, Tag, Task, TaskStatus
from core.project import DEFAULT_PROJECT_COLOR, DEFAULT_PROJECT_ICON


class RecordParser:
    """Converts between domain objects and plain YAML-safe dictionaries."""

    @staticmethod
    def _coerce_timestamp(value: Any, field_name: str) -> Optional[datetime]:
        """Normalize YAML timestamps to aware UTC datetimes.

        YAML loaders may already parse ISO-8601 values into datetime/date
        objects; naive values are treated as UTC.
        """
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        else:
            try:
                parsed = datetime.fromisoformat(str(value).strip())
            except ValueError as exc:
                raise ConversionError(f"Invalid timestamp in {field_name}: {value!r}") from exc
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    @classmethod
    def _required_timestamp(cls, raw: Dict[str, Any], field_name: str) -> datetime:
        value = cls._coerce_timestamp(raw.get(field_name), field_name)
        if value is None:
            raise ConversionError(f"Missing {field_name}")
        return value

    @staticmethod
    def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    @staticmethod
    def _required_text(raw: Dict[str, Any], field_name: str) -> str:
        value = raw.get(field_name)
        if value is None or str(value) == "":
            raise ConversionError(f"Missing {field_name}")
        return str(value)

    @classmethod
    def parse_task(cls, raw: Dict[str, Any]) -> Task:
        if not isinstance(raw, dict):
            raise ConversionError(f"Task record must be a mapping, got {type(raw).__name__}")
        tags = raw.get("tags") or []
        if not isinstance(tags, list):
            raise ConversionError("Task tags must be a list")
        return Task(
            id=cls._required_text(raw, "id"),
            title=str(raw.get("title") or ""),
            description=raw.get("description") or None,
            due_date=cls._coerce_timestamp(raw.get("due_date"), "due_date"),
            priority=Priority.from_string(str(raw.get("priority") or "")),
            status=TaskStatus.from_string(str(raw.get("status") or "")),
            project_id=raw.get("project_id") or None,
            tags=[str(tag) for tag in tags],
            created_at=cls._required_timestamp(raw, "created_at"),
            updated_at=cls._required_timestamp(raw, "updated_at"),
            completed_at=cls._coerce_timestamp(raw.get("completed_at"), "completed_at"),
        )

    @classmethod
    def task_to_dict(cls, task: Task) -> Dict[str, Any]:
        return {
            "id": task.id,
            "title": task.title,
            "description": task.description,
            "due_date": cls._format_timestamp(task.due_date),
            "priority": task.priority.code,
            "status": task.status.code,
            "project_id": task.project_id,
            "tags": list(task.tags),
            "created_at": cls._format_timestamp(task.created_at),
            "updated_at": cls._format_timestamp(task.updated_at),
            "completed_at": cls._format_timestamp(task.completed_at),
        }

    @classmethod
    def parse_project(cls, raw: Dict[str, Any]) -> Project:
        if not isinstance(raw, dict):
            raise ConversionError(f"Project record must be a mapping, got {type(raw).__name__}")
        return Project(
            id=cls._required_text(raw, "id"),
            name=cls._required_text(raw, "name"),
            color=str(raw.get("color") or DEFAULT_PROJECT_COLOR),
            icon=str(raw.get("icon") or DEFAULT_PROJECT_ICON),
            created_at=cls._required_timestamp(raw, "created_at"),
        )

    @classmethod
    def project_to_dict(cls, project: Project) -> Dict[str, Any]:
        return {
            "id": project.id,
            "name": project.name,
            "color": project.color,
            "icon": project.icon,
            "created_at": cls._format_timestamp(project.created_at),
        }

    @classmethod
    def parse_tag(cls, raw: Dict[str, Any]) -> Tag:
        if not isinstance(raw, dict):
            raise ConversionError(f"Tag record must be a mapping, got {type(raw).__name__}")
        return Tag(id=cls._required_text(raw, "id"), name=cls._required_text(raw, "name"))

    @staticmethod
    def tag_to_dict(tag: Tag) -> Dict[str, Any]:
        return {"id": tag.id, "name": tag.name}

    @classmethod
    def parse_many(cls, records: Any, parse) -> List[Any]:
        if records is None:
            return []
        if not isinstance(records, list):
            raise ConversionError(f"Expected a list of records, got {type(records).__name__}")
        return [parse(item) for item in records]
