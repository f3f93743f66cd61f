import copy
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from application.errors import (
    InboxProtectedError,
    MigrationError,
    NotFoundError,
    StorageEngineError,
)
from application.ports import Storage
from core import INBOX_ID, Project, Tag, Task, TaskStatus
from infrastructure.record_parser import RecordParser

logger = logging.getLogger("taskdeck.storage")

SCHEMA_VERSION = 1
DEFAULT_DATA_PATH = Path.home() / ".taskdeck" / "taskdeck.yaml"


class YamlStorage(Storage):
    """All projects, tasks and tags in a single YAML document.

    Every mutation rewrites the document atomically; a failed write leaves both
    the file and the in-memory snapshot untouched. With ``path=None`` the data
    lives only in memory.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._tasks: List[Task] = []
        self._projects: List[Project] = []
        self._tags: List[Tag] = []
        if self.path is not None and self.path.exists():
            self._load()
        if not any(p.is_inbox for p in self._projects):
            self._commit(projects=[Project.inbox()] + self._projects)

    @classmethod
    def in_memory(cls) -> "YamlStorage":
        return cls(None)

    @classmethod
    def open_default(cls) -> "YamlStorage":
        return cls(DEFAULT_DATA_PATH)

    # ------------------------------------------------------------------ io

    def _load(self) -> None:
        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise StorageEngineError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageEngineError(f"Unexpected document root in {self.path}")
        version = raw.get("schema_version", SCHEMA_VERSION)
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise MigrationError(f"Unsupported schema version {version!r} in {self.path}")
        self._projects = RecordParser.parse_many(raw.get("projects"), RecordParser.parse_project)
        self._tasks = RecordParser.parse_many(raw.get("tasks"), RecordParser.parse_task)
        self._tags = RecordParser.parse_many(raw.get("tags"), RecordParser.parse_tag)
        logger.debug(
            "Loaded %d task(s), %d project(s), %d tag(s) from %s",
            len(self._tasks), len(self._projects), len(self._tags), self.path,
        )

    def _document(self, tasks: List[Task], projects: List[Project], tags: List[Tag]) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "projects": [RecordParser.project_to_dict(p) for p in projects],
            "tasks": [RecordParser.task_to_dict(t) for t in tasks],
            "tags": [RecordParser.tag_to_dict(t) for t in tags],
        }

    def _write(self, document: Dict[str, Any]) -> None:
        root = self.path.parent
        tmp_path: Optional[Path] = None
        try:
            root.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                delete=False,
                dir=str(root),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            ) as tmp:
                yaml.safe_dump(document, tmp, allow_unicode=True, sort_keys=False)
                tmp.flush()
                os.fsync(tmp.fileno())
                tmp_path = Path(tmp.name)
            os.replace(str(tmp_path), str(self.path))
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to write %s: %s", self.path, exc)
            raise StorageEngineError(f"Cannot write {self.path}: {exc}") from exc
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()

    def _commit(
        self,
        tasks: Optional[List[Task]] = None,
        projects: Optional[List[Project]] = None,
        tags: Optional[List[Tag]] = None,
    ) -> None:
        new_tasks = self._tasks if tasks is None else tasks
        new_projects = self._projects if projects is None else projects
        new_tags = self._tags if tags is None else tags
        if self.path is not None:
            self._write(self._document(new_tasks, new_projects, new_tags))
        self._tasks, self._projects, self._tags = new_tasks, new_projects, new_tags

    def _task_index(self, task_id: str) -> Optional[int]:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return None

    def _project_index(self, project_id: str) -> Optional[int]:
        for idx, project in enumerate(self._projects):
            if project.id == project_id:
                return idx
        return None

    def _tags_with(self, names: List[str]) -> List[Tag]:
        tags = list(self._tags)
        known = {tag.name for tag in tags}
        for name in names:
            if name not in known:
                tags.append(Tag.new(name))
                known.add(name)
        return tags

    # --------------------------------------------------------------- tasks

    def get_all_tasks(self) -> List[Task]:
        return copy.deepcopy(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        idx = self._task_index(task_id)
        return copy.deepcopy(self._tasks[idx]) if idx is not None else None

    def insert_task(self, task: Task) -> None:
        if self._task_index(task.id) is not None:
            raise StorageEngineError(f"Task already exists: {task.id}")
        self._commit(tasks=self._tasks + [copy.deepcopy(task)], tags=self._tags_with(task.tags))
        logger.debug("Inserted task %s", task.id)

    def update_task(self, task: Task) -> None:
        idx = self._task_index(task.id)
        if idx is None:
            raise NotFoundError("Task", task.id)
        tasks = list(self._tasks)
        tasks[idx] = copy.deepcopy(task)
        self._commit(tasks=tasks, tags=self._tags_with(task.tags))
        logger.debug("Updated task %s", task.id)

    def delete_task(self, task_id: str) -> bool:
        idx = self._task_index(task_id)
        if idx is None:
            return False
        self._commit(tasks=self._tasks[:idx] + self._tasks[idx + 1:])
        logger.debug("Deleted task %s", task_id)
        return True

    def _delete_tasks_where(self, predicate) -> int:
        kept = [task for task in self._tasks if not predicate(task)]
        removed = len(self._tasks) - len(kept)
        if removed:
            self._commit(tasks=kept)
        return removed

    def delete_tasks_by_project(self, project_id: str) -> int:
        return self._delete_tasks_where(lambda t: t.project_id == project_id)

    def delete_completed_tasks(self) -> int:
        return self._delete_tasks_where(lambda t: t.status is TaskStatus.COMPLETED)

    def delete_all_tasks(self) -> int:
        return self._delete_tasks_where(lambda t: True)

    def move_tasks_to_inbox(self, project_id: str) -> int:
        tasks = copy.deepcopy(self._tasks)
        moved = 0
        for task in tasks:
            if task.project_id == project_id:
                task.project_id = INBOX_ID
                task.touch()
                moved += 1
        if moved:
            self._commit(tasks=tasks)
        return moved

    # ------------------------------------------------------------ projects

    def get_all_projects(self) -> List[Project]:
        return copy.deepcopy(self._projects)

    def get_project(self, project_id: str) -> Optional[Project]:
        idx = self._project_index(project_id)
        return copy.deepcopy(self._projects[idx]) if idx is not None else None

    def insert_project(self, project: Project) -> None:
        if self._project_index(project.id) is not None:
            raise StorageEngineError(f"Project already exists: {project.id}")
        self._commit(projects=self._projects + [copy.deepcopy(project)])
        logger.debug("Inserted project %s", project.id)

    def update_project(self, project: Project) -> None:
        idx = self._project_index(project.id)
        if idx is None:
            raise NotFoundError("Project", project.id)
        projects = list(self._projects)
        projects[idx] = copy.deepcopy(project)
        self._commit(projects=projects)

    def delete_project(self, project_id: str) -> bool:
        if project_id == INBOX_ID:
            raise InboxProtectedError()
        idx = self._project_index(project_id)
        if idx is None:
            return False
        tasks = copy.deepcopy(self._tasks)
        for task in tasks:
            if task.project_id == project_id:
                task.project_id = None
        self._commit(tasks=tasks, projects=self._projects[:idx] + self._projects[idx + 1:])
        logger.debug("Deleted project %s", project_id)
        return True

    def delete_all_projects_except_inbox(self) -> int:
        kept = [p for p in self._projects if p.id == INBOX_ID]
        removed = len(self._projects) - len(kept)
        if removed:
            removed_ids = {p.id for p in self._projects if p.id != INBOX_ID}
            tasks = copy.deepcopy(self._tasks)
            for task in tasks:
                if task.project_id in removed_ids:
                    task.project_id = None
            self._commit(tasks=tasks, projects=kept)
        return removed

    def get_task_count_by_project(self, project_id: str) -> int:
        return sum(1 for task in self._tasks if task.project_id == project_id)

    # ---------------------------------------------------------------- tags

    def get_all_tags(self) -> List[Tag]:
        return sorted(copy.deepcopy(self._tags), key=lambda t: t.name)

    def get_or_create_tag(self, name: str) -> str:
        for tag in self._tags:
            if tag.name == name:
                return tag.id
        tag = Tag.new(name)
        self._commit(tags=self._tags + [tag])
        return tag.id

    def delete_tag(self, tag_id: str) -> bool:
        kept = [tag for tag in self._tags if tag.id != tag_id]
        if len(kept) == len(self._tags):
            return False
        removed = {tag.name for tag in self._tags if tag.id == tag_id}
        tasks = copy.deepcopy(self._tasks)
        for task in tasks:
            for name in removed:
                task.remove_tag(name)
        self._commit(tasks=tasks, tags=kept)
        return True

    def cleanup_orphan_tags(self) -> int:
        used = {name for task in self._tasks for name in task.tags}
        kept = [tag for tag in self._tags if tag.name in used]
        removed = len(self._tags) - len(kept)
        if removed:
            self._commit(tags=kept)
            logger.debug("Removed %d orphan tag(s)", removed)
        return removed


__all__ = ["YamlStorage", "DEFAULT_DATA_PATH", "SCHEMA_VERSION"]
