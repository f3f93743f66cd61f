"""Helpers to pull snapshots out of Storage for AppState."""

import logging
from typing import List, Tuple

from application.ports import Storage
from core import Project, Task

logger = logging.getLogger("taskdeck.tui")


def load_snapshot(storage: Storage) -> Tuple[List[Task], List[Project], List[str]]:
    """Full (tasks, projects, tag names) read; nothing is patched in place."""
    tasks = storage.get_all_tasks()
    projects = storage.get_all_projects()
    tags = [tag.name for tag in storage.get_all_tags()]
    logger.debug("Loaded %d tasks, %d projects, %d tags", len(tasks), len(projects), len(tags))
    return tasks, projects, tags


def refresh_tags(app) -> None:
    """Drop tags no task uses any more and reload the tag list."""
    removed = app.storage.cleanup_orphan_tags()
    if removed:
        logger.debug("Removed %d orphan tags", removed)
    app.tags = [tag.name for tag in app.storage.get_all_tags()]


__all__ = ["load_snapshot", "refresh_tags"]
