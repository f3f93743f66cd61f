from typing import List, Optional, Protocol

from core import Project, Tag, Task


class Storage(Protocol):
    # Tasks
    def get_all_tasks(self) -> List[Task]:
        ...

    def get_task(self, task_id: str) -> Optional[Task]:
        ...

    def insert_task(self, task: Task) -> None:
        ...

    def update_task(self, task: Task) -> None:
        ...

    def delete_task(self, task_id: str) -> bool:
        ...

    def delete_tasks_by_project(self, project_id: str) -> int:
        ...

    def move_tasks_to_inbox(self, project_id: str) -> int:
        ...

    def delete_completed_tasks(self) -> int:
        ...

    def delete_all_tasks(self) -> int:
        ...

    # Projects
    def get_all_projects(self) -> List[Project]:
        ...

    def get_project(self, project_id: str) -> Optional[Project]:
        ...

    def insert_project(self, project: Project) -> None:
        ...

    def update_project(self, project: Project) -> None:
        ...

    def delete_project(self, project_id: str) -> bool:
        ...

    def delete_all_projects_except_inbox(self) -> int:
        ...

    def get_task_count_by_project(self, project_id: str) -> int:
        ...

    # Tags
    def get_all_tags(self) -> List[Tag]:
        ...

    def get_or_create_tag(self, name: str) -> str:
        ...

    def delete_tag(self, tag_id: str) -> bool:
        ...

    def cleanup_orphan_tags(self) -> int:
        ...
