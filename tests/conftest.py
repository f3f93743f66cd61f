import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core import Filter, FilterKind, Project, Task  # noqa: E402
from core.desktop.devtools.interface.tui_state import AppState  # noqa: E402
from infrastructure.yaml_storage import YamlStorage  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("TASKDECK_DATA", raising=False)
    monkeypatch.delenv("TASKDECK_LANG", raising=False)
    monkeypatch.delenv("TASKDECK_LOG_LEVEL", raising=False)
    import config

    monkeypatch.setattr(config, "USER_CONFIG_PATH", tmp_path / ".taskdeck_config.yaml")


@pytest.fixture
def storage():
    return YamlStorage.in_memory()


def make_task(title, **fields):
    task = Task.new(title)
    for name, value in fields.items():
        setattr(task, name, value)
    return task


@pytest.fixture
def app(storage):
    """AppState over an in-memory store with one extra project and three tasks."""
    work = Project.new("Work")
    storage.insert_project(work)
    storage.insert_task(make_task("Write report", project_id=work.id, tags=["docs"]))
    storage.insert_task(make_task("Buy milk", project_id="inbox"))
    storage.insert_task(make_task("Plan sprint", project_id=work.id))
    state = AppState(storage)
    state.filter = Filter(FilterKind.ALL)
    state.load_data()
    state.reset_selection()
    return state
