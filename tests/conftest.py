"""taskdesk 测试配置 -- 共享 fixture"""

from datetime import date
from pathlib import Path

import pytest
from taskdesk.manager import ProjectManager
from taskdesk.models import BugReport, DeadlineTask, Milestone, Project, SimpleTask, TaskStatus
from taskdesk.store import JsonProjectStore, PickleProjectStore

# 远期日期，避免"截止日期不得早于今天"的检查随时间失效
FUTURE_DEADLINE = date(2030, 1, 1)
FUTURE_DUE = date(2029, 6, 30)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """清除 TASKDESK_* 环境变量，默认数据目录指向临时目录"""
    for name in (
        "TASKDESK_STORE_FORMAT",
        "TASKDESK_STORE_PATH",
        "TASKDESK_LOG_FORMAT",
        "TASKDESK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TASKDESK_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def binary_path(tmp_path: Path) -> Path:
    return tmp_path / "dados.dat"


@pytest.fixture
def json_path(tmp_path: Path) -> Path:
    return tmp_path / "dados.json"


@pytest.fixture
def binary_store(binary_path: Path) -> PickleProjectStore:
    return PickleProjectStore(binary_path)


@pytest.fixture
def json_store(json_path: Path) -> JsonProjectStore:
    return JsonProjectStore(json_path)


@pytest.fixture
def manager(binary_store: PickleProjectStore) -> ProjectManager:
    """使用临时二进制存储的空 ProjectManager"""
    return ProjectManager(store=binary_store)


@pytest.fixture
def sample_projects() -> list[Project]:
    """覆盖全部四种任务类型的项目集合"""
    launch = Project(id="1", name="Launch", general_deadline=FUTURE_DEADLINE)
    launch.add_task(
        SimpleTask(id="1", description="Write docs", priority=2, status=TaskStatus.DONE)
    )
    launch.add_task(
        DeadlineTask(
            id="2",
            description="Ship build",
            priority=5,
            due_date=FUTURE_DUE,
            assignee="Ana",
            status=TaskStatus.IN_PROGRESS,
        )
    )
    launch.add_task(
        Milestone(
            id="3",
            description="Beta",
            priority=3,
            milestone_date=FUTURE_DUE,
            status=TaskStatus.ACHIEVED,
        )
    )
    launch.add_task(
        BugReport(
            id="4",
            description="Crash on start",
            priority=4,
            steps_to_reproduce="open app",
            severity="Critical",
        )
    )
    empty = Project(id="2", name="Backlog", general_deadline=FUTURE_DEADLINE)
    return [launch, empty]
