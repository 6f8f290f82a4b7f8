"""taskdesk -- 项目与任务管理核心

项目聚合、四种任务类型及其状态集合、任务工厂，
以及可互换的二进制 / JSON 持久化策略。
"""

from .exceptions import (
    ImportFailedError,
    InvalidStatusError,
    NotFoundError,
    ProjectNotFoundError,
    SchemaMismatchError,
    StorageError,
    StorageIOError,
    TaskDeskError,
    ValidationError,
)
from .factory import TaskFactory
from .manager import ProjectManager
from .models import (
    BugReport,
    DeadlineTask,
    Milestone,
    Project,
    SimpleTask,
    Task,
    TaskBase,
    TaskKind,
    TaskStatus,
)
from .store import JsonProjectStore, PickleProjectStore, ProjectStore

__all__ = [
    # 模型
    "Project",
    "Task",
    "TaskBase",
    "SimpleTask",
    "DeadlineTask",
    "Milestone",
    "BugReport",
    "TaskKind",
    "TaskStatus",
    # 核心组件
    "TaskFactory",
    "ProjectManager",
    # 持久化
    "ProjectStore",
    "PickleProjectStore",
    "JsonProjectStore",
    # 异常
    "TaskDeskError",
    "ValidationError",
    "InvalidStatusError",
    "NotFoundError",
    "ProjectNotFoundError",
    "StorageError",
    "StorageIOError",
    "SchemaMismatchError",
    "ImportFailedError",
]
