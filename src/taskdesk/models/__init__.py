"""taskdesk Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    DONE_STATUSES,
    INITIAL_STATUS,
    VALID_STATUSES,
    TaskKind,
    TaskStatus,
    is_done_status,
    validate_status,
)
from .project import Project
from .task import BugReport, DeadlineTask, Milestone, SimpleTask, Task, TaskBase

__all__ = [
    # 枚举
    "TaskKind",
    "TaskStatus",
    # 状态表
    "VALID_STATUSES",
    "INITIAL_STATUS",
    "DONE_STATUSES",
    "validate_status",
    "is_done_status",
    # Task
    "Task",
    "TaskBase",
    "SimpleTask",
    "DeadlineTask",
    "Milestone",
    "BugReport",
    # Project
    "Project",
]
