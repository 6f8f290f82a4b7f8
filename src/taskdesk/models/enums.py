"""枚举定义 -- 任务类型、任务状态与各类型合法状态表

状态合法性是纯数据：VALID_STATUSES 以任务类型为键给出合法状态集合，
所有任务类型共用同一个校验入口 validate_status()。
集合内任意状态之间都可以互相切换，没有流转顺序约束。
"""

from enum import StrEnum


class TaskKind(StrEnum):
    """任务类型 -- 取值同时作为持久化判别字段的值"""

    SIMPLE = "SimpleTask"
    DEADLINE = "DeadlineTask"
    MILESTONE = "Milestone"
    BUG_REPORT = "BugReport"


class TaskStatus(StrEnum):
    """任务状态（所有类型共用一个枚举）"""

    # SimpleTask / DeadlineTask
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    # Milestone
    PENDING = "PENDING"
    ACHIEVED = "ACHIEVED"

    # BugReport
    REPORTED = "REPORTED"
    FIXING = "FIXING"
    FIXED = "FIXED"

    @property
    def display_name(self) -> str:
        """展示名，如 IN_PROGRESS -> IN PROGRESS"""
        return self.value.replace("_", " ")


# 各类型的合法状态（有序，供界面按顺序展示）
VALID_STATUSES: dict[TaskKind, tuple[TaskStatus, ...]] = {
    TaskKind.SIMPLE: (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE),
    TaskKind.DEADLINE: (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE),
    TaskKind.MILESTONE: (TaskStatus.PENDING, TaskStatus.ACHIEVED),
    TaskKind.BUG_REPORT: (TaskStatus.REPORTED, TaskStatus.FIXING, TaskStatus.FIXED),
}

INITIAL_STATUS: dict[TaskKind, TaskStatus] = {
    TaskKind.SIMPLE: TaskStatus.TODO,
    TaskKind.DEADLINE: TaskStatus.TODO,
    TaskKind.MILESTONE: TaskStatus.PENDING,
    TaskKind.BUG_REPORT: TaskStatus.REPORTED,
}

# 计入项目进度的完成态，跨类型固定
DONE_STATUSES: frozenset[TaskStatus] = frozenset(
    {TaskStatus.DONE, TaskStatus.ACHIEVED, TaskStatus.FIXED}
)


def validate_status(kind: TaskKind, status: TaskStatus) -> bool:
    """验证状态是否属于该任务类型的合法集合

    Args:
        kind: 任务类型
        status: 目标状态

    Returns:
        True 如果合法，否则 False
    """
    return status in VALID_STATUSES.get(kind, ())


def is_done_status(status: TaskStatus) -> bool:
    return status in DONE_STATUSES
