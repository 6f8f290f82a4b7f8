"""TaskFactory -- 任务的唯一多态构造入口

根据类型判别值和一个字段字典构造具体任务类型。
必填字段 = description + priority + 各类型额外字段；
可选 status 用于从存储恢复已保存的状态，缺省时取该类型的初始状态。
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models.enums import TaskKind
from .models.task import BugReport, DeadlineTask, Milestone, SimpleTask, TaskBase

log = structlog.get_logger()

COMMON_FIELDS: dict[str, type] = {
    "description": str,
    "priority": int,
}

# 类型 -> (模型类, 额外必填字段及其类型)
TASK_VARIANTS: dict[TaskKind, tuple[type[TaskBase], dict[str, type]]] = {
    TaskKind.SIMPLE: (SimpleTask, {}),
    TaskKind.DEADLINE: (DeadlineTask, {"due_date": date, "assignee": str}),
    TaskKind.MILESTONE: (Milestone, {"milestone_date": date}),
    TaskKind.BUG_REPORT: (BugReport, {"steps_to_reproduce": str, "severity": str}),
}


def resolve_kind(kind: TaskKind | str) -> TaskKind:
    """把字符串判别值解析为 TaskKind

    Raises:
        ValidationError: 未知任务类型
    """
    try:
        return TaskKind(kind)
    except ValueError:
        known = ", ".join(k.value for k in TaskKind)
        raise ValidationError(f"Unknown task kind: {kind!r} (known kinds: {known})") from None


def required_fields(kind: TaskKind | str) -> dict[str, type]:
    """某类型的全部必填字段及期望类型"""
    _, extra = TASK_VARIANTS[resolve_kind(kind)]
    return {**COMMON_FIELDS, **extra}


class TaskFactory:
    """任务工厂"""

    def create_task(
        self,
        task_id: str,
        kind: TaskKind | str,
        fields: Mapping[str, Any],
    ) -> TaskBase:
        """创建具体任务

        Args:
            task_id: 由 ProjectManager 分配的 id
            kind: 任务类型（TaskKind 或其字符串值）
            fields: 字段字典，未知键被忽略

        Returns:
            构造好的任务实例

        Raises:
            ValidationError: 类型未知、字段缺失/类型错误或值非法
        """
        task_kind = resolve_kind(kind)
        model_cls, extra = TASK_VARIANTS[task_kind]

        values: dict[str, Any] = {}
        for name, expected in {**COMMON_FIELDS, **extra}.items():
            if name not in fields or fields[name] is None:
                raise ValidationError(f"Missing required field {name!r} for {task_kind}")
            value = fields[name]
            if not isinstance(value, expected) or isinstance(value, bool):
                raise ValidationError(
                    f"Field {name!r} for {task_kind} must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            values[name] = value

        if fields.get("status") is not None:
            values["status"] = fields["status"]

        try:
            task = model_cls(id=task_id, **values)
        except PydanticValidationError as e:
            # 自定义校验器抛出的 ValidationError 会直接穿透，这里只兜底 pydantic 自身的类型错误
            raise ValidationError(f"Invalid fields for {task_kind}: {e}") from e

        log.debug("task_constructed", task_id=task.id, kind=task_kind.value)
        return task
