"""JSON 文本格式编解码器

- 日期：ISO 日历字符串 YYYY-MM-DD，None 编码为 JSON null（不是空串）
- 任务：每条记录带 TIPO_DA_CLASSE 判别字段；解码时先读判别字段，
  再经 TASK_DECODERS 查表分派到对应类型的解码函数。
  表外的判别值一律抛出 SchemaMismatchError，不做反射式类加载。

解码函数只负责把 JSON 字段名映射为字段字典，具体构造交给 TaskFactory。
"""

import re
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import SchemaMismatchError, ValidationError
from ..factory import TaskFactory
from ..models.enums import TaskKind
from ..models.project import Project
from ..models.task import BugReport, DeadlineTask, Milestone, TaskBase

CLASS_META_KEY = "TIPO_DA_CLASSE"

# 只接受 YYYY-MM-DD，不接受 fromisoformat 额外支持的 20300101、2030-W01-1 等形式
_ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_factory = TaskFactory()


class CodecError(Exception):
    """记录级解码失败，由 store 补上文件路径后转换为 SchemaMismatchError"""


# ---- 日期 ----


def encode_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def decode_date(raw: Any) -> date | None:
    """解码 YYYY-MM-DD 日期，null 还原为 None"""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise CodecError(f"date must be an ISO string, got {type(raw).__name__}")
    if not _ISO_DATE_PATTERN.fullmatch(raw):
        raise CodecError(f"date must be YYYY-MM-DD, got {raw!r}")
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise CodecError(f"invalid ISO date {raw!r}") from e


# ---- 任务 ----


def encode_task(task: TaskBase) -> dict[str, Any]:
    """任务 -> JSON 记录（判别字段放在最后）"""
    record: dict[str, Any] = {
        "id": task.id,
        "description": task.description,
        "priority": task.priority,
        "status": task.status.value,
    }
    if isinstance(task, DeadlineTask):
        record["dueDate"] = encode_date(task.due_date)
        record["assignee"] = task.assignee
    elif isinstance(task, Milestone):
        record["milestoneDate"] = encode_date(task.milestone_date)
    elif isinstance(task, BugReport):
        record["stepsToReproduce"] = task.steps_to_reproduce
        record["severity"] = task.severity
    record[CLASS_META_KEY] = task.task_kind().value
    return record


def _common_fields(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "description": record.get("description"),
        "priority": record.get("priority"),
        "status": record.get("status"),
    }


def _decode_simple(record: dict[str, Any]) -> dict[str, Any]:
    return _common_fields(record)


def _decode_deadline(record: dict[str, Any]) -> dict[str, Any]:
    return {
        **_common_fields(record),
        "due_date": decode_date(record.get("dueDate")),
        "assignee": record.get("assignee"),
    }


def _decode_milestone(record: dict[str, Any]) -> dict[str, Any]:
    return {
        **_common_fields(record),
        "milestone_date": decode_date(record.get("milestoneDate")),
    }


def _decode_bug_report(record: dict[str, Any]) -> dict[str, Any]:
    return {
        **_common_fields(record),
        "steps_to_reproduce": record.get("stepsToReproduce"),
        "severity": record.get("severity"),
    }


# 判别值 -> 字段解码函数，封闭覆盖全部四种类型
TASK_DECODERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    TaskKind.SIMPLE.value: _decode_simple,
    TaskKind.DEADLINE.value: _decode_deadline,
    TaskKind.MILESTONE.value: _decode_milestone,
    TaskKind.BUG_REPORT.value: _decode_bug_report,
}


def decode_task(record: Any) -> TaskBase:
    """JSON 记录 -> 任务

    Raises:
        CodecError: 不是对象、判别字段缺失/未知、字段非法
    """
    if not isinstance(record, dict):
        raise CodecError(f"task record must be an object, got {type(record).__name__}")

    discriminator = record.get(CLASS_META_KEY)
    decoder = TASK_DECODERS.get(discriminator) if isinstance(discriminator, str) else None
    if decoder is None:
        raise CodecError(f"task record has unrecognized {CLASS_META_KEY}: {discriminator!r}")

    task_id = record.get("id")
    fields = decoder(record)
    try:
        return _factory.create_task(task_id, discriminator, fields)
    except ValidationError as e:
        raise CodecError(f"task {task_id!r}: {e}") from e


# ---- 项目 ----


def encode_project(project: Project) -> dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "generalDeadline": encode_date(project.general_deadline),
        "tasks": [encode_task(task) for task in project.tasks],
    }


def decode_project(record: Any) -> Project:
    """JSON 记录 -> 项目（历史数据不检查截止日期是否已过）"""
    if not isinstance(record, dict):
        raise CodecError(f"project record must be an object, got {type(record).__name__}")

    tasks_raw = record.get("tasks", [])
    if not isinstance(tasks_raw, list):
        raise CodecError("project tasks must be an array")

    project_id = record.get("id")
    tasks = [decode_task(item) for item in tasks_raw]
    try:
        return Project(
            id=project_id,
            name=record.get("name"),
            general_deadline=decode_date(record.get("generalDeadline")),
            tasks=tasks,
        )
    except (ValidationError, PydanticValidationError) as e:
        raise CodecError(f"project {project_id!r}: {e}") from e


def encode_projects(projects: list[Project]) -> list[dict[str, Any]]:
    return [encode_project(project) for project in projects]


def decode_projects(data: Any, path: Path) -> list[Project]:
    """顶层 JSON 数组 -> 项目列表

    Raises:
        SchemaMismatchError: 任何结构性不兼容
    """
    if not isinstance(data, list):
        raise SchemaMismatchError(path, f"top level must be an array, got {type(data).__name__}")
    try:
        return [decode_project(item) for item in data]
    except CodecError as e:
        raise SchemaMismatchError(path, str(e)) from e
