"""Task Domain Model -- 四种任务类型的 tagged union

公共字段（id/description/priority/status）定义在 TaskBase，
各类型通过 kind 判别字段区分，并只补充自己的额外字段。
状态合法性查 enums.VALID_STATUSES，所有类型共用同一个校验器。

字段赋值即校验（validate_assignment）：校验失败抛出 ValidationError，
原值保持不变。
"""

from abc import abstractmethod
from datetime import date
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import DESCRIPTION_MAX_LENGTH
from ..exceptions import InvalidStatusError, ValidationError
from ..utils import format_date, is_blank, is_calendar_date, is_valid_priority
from .enums import VALID_STATUSES, TaskKind, TaskStatus, is_done_status, validate_status


def require_text(value: Any, field_name: str, max_length: int | None = None) -> str:
    """非空文本校验，失败抛出 ValidationError"""
    if is_blank(value):
        raise ValidationError(f"{field_name} must not be empty")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"{field_name} must be at most {max_length} characters, got {len(value)}"
        )
    return value


def require_date(value: Any, field_name: str) -> date:
    """日期校验：必须是 date（不接受 None、字符串或 datetime）"""
    if not is_calendar_date(value):
        raise ValidationError(
            f"{field_name} must be a date, got {type(value).__name__}"
        )
    return value


class TaskBase(BaseModel):
    """任务公共字段 -- 抽象基类，只能实例化四个具体类型"""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True, description="唯一标识，创建后不可变")
    description: str = Field(description="任务描述")
    priority: int = Field(description="优先级 1~5")
    status: TaskStatus = Field(description="当前状态，必须属于本类型的合法集合")

    @classmethod
    def task_kind(cls) -> TaskKind:
        """本类型的判别值

        Raises:
            TypeError: 在没有 kind 字段的抽象基类上调用
        """
        kind_field = cls.model_fields.get("kind")
        if kind_field is None:
            raise TypeError(f"{cls.__name__} is abstract and has no task kind")
        return TaskKind(kind_field.default)

    @classmethod
    def valid_statuses(cls) -> tuple[TaskStatus, ...]:
        """本类型的合法状态（有序）"""
        return VALID_STATUSES[cls.task_kind()]

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> str:
        return require_text(value, "id")

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> str:
        return require_text(value, "description", DESCRIPTION_MAX_LENGTH)

    @field_validator("priority", mode="before")
    @classmethod
    def _check_priority(cls, value: Any) -> int:
        if not is_valid_priority(value):
            raise ValidationError(f"priority must be an integer between 1 and 5, got {value!r}")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, value: Any) -> TaskStatus:
        kind = cls.task_kind()
        allowed = VALID_STATUSES[kind]
        try:
            status = TaskStatus(value)
        except (ValueError, TypeError):
            raise InvalidStatusError(kind, value, allowed) from None
        if not validate_status(kind, status):
            raise InvalidStatusError(kind, status, allowed)
        return status

    def set_status(self, status: TaskStatus | str) -> None:
        """切换状态

        任意合法状态之间都可以切换；重复设置同一状态是幂等的。

        Raises:
            InvalidStatusError: 状态不属于本类型，原状态保持不变
        """
        self.status = status

    def is_done(self) -> bool:
        return is_done_status(self.status)

    @abstractmethod
    def display_details(self) -> str:
        """单行展示文本，由具体类型实现"""

    def _render(self, label: str, extra: str = "") -> str:
        details = f" ({extra})" if extra else ""
        return (
            f"[{label}] {self.description}{details} "
            f"(Priority: {self.priority}) - Status: {self.status.display_name}"
        )


class SimpleTask(TaskBase):
    """简单任务，无额外字段"""

    kind: Literal["SimpleTask"] = Field(default="SimpleTask", frozen=True)
    status: TaskStatus = TaskStatus.TODO

    def display_details(self) -> str:
        return self._render("Simple Task")


class DeadlineTask(TaskBase):
    """带截止日期和负责人的任务"""

    kind: Literal["DeadlineTask"] = Field(default="DeadlineTask", frozen=True)
    status: TaskStatus = TaskStatus.TODO
    due_date: date = Field(description="截止日期")
    assignee: str = Field(description="负责人")

    @field_validator("due_date", mode="before")
    @classmethod
    def _check_due_date(cls, value: Any) -> date:
        return require_date(value, "due_date")

    @field_validator("assignee", mode="before")
    @classmethod
    def _check_assignee(cls, value: Any) -> str:
        return require_text(value, "assignee")

    def display_details(self) -> str:
        return self._render(
            "Deadline Task",
            f"Assignee: {self.assignee}, Due: {format_date(self.due_date)}",
        )


class Milestone(TaskBase):
    """里程碑 -- 检查点而非工作项，状态只有 PENDING / ACHIEVED"""

    kind: Literal["Milestone"] = Field(default="Milestone", frozen=True)
    status: TaskStatus = TaskStatus.PENDING
    milestone_date: date = Field(description="里程碑日期")

    @field_validator("milestone_date", mode="before")
    @classmethod
    def _check_milestone_date(cls, value: Any) -> date:
        return require_date(value, "milestone_date")

    def display_details(self) -> str:
        return self._render("Milestone", f"Date: {format_date(self.milestone_date)}")


class BugReport(TaskBase):
    """缺陷报告"""

    kind: Literal["BugReport"] = Field(default="BugReport", frozen=True)
    status: TaskStatus = TaskStatus.REPORTED
    steps_to_reproduce: str = Field(description="复现步骤")
    severity: str = Field(description="严重程度，如 Low / Medium / Critical")

    @field_validator("steps_to_reproduce", mode="before")
    @classmethod
    def _check_steps(cls, value: Any) -> str:
        return require_text(value, "steps_to_reproduce")

    @field_validator("severity", mode="before")
    @classmethod
    def _check_severity(cls, value: Any) -> str:
        return require_text(value, "severity")

    def display_details(self) -> str:
        return self._render("Bug Report", f"Severity: {self.severity}")


Task = Annotated[
    SimpleTask | DeadlineTask | Milestone | BugReport,
    Field(discriminator="kind"),
]
