"""Project Domain Model -- 有序任务列表的聚合根

tasks 是实时列表（view），调用方拿到的引用会直接观察到后续修改。
截止日期"不得早于今天"只在 create()/update() 时检查；
从存储解码或导入的历史数据直接构造，不受此限制。
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import PROJECT_NAME_MAX_LENGTH
from ..exceptions import ValidationError
from ..utils import is_date_in_past
from .task import Task, TaskBase, require_date, require_text


def _require_future_deadline(value: Any, today: date | None = None) -> date:
    deadline = require_date(value, "general_deadline")
    if is_date_in_past(deadline, today):
        raise ValidationError(f"general_deadline must not be in the past, got {deadline}")
    return deadline


class Project(BaseModel):
    """项目 -- 拥有一组任务并计算整体进度"""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True, description="唯一标识")
    name: str = Field(description="项目名称")
    general_deadline: date = Field(description="项目总截止日期")
    tasks: list[Task] = Field(default_factory=list, description="任务列表，插入顺序即展示顺序")

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> str:
        return require_text(value, "id")

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        return require_text(value, "name", PROJECT_NAME_MAX_LENGTH)

    @field_validator("general_deadline", mode="before")
    @classmethod
    def _check_general_deadline(cls, value: Any) -> date:
        return require_date(value, "general_deadline")

    @classmethod
    def create(
        cls,
        project_id: str,
        name: str,
        general_deadline: date,
        today: date | None = None,
    ) -> "Project":
        """新建项目（截止日期不得早于今天）

        Raises:
            ValidationError: 名称或截止日期非法
        """
        deadline = _require_future_deadline(general_deadline, today)
        return cls(id=project_id, name=name, general_deadline=deadline)

    def update(self, name: str, general_deadline: date, today: date | None = None) -> None:
        """更新名称和截止日期

        两个字段都校验通过后才写入，任一失败则项目保持原样。
        """
        new_name = require_text(name, "name", PROJECT_NAME_MAX_LENGTH)
        new_deadline = _require_future_deadline(general_deadline, today)
        self.name = new_name
        self.general_deadline = new_deadline

    # ---- 任务 CRUD ----

    def add_task(self, task: TaskBase) -> None:
        """追加任务

        Raises:
            TypeError: task 为 None 或不是任务对象（调用方误用）
        """
        if not isinstance(task, TaskBase):
            raise TypeError(f"task must be a Task instance, got {type(task).__name__}")
        self.tasks.append(task)

    def remove_task(self, task_id: str) -> bool:
        """按 id 删除任务，返回是否找到"""
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                del self.tasks[index]
                return True
        return False

    def get_task_by_id(self, task_id: str) -> TaskBase | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def progress_percentage(self) -> float:
        """完成度百分比 -- DONE/ACHIEVED/FIXED 计为完成，空列表为 0.0"""
        if not self.tasks:
            return 0.0
        done = sum(1 for task in self.tasks if task.is_done())
        return done / len(self.tasks) * 100.0
