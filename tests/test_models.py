"""Domain Models 单元测试

测试内容：
1. 公共字段校验（描述、优先级）与赋值失败时原值保持
2. 各类型额外字段校验
3. display_details 输出格式
4. 校验谓词与 id 辅助函数
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError
from taskdesk.config import DESCRIPTION_MAX_LENGTH
from taskdesk.exceptions import ValidationError
from taskdesk.models import (
    BugReport,
    DeadlineTask,
    Milestone,
    SimpleTask,
    TaskBase,
    TaskKind,
    TaskStatus,
)
from taskdesk.utils import (
    format_date,
    is_blank,
    is_calendar_date,
    is_date_in_past,
    is_invalid_length,
    is_valid_priority,
    parse_numeric_id,
)

DUE = date(2029, 6, 30)


class TestEnums:
    """枚举取值"""

    def test_task_kind_values(self):
        """TaskKind 取值即持久化判别值"""
        assert TaskKind.SIMPLE == "SimpleTask"
        assert TaskKind.DEADLINE == "DeadlineTask"
        assert TaskKind.MILESTONE == "Milestone"
        assert TaskKind.BUG_REPORT == "BugReport"

    def test_task_status_from_string(self):
        assert TaskStatus("IN_PROGRESS") is TaskStatus.IN_PROGRESS

    def test_task_kind_of_class(self):
        """每个模型类都能报告自己的类型"""
        assert SimpleTask.task_kind() is TaskKind.SIMPLE
        assert BugReport.task_kind() is TaskKind.BUG_REPORT
        assert Milestone.valid_statuses() == (TaskStatus.PENDING, TaskStatus.ACHIEVED)

    def test_task_base_is_abstract(self):
        """TaskBase 不能直接实例化"""
        with pytest.raises(TypeError):
            TaskBase(id="1", description="d", priority=1, status=TaskStatus.TODO)

    def test_task_base_has_no_kind(self):
        with pytest.raises(TypeError, match="abstract"):
            TaskBase.task_kind()


class TestCommonFields:
    """公共字段校验"""

    def test_create_simple_task(self):
        task = SimpleTask(id="1", description="Write docs", priority=3)
        assert task.kind == "SimpleTask"
        assert task.description == "Write docs"
        assert task.priority == 3
        assert task.status == TaskStatus.TODO

    @pytest.mark.parametrize("description", ["", "   ", None, 42])
    def test_blank_description_rejected(self, description):
        """空描述或非字符串描述被拒绝"""
        with pytest.raises(ValidationError, match="description"):
            SimpleTask(id="1", description=description, priority=3)

    def test_description_length_limit(self):
        """描述长度上限"""
        SimpleTask(id="1", description="x" * DESCRIPTION_MAX_LENGTH, priority=1)
        with pytest.raises(ValidationError, match="at most"):
            SimpleTask(id="1", description="x" * (DESCRIPTION_MAX_LENGTH + 1), priority=1)

    @pytest.mark.parametrize("priority", [0, 6, -1, "3", 2.5, True, None])
    def test_invalid_priority_rejected(self, priority):
        """优先级必须是 1~5 的整数"""
        with pytest.raises(ValidationError, match="priority"):
            SimpleTask(id="1", description="d", priority=priority)

    @pytest.mark.parametrize("priority", [1, 3, 5])
    def test_valid_priority(self, priority: int):
        assert SimpleTask(id="1", description="d", priority=priority).priority == priority

    def test_failed_assignment_keeps_value(self):
        """赋值失败时原值保持"""
        task = SimpleTask(id="1", description="keep", priority=2)

        with pytest.raises(ValidationError):
            task.description = "  "
        with pytest.raises(ValidationError):
            task.priority = 9

        assert task.description == "keep"
        assert task.priority == 2

    def test_valid_assignment(self):
        task = SimpleTask(id="1", description="old", priority=2)
        task.description = "new"
        task.priority = 5
        assert task.description == "new"
        assert task.priority == 5

    def test_id_is_immutable(self):
        """id 创建后不可修改"""
        task = SimpleTask(id="1", description="d", priority=1)
        with pytest.raises(PydanticValidationError):
            task.id = "2"
        assert task.id == "1"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError, match="id"):
            SimpleTask(id="", description="d", priority=1)


class TestVariantFields:
    """各类型额外字段"""

    def test_deadline_task_fields(self):
        task = DeadlineTask(id="1", description="d", priority=1, due_date=DUE, assignee="Ana")
        assert task.due_date == DUE
        assert task.assignee == "Ana"

    @pytest.mark.parametrize("due_date", [None, "2029-06-30", datetime(2029, 6, 30, 12, 0)])
    def test_deadline_task_requires_date(self, due_date):
        """截止日期必须是 date（不接受 None、字符串、datetime）"""
        with pytest.raises(ValidationError, match="due_date"):
            DeadlineTask(id="1", description="d", priority=1, due_date=due_date, assignee="Ana")

    def test_deadline_task_requires_assignee(self):
        with pytest.raises(ValidationError, match="assignee"):
            DeadlineTask(id="1", description="d", priority=1, due_date=DUE, assignee=" ")

    def test_milestone_date_assignment(self):
        """日期赋值失败时原值保持"""
        task = Milestone(id="1", description="d", priority=1, milestone_date=DUE)
        with pytest.raises(ValidationError):
            task.milestone_date = None
        assert task.milestone_date == DUE

    def test_bug_report_fields(self):
        task = BugReport(
            id="1", description="d", priority=1, steps_to_reproduce="click", severity="Low"
        )
        assert task.status == TaskStatus.REPORTED
        with pytest.raises(ValidationError, match="severity"):
            task.severity = ""
        assert task.severity == "Low"


class TestDisplayDetails:
    """展示格式"""

    def test_simple_task(self):
        task = SimpleTask(id="1", description="Write docs", priority=2)
        task.set_status(TaskStatus.IN_PROGRESS)
        assert task.display_details() == (
            "[Simple Task] Write docs (Priority: 2) - Status: IN PROGRESS"
        )

    def test_deadline_task(self):
        task = DeadlineTask(
            id="1", description="Ship", priority=5, due_date=date(2029, 6, 3), assignee="Ana"
        )
        assert task.display_details() == (
            "[Deadline Task] Ship (Assignee: Ana, Due: 03/06/2029) (Priority: 5) - Status: TODO"
        )

    def test_milestone(self):
        task = Milestone(id="1", description="Beta", priority=3, milestone_date=DUE)
        assert task.display_details() == (
            "[Milestone] Beta (Date: 30/06/2029) (Priority: 3) - Status: PENDING"
        )

    def test_bug_report(self):
        task = BugReport(
            id="1", description="Crash", priority=4, steps_to_reproduce="s", severity="Critical"
        )
        assert task.display_details() == (
            "[Bug Report] Crash (Severity: Critical) (Priority: 4) - Status: REPORTED"
        )


class TestUtils:
    """校验谓词与辅助函数"""

    @pytest.mark.parametrize(
        "value,blank",
        [("", True), ("  \t", True), (None, True), (3, True), ("a", False), (" a ", False)],
    )
    def test_is_blank(self, value, blank: bool):
        assert is_blank(value) is blank

    def test_is_invalid_length(self):
        assert is_invalid_length("abc", 3) is False
        assert is_invalid_length("abcd", 3) is True
        assert is_invalid_length("", 3) is True

    def test_is_valid_priority(self):
        assert is_valid_priority(1) is True
        assert is_valid_priority(5) is True
        assert is_valid_priority(0) is False
        assert is_valid_priority(False) is False

    def test_is_calendar_date(self):
        assert is_calendar_date(DUE) is True
        assert is_calendar_date(datetime(2029, 1, 1)) is False
        assert is_calendar_date("2029-01-01") is False

    def test_is_date_in_past(self):
        """今天本身不算过去"""
        today = date(2026, 10, 19)
        assert is_date_in_past(date(2026, 10, 18), today) is True
        assert is_date_in_past(today, today) is False
        assert is_date_in_past(date(2026, 10, 20), today) is False

    def test_format_date(self):
        assert format_date(date(2029, 1, 5)) == "05/01/2029"
        assert format_date(None) == "N/A"

    @pytest.mark.parametrize(
        "value,expected",
        [("7", 7), ("042", 42), ("alpha", None), ("", None), ("-1", None), ("٣", None)],
    )
    def test_parse_numeric_id(self, value: str, expected):
        """只解析 ASCII 十进制 id"""
        assert parse_numeric_id(value) == expected
