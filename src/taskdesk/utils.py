"""通用工具 -- 校验谓词与 id 辅助函数

纯函数，无状态。id 计数器由 ProjectManager 持有，此处只负责格式化与解析。
"""

from datetime import date, datetime

from .config import DISPLAY_DATE_FORMAT, PRIORITY_MAX, PRIORITY_MIN


def is_blank(value: object) -> bool:
    """None、非字符串、空串或纯空白均视为空"""
    return not isinstance(value, str) or not value.strip()


def is_invalid_length(value: object, max_length: int) -> bool:
    """为空或超过长度上限"""
    return is_blank(value) or len(value) > max_length  # type: ignore[arg-type]


def is_valid_priority(value: object) -> bool:
    """优先级必须是 1~5 的整数（bool 不算）"""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and PRIORITY_MIN <= value <= PRIORITY_MAX
    )


def is_calendar_date(value: object) -> bool:
    """是 date 且不是 datetime（避免时间部分被静默截断）"""
    return isinstance(value, date) and not isinstance(value, datetime)


def is_date_in_past(value: date, today: date | None = None) -> bool:
    """早于今天即为过去，今天本身不算"""
    return value < (today or date.today())


def format_date(value: date | None) -> str:
    """日期展示格式 dd/mm/YYYY，None 显示为 N/A"""
    if value is None:
        return "N/A"
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_id(number: int) -> str:
    return str(number)


def parse_numeric_id(value: str) -> int | None:
    """解析十进制数字 id，非数字 id 返回 None

    用于加载后恢复计数器：与使用不透明字符串 id 的实现互通时，
    这些 id 直接被跳过。
    """
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        return None
    return int(value)
