"""taskdesk 异常体系

ValidationError 为调用方可纠正的错误，不破坏任何状态；
StorageError 系列区分磁盘读写失败与文件结构不兼容。
"""

from collections.abc import Iterable
from pathlib import Path


class TaskDeskError(Exception):
    """taskdesk 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方能否通过修正输入或重试恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class ValidationError(TaskDeskError):
    """字段或状态值违反不变量，原值保持不变"""


class InvalidStatusError(ValidationError):
    """状态不在该任务类型的合法集合内"""

    def __init__(self, kind: str, status: object, allowed: Iterable[str]) -> None:
        self.kind = kind
        self.status = status
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid status '{status}' for {kind}. "
            f"Allowed statuses: {', '.join(self.allowed)}."
        )


class NotFoundError(TaskDeskError):
    """按 id 查找无结果"""


class ProjectNotFoundError(NotFoundError):
    """在不存在的项目下创建任务 -- 属于调用方误用"""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project {project_id!r} not found", recoverable=False)
        self.project_id = project_id


class StorageError(TaskDeskError):
    """持久化层异常基类"""


class StorageIOError(StorageError):
    """磁盘读写失败（权限、磁盘满、路径为目录等）"""

    def __init__(self, path: Path | str, original_error: Exception) -> None:
        """
        Args:
            path: 读写的文件路径
            original_error: 原始异常
        """
        super().__init__(
            f"I/O failure on {path}: {original_error}",
            recoverable=True,
        )
        self.path = Path(path)
        self.original_error = original_error


class SchemaMismatchError(StorageError):
    """文件存在但内容结构与当前数据模型不兼容

    包括格式错配（用 JSON store 读二进制文件或反之）、缺失判别字段、
    未知任务类型、schema 版本不一致等情况。
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Incompatible data in {path}: {reason}", recoverable=False)
        self.path = Path(path)
        self.reason = reason


class ImportFailedError(TaskDeskError):
    """导入外部文件失败（结构不兼容以外的任何读取错误）"""

    def __init__(self, path: Path | str, original_error: Exception | None = None) -> None:
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"Failed to import {path}{detail}", recoverable=True)
        self.path = Path(path)
        self.original_error = original_error
