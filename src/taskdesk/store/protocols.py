"""Store Protocol 接口定义

定义 ProjectStore 抽象接口（持久化策略），
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models.project import Project


@runtime_checkable
class ProjectStore(Protocol):
    """项目集合的持久化策略

    两个实现（二进制对象图 / JSON 文本）可互换，但不要求读取对方的文件。
    """

    path: Path

    def save(self, projects: list[Project]) -> None:
        """整体覆盖写入项目列表

        Raises:
            StorageIOError: 写入失败
        """
        ...

    def load(self) -> list[Project]:
        """读取项目列表

        文件不存在时返回空列表（首次运行）。

        Raises:
            StorageIOError: 文件存在但无法读取
            SchemaMismatchError: 内容结构与当前数据模型不兼容
        """
        ...
