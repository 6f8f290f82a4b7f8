"""二进制对象图存储 -- pickle 实现

整个项目列表作为一个对象图一次写入、一次读出（整文件原子替换）。
文件内容是一个带格式标记和 schema 版本的信封：

    {"format": "taskdesk-binary", "schema_version": 1, "projects": [...]}

读取使用受限 Unpickler，只解析 taskdesk 模型类和 datetime.date；
其余全局对象、信封不符、版本不一致、对象缺少当前模型字段，
一律视为 SchemaMismatchError，不做静默转换。
"""

import pickle
from pathlib import Path
from typing import Any, BinaryIO

import structlog
from pydantic import BaseModel

from ..config import get_binary_store_path
from ..exceptions import SchemaMismatchError, StorageIOError
from ..models.enums import TaskStatus
from ..models.project import Project
from ..models.task import BugReport, DeadlineTask, Milestone, SimpleTask, TaskBase
from .files import write_bytes_atomic

log = structlog.get_logger()

BINARY_FORMAT_TAG = "taskdesk-binary"
BINARY_SCHEMA_VERSION = 1

_MODEL_TYPES: tuple[type, ...] = (
    Project,
    SimpleTask,
    DeadlineTask,
    Milestone,
    BugReport,
    TaskStatus,
)

_ALLOWED_GLOBALS: frozenset[tuple[str, str]] = frozenset(
    {("datetime", "date")} | {(cls.__module__, cls.__qualname__) for cls in _MODEL_TYPES}
)


class _ModelUnpickler(pickle.Unpickler):
    """只允许还原 taskdesk 模型类型的 Unpickler"""

    def find_class(self, module: str, name: str) -> Any:
        if (module, name) not in _ALLOWED_GLOBALS:
            raise pickle.UnpicklingError(f"unexpected type {module}.{name}")
        return super().find_class(module, name)


def _missing_fields(model: BaseModel) -> list[str]:
    """对象图里缺失的当前模型字段（类型定义已变化的旧文件）"""
    state = vars(model)
    return [name for name in type(model).model_fields if name not in state]


class PickleProjectStore:
    """ProjectStore 的二进制对象图实现"""

    def __init__(self, path: str | Path | None = None) -> None:
        if path is not None and not str(path).strip():
            raise ValueError("store path must not be empty")
        self.path = Path(path) if path is not None else get_binary_store_path()

    def save(self, projects: list[Project]) -> None:
        """pickle 整个项目列表（整文件原子替换）

        先在内存中完成序列化，序列化失败时不触碰已有文件。
        """
        payload = {
            "format": BINARY_FORMAT_TAG,
            "schema_version": BINARY_SCHEMA_VERSION,
            "projects": list(projects),
        }
        try:
            data = pickle.dumps(payload, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise StorageIOError(self.path, e) from e

        try:
            write_bytes_atomic(self.path, data)
        except OSError as e:
            raise StorageIOError(self.path, e) from e

        log.info("projects_saved", path=str(self.path), store="binary", count=len(projects))

    def load(self) -> list[Project]:
        """读取项目列表，文件不存在时返回空列表"""
        try:
            with self.path.open("rb") as fh:
                payload = self._read(fh)
        except FileNotFoundError:
            log.info("store_file_missing", path=str(self.path), store="binary")
            return []
        except OSError as e:
            raise StorageIOError(self.path, e) from e

        projects = self._unwrap(payload)
        log.info("projects_loaded", path=str(self.path), store="binary", count=len(projects))
        return projects

    def _read(self, fh: BinaryIO) -> Any:
        try:
            return _ModelUnpickler(fh).load()
        except OSError:
            raise
        except Exception as e:
            # 非 pickle 数据（如 JSON 文本）或损坏的流可能抛出任意异常类型
            raise SchemaMismatchError(self.path, f"not a taskdesk binary store ({e})") from e

    def _unwrap(self, payload: Any) -> list[Project]:
        """校验信封与对象图结构"""
        if not isinstance(payload, dict) or payload.get("format") != BINARY_FORMAT_TAG:
            raise SchemaMismatchError(self.path, "missing taskdesk binary format tag")

        version = payload.get("schema_version")
        if version != BINARY_SCHEMA_VERSION:
            raise SchemaMismatchError(
                self.path,
                f"schema version {version!r} does not match {BINARY_SCHEMA_VERSION}",
            )

        projects = payload.get("projects")
        if not isinstance(projects, list):
            raise SchemaMismatchError(self.path, "projects entry is not a list")

        for project in projects:
            if not isinstance(project, Project):
                raise SchemaMismatchError(
                    self.path, f"expected Project, found {type(project).__name__}"
                )
            if missing := _missing_fields(project):
                raise SchemaMismatchError(
                    self.path, f"project {vars(project).get('id')!r} lacks fields {missing}"
                )
            for task in project.tasks:
                if not isinstance(task, TaskBase):
                    raise SchemaMismatchError(
                        self.path, f"expected Task, found {type(task).__name__}"
                    )
                if missing := _missing_fields(task):
                    raise SchemaMismatchError(
                        self.path, f"task {vars(task).get('id')!r} lacks fields {missing}"
                    )

        return projects
