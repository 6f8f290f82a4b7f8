"""ProjectManager -- 项目集合的 facade

职责：
1. 持有有序的项目列表，分配项目/任务 id（各自单调递增的计数器）
2. 对外提供项目 CRUD 与任务创建
3. 通过 ProjectStore 编排保存、加载与导入

get_projects() 返回实时列表，调用方应视其为共享视图而非副本。
"""

from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

import structlog

from .config import load_store_config
from .exceptions import (
    ImportFailedError,
    ProjectNotFoundError,
    SchemaMismatchError,
    StorageError,
)
from .factory import TaskFactory
from .models.enums import TaskKind
from .models.project import Project
from .models.task import TaskBase
from .store import ProjectStore, store_for_path, store_from_config
from .utils import format_id, parse_numeric_id

log = structlog.get_logger()


class ProjectManager:
    """项目管理 facade"""

    def __init__(
        self,
        store: ProjectStore | None = None,
        task_factory: TaskFactory | None = None,
    ) -> None:
        self._projects: list[Project] = []
        self._store = store if store is not None else store_from_config(load_store_config())
        self._task_factory = task_factory or TaskFactory()
        self._next_project_id = 1
        self._next_task_id = 1

    # ---- 持久化 ----

    @property
    def store(self) -> ProjectStore:
        return self._store

    def set_store(self, store: ProjectStore) -> None:
        """切换持久化策略（如在 .dat 与 .json 之间切换）"""
        if store is None:
            raise TypeError("store must not be None")
        self._store = store
        log.info("store_switched", path=str(store.path), store=type(store).__name__)

    def load_data(self) -> None:
        """用 Store 中的数据替换当前集合，并恢复 id 计数器

        文件不存在时得到空集合。读取失败时异常向上抛出，
        当前内存中的集合保持不变。

        Raises:
            StorageIOError: 文件无法读取
            SchemaMismatchError: 文件结构不兼容
        """
        loaded = self._store.load()
        # 就地替换，保持调用方持有的列表引用有效
        self._projects[:] = loaded
        self._recover_id_counters()

    def save_data(self) -> bool:
        """保存当前集合

        写入失败只记录并返回 False，不中断进程；内存中的集合仍然是权威数据，
        调用方可以重试或换一个 Store 再保存。
        """
        try:
            self._store.save(self._projects)
        except StorageError as e:
            log.error(
                "save_failed",
                path=str(self._store.path),
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
        return True

    def import_projects(self, source: str | Path | ProjectStore) -> list[Project]:
        """从外部文件导入项目，追加到当前集合

        导入的项目和任务全部重新分配 id，避免与现有数据冲突。
        任何失败都不会追加半截数据。

        Args:
            source: 文件路径（按后缀推断格式）或 ProjectStore 实例

        Returns:
            追加的项目列表（已分配新 id）

        Raises:
            SchemaMismatchError: 文件结构不兼容
            ImportFailedError: 文件不存在或其他读取错误
        """
        store = source if isinstance(source, ProjectStore) else store_for_path(source)

        if not store.path.exists():
            raise ImportFailedError(store.path, FileNotFoundError(str(store.path)))

        try:
            external = store.load()
        except SchemaMismatchError:
            raise
        except StorageError as e:
            raise ImportFailedError(store.path, e) from e

        imported = [self._reassign_ids(project) for project in external]
        self._projects.extend(imported)

        log.info(
            "projects_imported",
            path=str(store.path),
            project_count=len(imported),
            task_count=sum(len(p.tasks) for p in imported),
        )
        return imported

    def _reassign_ids(self, project: Project) -> Project:
        tasks = [task.model_copy(update={"id": self._issue_task_id()}) for task in project.tasks]
        return project.model_copy(update={"id": self._issue_project_id(), "tasks": tasks})

    # ---- id 分配 ----

    @property
    def next_project_id(self) -> str:
        return format_id(self._next_project_id)

    @property
    def next_task_id(self) -> str:
        return format_id(self._next_task_id)

    def _issue_project_id(self) -> str:
        project_id = format_id(self._next_project_id)
        self._next_project_id += 1
        return project_id

    def _issue_task_id(self) -> str:
        task_id = format_id(self._next_task_id)
        self._next_task_id += 1
        return task_id

    def _recover_id_counters(self) -> None:
        """加载后把计数器推进到 max(数字 id) + 1

        项目与任务分别计算；非数字 id 逐个跳过，不影响同一项目下其他 id 的扫描。
        """
        max_project_id = 0
        max_task_id = 0

        for project in self._projects:
            project_number = parse_numeric_id(project.id)
            if project_number is not None:
                max_project_id = max(max_project_id, project_number)
            for task in project.tasks:
                task_number = parse_numeric_id(task.id)
                if task_number is not None:
                    max_task_id = max(max_task_id, task_number)

        self._next_project_id = max_project_id + 1
        self._next_task_id = max_task_id + 1

        log.info(
            "id_counters_recovered",
            next_project_id=self._next_project_id,
            next_task_id=self._next_task_id,
        )

    # ---- 项目 CRUD ----

    def create_project(self, name: str, general_deadline: date) -> Project:
        """创建项目并追加到集合

        校验失败时不消耗 id。

        Raises:
            ValidationError: 名称或截止日期非法
        """
        project = Project.create(format_id(self._next_project_id), name, general_deadline)
        self._next_project_id += 1
        self._projects.append(project)
        log.info("project_created", project_id=project.id, name=project.name)
        return project

    def get_projects(self) -> list[Project]:
        """全部项目（实时列表）"""
        return self._projects

    def get_project_by_id(self, project_id: str) -> Project | None:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def update_project(self, project_id: str, new_name: str, new_deadline: date) -> bool:
        """更新项目名称与截止日期

        两个字段都校验通过才写入（不会出现名称已改、日期失败的半更新）。

        Returns:
            False 表示项目不存在

        Raises:
            ValidationError: 新名称或新日期非法，项目保持原样
        """
        project = self.get_project_by_id(project_id)
        if project is None:
            return False
        project.update(new_name, new_deadline)
        log.info("project_updated", project_id=project_id)
        return True

    def delete_project(self, project_id: str) -> bool:
        """删除项目及其全部任务，返回是否找到"""
        for index, project in enumerate(self._projects):
            if project.id == project_id:
                del self._projects[index]
                log.info("project_deleted", project_id=project_id, task_count=len(project.tasks))
                return True
        return False

    # ---- 任务 ----

    def create_task_for_project(
        self,
        project_id: str,
        kind: TaskKind | str,
        fields: Mapping[str, Any],
    ) -> TaskBase:
        """在指定项目下创建任务

        Raises:
            ProjectNotFoundError: 项目不存在
            ValidationError: 类型未知或字段非法（不消耗 id）
        """
        project = self.get_project_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        task = self._task_factory.create_task(format_id(self._next_task_id), kind, fields)
        self._next_task_id += 1
        project.add_task(task)
        log.info("task_created", project_id=project_id, task_id=task.id, kind=task.kind)
        return task
