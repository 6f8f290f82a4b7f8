"""CLI 入口模块 -- python -m taskdesk <command>

支持的命令：
  summary                     列出已保存的项目及完成度
  import <file>               导入外部文件（.json 或 .dat）并保存
  convert <json|binary> <dest>  把当前存储转存为另一种格式
"""

import sys

import structlog

from .config import load_store_config
from .exceptions import TaskDeskError
from .logging_config import bind_store_context, setup_logging
from .manager import ProjectManager
from .store import create_store, store_from_config

log = structlog.get_logger()

USAGE = """用法: python -m taskdesk <command>
命令:
  summary                       列出已保存的项目及完成度
  import <file>                 导入外部文件（.json 或 .dat）并保存
  convert <json|binary> <dest>  把当前存储转存为另一种格式"""


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口，返回进程退出码"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 1

    setup_logging()
    command, rest = args[0], args[1:]

    try:
        if command == "summary" and not rest:
            return summary()
        if command == "import" and len(rest) == 1:
            return import_file(rest[0])
        if command == "convert" and len(rest) == 2 and rest[0] in ("json", "binary"):
            return convert(rest[0], rest[1])
    except TaskDeskError as e:
        log.error("command_failed", command=command, error_type=type(e).__name__, error=str(e))
        print(f"错误: {e}", file=sys.stderr)
        return 1

    print(f"未知命令或参数错误: {' '.join(args)}")
    print(USAGE)
    return 1


def _open_manager() -> ProjectManager:
    config = load_store_config()
    bind_store_context(config)
    manager = ProjectManager(store=store_from_config(config))
    manager.load_data()
    return manager


def summary() -> int:
    """打印每个项目及其任务"""
    manager = _open_manager()
    projects = manager.get_projects()
    if not projects:
        print("没有已保存的项目。")
        return 0

    for project in projects:
        print(
            f"[{project.id}] {project.name} | 截止: {project.general_deadline.isoformat()} "
            f"| 完成度: {project.progress_percentage():.1f}%"
        )
        for task in project.tasks:
            print(f"    {task.id}. {task.display_details()}")
    return 0


def import_file(path: str) -> int:
    manager = _open_manager()
    imported = manager.import_projects(path)
    if not manager.save_data():
        print("导入成功但保存失败，请检查存储路径。", file=sys.stderr)
        return 1
    print(f"已导入 {len(imported)} 个项目。")
    return 0


def convert(target_format: str, dest: str) -> int:
    manager = _open_manager()
    manager.set_store(create_store(target_format, dest))  # type: ignore[arg-type]
    if not manager.save_data():
        return 1
    print(f"已写入 {dest}（{target_format}）。")
    return 0


if __name__ == "__main__":
    sys.exit(main())
