"""taskdesk Store -- 项目集合的可插拔持久化策略

提供工厂函数按格式或文件后缀创建 Store 实例。
"""

from pathlib import Path

from ..config import StoreConfig, StoreFormat, default_store_path
from .binary_store import PickleProjectStore
from .json_store import JsonProjectStore
from .protocols import ProjectStore


def create_store(store_format: StoreFormat, path: str | Path | None = None) -> ProjectStore:
    """按格式创建 Store

    Args:
        store_format: "binary" 或 "json"
        path: 文件路径，缺省取该格式的默认路径

    Returns:
        ProjectStore 实例
    """
    if store_format == "json":
        return JsonProjectStore(path or default_store_path("json"))
    if store_format == "binary":
        return PickleProjectStore(path or default_store_path("binary"))
    raise ValueError(f"Unknown store format: {store_format!r}")


def store_for_path(path: str | Path) -> ProjectStore:
    """按文件后缀推断格式：.json 为 JSON，其余为二进制"""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return JsonProjectStore(path)
    return PickleProjectStore(path)


def store_from_config(config: StoreConfig) -> ProjectStore:
    return create_store(config.store_format, config.path)


__all__ = [
    "ProjectStore",
    "PickleProjectStore",
    "JsonProjectStore",
    "create_store",
    "store_for_path",
    "store_from_config",
]
