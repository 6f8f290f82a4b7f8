"""配置模块 -- 可通过环境变量覆盖

包含数据目录、默认存储格式与路径、字段长度上限等可配置常量。

环境变量:
    TASKDESK_DATA_DIR: 数据基础目录（默认 data）
    TASKDESK_STORE_FORMAT: 存储格式 binary / json（默认 binary）
    TASKDESK_STORE_PATH: 存储文件路径（默认按格式取 data/dados.dat 或 data/dados.json）
"""

import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

StoreFormat = Literal["binary", "json"]

DEFAULT_STORE_FORMAT: StoreFormat = "binary"

BINARY_STORE_FILENAME = "dados.dat"
JSON_STORE_FILENAME = "dados.json"

# 字段约束
PROJECT_NAME_MAX_LENGTH: int = 50
DESCRIPTION_MAX_LENGTH: int = 255
PRIORITY_MIN: int = 1
PRIORITY_MAX: int = 5

# display_details() 中的日期格式
DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def _get_base_dir() -> Path:
    """获取数据基础目录"""
    return Path(os.environ.get("TASKDESK_DATA_DIR", "data"))


def get_binary_store_path() -> Path:
    """二进制存储默认路径"""
    return _get_base_dir() / BINARY_STORE_FILENAME


def get_json_store_path() -> Path:
    """JSON 存储默认路径"""
    return _get_base_dir() / JSON_STORE_FILENAME


def default_store_path(store_format: StoreFormat) -> Path:
    if store_format == "json":
        return get_json_store_path()
    return get_binary_store_path()


class StoreConfig(BaseModel):
    """持久化配置"""

    store_format: StoreFormat = Field(
        default=DEFAULT_STORE_FORMAT,
        description="存储格式：binary / json",
    )
    path: Path = Field(
        default_factory=get_binary_store_path,
        description="存储文件路径",
    )


def load_store_config() -> StoreConfig:
    """从环境变量加载持久化配置

    无效的 TASKDESK_STORE_FORMAT 只记录告警并回退默认值，不阻塞启动。

    Returns:
        StoreConfig 实例
    """
    store_format: StoreFormat = DEFAULT_STORE_FORMAT

    if val := os.environ.get("TASKDESK_STORE_FORMAT"):
        normalized = val.strip().lower()
        if normalized in ("binary", "json"):
            store_format = normalized  # type: ignore[assignment]
        else:
            log.warning(
                "invalid_store_format_config",
                env_var="TASKDESK_STORE_FORMAT",
                value=val,
                fallback=DEFAULT_STORE_FORMAT,
            )

    if val := os.environ.get("TASKDESK_STORE_PATH"):
        path = Path(val)
    else:
        path = default_store_path(store_format)

    return StoreConfig(store_format=store_format, path=path)
