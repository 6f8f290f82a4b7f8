"""taskdesk 日志配置

CLI 的正常输出写 stdout，structlog 事件统一经标准库 logging 写 stderr。
每条命令开始时把当前存储（格式、路径）绑定到 contextvars，
之后 manager / store 发出的所有事件都带上这两个字段。

环境变量:
    TASKDESK_LOG_FORMAT: dev（默认，ConsoleRenderer）或 json（JSONRenderer）
    TASKDESK_LOG_LEVEL: 日志级别名（默认 INFO，无法识别时回退 INFO）
"""

import logging
import os
import sys

import structlog

from .config import StoreConfig

DEFAULT_LOG_FORMAT = "dev"
DEFAULT_LOG_LEVEL = "INFO"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format.strip().lower() == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    # 输出被重定向（管道、文件）时不带颜色控制符
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog

    Args:
        log_format: 渲染模式，缺省读取 TASKDESK_LOG_FORMAT
        log_level: 日志级别名，缺省读取 TASKDESK_LOG_LEVEL
    """
    log_format = log_format or os.environ.get("TASKDESK_LOG_FORMAT", DEFAULT_LOG_FORMAT)
    log_level = log_level or os.environ.get("TASKDESK_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_level(log_level))


def bind_store_context(config: StoreConfig) -> None:
    """把当前存储绑定到日志上下文（覆盖上一条命令的绑定）"""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        store_format=config.store_format,
        store_path=str(config.path),
    )
