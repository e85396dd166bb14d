"""structlog 配置模块

渲染模式与级别取自 IndexerConfig（log_format / log_level）。
日志经 stdlib logging 输出到 stderr，stdout 留给 CLI 结果。
"""

import logging

import structlog

from .config import IndexerConfig


def _shared_processors() -> list[structlog.types.Processor]:
    """structlog 与 stdlib 日志共用的前置处理器链"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(config: IndexerConfig) -> logging.Handler:
    """按配置初始化 structlog

    Args:
        config: 已加载的 IndexerConfig

    Returns:
        安装到根 logger 的 handler
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(config.log_format),
            foreign_pre_chain=shared,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    return handler
