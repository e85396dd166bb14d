"""IndexerConfig -- 从环境变量加载配置

环境变量:
    NEARINDEXER_DATA_DIR: 数据基础目录（默认 data）
    NEARINDEXER_DB_PATH: SQLite 数据库路径
    NEARINDEXER_GAS_PRICE_POLICY: gas_price 越界处理策略（zero/raise）
    NEARINDEXER_INGEST_BATCH_SIZE: 每个事务写入的 receipt 数量
    NEARINDEXER_LOG_FORMAT: 日志渲染模式（dev/json）
    NEARINDEXER_LOG_LEVEL: 日志级别（默认 INFO）
"""

import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

from .models.enums import GasPricePolicy

log = structlog.get_logger()

DEFAULT_BATCH_SIZE: int = 500

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _get_base_dir() -> Path:
    """获取数据基础目录"""
    return Path(os.environ.get("NEARINDEXER_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "NEARINDEXER_DB_PATH",
        str(_get_base_dir() / "sqlite" / "nearindexer.db"),
    )


class IndexerConfig(BaseModel):
    """Indexer 配置"""

    db_path: str = Field(description="SQLite 数据库路径")
    gas_price_policy: GasPricePolicy = Field(
        default=GasPricePolicy.ZERO,
        description="gas_price 越界时写 0（zero）或报错（raise）",
    )
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        ge=1,
        description="每个事务写入的 receipt 数量",
    )
    log_format: Literal["dev", "json"] = Field(
        default="dev",
        description="日志渲染模式：dev 可读输出 / json 结构化输出",
    )
    log_level: str = Field(default="INFO", description="根 logger 级别")


def load_indexer_config() -> IndexerConfig:
    """从环境变量加载配置，非法值记录 warning 后回退默认值"""
    kwargs: dict = {"db_path": get_db_path()}

    if val := os.environ.get("NEARINDEXER_GAS_PRICE_POLICY"):
        try:
            kwargs["gas_price_policy"] = GasPricePolicy(val.lower())
        except ValueError:
            log.warning(
                "invalid_gas_price_policy_config",
                env_var="NEARINDEXER_GAS_PRICE_POLICY",
                value=val,
                fallback=GasPricePolicy.ZERO.value,
            )

    if val := os.environ.get("NEARINDEXER_INGEST_BATCH_SIZE"):
        try:
            batch_size = int(val)
        except ValueError:
            batch_size = 0
        if batch_size >= 1:
            kwargs["batch_size"] = batch_size
        else:
            log.warning(
                "invalid_batch_size_config",
                env_var="NEARINDEXER_INGEST_BATCH_SIZE",
                value=val,
                fallback=DEFAULT_BATCH_SIZE,
            )

    if val := os.environ.get("NEARINDEXER_LOG_FORMAT"):
        if val.lower() in ("dev", "json"):
            kwargs["log_format"] = val.lower()
        else:
            log.warning(
                "invalid_log_format_config",
                env_var="NEARINDEXER_LOG_FORMAT",
                value=val,
                fallback="dev",
            )

    if val := os.environ.get("NEARINDEXER_LOG_LEVEL"):
        if val.upper() in _LOG_LEVELS:
            kwargs["log_level"] = val.upper()
        else:
            log.warning(
                "invalid_log_level_config",
                env_var="NEARINDEXER_LOG_LEVEL",
                value=val,
                fallback="INFO",
            )

    return IndexerConfig(**kwargs)
