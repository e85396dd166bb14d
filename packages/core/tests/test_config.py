"""IndexerConfig + load_indexer_config 单元测试

验证环境变量映射、默认值、非法值回退。
"""

import logging

import pytest
import structlog
from nearindexer.core.config import (
    DEFAULT_BATCH_SIZE,
    IndexerConfig,
    get_db_path,
    load_indexer_config,
)
from nearindexer.core.logging_config import setup_logging
from nearindexer.core.models import GasPricePolicy
from pydantic import ValidationError

ENV_VARS = (
    "NEARINDEXER_DATA_DIR",
    "NEARINDEXER_DB_PATH",
    "NEARINDEXER_GAS_PRICE_POLICY",
    "NEARINDEXER_INGEST_BATCH_SIZE",
    "NEARINDEXER_LOG_FORMAT",
    "NEARINDEXER_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestIndexerConfig:
    """IndexerConfig 数据模型测试"""

    def test_default_values(self):
        config = IndexerConfig(db_path="x.db")
        assert config.gas_price_policy == GasPricePolicy.ZERO
        assert config.batch_size == DEFAULT_BATCH_SIZE
        assert config.log_format == "dev"
        assert config.log_level == "INFO"

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            IndexerConfig(db_path="x.db", log_format="xml")

    def test_batch_size_min_value(self):
        with pytest.raises(ValidationError):
            IndexerConfig(db_path="x.db", batch_size=0)

    def test_policy_from_string(self):
        config = IndexerConfig(db_path="x.db", gas_price_policy="raise")
        assert config.gas_price_policy == GasPricePolicy.RAISE


class TestLoadIndexerConfig:
    """load_indexer_config() 环境变量映射测试"""

    def test_default_when_no_env(self, clean_env):
        config = load_indexer_config()
        assert config.db_path == "data/sqlite/nearindexer.db"
        assert config.gas_price_policy == GasPricePolicy.ZERO
        assert config.batch_size == DEFAULT_BATCH_SIZE

    def test_data_dir_moves_db_path(self, clean_env, tmp_path):
        clean_env.setenv("NEARINDEXER_DATA_DIR", str(tmp_path))
        assert get_db_path() == str(tmp_path / "sqlite" / "nearindexer.db")

    def test_db_path_override(self, clean_env):
        clean_env.setenv("NEARINDEXER_DB_PATH", "/tmp/custom.db")
        assert load_indexer_config().db_path == "/tmp/custom.db"

    def test_policy_from_env(self, clean_env):
        clean_env.setenv("NEARINDEXER_GAS_PRICE_POLICY", "RAISE")
        assert load_indexer_config().gas_price_policy == GasPricePolicy.RAISE

    def test_invalid_policy_falls_back(self, clean_env):
        clean_env.setenv("NEARINDEXER_GAS_PRICE_POLICY", "ignore")
        assert load_indexer_config().gas_price_policy == GasPricePolicy.ZERO

    def test_batch_size_from_env(self, clean_env):
        clean_env.setenv("NEARINDEXER_INGEST_BATCH_SIZE", "25")
        assert load_indexer_config().batch_size == 25

    @pytest.mark.parametrize("value", ["abc", "0", "-3"])
    def test_invalid_batch_size_falls_back(self, clean_env, value):
        clean_env.setenv("NEARINDEXER_INGEST_BATCH_SIZE", value)
        assert load_indexer_config().batch_size == DEFAULT_BATCH_SIZE

    def test_log_settings_from_env(self, clean_env):
        clean_env.setenv("NEARINDEXER_LOG_FORMAT", "JSON")
        clean_env.setenv("NEARINDEXER_LOG_LEVEL", "debug")
        config = load_indexer_config()
        assert config.log_format == "json"
        assert config.log_level == "DEBUG"

    def test_invalid_log_settings_fall_back(self, clean_env):
        clean_env.setenv("NEARINDEXER_LOG_FORMAT", "xml")
        clean_env.setenv("NEARINDEXER_LOG_LEVEL", "loud")
        config = load_indexer_config()
        assert config.log_format == "dev"
        assert config.log_level == "INFO"


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    """setup_logging(config) 按配置安装 handler"""

    def test_json_debug(self, restore_logging):
        handler = setup_logging(
            IndexerConfig(db_path="x.db", log_format="json", log_level="DEBUG")
        )
        assert restore_logging.handlers == [handler]
        assert restore_logging.level == logging.DEBUG
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(handler.formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_dev_renderer_by_default(self, restore_logging):
        handler = setup_logging(IndexerConfig(db_path="x.db"))
        assert restore_logging.level == logging.INFO
        assert isinstance(handler.formatter.processors[-1], structlog.dev.ConsoleRenderer)
