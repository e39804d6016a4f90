"""日志配置单元测试。

测试覆盖：
- loguru 与 structlog 使用同一日志级别
- 业务事件在 DEBUG 级别输出
- 非本地环境输出 JSON
- 无法识别的级别回退为 INFO
"""

import json
import sys

import pytest
import structlog
from loguru import logger

from deckfilter.core.config import Settings
from deckfilter.core.infrastructure.logging import DeckEvents, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """测试结束后恢复默认日志输出。"""
    yield
    structlog.reset_defaults()
    logger.remove()
    logger.add(sys.__stderr__)


class TestSetupLogging:
    """setup_logging 测试。"""

    def test_level_applies_to_both_loggers(self, capsys):
        """测试 WARNING 级别同时过滤 loguru 与 structlog。"""
        level = setup_logging(Settings(ENVIRONMENT="local", LOG_LEVEL="warning"))

        logger.info("loguru-info")
        logger.warning("loguru-warning")
        structlog.get_logger("deck.test").info("structlog-info")
        structlog.get_logger("deck.test").warning("structlog-warning")

        err = capsys.readouterr().err
        assert level == "WARNING"
        assert "loguru-warning" in err
        assert "structlog-warning" in err
        assert "loguru-info" not in err
        assert "structlog-info" not in err

    def test_debug_level_emits_deck_events(self, capsys, test_settings):
        """测试 DEBUG 级别输出业务事件与启动日志。"""
        assert setup_logging(test_settings) == "DEBUG"

        DeckEvents.items_filtered(kind="live", total=2, kept=1, reasons={"rerun": 1})

        err = capsys.readouterr().err
        assert "deckfilter logging configured with level: DEBUG" in err
        assert "items_filtered" in err
        assert "rerun" in err

    def test_json_outside_local(self, capsys):
        """测试非本地环境输出 JSON。"""
        setup_logging(Settings(ENVIRONMENT="production", LOG_LEVEL="INFO"))

        structlog.get_logger("deck.test").info("json-event", kind="clip")

        lines = [line for line in capsys.readouterr().err.splitlines() if "json-event" in line]
        assert len(lines) == 1
        payload = json.loads(lines[0])
        assert payload["event"] == "json-event"
        assert payload["kind"] == "clip"
        assert payload["level"] == "info"

    def test_unknown_level_falls_back_to_info(self, capsys):
        """测试无法识别的级别。"""
        assert setup_logging(Settings(LOG_LEVEL="verbose")) == "INFO"

        logger.debug("hidden-debug")

        assert "hidden-debug" not in capsys.readouterr().err
