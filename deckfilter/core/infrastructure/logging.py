"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志（过滤结果、配置失效、标签解析）

宿主在启动时调用一次 setup_logging()。
"""

import sys
from collections.abc import Mapping
from typing import Any

import structlog
from loguru import logger

from deckfilter.core.config import Settings, settings

LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

LOGURU_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(config: Settings | None = None) -> str:
    """Send loguru and structlog output to stderr at the configured level.

    Args:
        config: 应用配置，默认使用模块级 settings

    Returns:
        生效的日志级别名（无法识别的级别回退为 INFO）
    """
    config = config or settings
    level = config.LOG_LEVEL.upper()
    if level not in LOG_LEVELS:
        level = "INFO"

    _configure_structlog(level, console=config.ENVIRONMENT == "local")
    _configure_loguru(level)

    logger.info(f"{config.PROJECT_NAME} logging configured with level: {level}")
    return level


def _configure_structlog(level: str, console: bool) -> None:
    """配置 structlog 处理器链。"""
    # 本地开发使用人类可读格式，其他环境输出 JSON
    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if console
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS[level]),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _configure_loguru(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOGURU_FORMAT, colorize=False)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class DeckEvents:
    """业务事件日志助手类。

    Usage:
        from deckfilter.core.infrastructure.logging import DeckEvents

        DeckEvents.items_filtered(kind="live", total=40, kept=31)
        DeckEvents.column_invalidated(kind="video", scope="global")
    """

    _log = structlog.get_logger("deck.events")

    @classmethod
    def items_filtered(
        cls,
        kind: str,
        total: int,
        kept: int,
        reasons: Mapping[str, int] | None = None,
        **extra: Any,
    ) -> None:
        """记录一次批量过滤的结果。"""
        cls._log.debug(
            "items_filtered",
            event_type="filter",
            kind=kind,
            total=total,
            kept=kept,
            dropped=total - kept,
            reasons=dict(reasons) if reasons else None,
            **extra,
        )

    @classmethod
    def column_invalidated(
        cls,
        kind: str,
        scope: str,
        **extra: Any,
    ) -> None:
        """记录列配置变化导致的下游失效。"""
        cls._log.info(
            "column_invalidated",
            event_type="invalidate",
            kind=kind,
            scope=scope,
            **extra,
        )

    @classmethod
    def tag_resolved(
        cls,
        tag_id: str,
        is_language: bool,
        waiters: int,
        **extra: Any,
    ) -> None:
        """记录标签解析完成事件。"""
        cls._log.debug(
            "tag_resolved",
            event_type="tag",
            tag_id=tag_id,
            is_language=is_language,
            waiters=waiters,
            **extra,
        )

    @classmethod
    def cache_updated(
        cls,
        keys: list[str],
        **extra: Any,
    ) -> None:
        """记录列缓存写入事件。"""
        cls._log.debug(
            "cache_updated",
            event_type="cache",
            keys=keys,
            **extra,
        )

    @classmethod
    def record_rejected(
        cls,
        kind: str,
        error: str,
        record_id: str | None = None,
        **extra: Any,
    ) -> None:
        """记录无法解析的上游条目。"""
        cls._log.warning(
            "record_rejected",
            event_type="parse_error",
            kind=kind,
            record_id=record_id,
            error=error,
            **extra,
        )
