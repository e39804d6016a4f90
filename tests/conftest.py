"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（纯内存计算，不依赖外部服务）

使用方法：
    # 运行所有测试
    uv run pytest

    # 运行带覆盖率
    uv run pytest --cov=deckfilter --cov-report=html
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from deckfilter.core.config import Settings
from deckfilter.modules.items.domain.entities import ClipItem, LiveItem, VideoItem
from deckfilter.modules.tags.domain.entities import TagDescriptor
from deckfilter.modules.tags.infrastructure.memory_resolver import InMemoryTagResolver

# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        LOG_LEVEL="DEBUG",
        LOG_FILTER_DECISIONS=True,
    )


# ============================================
# 标签 Fixtures
# ============================================


@pytest.fixture
def english_tag() -> TagDescriptor:
    """英语语言标签。"""
    return TagDescriptor(id="123", label="English", is_language=True, language_code="EN")


@pytest.fixture
def speedrun_tag() -> TagDescriptor:
    """普通标签。"""
    return TagDescriptor(id="456", label="Speedrun")


@pytest.fixture
def tag_resolver(english_tag, speedrun_tag) -> InMemoryTagResolver:
    """预置了两个已解析标签的 resolver。"""
    return InMemoryTagResolver([english_tag, speedrun_tag])


@pytest.fixture
def mock_host() -> MagicMock:
    """Mock 列宿主。"""
    host = MagicMock()
    host.save_cache = MagicMock()
    host.refresh = MagicMock()
    host.on_invalidate = MagicMock()
    return host


# ============================================
# 条目 Fixtures（按上游 camelCase 记录构造）
# ============================================


@pytest.fixture
def make_live() -> Callable[..., LiveItem]:
    """直播条目工厂。"""

    def _make(
        item_id: str = "1",
        *,
        stream: bool = True,
        stream_type: str | None = "live",
        viewers: int | None = 10,
        created_at: str | None = "2024-05-01T10:00:00Z",
        tags: list[str] | None = None,
        language: str | None = "en",
        game: dict[str, Any] | None = None,
    ) -> LiveItem:
        record: dict[str, Any] = {
            "id": item_id,
            "broadcastSettings": {"language": language, "game": game},
        }
        if stream:
            record["stream"] = {
                "id": f"s{item_id}",
                "type": stream_type,
                "viewersCount": viewers,
                "createdAt": created_at,
                "tags": [{"id": t} for t in tags] if tags is not None else None,
            }
        return LiveItem.model_validate(record)

    return _make


@pytest.fixture
def make_clip() -> Callable[..., ClipItem]:
    """剪辑条目工厂。"""

    def _make(
        item_id: str = "c1",
        *,
        game: dict[str, Any] | None = None,
        views: int | None = 5,
    ) -> ClipItem:
        return ClipItem.model_validate(
            {
                "id": item_id,
                "game": game,
                "viewCount": views,
                "createdAt": "2024-05-01T10:00:00Z",
            }
        )

    return _make


@pytest.fixture
def make_video() -> Callable[..., VideoItem]:
    """视频条目工厂。"""

    def _make(
        item_id: str = "v1",
        *,
        status: str | None = "RECORDED",
        broadcast_type: str | None = "ARCHIVE",
        language: str | None = "en",
        tags: list[str] | None = None,
        game: dict[str, Any] | None = None,
    ) -> VideoItem:
        return VideoItem.model_validate(
            {
                "id": item_id,
                "status": status,
                "broadcastType": broadcast_type,
                "language": language,
                "contentTags": [{"id": t} for t in tags] if tags is not None else None,
                "game": game,
                "publishedAt": "2024-05-01T10:00:00Z",
            }
        )

    return _make
