"""Classifier service - 条目过滤与客户端排序。

过滤与排序都是对已加载数据的纯计算，不做 I/O，也不修改条目或配置。
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel

from deckfilter.core.config import settings
from deckfilter.core.infrastructure.logging import DeckEvents
from deckfilter.modules.catalog.domain.entities import SortDescriptor
from deckfilter.modules.classify.application.filters import STRATEGIES, exclusion_reason
from deckfilter.modules.classify.domain.exceptions import ClientSortNotSupportedError
from deckfilter.modules.columns.domain.entities import ColumnConfig
from deckfilter.modules.items.application.parsing import parse_item
from deckfilter.modules.items.domain.entities import ContentKind, FeedItem
from deckfilter.modules.tags.domain.resolver import TagResolver

STREAM_DOWN = "stream_down"


def _as_list(items: Any) -> list | None:
    # 字符串、字典与单个模型不是条目批次
    if not isinstance(items, Iterable) or isinstance(items, str | bytes | Mapping | BaseModel):
        return None
    return list(items)


def matches(
    item: FeedItem,
    config: ColumnConfig,
    resolver: TagResolver | None = None,
) -> bool:
    """Return True when a single item is visible in the column."""
    return exclusion_reason(item, config, resolver) is None


def filter_items(
    items: Iterable[Any],
    config: ColumnConfig,
    resolver: TagResolver | None = None,
) -> list[FeedItem]:
    """Keep the items a column shows, preserving their order.

    Args:
        items: 条目模型或上游原始记录
        config: 列配置快照
        resolver: 标签解析器，用于语言等价判断

    Returns:
        可见条目；输入不是条目序列（如 None、字符串、字典）时返回空列表
    """
    batch = _as_list(items)
    if batch is None:
        return []

    kind = config.kind
    kept: list[FeedItem] = []
    reasons: Counter[str] = Counter()

    for raw in batch:
        item = parse_item(kind, raw)
        if item is None:
            reasons["malformed"] += 1
            continue

        reason = exclusion_reason(item, config, resolver)
        if reason is None:
            kept.append(item)
            continue

        reasons[reason.value] += 1
        if settings.LOG_FILTER_DECISIONS:
            logger.debug(f"Excluded {kind.value} item {item.id}: {reason.value}")

    DeckEvents.items_filtered(
        kind=kind.value, total=len(batch), kept=len(kept), reasons=reasons
    )
    return kept


def should_client_sort(config: ColumnConfig) -> bool:
    """Return True when the column's active sort is performed locally."""
    if not STRATEGIES[config.kind].client_sort:
        return False
    option = config.sort_option
    return option is not None and option.is_client_sortable


def sort_items(
    kind: ContentKind,
    items: Iterable[FeedItem],
    sort: SortDescriptor | None = None,
) -> list[FeedItem]:
    """Order items with a sort option's key.

    Raises:
        ClientSortNotSupportedError: 该内容类型的排序由上游决定
    """
    if not STRATEGIES[kind].client_sort:
        raise ClientSortNotSupportedError(kind)

    batch = _as_list(items)
    if batch is None:
        return []

    # 无排序键（如推荐）时保持上游顺序
    if sort is None or sort.sort_key is None:
        return batch

    return sorted(batch, key=sort.sort_key, reverse=sort.reverse)


def apply_stream_change(
    kind: ContentKind,
    items: Iterable[FeedItem],
    change_type: str,
    item_id: str | None,
) -> list[FeedItem]:
    """Apply a live update notification to an already displayed list."""
    batch = _as_list(items)
    if batch is None:
        return []

    if kind != ContentKind.LIVE or change_type != STREAM_DOWN or not item_id:
        return batch

    return [item for item in batch if str(item.id) != str(item_id)]
