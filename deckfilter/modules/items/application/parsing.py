"""Upstream record parsing.

把上游 JSON 记录转换为只读条目模型。无法校验的记录只记录日志并跳过，不会让整批失败。
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from deckfilter.core.infrastructure.logging import DeckEvents
from deckfilter.modules.items.domain.entities import (
    ITEM_MODELS,
    ContentKind,
    FeedItem,
)


def parse_item(kind: ContentKind, record: Any) -> FeedItem | None:
    """Parse one upstream record, returning None when it is malformed."""
    model = ITEM_MODELS[kind]

    if isinstance(record, model):
        return record
    if not isinstance(record, Mapping):
        DeckEvents.record_rejected(kind=kind.value, error="record is not an object")
        return None

    try:
        return model.model_validate(record)
    except ValidationError as e:
        record_id = record.get("id")
        logger.debug(f"Skipping malformed {kind.value} record {record_id!r}: {e}")
        DeckEvents.record_rejected(
            kind=kind.value,
            record_id=str(record_id) if record_id is not None else None,
            error=f"{e.error_count()} validation error(s)",
        )
        return None


def parse_items(kind: ContentKind, records: Any) -> list[FeedItem]:
    """Parse a batch of upstream records of one content kind.

    Args:
        kind: 条目类型
        records: 上游返回的记录列表

    Returns:
        解析成功的条目，保持原有顺序
    """
    if not isinstance(records, Iterable) or isinstance(
        records, str | bytes | Mapping | BaseModel
    ):
        return []

    items: list[FeedItem] = []
    for record in records:
        item = parse_item(kind, record)
        if item is not None:
            items.append(item)
    return items
