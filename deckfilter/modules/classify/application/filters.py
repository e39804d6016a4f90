"""Per-kind item predicates.

过滤流程对三种内容类型形状一致，只有结构检查与是否使用标签不同：
1. 类型专属检查（直播：stream 存在、重播；视频：录制中、视频类型）
2. 分类名屏蔽（全局，按名称）
3. 分类ID白名单 / 黑名单（单列）
4. 标签匹配（直播与视频）
第一个不通过的检查即排除该条目，后续检查不再执行。
"""

from collections.abc import Callable
from dataclasses import dataclass

from deckfilter.modules.classify.domain.entities import ExclusionReason
from deckfilter.modules.columns.domain.entities import ColumnConfig
from deckfilter.modules.items.domain.entities import (
    ClipItem,
    ContentKind,
    FeedItem,
    Game,
    LiveItem,
    VideoItem,
)
from deckfilter.modules.tags.domain.resolver import TagResolver

RERUN = "rerun"
RECORDING = "RECORDING"

Guard = Callable[[FeedItem, ColumnConfig], ExclusionReason | None]


def _live_guard(item: LiveItem, config: ColumnConfig) -> ExclusionReason | None:
    if item.stream is None:
        return ExclusionReason.NO_STREAM
    if config.hide_reruns and item.stream.type == RERUN:
        return ExclusionReason.RERUN
    return None


def _clip_guard(item: ClipItem, config: ColumnConfig) -> ExclusionReason | None:
    return None


def _video_guard(item: VideoItem, config: ColumnConfig) -> ExclusionReason | None:
    if config.hide_recordings and item.status == RECORDING:
        return ExclusionReason.RECORDING
    allowed = config.allowed_broadcast_types
    if allowed is not None and item.broadcast_type and item.broadcast_type not in allowed:
        return ExclusionReason.BROADCAST_TYPE
    return None


@dataclass(frozen=True)
class KindStrategy:
    """Kind-specific steps plugged into the shared filter shape."""

    kind: ContentKind
    item_type: type
    guard: Guard
    uses_tags: bool
    client_sort: bool


STRATEGIES: dict[ContentKind, KindStrategy] = {
    ContentKind.LIVE: KindStrategy(
        kind=ContentKind.LIVE,
        item_type=LiveItem,
        guard=_live_guard,
        uses_tags=True,
        client_sort=True,
    ),
    ContentKind.CLIP: KindStrategy(
        kind=ContentKind.CLIP,
        item_type=ClipItem,
        guard=_clip_guard,
        uses_tags=False,
        client_sort=False,
    ),
    ContentKind.VIDEO: KindStrategy(
        kind=ContentKind.VIDEO,
        item_type=VideoItem,
        guard=_video_guard,
        uses_tags=True,
        client_sort=False,
    ),
}


def check_category(game: Game | None, config: ColumnConfig) -> ExclusionReason | None:
    """Apply the name block list and the id allow/block lists."""
    if game is None:
        return None

    if config.blocked_category_names and game.name in config.blocked_category_names:
        return ExclusionReason.BLOCKED_CATEGORY_NAME

    if config.allowed_category_ids is not None and game.id not in config.allowed_category_ids:
        return ExclusionReason.CATEGORY_NOT_ALLOWED

    if config.blocked_category_ids and game.id in config.blocked_category_ids:
        return ExclusionReason.BLOCKED_CATEGORY

    return None


def check_tags(
    tag_ids: set[str],
    language: str | None,
    config: ColumnConfig,
    resolver: TagResolver | None,
) -> ExclusionReason | None:
    """Match an item's tags against the required and blocked sets.

    必需标签若不在条目上，可由语言等价满足：该标签已解析、是语言标签，
    且语言代码与条目语言一致。屏蔽标签没有这种例外。
    """
    lang = language.lower() if language else None

    if config.required_tag_ids:
        for tag_id in config.required_tag_ids:
            if tag_id in tag_ids:
                continue
            # fire and forget：未解析的标签不等待，直接视为不满足
            tag = resolver.resolve_now(tag_id) if resolver is not None else None
            if tag is not None and tag.is_language and lang and lang == tag.language_code:
                continue
            return ExclusionReason.MISSING_REQUIRED_TAG

    if config.blocked_tag_ids and not config.blocked_tag_ids.isdisjoint(tag_ids):
        return ExclusionReason.BLOCKED_TAG

    return None


def exclusion_reason(
    item: FeedItem,
    config: ColumnConfig,
    resolver: TagResolver | None = None,
) -> ExclusionReason | None:
    """Return why an item is hidden by a column, or None when it is visible."""
    strategy = STRATEGIES[config.kind]

    reason = strategy.guard(item, config)
    if reason is not None:
        return reason

    reason = check_category(item.game, config)
    if reason is not None:
        return reason

    if strategy.uses_tags and config.uses_tag_filter:
        tag_ids = {tag.id for tag in item.tags or ()}
        return check_tags(tag_ids, item.language, config, resolver)

    return None
