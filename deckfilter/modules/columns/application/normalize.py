"""Column configuration normalization.

把单列设置与全局设置合并为 ColumnConfig。每次设置变化都完整重建，不做增量修补。
"""

from collections.abc import Callable, Iterable

from deckfilter.modules.catalog.domain.catalog import get_period, get_sort_option
from deckfilter.modules.catalog.domain.entities import VideoType
from deckfilter.modules.columns.domain.entities import (
    ColumnConfig,
    ColumnSettings,
    GlobalSettings,
    SettingsRecord,
)
from deckfilter.modules.items.domain.entities import ContentKind


def _union(
    *sources: Iterable[str] | None,
    transform: Callable[[str], str] | None = None,
) -> frozenset[str] | None:
    """Union several optional lists; an empty result becomes None."""
    values: set[str] = set()
    for source in sources:
        if not source:
            continue
        for value in source:
            values.add(transform(value) if transform else value)
    return frozenset(values) if values else None


def _allowed_broadcast_types(hidden: list[str] | None) -> frozenset[str] | None:
    """Invert the hidden type list into the set of allowed types."""
    if not hidden:
        return None
    return frozenset(t for t in VideoType.all_types() if t not in hidden)


def normalize(
    kind: ContentKind,
    settings: ColumnSettings | None,
    global_settings: GlobalSettings | None,
) -> ColumnConfig:
    """Build the configuration snapshot for a column.

    Args:
        kind: 列的内容类型
        settings: 单列设置（可为空）
        global_settings: 全局设置（可为空）

    Returns:
        新的 ColumnConfig；相同输入总是得到相等的结果
    """
    column = settings or ColumnSettings()
    shared = global_settings or GlobalSettings()

    sort_key = column.sort if get_sort_option(kind, column.sort) else None
    period_key = column.period if get_period(kind, column.period) else None

    return ColumnConfig(
        kind=kind,
        required_tag_ids=_union(column.tags, shared.tags),
        blocked_tag_ids=_union(column.blocked_tags, shared.blocked_tags),
        allowed_category_ids=_union(column.filter_games),
        blocked_category_ids=_union(column.filter_blocked_games),
        languages=_union(column.lang, shared.lang, transform=str.upper),
        # 全局屏蔽列表只有分类名可用，按名称匹配
        blocked_category_names=_union(shared.blocked_games),
        allowed_broadcast_types=(
            _allowed_broadcast_types(column.types)
            if kind == ContentKind.VIDEO
            else None
        ),
        hide_reruns=shared.hide_reruns,
        hide_recordings=column.no_recordings if kind == ContentKind.VIDEO else False,
        selected_sort_key=sort_key,
        selected_period_key=period_key,
    )


def should_invalidate(
    new: SettingsRecord | None, old: SettingsRecord | None
) -> bool:
    """Decide whether a settings change must invalidate downstream data.

    新设置存在且与旧设置不同，或设置被清空（旧设置存在）时返回 True。
    """
    if new is not None:
        return new != old
    return old is not None
