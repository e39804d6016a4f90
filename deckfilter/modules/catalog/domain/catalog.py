"""Static sort and period tables.

每种内容类型一张只读排序表。只有直播支持客户端排序；剪辑与视频的排序由上游完成。
"""

from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType

from deckfilter.modules.catalog.domain.entities import PeriodDescriptor, SortDescriptor
from deckfilter.modules.items.domain.entities import EPOCH, ContentKind, LiveItem


def _live_viewers(item: LiveItem) -> int:
    if item.stream is None:
        return 0
    return item.stream.viewers_count or 0


def _live_started_at(item: LiveItem) -> datetime:
    if item.stream is None:
        return EPOCH
    return item.stream.created_at or EPOCH


def _table(*options: SortDescriptor) -> Mapping[str, SortDescriptor]:
    return MappingProxyType({option.key: option for option in options})


LIVE_SORT_OPTIONS = _table(
    SortDescriptor(
        key="VIEWER_COUNT",
        title="Viewers (High to Low)",
        i18n="addon.deck.sort.live.viewers",
        subtitle="Viewers",
        sub_i18n="addon.deck.sort.sub.viewers",
        icon="ffz-i-sort-alt-down",
        sort_key=_live_viewers,
        reverse=True,
    ),
    SortDescriptor(
        key="VIEWER_COUNT_ASC",
        title="Viewers (Low to High)",
        i18n="addon.deck.sort.live.viewers-asc",
        subtitle="Viewers",
        sub_i18n="addon.deck.sort.sub.viewers",
        icon="ffz-i-sort-alt-up",
        sort_key=_live_viewers,
    ),
    SortDescriptor(
        key="RECENT",
        title="Recently Started",
        i18n="addon.deck.live.recent",
        subtitle="Recent",
        sub_i18n="addon.deck.sub.recent",
        icon="ffz-i-clock",
        sort_key=_live_started_at,
        reverse=True,
    ),
    SortDescriptor(
        key="RELEVANCE",
        title="Recommended for You",
        i18n="addon.deck.live.recommended",
        subtitle="Recommended",
        sub_i18n="addon.deck.sub.recommended",
        icon="ffz-i-thumbs-up",
    ),
)

CLIP_SORT_OPTIONS = _table(
    SortDescriptor(
        key="CREATED_AT_ASC",
        title="Recently Created",
        i18n="addon.deck.sort.clip.created-asc",
        subtitle="Recent",
        sub_i18n="addon.deck.sub.recent",
        icon="ffz-i-clock",
    ),
    SortDescriptor(
        key="CREATED_AT_DESC",
        title="Oldest First",
        i18n="addon.deck.sort.clip.created-desc",
        subtitle="Oldest",
        sub_i18n="addon.deck.sub.oldest",
        icon="ffz-i-clock",
    ),
    SortDescriptor(
        key="VIEWS_ASC",
        title="Views (Low to High)",
        i18n="addon.deck.sort.clip.views-asc",
        subtitle="Views",
        sub_i18n="addon.deck.sub.views",
        icon="ffz-i-sort-alt-up",
    ),
    SortDescriptor(
        key="VIEWS_DESC",
        title="Views (High to Low)",
        i18n="addon.deck.sort.clip.views-desc",
        subtitle="Views",
        sub_i18n="addon.deck.sub.views",
        icon="ffz-i-sort-alt-down",
    ),
    SortDescriptor(
        key="TRENDING",
        title="Trending",
        i18n="addon.deck.sort.trending",
        icon="ffz-i-thumbs-up",
    ),
)

VIDEO_SORT_OPTIONS = _table(
    SortDescriptor(
        key="TIME",
        title="Recently Published",
        i18n="addon.deck.sort.video.recent",
        subtitle="Recent",
        sub_i18n="addon.deck.sub.recent",
        icon="ffz-i-clock",
    ),
    SortDescriptor(
        key="VIEWS",
        title="Views (High to Low)",
        i18n="addon.deck.sort.video.views",
        subtitle="Views",
        sub_i18n="addon.deck.sort.sub.views",
        icon="ffz-i-sort-alt-down",
    ),
)

SORT_OPTIONS: Mapping[ContentKind, Mapping[str, SortDescriptor]] = MappingProxyType(
    {
        ContentKind.LIVE: LIVE_SORT_OPTIONS,
        ContentKind.CLIP: CLIP_SORT_OPTIONS,
        ContentKind.VIDEO: VIDEO_SORT_OPTIONS,
    }
)


CLIP_PERIODS: Mapping[str, PeriodDescriptor] = MappingProxyType(
    {
        period.key: period
        for period in (
            PeriodDescriptor(
                key="LAST_DAY",
                title="24 Hours",
                i18n="addon.deck.clip-period.24-hours",
                subtitle="24h",
                sub_i18n="addon.deck.clip-period.24h",
                icon="ffz-i-calendar",
            ),
            PeriodDescriptor(
                key="LAST_WEEK",
                title="7 Days",
                i18n="addon.deck.clip-period.7-days",
                subtitle="7d",
                sub_i18n="addon.deck.clip-period.7d",
                icon="ffz-i-calendar",
            ),
            PeriodDescriptor(
                key="LAST_MONTH",
                title="30 Days",
                i18n="addon.deck.clip-period.30-days",
                subtitle="30d",
                sub_i18n="addon.deck.clip-period.30d",
                icon="ffz-i-calendar",
            ),
            PeriodDescriptor(
                key="ALL_TIME",
                title="All Time",
                i18n="addon.deck.clip-period.all-time",
                subtitle="All",
                sub_i18n="addon.deck.clip-period.all",
                icon="ffz-i-calendar",
            ),
        )
    }
)


def get_sort_options(kind: ContentKind) -> Mapping[str, SortDescriptor]:
    """Return the sort table of a content kind."""
    return SORT_OPTIONS[kind]


def get_sort_option(kind: ContentKind, key: str | None) -> SortDescriptor | None:
    """Look up a sort option; unknown keys mean no active sort."""
    if not key:
        return None
    return SORT_OPTIONS[kind].get(key)


def get_period(kind: ContentKind, key: str | None) -> PeriodDescriptor | None:
    """Look up a clip period; other kinds have no periods."""
    if kind != ContentKind.CLIP or not key:
        return None
    return CLIP_PERIODS.get(key)
