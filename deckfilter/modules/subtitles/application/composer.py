"""Column subtitle composer.

根据列设置与排序选项生成列标题下方的摘要标签。除标签名查询外均为纯函数；
标签未解析时只登记回调，不阻塞、不重试。
"""

from deckfilter.modules.catalog.domain.catalog import get_period
from deckfilter.modules.catalog.domain.entities import SortDescriptor
from deckfilter.modules.columns.domain.entities import ColumnSettings
from deckfilter.modules.items.domain.entities import ContentKind
from deckfilter.modules.subtitles.domain.entities import Subtitle
from deckfilter.modules.tags.domain.resolver import OnResolved, TagResolver

SORT_ICON = "ffz-i-sort-down"
TAGS_ICON = "ffz-i-tags"
CATEGORIES_ICON = "ffz-i-tag"
PERIOD_ICON = "ffz-i-calendar"

TAGS_I18N = "addon.deck.sub.tags"
TAGS_TEXT = "{count, plural, one {{joined} tag} other {{joined} tags}}"
CATEGORIES_I18N = "addon.deck.sub.categories"
CATEGORIES_TEXT = (
    "{count, plural, one {{joined} category} other {{joined} categories}}"
)


def _joined(count: int, blocked: int) -> str:
    return f"{count}-{blocked}" if blocked > 0 else str(count)


def sort_subtitle(sort: SortDescriptor | None) -> Subtitle | None:
    """Label for the active sort option."""
    if sort is None:
        return None

    if sort.subtitle:
        return Subtitle(
            icon=sort.icon or SORT_ICON,
            i18n=sort.sub_i18n,
            text=sort.subtitle,
            tip_i18n=sort.i18n,
            tip=sort.title,
        )

    return Subtitle(icon=sort.icon or SORT_ICON, i18n=sort.i18n, text=sort.title)


def tag_subtitle(
    settings: ColumnSettings | None,
    resolver: TagResolver | None = None,
    on_resolved: OnResolved | None = None,
) -> Subtitle | None:
    """Label counting the column's required and blocked tags.

    Args:
        settings: 单列设置
        resolver: 用于查询标签名（提示文本）
        on_resolved: 未解析的标签解析完成后回调，宿主可据此刷新；
            同一回调对同一标签只登记一次，应传入稳定的可调用对象
    """
    if settings is None:
        return None

    required = settings.tags or []
    blocked = settings.blocked_tags or []
    if not required and not blocked:
        return None

    tip: list[str] = []

    if resolver is not None:
        for tag_id in required:
            tag = resolver.resolve_now(tag_id, on_resolved)
            if tag is not None:
                tip.append(tag.label)

        for tag_id in blocked:
            tag = resolver.resolve_now(tag_id, on_resolved)
            if tag is not None:
                tip.append(f"-{tag.label}")

    if len(tip) == 1:
        return Subtitle(icon=TAGS_ICON, text=tip[0], tip=tip[0])

    return Subtitle(
        icon=TAGS_ICON,
        i18n=TAGS_I18N,
        text=TAGS_TEXT,
        count=len(required) + len(blocked),
        joined=_joined(len(required), len(blocked)),
        tip=", ".join(tip) if tip else None,
    )


def category_subtitle(settings: ColumnSettings | None) -> Subtitle | None:
    """Label counting the column's allowed and blocked categories."""
    if settings is None:
        return None

    allowed = len(settings.filter_games or [])
    blocked = len(settings.filter_blocked_games or [])
    if allowed == 0 and blocked == 0:
        return None

    return Subtitle(
        icon=CATEGORIES_ICON,
        i18n=CATEGORIES_I18N,
        text=CATEGORIES_TEXT,
        count=allowed + blocked,
        joined=_joined(allowed, blocked),
    )


def period_subtitle(kind: ContentKind, settings: ColumnSettings | None) -> Subtitle | None:
    """Label for the clip period; other kinds have none."""
    if settings is None:
        return None

    period = get_period(kind, settings.period)
    if period is None:
        return None

    if period.subtitle:
        return Subtitle(
            icon=period.icon or PERIOD_ICON,
            i18n=period.sub_i18n,
            text=period.title,
            tip_i18n=period.i18n,
            tip=period.title,
        )

    return Subtitle(icon=period.icon or PERIOD_ICON, i18n=period.i18n, text=period.title)


def compose_subtitles(
    kind: ContentKind,
    settings: ColumnSettings | None,
    sort: SortDescriptor | None,
    resolver: TagResolver | None = None,
    on_resolved: OnResolved | None = None,
) -> list[Subtitle] | None:
    """All subtitles of a column in display order, or None when there are none."""
    out = [
        subtitle
        for subtitle in (
            sort_subtitle(sort),
            tag_subtitle(settings, resolver, on_resolved),
            category_subtitle(settings),
            period_subtitle(kind, settings),
        )
        if subtitle is not None
    ]
    return out or None
