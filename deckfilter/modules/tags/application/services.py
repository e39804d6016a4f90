"""Tag memorization helpers."""

from deckfilter.modules.items.domain.entities import ContentKind, FeedItem
from deckfilter.modules.tags.domain.resolver import TagResolver

# 只有直播与视频携带标签
TAGGED_KINDS = frozenset({ContentKind.LIVE, ContentKind.VIDEO})


def memorize_item_tags(
    kind: ContentKind, item: FeedItem | None, resolver: TagResolver | None
) -> int:
    """Hand every tag carried by an item to the resolver.

    Returns:
        交给 resolver 的标签数量
    """
    if resolver is None or item is None or kind not in TAGGED_KINDS:
        return 0

    tags = getattr(item, "tags", None)
    if not tags:
        return 0

    for tag in tags:
        resolver.memorize(tag)
    return len(tags)
