"""Tag resolver port."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from deckfilter.modules.items.domain.entities import ItemTag
from deckfilter.modules.tags.domain.entities import TagDescriptor

OnResolved = Callable[[TagDescriptor], None]


class TagResolver(ABC):
    """Port for looking up tag descriptors.

    resolve_now 永不阻塞：未解析时返回 None，并在提供回调时于描述可用后回调一次。
    """

    @abstractmethod
    def resolve_now(
        self, tag_id: str, on_resolved: OnResolved | None = None
    ) -> TagDescriptor | None:
        """Return the descriptor if it is already known.

        Args:
            tag_id: 标签ID
            on_resolved: 未解析时登记的回调，解析完成后最多触发一次

        Returns:
            已知的描述，否则 None
        """
        pass

    @abstractmethod
    def memorize(self, tag: str | ItemTag) -> None:
        """Record that a tag was seen. Never fails."""
        pass
