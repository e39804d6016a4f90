"""In-process tag resolver.

标签描述在进程生命周期内缓存。宿主负责实际抓取：通过 pending_ids() 取得待解析的ID，
抓取完成后调用 store() 写入，store() 会触发登记的回调（同一回调对同一ID只登记一次）。

过滤可以并行执行，查找与登记、写入与取出回调都在同一把锁内完成；
回调在释放锁之后执行。
"""

import threading
from collections.abc import Iterable

from loguru import logger

from deckfilter.core.infrastructure.logging import DeckEvents
from deckfilter.modules.items.domain.entities import ItemTag
from deckfilter.modules.tags.domain.entities import TagDescriptor
from deckfilter.modules.tags.domain.resolver import OnResolved, TagResolver


class InMemoryTagResolver(TagResolver):
    """Tag resolver backed by a process-lifetime dictionary."""

    def __init__(self, tags: Iterable[TagDescriptor] | None = None) -> None:
        self._lock = threading.Lock()
        self._tags: dict[str, TagDescriptor] = {}
        self._waiters: dict[str, list[OnResolved]] = {}
        # dict 保持插入顺序，当作有序集合使用
        self._pending: dict[str, None] = {}

        for tag in tags or ():
            self._tags[tag.id] = tag

    def __contains__(self, tag_id: object) -> bool:
        return tag_id in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def resolve_now(
        self, tag_id: str, on_resolved: OnResolved | None = None
    ) -> TagDescriptor | None:
        with self._lock:
            tag = self._tags.get(tag_id)
            if tag is not None:
                return tag

            self._pending.setdefault(tag_id, None)
            if on_resolved is not None:
                waiters = self._waiters.setdefault(tag_id, [])
                if on_resolved not in waiters:
                    waiters.append(on_resolved)
        return None

    def memorize(self, tag: str | ItemTag) -> None:
        if isinstance(tag, ItemTag):
            self.store(TagDescriptor.from_item_tag(tag))
        elif isinstance(tag, str) and tag:
            with self._lock:
                if tag not in self._tags:
                    self._pending.setdefault(tag, None)
        else:
            logger.debug(f"Ignoring unsupported tag hint: {tag!r}")

    def pending_ids(self) -> list[str]:
        """Return ids that were requested or seen but are not resolved yet."""
        with self._lock:
            return list(self._pending)

    def waiter_count(self, tag_id: str) -> int:
        """Return how many callbacks wait for an unresolved id."""
        with self._lock:
            return len(self._waiters.get(tag_id, ()))

    def store(self, descriptor: TagDescriptor) -> bool:
        """Store a resolved descriptor and notify waiters.

        Returns:
            是否为新写入；重复写入同一ID不会再次触发回调
        """
        with self._lock:
            if descriptor.id in self._tags:
                return False

            self._tags[descriptor.id] = descriptor
            self._pending.pop(descriptor.id, None)
            waiters = self._waiters.pop(descriptor.id, [])

        DeckEvents.tag_resolved(
            tag_id=descriptor.id,
            is_language=descriptor.is_language,
            waiters=len(waiters),
        )

        for callback in waiters:
            try:
                callback(descriptor)
            except Exception as e:
                logger.error(f"Error in tag callback for {descriptor.id}: {e}")

        return True

    def store_many(self, descriptors: Iterable[TagDescriptor]) -> int:
        """Store several descriptors, returning how many were new."""
        return sum(1 for descriptor in descriptors if self.store(descriptor))
