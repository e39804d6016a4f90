"""Column service.

一个 Column 持有某一列当前的配置快照与缓存。设置变化时完整重建 ColumnConfig，
并通过返回值 ConfigUpdate.invalidated 告知调用方是否需要刷新下游数据。
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from deckfilter.core.config import settings as app_settings
from deckfilter.core.infrastructure.logging import DeckEvents
from deckfilter.modules.classify.application.services import (
    apply_stream_change,
    filter_items,
    should_client_sort,
    sort_items,
)
from deckfilter.modules.columns.application.normalize import normalize, should_invalidate
from deckfilter.modules.columns.domain.entities import (
    ColumnConfig,
    ColumnSettings,
    ConfigUpdate,
    GlobalSettings,
)
from deckfilter.modules.columns.domain.ports import ColumnHost
from deckfilter.modules.items.domain.entities import ContentKind, FeedItem
from deckfilter.modules.subtitles.application.composer import compose_subtitles
from deckfilter.modules.subtitles.domain.entities import Subtitle
from deckfilter.modules.tags.application.services import memorize_item_tags
from deckfilter.modules.tags.domain.entities import TagDescriptor
from deckfilter.modules.tags.domain.resolver import TagResolver

_MISSING = object()


class Column:
    """One configured deck column.

    职责：
    - 维护列配置快照（ColumnConfig）
    - 判断设置变化是否需要失效
    - 维护列缓存（浅合并 + 深比较）
    - 过滤、排序条目并生成摘要标签
    """

    def __init__(
        self,
        kind: ContentKind,
        settings: ColumnSettings | Mapping[str, Any] | None = None,
        global_settings: GlobalSettings | Mapping[str, Any] | None = None,
        cache: Mapping[str, Any] | None = None,
        host: ColumnHost | None = None,
        resolver: TagResolver | None = None,
    ):
        self.kind = kind
        self.settings = ColumnSettings.coerce(settings)
        self.global_settings = GlobalSettings.coerce(global_settings)
        self.host = host
        self.resolver = resolver
        self._cache: dict[str, Any] = dict(cache or {})
        self.config = normalize(self.kind, self.settings, self.global_settings)

    # ========================================================================
    # Settings
    # ========================================================================

    def update_settings(
        self, settings: ColumnSettings | Mapping[str, Any] | None
    ) -> ConfigUpdate:
        """Receive new settings after the column was edited."""
        old_settings = self.settings
        self.settings = ColumnSettings.coerce(settings)
        self.config = normalize(self.kind, self.settings, self.global_settings)

        invalidated = should_invalidate(self.settings, old_settings)
        if invalidated:
            self._invalidate("column")
        return ConfigUpdate(config=self.config, invalidated=invalidated)

    def update_global_settings(
        self, settings: GlobalSettings | Mapping[str, Any] | None
    ) -> ConfigUpdate:
        """Receive new global settings after the deck or tab settings changed."""
        old_global = self.global_settings
        self.global_settings = GlobalSettings.coerce(settings)
        self.config = normalize(self.kind, self.settings, self.global_settings)

        invalidated = should_invalidate(self.global_settings, old_global)
        if invalidated:
            self._invalidate("global")
        return ConfigUpdate(config=self.config, invalidated=invalidated)

    def _invalidate(self, scope: str) -> None:
        DeckEvents.column_invalidated(kind=self.kind.value, scope=scope)
        if self.host is not None:
            self.host.on_invalidate()

    @property
    def can_run(self) -> bool:
        return self.config.can_run

    @property
    def refresh_delay(self) -> int:
        return app_settings.REFRESH_DELAY_MS

    @property
    def refresh_multiplier(self) -> int:
        return app_settings.REFRESH_MULTIPLIER_MS

    # ========================================================================
    # Caching
    # ========================================================================

    @property
    def cache(self) -> dict[str, Any]:
        return dict(self._cache)

    def update_cache(self, data: Any) -> bool:
        """Merge keys into the cache and save it when something changed.

        只更新传入的键，不删除已有键；合并后无变化则不保存也不通知。

        Returns:
            缓存是否发生变化
        """
        if not isinstance(data, Mapping):
            return False

        changed: list[str] = []
        for key, value in data.items():
            if self._cache.get(key, _MISSING) != value:
                self._cache[key] = value
                changed.append(key)

        if not changed:
            return False

        DeckEvents.cache_updated(keys=changed)
        self.save_cache()
        return True

    def save_cache(self) -> None:
        """Hand the current cache to the host for persistence."""
        if self.host is None:
            logger.debug(f"No host attached to {self.kind.value} column, cache not saved")
            return
        self.host.save_cache(self.cache)
        self.host.refresh()

    def set_cache(self, cache: Mapping[str, Any] | None) -> None:
        """Replace the whole cache and save it."""
        self._cache = dict(cache or {})
        self.save_cache()

    @property
    def has_art(self) -> bool:
        return bool(self._cache.get("cover"))

    @property
    def logo(self) -> str | None:
        return self._cache.get("avatar")

    @property
    def cover_image(self) -> str | None:
        return self._cache.get("cover")

    # ========================================================================
    # Processing
    # ========================================================================

    def filter(self, items: Iterable[Any]) -> list[FeedItem]:
        return filter_items(items, self.config, self.resolver)

    def sort(self, items: Iterable[FeedItem]) -> list[FeedItem]:
        return sort_items(self.kind, items, self.config.sort_option)

    def process(self, items: Iterable[Any]) -> list[FeedItem]:
        """Filter items, then sort them locally when the active sort asks for it."""
        visible = self.filter(items)
        if should_client_sort(self.config):
            return self.sort(visible)
        return visible

    def memorize_tags(self, item: FeedItem) -> int:
        return memorize_item_tags(self.kind, item, self.resolver)

    def on_stream_change(
        self, items: Iterable[FeedItem], change_type: str, item_id: str | None
    ) -> list[FeedItem]:
        return apply_stream_change(self.kind, items, change_type, item_id)

    # ========================================================================
    # Display
    # ========================================================================

    def subtitles(self) -> list[Subtitle] | None:
        on_resolved = self._on_tag_resolved if self.host is not None else None
        return compose_subtitles(
            self.kind,
            self.settings,
            self.config.sort_option,
            self.resolver,
            on_resolved,
        )

    def _on_tag_resolved(self, tag: TagDescriptor) -> None:
        # 绑定方法彼此相等，重复渲染只登记一次
        if self.host is not None:
            self.host.refresh()
