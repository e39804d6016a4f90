"""Column domain entities."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

from pydantic import ConfigDict, Field

from deckfilter.core.domain.value_object import ValueObject
from deckfilter.modules.catalog.domain.catalog import get_period, get_sort_option
from deckfilter.modules.catalog.domain.entities import PeriodDescriptor, SortDescriptor
from deckfilter.modules.items.domain.entities import ContentKind


class SettingsRecord(ValueObject):
    """Base class for user-edited settings records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @classmethod
    def coerce(cls, value: Self | Mapping[str, Any] | None) -> Self | None:
        """Accept a model, a plain mapping or None."""
        if value is None or isinstance(value, cls):
            return value
        return cls.model_validate(value)


class ColumnSettings(SettingsRecord):
    """Column-local settings - 单列设置。"""

    tags: list[str] | None = Field(default=None, description="必需标签")
    blocked_tags: list[str] | None = Field(default=None, description="屏蔽标签")
    filter_games: list[str] | None = Field(default=None, description="允许的分类ID")
    filter_blocked_games: list[str] | None = Field(
        default=None, description="屏蔽的分类ID"
    )
    lang: list[str] | None = Field(default=None, description="语言偏好")
    sort: str | None = Field(default=None, description="排序键")
    period: str | None = Field(default=None, description="剪辑时间范围")
    types: list[str] | None = Field(default=None, description="隐藏的视频类型")
    no_recordings: bool = Field(default=False, description="隐藏正在录制的视频")


class GlobalSettings(SettingsRecord):
    """Settings shared by every column - 全局设置。"""

    tags: list[str] | None = Field(default=None, description="必需标签")
    blocked_tags: list[str] | None = Field(default=None, description="屏蔽标签")
    lang: list[str] | None = Field(default=None, description="语言偏好")
    blocked_games: list[str] | None = Field(
        default=None, description="屏蔽的分类（按显示名）"
    )
    hide_reruns: bool = Field(default=False, description="隐藏重播")


class ColumnConfig(ValueObject):
    """Normalized configuration snapshot for one column.

    所有集合要么为 None（不限制），要么非空。唯一例外是 allowed_broadcast_types：
    用户隐藏了全部视频类型时为空集，此时 can_run 为 False。
    """

    kind: ContentKind
    required_tag_ids: frozenset[str] | None = None
    blocked_tag_ids: frozenset[str] | None = None
    allowed_category_ids: frozenset[str] | None = None
    blocked_category_ids: frozenset[str] | None = None
    languages: frozenset[str] | None = None
    blocked_category_names: frozenset[str] | None = None
    allowed_broadcast_types: frozenset[str] | None = None
    hide_reruns: bool = False
    hide_recordings: bool = False
    selected_sort_key: str | None = None
    selected_period_key: str | None = None

    @property
    def uses_tag_filter(self) -> bool:
        return self.required_tag_ids is not None or self.blocked_tag_ids is not None

    @property
    def can_run(self) -> bool:
        return self.allowed_broadcast_types is None or bool(
            self.allowed_broadcast_types
        )

    @property
    def sort_option(self) -> SortDescriptor | None:
        return get_sort_option(self.kind, self.selected_sort_key)

    @property
    def period(self) -> PeriodDescriptor | None:
        return get_period(self.kind, self.selected_period_key)


@dataclass(frozen=True)
class ConfigUpdate:
    """Result of applying a settings change."""

    config: ColumnConfig
    invalidated: bool
