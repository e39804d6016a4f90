"""Sort and period catalog domain models."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class VideoType(str, Enum):
    """Broadcast types a video can declare."""

    ARCHIVE = "ARCHIVE"
    HIGHLIGHT = "HIGHLIGHT"
    UPLOAD = "UPLOAD"
    PAST_PREMIERE = "PAST_PREMIERE"
    PREMIERE_UPLOAD = "PREMIERE_UPLOAD"

    @classmethod
    def all_types(cls) -> frozenset[str]:
        return frozenset(t.value for t in cls)


@dataclass(frozen=True)
class SortDescriptor:
    """One entry of a kind's sort table.

    sort_key 为空表示顺序由上游 feed 决定，客户端不做排序。
    """

    key: str
    title: str
    i18n: str
    icon: str
    subtitle: str | None = None
    sub_i18n: str | None = None
    sort_key: Callable[[Any], Any] | None = None
    reverse: bool = False

    @property
    def is_client_sortable(self) -> bool:
        return self.sort_key is not None


@dataclass(frozen=True)
class PeriodDescriptor:
    """One entry of the clip period table."""

    key: str
    title: str
    i18n: str
    icon: str
    subtitle: str | None = None
    sub_i18n: str | None = None
