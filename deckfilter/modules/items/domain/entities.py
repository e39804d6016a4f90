"""Item domain entities.

上游 feed 返回的条目均为只读记录，这里只声明过滤与排序需要读取的字段。
字段名沿用上游 camelCase 作为别名，未知字段直接忽略。
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from deckfilter.core.domain.value_object import ValueObject

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an upstream timestamp, returning None when it is unusable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


Timestamp = Annotated[datetime | None, BeforeValidator(_parse_timestamp)]


class ContentKind(str, Enum):
    """Content kind shown by a column."""

    LIVE = "live"
    CLIP = "clip"
    VIDEO = "video"


class FeedRecord(ValueObject):
    """Base class for upstream feed records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )


class Game(FeedRecord):
    """Category (game) attached to an item."""

    id: str | None = Field(default=None, description="分类ID")
    name: str | None = Field(default=None, description="分类显示名")


class ItemTag(FeedRecord):
    """Tag payload carried on a stream or video."""

    id: str = Field(..., description="标签ID")
    localized_name: str | None = Field(default=None, description="本地化名称")
    tag_name: str | None = Field(default=None, description="标签原始名")
    is_language_tag: bool = Field(default=False, description="是否为语言标签")
    language: str | None = Field(default=None, description="语言代码")


class LiveStream(FeedRecord):
    """The stream sub-record of a live item."""

    id: str | None = None
    type: str | None = Field(default=None, description="live / rerun")
    viewers_count: int | None = Field(default=None, description="观看人数")
    created_at: Timestamp = Field(default=None, description="开播时间")
    tags: list[ItemTag] | None = Field(default=None, description="标签")


class BroadcastSettings(FeedRecord):
    """Broadcast settings of a live channel."""

    language: str | None = None
    game: Game | None = None


class LiveItem(FeedRecord):
    """Live stream item - 直播条目。"""

    id: str = Field(..., description="频道ID")
    stream: LiveStream | None = None
    broadcast_settings: BroadcastSettings | None = None

    @property
    def game(self) -> Game | None:
        return self.broadcast_settings.game if self.broadcast_settings else None

    @property
    def language(self) -> str | None:
        return self.broadcast_settings.language if self.broadcast_settings else None

    @property
    def tags(self) -> list[ItemTag] | None:
        return self.stream.tags if self.stream else None


class ClipItem(FeedRecord):
    """Clip item - 剪辑条目。"""

    id: str = Field(..., description="剪辑ID")
    game: Game | None = None
    view_count: int | None = Field(default=None, description="播放次数")
    created_at: Timestamp = Field(default=None, description="创建时间")


class VideoItem(FeedRecord):
    """Video item - 录像/上传视频条目。"""

    id: str = Field(..., description="视频ID")
    status: str | None = Field(default=None, description="RECORDING / RECORDED")
    broadcast_type: str | None = Field(default=None, description="ARCHIVE / UPLOAD ...")
    language: str | None = None
    content_tags: list[ItemTag] | None = None
    game: Game | None = None
    view_count: int | None = None
    published_at: Timestamp = Field(default=None, description="发布时间")

    @property
    def tags(self) -> list[ItemTag] | None:
        return self.content_tags


FeedItem = LiveItem | ClipItem | VideoItem

ITEM_MODELS: dict[ContentKind, type[FeedRecord]] = {
    ContentKind.LIVE: LiveItem,
    ContentKind.CLIP: ClipItem,
    ContentKind.VIDEO: VideoItem,
}
