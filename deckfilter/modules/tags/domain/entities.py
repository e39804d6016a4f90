"""Tag domain entities."""

from pydantic import Field, field_validator

from deckfilter.core.domain.value_object import ValueObject
from deckfilter.modules.items.domain.entities import ItemTag


class TagDescriptor(ValueObject):
    """Resolved tag - 已解析的标签描述。"""

    id: str = Field(..., description="标签ID")
    label: str = Field(..., description="显示名称")
    is_language: bool = Field(default=False, description="是否代表一种语言")
    language_code: str | None = Field(default=None, description="语言代码（小写）")

    @field_validator("language_code")
    @classmethod
    def _lower_language(cls, v: str | None) -> str | None:
        return v.lower() if v else None

    @classmethod
    def from_item_tag(cls, tag: ItemTag) -> "TagDescriptor":
        """Build a descriptor from a tag payload carried on an item."""
        return cls(
            id=tag.id,
            label=tag.localized_name or tag.tag_name or tag.id,
            is_language=tag.is_language_tag,
            language_code=tag.language,
        )
