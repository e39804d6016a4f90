"""Subtitle domain entities."""

from pydantic import Field

from deckfilter.core.domain.value_object import ValueObject


class Subtitle(ValueObject):
    """One summary label shown under a column title.

    text 可能是 ICU 复数模板，由宿主结合 i18n / count / joined 格式化。
    """

    icon: str = Field(..., description="图标类名")
    text: str = Field(..., description="默认文本或 ICU 模板")
    i18n: str | None = Field(default=None, description="文本 i18n 键")
    count: int | None = Field(default=None, description="复数计数")
    joined: str | None = Field(default=None, description="计数显示形式，如 2-1")
    tip: str | None = Field(default=None, description="提示文本")
    tip_i18n: str | None = Field(default=None, description="提示 i18n 键")
