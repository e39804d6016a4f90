"""Base value object class for immutable domain records."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable record compared by value.

    Snapshots handed to filter/sort calls must never change, so every
    value object is frozen. Unknown keys from upstream payloads are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
