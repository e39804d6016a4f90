"""Column host ports."""

from collections.abc import Mapping
from typing import Any, Protocol


class ColumnHost(Protocol):
    """Port for the UI host that owns a column."""

    def save_cache(self, record: Mapping[str, Any]) -> None:
        """Persist the column's cache bag."""
        ...

    def refresh(self) -> None:
        """Ask the host to re-read derived column state."""
        ...

    def on_invalidate(self) -> None:
        """Ask the host to refetch and recompute the column's data."""
        ...
