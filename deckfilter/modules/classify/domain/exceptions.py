"""Classifier domain exceptions."""

from deckfilter.core.domain.exceptions import NotSupportedError
from deckfilter.modules.items.domain.entities import ContentKind


class ClientSortNotSupportedError(NotSupportedError):
    """Raised when client sorting is requested for a server-sorted kind."""

    error_code = "CLIENT_SORT_NOT_SUPPORTED"

    def __init__(self, kind: ContentKind):
        self.kind = kind
        super().__init__(f"Client sort is not implemented for {kind.value} columns")
