"""Classifier domain entities."""

from enum import Enum


class ExclusionReason(str, Enum):
    """Why an item was excluded, in check order."""

    NO_STREAM = "no_stream"
    RECORDING = "recording"
    RERUN = "rerun"
    BROADCAST_TYPE = "broadcast_type"
    BLOCKED_CATEGORY_NAME = "blocked_category_name"
    CATEGORY_NOT_ALLOWED = "category_not_allowed"
    BLOCKED_CATEGORY = "blocked_category"
    MISSING_REQUIRED_TAG = "missing_required_tag"
    BLOCKED_TAG = "blocked_tag"
