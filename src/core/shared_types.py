"""
Type definitions used across layers
"""

from enum import StrEnum


class ZoneKind(StrEnum):
    AUTO = "auto"
    FIXED = "fixed"


class PosePosition(StrEnum):
    """The five position tags a pose can carry. Definition order is the order they are drawn on a card."""

    INVERSION = "inversion"
    STANDING = "standing"
    KNEELING = "kneeling"
    SUPINE = "supine"
    PRONE = "prone"


class DropStatus(StrEnum):
    MOVED = "moved"
    UNCHANGED = "unchanged"
    REJECTED_OCCUPIED = "rejected: cell occupied"
    REJECTED_CAPACITY = "rejected: zone at capacity"


class LoadStatus(StrEnum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
