"""
Custom exceptions shared by all layers.

Everything derives from BoardError, so a caller can catch the whole family at once.
NOTE: A rejected drop (occupied cell / zone at capacity) is NOT an exception. That is a normal outcome of the Placement Engine.
"""


class BoardError(Exception):
    """Top-level exception of the application."""


class ConfigError(BoardError):
    """Settings / grid configuration that cannot be used."""


class NotInitializedError(BoardError):
    """Something was queried before its lifecycle start (ex. the pose catalog before it got loaded)."""


class CatalogLoadError(BoardError):
    """The pose dataset could not be read or parsed."""


class UnknownCardError(BoardError):
    """No card with this name is placed on the board."""


class UnknownZoneError(BoardError):
    """No zone with this id is defined for the session."""


class PlacementError(BoardError):
    """Cards cannot be placed as requested (ex. more cards than a fixed zone holds)."""


class InvalidRequestError(BoardError):
    """Request coming in from the input surface failed validation."""
