"""Requests and Response models"""

import math
from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import (
    InvalidRequestError,
    UnknownCardError,
    UnknownZoneError,
)
from src.core.shared_types import DropStatus, ZoneKind

CardName = str
ZoneId = str


def _require_name(value: str, what: str) -> str:
    value = value.strip()
    if not value:
        raise InvalidRequestError(f"{what} cannot be blank.")
    return value


def _require_finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise InvalidRequestError(f"{what} must be a finite number, got {value}")
    return value


# --- REQUEST MODELS ---
class DragStartRequest(BaseModel):
    """Pointer went down on a card"""

    card_id: CardName

    @field_validator("card_id")
    @classmethod
    def validate_card_id(cls, value: str) -> str:
        return _require_name(value, "card_id")


class DragOverRequest(BaseModel):
    """Pointer moved over a zone while dragging. zone_id=None: pointer left all zones."""

    zone_id: Optional[ZoneId] = None

    @field_validator("zone_id")
    @classmethod
    def validate_zone_id(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _require_name(value, "zone_id")


class DropRequest(BaseModel):
    """
    Pointer released above a zone.
    ----

    x / y are relative to the origin of the zone's cell area.
    card_id may be left out: the card of the current drag is used then.
    """

    zone_id: ZoneId
    x: float
    y: float
    card_id: Optional[CardName] = None

    @field_validator(*["zone_id", "card_id"])
    @classmethod
    def validate_names(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _require_name(value, "zone_id / card_id")

    @field_validator(*["x", "y"])
    @classmethod
    def validate_coordinates(cls, value: float) -> float:
        return _require_finite(value, "Pointer coordinate")


class ResizeRequest(BaseModel):
    viewport_width: float

    @field_validator("viewport_width")
    @classmethod
    def validate_width(cls, value: float) -> float:
        _require_finite(value, "Viewport width")
        if value < 0:
            raise InvalidRequestError(f"Viewport width cannot be negative: {value}")
        return value


# --- RESPONSE MODELS ---
class ZoneLayout(BaseModel):
    """
    columns x rows: current dimensions of the zone.
    drop_columns x drop_rows: cells shown as drop targets (an auto zone keeps one spare cell for a card joining it).
    The rectangle x / y / width / height covers the drop cells.
    """

    zone_id: ZoneId
    title: str
    kind: ZoneKind
    columns: int
    rows: int
    drop_columns: int
    drop_rows: int
    x: int
    y: int
    width: int
    height: int
    card_count: int
    capacity: Optional[int]


class CardLayout(BaseModel):
    """Pixel coordinates are absolute (relative to the board's top-left corner)."""

    card_id: CardName
    zone_id: ZoneId
    column: int
    row: int
    x: int
    y: int


class ViewState(BaseModel):
    """Ephemeral drag & hover state. Never part of the placements."""

    dragging: Optional[CardName] = None
    source_zone: Optional[ZoneId] = None
    hover_zone: Optional[ZoneId] = None


class BoardLayout(BaseModel):
    column_bound: int
    width: int
    height: int
    zones: list[ZoneLayout]
    cards: list[CardLayout]
    view: ViewState

    def zone(self, zone_id: ZoneId) -> ZoneLayout:
        for zone in self.zones:
            if zone.zone_id == zone_id:
                return zone
        raise UnknownZoneError(f"Layout has no zone {zone_id!r}")

    def card(self, card_id: CardName) -> CardLayout:
        for card in self.cards:
            if card.card_id == card_id:
                return card
        raise UnknownCardError(f"Layout has no card {card_id!r}")


class DropResponse(BaseModel):
    status: DropStatus
    accepted: bool
    card_id: CardName
    layout: BoardLayout
