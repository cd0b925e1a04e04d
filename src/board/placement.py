"""
The Placement Engine owns the position of every card on the board, and implements all rules that change it.

Invariants (hold after every public method returns):
* every card has exactly one Position
* within a zone, no two cards share a cell
* every Position lies within its zone's current dimensions
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.board.cell import Cell, Position
from src.board.zones import (
    Zone,
    ZoneDimensions,
    capacity,
    drop_dimensions,
    is_at_capacity,
    zone_dimensions,
)
from src.core.exceptions import (
    ConfigError,
    PlacementError,
    UnknownCardError,
    UnknownZoneError,
)
from src.core.models import BoardModel
from src.core.shared_types import DropStatus

logger = logging.getLogger(__name__)

Placements = dict[str, Position]


@dataclass(frozen=True)
class DropOutcome:
    """Result of a drop attempt. A rejection is a normal outcome, the placements are simply left as they were."""

    status: DropStatus
    card_id: str
    previous: Position
    position: Position
    placements: Placements = field(repr=False)

    @property
    def accepted(self) -> bool:
        return self.status in (DropStatus.MOVED, DropStatus.UNCHANGED)


class PlacementEngine:
    def __init__(
        self,
        zones: Iterable[Zone],
        min_columns: int,
        column_bound: Optional[int] = None,
    ) -> None:
        self.zones: dict[str, Zone] = {}
        for zone in zones:
            if zone.zone_id in self.zones:
                raise ConfigError(f"Zone id {zone.zone_id!r} defined twice.")
            self.zones[zone.zone_id] = zone
        if not self.zones:
            raise ConfigError("The board needs at least one zone.")
        if min_columns < 1:
            raise ConfigError(f"min_columns must be at least 1, got {min_columns}")

        self.min_columns = min_columns
        self.column_bound = self._checked_bound(
            column_bound if column_bound is not None else min_columns
        )
        self.placements: Placements = {}

    # --- OPERATIONS ---
    def initialize(
        self, card_ids: Iterable[str], zone_id: str, max_columns: int
    ) -> Placements:
        """
        Put all cards in a single zone, filling it row by row from (0, 0), in the order given.
        ----

        * Any previous placements are discarded.
        * max_columns becomes the column bound of the engine, and is the width used for packing an auto zone.
        * A fixed zone is packed using its own column count, and cannot take more cards than its capacity.
        """
        zone = self._zone(zone_id)
        cards = list(card_ids)
        if len(set(cards)) != len(cards):
            duplicates = sorted({card for card in cards if cards.count(card) > 1})
            raise PlacementError(f"Card names must be unique. Duplicates: {duplicates}")

        self.column_bound = self._checked_bound(max_columns)

        if zone.is_auto:
            columns = self.column_bound
        else:
            limit = capacity(zone)
            if limit is not None and len(cards) > limit:
                raise PlacementError(
                    f"Zone {zone_id!r} holds at most {zone.max_cards} cards, got {len(cards)}."
                )
            columns = zone.columns

        self.placements = {
            card: Position.in_zone(zone_id, Cell.from_index(index, columns))
            for index, card in enumerate(cards)
        }
        logger.info(
            "Placed %d cards in zone %r (%d columns)", len(cards), zone_id, columns
        )
        return self.snapshot()

    def drop(self, card_id: str, target_zone_id: str, cell: Cell) -> DropOutcome:
        """
        Attempt to move a card to a cell of a zone.
        ----

        1. clamp the cell into the zone's droppable range (a drop is never refused for being out of bounds)
        2. own cell? --> nothing changes
        3. occupied by another card? --> rejected (no swap)
        4. joining a fixed zone that is full? --> rejected
        5. move the card
        6. target zone is auto --> reflow it
        7. the card left another auto zone --> reflow that one too, it just shrank

        Computed on a copy of the placements, only committed when accepted.
        """
        zone = self._zone(target_zone_id)
        current = self.position_of(card_id)
        joining = current.zone_id != target_zone_id
        member_count = len(self.members(target_zone_id))

        bounds = drop_dimensions(
            zone, member_count, self.column_bound, self.min_columns, joining
        )
        target = Position.in_zone(target_zone_id, cell.clamp(bounds.columns, bounds.rows))

        if target == current:
            return self._outcome(DropStatus.UNCHANGED, card_id, current)

        occupant = self.occupant(target_zone_id, target.cell)
        if occupant is not None:
            logger.debug(
                "Drop of %r rejected: %s is occupied by %r", card_id, target, occupant
            )
            return self._outcome(DropStatus.REJECTED_OCCUPIED, card_id, current)

        if joining and is_at_capacity(zone, member_count):
            logger.debug(
                "Drop of %r rejected: zone %r is at capacity (%s cards)",
                card_id,
                target_zone_id,
                zone.max_cards,
            )
            return self._outcome(DropStatus.REJECTED_CAPACITY, card_id, current)

        updated = dict(self.placements)
        updated[card_id] = target
        if zone.is_auto:
            self._reflow(updated, target_zone_id)
        if joining and self._zone(current.zone_id).is_auto:
            self._reflow(updated, current.zone_id)

        # commit
        self.placements = updated
        logger.debug("Moved %r from %s to %s", card_id, current, updated[card_id])
        return self._outcome(DropStatus.MOVED, card_id, current)

    def fit_to_bounds(self, column_bound: int) -> list[str]:
        """
        Apply a new column bound (the viewport got resized).
        ----

        Cards are left where they are, unless their cell is outside the zone's new dimensions.
        Only auto zones change size with the bound; such a zone is reflowed (keeping the current order of its cards).

        Returns the ids of the zones that got reflowed.
        """
        self.column_bound = self._checked_bound(column_bound)
        updated = dict(self.placements)
        reflowed: list[str] = []
        for zone_id, zone in self.zones.items():
            if not zone.is_auto:
                continue
            dims = self.dimensions(zone_id)
            if all(
                position.cell.is_within(dims.columns, dims.rows)
                for position in self._zone_positions(updated, zone_id).values()
            ):
                continue
            self._reflow(updated, zone_id)
            reflowed.append(zone_id)
        self.placements = updated
        if reflowed:
            logger.debug("Column bound %d: reflowed zones %s", column_bound, reflowed)
        return reflowed

    # --- READ ACCESS ---
    def position_of(self, card_id: str) -> Position:
        try:
            return self.placements[card_id]
        except KeyError:
            raise UnknownCardError(f"Card {card_id!r} is not on the board.") from None

    def occupant(self, zone_id: str, cell: Cell) -> Optional[str]:
        """Name of the card on that cell (None if empty)"""
        self._zone(zone_id)
        wanted = Position.in_zone(zone_id, cell)
        return next(
            (card for card, position in self.placements.items() if position == wanted),
            None,
        )

    def members(self, zone_id: str) -> list[str]:
        """Cards in the zone, in row-major order of their cells"""
        self._zone(zone_id)
        return self._ordered_members(self.placements, zone_id)

    def dimensions(self, zone_id: str) -> ZoneDimensions:
        """Current (columns, rows) of the zone"""
        zone = self._zone(zone_id)
        return zone_dimensions(
            zone, len(self.members(zone_id)), self.column_bound, self.min_columns
        )

    def drop_range(self, zone_id: str) -> ZoneDimensions:
        """Cells a card coming from another zone may be dropped on"""
        zone = self._zone(zone_id)
        return drop_dimensions(
            zone,
            len(self.members(zone_id)),
            self.column_bound,
            self.min_columns,
            joining=True,
        )

    def positions_by_zone(self) -> dict[str, list[tuple[str, Position]]]:
        """Projection for rendering: every zone (in definition order), with its cards in row-major order."""
        return {
            zone_id: [
                (card, self.placements[card])
                for card in self._ordered_members(self.placements, zone_id)
            ]
            for zone_id in self.zones
        }

    def snapshot(self) -> Placements:
        """Copy of the placements. Position is immutable, so a shallow copy is enough."""
        return dict(self.placements)

    @property
    def card_ids(self) -> list[str]:
        return list(self.placements.keys())

    def to_model(self) -> BoardModel:
        """Encode into the format used across the Service boundary"""
        return BoardModel(
            column_bound=self.column_bound,
            zone_dimensions={
                zone_id: self._dimension_pair(zone_id) for zone_id in self.zones
            },
            drop_dimensions={
                zone_id: self._dimension_pair(zone_id, for_drop=True)
                for zone_id in self.zones
            },
            placements={
                card: (position.zone_id, position.column, position.row)
                for card, position in self.placements.items()
            },
        )

    # -- PRIVATE HELPERS ---
    def _zone(self, zone_id: str) -> Zone:
        try:
            return self.zones[zone_id]
        except KeyError:
            raise UnknownZoneError(
                f"Unknown zone {zone_id!r}. Pick one from {','.join(self.zones)}"
            ) from None

    def _dimension_pair(self, zone_id: str, for_drop: bool = False) -> tuple[int, int]:
        dims = self.drop_range(zone_id) if for_drop else self.dimensions(zone_id)
        return (dims.columns, dims.rows)

    def _checked_bound(self, column_bound: int) -> int:
        if column_bound < self.min_columns:
            raise PlacementError(
                f"Column bound {column_bound} is below min_columns={self.min_columns}"
            )
        return column_bound

    def _outcome(
        self, status: DropStatus, card_id: str, previous: Position
    ) -> DropOutcome:
        return DropOutcome(
            status=status,
            card_id=card_id,
            previous=previous,
            position=self.placements[card_id],
            placements=self.snapshot(),
        )

    @staticmethod
    def _zone_positions(placements: Placements, zone_id: str) -> Placements:
        return {
            card: position
            for card, position in placements.items()
            if position.zone_id == zone_id
        }

    def _ordered_members(self, placements: Placements, zone_id: str) -> list[str]:
        zone_positions = self._zone_positions(placements, zone_id)
        return sorted(zone_positions, key=lambda card: zone_positions[card].cell)

    def _reflow(self, placements: Placements, zone_id: str) -> None:
        """
        Re-assign the cells of all cards in the zone, row by row without gaps.
        The cards keep their relative (row-major) order. Works on the given placements, in place.
        """
        members = self._ordered_members(placements, zone_id)
        dims = zone_dimensions(
            self.zones[zone_id], len(members), self.column_bound, self.min_columns
        )
        for index, card in enumerate(members):
            placements[card] = Position.in_zone(
                zone_id, Cell.from_index(index, dims.columns)
            )
