"""
Zone definitions and the Zone Layout Policy.

A zone's dimensions (columns x rows) are never stored. They are computed from the zone definition, the number of cards
currently in the zone and the column bound of the viewport.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Self

from src.core.exceptions import ConfigError
from src.core.shared_types import ZoneKind


class ZoneDimensions(NamedTuple):
    columns: int
    rows: int

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class Zone:
    """
    Static definition of a zone.
    ----

    * auto: sizes itself to its members. columns / rows / max_cards are not used.
    * fixed: constant columns x rows. max_cards defaults to every cell of the grid.
    """

    zone_id: str
    title: str
    kind: ZoneKind
    columns: int = 0
    rows: int = 0
    max_cards: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.zone_id:
            raise ConfigError("Zone id cannot be empty.")
        if self.kind != ZoneKind.FIXED:
            return
        if self.columns < 1 or self.rows < 1:
            raise ConfigError(
                f"Fixed zone {self.zone_id!r} needs at least 1 column and 1 row, got {self.columns}x{self.rows}"
            )
        if self.max_cards is None:
            # frozen dataclass: go around __setattr__ to fill in the default
            object.__setattr__(self, "max_cards", self.columns * self.rows)
        elif not (0 <= self.max_cards <= self.columns * self.rows):
            raise ConfigError(
                f"Fixed zone {self.zone_id!r}: max_cards={self.max_cards} does not fit in {self.columns}x{self.rows} cells"
            )

    @classmethod
    def auto(cls, zone_id: str, title: str) -> Self:
        return cls(zone_id, title, ZoneKind.AUTO)

    @classmethod
    def fixed(
        cls, zone_id: str, title: str, columns: int, rows: int, max_cards: Optional[int] = None
    ) -> Self:
        return cls(zone_id, title, ZoneKind.FIXED, columns, rows, max_cards)

    @property
    def is_auto(self) -> bool:
        return self.kind == ZoneKind.AUTO


# A draw pile that grows with its cards and one player's hand of up to 10 cards
DEFAULT_ZONES: tuple[Zone, ...] = (
    Zone.auto("draw", "Draw pile"),
    Zone.fixed("player1", "Player hand", columns=5, rows=2, max_cards=10),
)

# Free-form board: a single auto zone without a capacity cap
SINGLE_ZONE: tuple[Zone, ...] = (Zone.auto("board", "Board"),)


def zone_dimensions(
    zone: Zone, member_count: int, column_bound: int, min_columns: int
) -> ZoneDimensions:
    """
    Current (columns, rows) of a zone.
    ----

    fixed: the configured grid, regardless of how many cards are in it.
    auto: grow wider (up to the column bound) before growing taller. An empty auto zone is min_columns x 1,
    so it still shows a row of cells to drop on.
    """
    if not zone.is_auto:
        return ZoneDimensions(zone.columns, zone.rows)

    if member_count == 0:
        return ZoneDimensions(min_columns, 1)

    columns = min(max(member_count, min_columns), column_bound)
    rows = math.ceil(member_count / columns)
    return ZoneDimensions(columns, rows)


def drop_dimensions(
    zone: Zone,
    member_count: int,
    column_bound: int,
    min_columns: int,
    joining: bool,
) -> ZoneDimensions:
    """
    Cell range a drop into this zone may target.

    A card joining an auto zone gets the dimensions the zone will have once it is a member.
    So a fully packed auto zone (ex. 6 cards in 6x1) still offers a free cell on the next row.
    """
    if zone.is_auto and joining:
        return zone_dimensions(zone, member_count + 1, column_bound, min_columns)
    return zone_dimensions(zone, member_count, column_bound, min_columns)


def capacity(zone: Zone) -> Optional[int]:
    """Max number of cards in the zone. None: unbounded."""
    return None if zone.is_auto else zone.max_cards


def is_at_capacity(zone: Zone, member_count: int) -> bool:
    limit = capacity(zone)
    return limit is not None and member_count >= limit
