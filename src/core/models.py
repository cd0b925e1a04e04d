"""
Boundary layer data model(s).

The Placement Engine exports its state as a BoardModel, the Service converts it into a response for the presentation layer.
(Decouples the engine's own Position / Zone objects from what gets sent across the boundary)
"""

from dataclasses import dataclass

# Type aliases to make BoardModel easier to read
CardName = str
ZoneId = str
Cell = tuple[int, int]


@dataclass
class BoardModel:
    """Transport-safe snapshot of the placement state."""

    column_bound: int
    zone_dimensions: dict[ZoneId, Cell]
    drop_dimensions: dict[ZoneId, Cell]
    placements: dict[CardName, tuple[ZoneId, int, int]]
