"""
A cell of a zone's grid, and the Position of a card on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Cell:
    """(column, row) inside a zone. Ordering is row-major: compare row first, then column."""

    row: int
    column: int

    @classmethod
    def at(cls, column: int, row: int) -> Cell:
        """Convenience constructor with the (column, row) argument order used everywhere else."""
        return cls(row=row, column=column)

    @classmethod
    def from_index(cls, index: int, columns: int) -> Cell:
        """The index-th cell when filling a grid of the given width row by row."""
        row, column = divmod(index, columns)
        return cls(row=row, column=column)

    def to_index(self, columns: int) -> int:
        return self.row * columns + self.column

    def clamp(self, columns: int, rows: int) -> Cell:
        """Snap to the nearest cell inside a grid of columns x rows (grid must have at least one cell)."""
        return Cell(
            row=min(max(self.row, 0), rows - 1),
            column=min(max(self.column, 0), columns - 1),
        )

    def is_within(self, columns: int, rows: int) -> bool:
        return (0 <= self.column < columns) and (0 <= self.row < rows)

    def as_tuple(self) -> tuple[int, int]:
        return (self.column, self.row)


@dataclass(frozen=True)
class Position:
    zone_id: str
    column: int
    row: int

    @classmethod
    def in_zone(cls, zone_id: str, cell: Cell) -> Position:
        return cls(zone_id, cell.column, cell.row)

    @property
    def cell(self) -> Cell:
        return Cell.at(self.column, self.row)
