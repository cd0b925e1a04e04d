"""
Grid Geometry: convert between grid coordinates and pixels.

All functions are pure. The only input besides the coordinates is the (immutable) GridConfig of the session.
"""

from dataclasses import dataclass
from typing import NamedTuple, Self

from src.board.cell import Cell
from src.core.exceptions import ConfigError


class Point(NamedTuple):
    x: int
    y: int


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    def contains(self, px: float, py: float) -> bool:
        return (self.x <= px < self.x + self.width) and (
            self.y <= py < self.y + self.height
        )


@dataclass(frozen=True)
class GridConfig:
    cell_width: int
    cell_height: int
    spacing: int
    min_columns: int
    max_columns: int
    padding: int
    title_height: int = 40

    def __post_init__(self) -> None:
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise ConfigError(
                f"Cell size must be positive, got {self.cell_width}x{self.cell_height}"
            )
        if self.spacing < 0 or self.padding < 0 or self.title_height < 0:
            raise ConfigError("spacing, padding and title_height cannot be negative")
        if not (1 <= self.min_columns <= self.max_columns):
            raise ConfigError(
                f"Need 1 <= min_columns <= max_columns, got {self.min_columns}..{self.max_columns}"
            )

    @classmethod
    def from_dict(cls, values: dict[str, int]) -> Self:
        """Keys match the field names. Unknown keys are an error (most likely a typo)."""
        try:
            return cls(**values)
        except TypeError as exc:
            raise ConfigError(f"Invalid grid config: {exc}") from exc

    @property
    def column_step(self) -> int:
        """Horizontal distance between the origins of two neighboring cells"""
        return self.cell_width + self.spacing

    @property
    def row_step(self) -> int:
        return self.cell_height + self.spacing


DEFAULT_GRID_CONFIG = GridConfig(
    cell_width=180,
    cell_height=300,
    spacing=20,
    min_columns=3,
    max_columns=6,
    padding=100,
)


def cell_origin(config: GridConfig, column: int, row: int) -> Point:
    """Top-left pixel of a cell, relative to the origin of its zone."""
    return Point(column * config.column_step, row * config.row_step)


def pixel_to_cell(config: GridConfig, x: float, y: float) -> Cell:
    """Inverse of cell_origin. Pixels in the spacing after a cell still belong to that cell.

    NOTE: no bounds checks here. Coordinates left of / above the zone give negative cells, clamping is up to the caller.
    """
    return Cell.at(int(x // config.column_step), int(y // config.row_step))


def cell_rect(config: GridConfig, column: int, row: int) -> Rect:
    origin = cell_origin(config, column, row)
    return Rect(origin.x, origin.y, config.cell_width, config.cell_height)


def max_columns_for_width(config: GridConfig, viewport_width: float) -> int:
    """How many columns fit next to each other in the viewport, clamped into [min_columns, max_columns]."""
    usable_width = viewport_width - 2 * config.padding
    fitting = int(usable_width // config.column_step)
    return min(max(fitting, config.min_columns), config.max_columns)


def zone_pixel_size(config: GridConfig, columns: int, rows: int) -> tuple[int, int]:
    """Size of a zone's cell area. The spacing after the last column / row is not included."""
    width = max(columns * config.column_step - config.spacing, 0)
    height = max(rows * config.row_step - config.spacing, 0)
    return width, height


def stack_zones(
    config: GridConfig, dimensions: list[tuple[int, int]]
) -> list[Rect]:
    """
    Place zones below each other (in the given order).
    ----

    * every zone starts `padding` pixels from the left edge of the board
    * a band of `title_height` pixels above each zone holds its title
    * zones are separated by `spacing`

    Returns the rectangle of each zone's cell area (the title band is not part of it).
    """
    rects: list[Rect] = []
    y = config.spacing
    for columns, rows in dimensions:
        width, height = zone_pixel_size(config, columns, rows)
        y += config.title_height
        rects.append(Rect(config.padding, y, width, height))
        y += height + config.spacing
    return rects


def board_bounds(config: GridConfig, zone_rects: list[Rect]) -> tuple[int, int]:
    """Pixel extent (width, height) needed to render all zones. Never narrower than min_columns of cells."""
    min_width, _ = zone_pixel_size(config, config.min_columns, 0)
    widest = max([rect.width for rect in zone_rects] + [min_width])
    bottom = max([rect.y + rect.height for rect in zone_rects], default=0)
    return widest + 2 * config.padding, bottom + config.spacing
