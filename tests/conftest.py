"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator, Optional

import pytest

from src.board.geometry import GridConfig
from src.board.placement import PlacementEngine
from src.board.zones import Zone
from src.catalog.poses import PoseCatalog
from tests.helpers import POSES_CSV, ZONES, card_names


@pytest.fixture
def grid_config() -> GridConfig:
    """Config used in the examples: 180x300 cells, 20px spacing, 3..6 columns, 100px padding"""
    return GridConfig(
        cell_width=180,
        cell_height=300,
        spacing=20,
        min_columns=3,
        max_columns=6,
        padding=100,
    )


@pytest.fixture
def make_engine() -> Callable[..., PlacementEngine]:
    """Call the inner function with the number of cards to start with (in the draw pile, unless zone_id says otherwise)."""

    def _create_engine(
        count: int,
        column_bound: int = 6,
        zones: tuple[Zone, ...] = ZONES,
        zone_id: Optional[str] = None,
    ) -> PlacementEngine:
        engine = PlacementEngine(zones, min_columns=3, column_bound=column_bound)
        engine.initialize(card_names(count), zone_id or zones[0].zone_id, column_bound)
        return engine

    return _create_engine


@pytest.fixture
def catalog() -> Generator[PoseCatalog, None, None]:
    """Loaded catalog of the five poses in POSES_CSV. Closed again at teardown."""
    pose_catalog = PoseCatalog().load_text(POSES_CSV)
    yield pose_catalog
    pose_catalog.close()
