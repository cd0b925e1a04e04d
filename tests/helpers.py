"""Data and assertions shared by the test modules"""

from src.board.cell import Position
from src.board.placement import PlacementEngine
from src.board.zones import Zone

POSES_CSV = """name,categories,inversion,standing,kneeling,supine,prone
Mountain Pose,standing,,0,2,3,
Downward Dog,inversion|standing,0,1,1,,2
Child's Pose,kneeling,,2,0,,1
Cobra Pose,prone,,,1,,0
Bridge Pose,supine,,,,0,
"""

ZONES = (
    Zone.auto("draw", "Draw pile"),
    Zone.fixed("player1", "Player hand", columns=5, rows=2, max_cards=10),
)


def card_names(count: int, prefix: str = "pose") -> list[str]:
    return [f"{prefix}-{index:02d}" for index in range(count)]


def assert_invariants(engine: PlacementEngine) -> None:
    """Every card has one position, inside its zone's dimensions, and no two cards of a zone share a cell."""
    seen: set[Position] = set()
    for card, position in engine.placements.items():
        assert position not in seen, f"{card} shares {position} with another card"
        seen.add(position)
        dims = engine.dimensions(position.zone_id)
        assert position.cell.is_within(dims.columns, dims.rows), (
            f"{card} at {position} is outside {dims}"
        )
