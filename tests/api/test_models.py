import pytest
from pydantic import ValidationError

from src.api.models import (
    BoardLayout,
    DragOverRequest,
    DragStartRequest,
    DropRequest,
    ResizeRequest,
    ViewState,
    ZoneLayout,
)
from src.core.exceptions import InvalidRequestError, UnknownCardError, UnknownZoneError
from src.core.shared_types import ZoneKind


# -- Validation - DragStartRequest / DragOverRequest --
def test_card_name_is_trimmed() -> None:
    """Surrounding whitespace is not part of a pose name."""
    request = DragStartRequest(card_id="  Mountain Pose ")
    assert request.card_id == "Mountain Pose"


@pytest.mark.parametrize("blank", ["", "   ", "\t"])
def test_blank_card_name(blank: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = DragStartRequest(card_id=blank)


def test_drag_over_nothing() -> None:
    """zone_id is optional: the pointer left every zone."""
    assert DragOverRequest().zone_id is None
    assert DragOverRequest(zone_id=None).zone_id is None


def test_drag_over_blank_zone() -> None:
    with pytest.raises(InvalidRequestError):
        _ = DragOverRequest(zone_id=" ")


# -- Validation - DropRequest --
def test_valid_drop_request() -> None:
    request = DropRequest(zone_id="draw", x=210.5, y=0)
    assert request.zone_id == "draw"
    assert (request.x, request.y) == (210.5, 0)
    assert request.card_id is None


@pytest.mark.parametrize(
    "zone_id, card_id",
    [
        ("", "Cobra Pose"),  # blank zone
        ("player1", "  "),  # blank card name (None would be fine)
    ],
)
def test_invalid_drop_request(zone_id: str, card_id: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = DropRequest(zone_id=zone_id, card_id=card_id, x=0, y=0)


def test_drop_request_needs_coordinates() -> None:
    """Missing / non-numeric coordinates are caught by pydantic itself."""
    with pytest.raises(ValidationError):
        _ = DropRequest(zone_id="draw", x="left", y=0)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "x, y",
    [
        (float("nan"), 0),
        (0, float("nan")),
        (float("inf"), 0),
        (0, float("-inf")),
    ],
)
def test_drop_coordinates_must_be_finite(x: float, y: float) -> None:
    """NaN / infinite pointer coordinates cannot be turned into a cell."""
    with pytest.raises(InvalidRequestError):
        _ = DropRequest(zone_id="player1", card_id="Cobra Pose", x=x, y=y)


# -- Validation - ResizeRequest --
@pytest.mark.parametrize("width", [0, 320, 1400.5])
def test_valid_viewport_width(width: float) -> None:
    assert ResizeRequest(viewport_width=width).viewport_width == width


def test_negative_viewport_width() -> None:
    with pytest.raises(InvalidRequestError):
        _ = ResizeRequest(viewport_width=-1)


@pytest.mark.parametrize("width", [float("nan"), float("inf")])
def test_viewport_width_must_be_finite(width: float) -> None:
    """NaN slips past a "< 0" check, so it is refused on its own."""
    with pytest.raises(InvalidRequestError):
        _ = ResizeRequest(viewport_width=width)


# -- Responses --
def test_board_layout_lookups() -> None:
    zone = ZoneLayout(
        zone_id="player1",
        title="Player hand",
        kind=ZoneKind.FIXED,
        columns=5,
        rows=2,
        drop_columns=5,
        drop_rows=2,
        x=100,
        y=60,
        width=980,
        height=620,
        card_count=0,
        capacity=10,
    )
    layout = BoardLayout(column_bound=6, width=1380, height=700, zones=[zone], cards=[], view=ViewState())

    assert layout.zone("player1") == zone
    with pytest.raises(UnknownZoneError):
        layout.zone("draw")
    with pytest.raises(UnknownCardError):
        layout.card("Mountain Pose")


def test_view_state_starts_idle() -> None:
    view = ViewState()
    assert (view.dragging, view.source_zone, view.hover_zone) == (None, None, None)
