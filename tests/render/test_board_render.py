"""Unit tests for /src/render/board.py"""

import xml.etree.ElementTree as ET

import pytest

from src.api.models import DragOverRequest, DragStartRequest
from src.board.geometry import GridConfig
from src.catalog.poses import PoseCatalog
from src.render.board import CELL_BORDER, HOVER_BORDER, HOVER_FILL, render_board
from src.services.board_service import BoardService
from tests.helpers import ZONES

SVG = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def board(catalog: PoseCatalog, grid_config: GridConfig) -> BoardService:
    """The five catalog poses in the draw pile, 1400px viewport"""
    return BoardService(catalog.names(), 1400, config=grid_config, zones=ZONES)


def render(board: BoardService, catalog: PoseCatalog) -> ET.Element:
    return ET.fromstring(render_board(board.layout(), catalog, board.config))


def zone_group(root: ET.Element, zone_id: str) -> ET.Element:
    group = root.find(f"{SVG}g[@data-zone='{zone_id}']")
    assert group is not None
    return group


def card_group(root: ET.Element, card_id: str) -> ET.Element:
    for group in root.findall(f"{SVG}g[@class='card']"):
        if group.get("data-card") == card_id:
            return group
    raise AssertionError(f"no card {card_id}")


def test_board_size(board: BoardService, catalog: PoseCatalog) -> None:
    layout = board.layout()
    root = render(board, catalog)
    assert root.get("width") == str(layout.width)
    assert root.get("height") == str(layout.height)


def test_zone_drop_cells(board: BoardService, catalog: PoseCatalog) -> None:
    """Draw pile: 5 cards in 5x1, drawn with one spare cell (6x1). Hand: all 10 cells."""
    root = render(board, catalog)
    draw_cells = zone_group(root, "draw").findall(f"{SVG}rect")
    hand_cells = zone_group(root, "player1").findall(f"{SVG}rect")

    assert len(draw_cells) == 6
    assert len(hand_cells) == 10
    assert all(cell.get("stroke-dasharray") for cell in hand_cells)
    assert {cell.get("stroke") for cell in draw_cells} == {CELL_BORDER}


def test_zone_titles(board: BoardService, catalog: PoseCatalog) -> None:
    root = render(board, catalog)
    draw_title = zone_group(root, "draw").find(f"{SVG}text")
    hand_title = zone_group(root, "player1").find(f"{SVG}text")
    assert draw_title is not None and draw_title.text == "Draw pile"
    assert hand_title is not None and hand_title.text == "Player hand (0/10)"


def test_cards_are_placed_by_layout(board: BoardService, catalog: PoseCatalog) -> None:
    layout = board.layout()
    root = render(board, catalog)

    cards = root.findall(f"{SVG}g[@class='card']")
    assert [card.get("data-card") for card in cards] == catalog.names()

    cobra = layout.card("Cobra Pose")
    group = card_group(root, "Cobra Pose")
    assert group.get("transform") == f"translate({cobra.x},{cobra.y})"
    assert group.get("opacity") == "1"
    # the card face is nested inside
    face = group.find(f"{SVG}svg")
    assert face is not None
    face_title = face.find(f"{SVG}text")
    assert face_title is not None and face_title.text == "Cobra Pose"


def test_dragged_card_is_dimmed(board: BoardService, catalog: PoseCatalog) -> None:
    board.start_drag(DragStartRequest(card_id="Child's Pose"))
    root = render(board, catalog)

    assert card_group(root, "Child's Pose").get("opacity") == "0.5"
    assert card_group(root, "Mountain Pose").get("opacity") == "1"


def test_hovered_zone_is_highlighted(board: BoardService, catalog: PoseCatalog) -> None:
    board.start_drag(DragStartRequest(card_id="Child's Pose"))
    board.drag_over(DragOverRequest(zone_id="player1"))
    root = render(board, catalog)

    hand_cells = zone_group(root, "player1").findall(f"{SVG}rect")
    assert {(cell.get("stroke"), cell.get("fill")) for cell in hand_cells} == {
        (HOVER_BORDER, HOVER_FILL)
    }
    draw_cells = zone_group(root, "draw").findall(f"{SVG}rect")
    assert {cell.get("stroke") for cell in draw_cells} == {CELL_BORDER}
