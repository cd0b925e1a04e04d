"""Orchestration of input events (resize, drag, drop) to the placement logic, and of the layout back to the presentation layer."""

import logging
from typing import Iterable, Optional

from src.api.models import (
    BoardLayout,
    CardLayout,
    DragOverRequest,
    DragStartRequest,
    DropRequest,
    DropResponse,
    ResizeRequest,
    ViewState,
    ZoneLayout,
)
from src.board.geometry import (
    DEFAULT_GRID_CONFIG,
    GridConfig,
    board_bounds,
    cell_origin,
    max_columns_for_width,
    pixel_to_cell,
    stack_zones,
)
from src.board.placement import PlacementEngine
from src.board.zones import DEFAULT_ZONES, Zone, capacity
from src.core.exceptions import InvalidRequestError
from src.core.models import BoardModel

logger = logging.getLogger(__name__)


class BoardService:
    """
    The Board Controller.
    ----

    Owns the grid configuration and the zone definitions of the session, and the Placement Engine built from them.
    Drag / hover state lives here as view state, it never enters the engine's placements.
    """

    def __init__(
        self,
        card_ids: Iterable[str],
        viewport_width: float,
        config: GridConfig = DEFAULT_GRID_CONFIG,
        zones: Iterable[Zone] = DEFAULT_ZONES,
        initial_zone: Optional[str] = None,
    ) -> None:
        self.config = config
        self.zones: tuple[Zone, ...] = tuple(zones)
        self.viewport_width = viewport_width

        column_bound = max_columns_for_width(config, viewport_width)
        self.engine = PlacementEngine(self.zones, config.min_columns, column_bound)

        # cards start out in the first auto zone (the draw pile), unless told otherwise
        start_zone = initial_zone or next(
            (zone.zone_id for zone in self.zones if zone.is_auto),
            self.zones[0].zone_id,
        )
        self.engine.initialize(card_ids, start_zone, column_bound)
        self.view = ViewState()

    # -- INPUT EVENTS ---
    def resize(self, request: ResizeRequest) -> BoardLayout:
        """Viewport changed size. Only touches the placements if a card would end up outside its zone."""
        self.viewport_width = request.viewport_width
        column_bound = max_columns_for_width(self.config, request.viewport_width)
        if column_bound != self.engine.column_bound:
            logger.debug(
                "Viewport %s px: column bound %d -> %d",
                request.viewport_width,
                self.engine.column_bound,
                column_bound,
            )
            self.engine.fit_to_bounds(column_bound)
        return self.layout()

    def start_drag(self, request: DragStartRequest) -> BoardLayout:
        """Remember which card is picked up, and where from."""
        position = self.engine.position_of(request.card_id)
        self.view = ViewState(dragging=request.card_id, source_zone=position.zone_id)
        return self.layout()

    def drag_over(self, request: DragOverRequest) -> BoardLayout:
        """Hover highlight. Ignored when nothing is being dragged."""
        if request.zone_id is not None:
            # raises for unknown zones
            self.engine.dimensions(request.zone_id)
        if self.view.dragging is not None:
            self.view = self.view.model_copy(update={"hover_zone": request.zone_id})
        return self.layout()

    def cancel_drag(self) -> BoardLayout:
        self.view = ViewState()
        return self.layout()

    def drop(self, request: DropRequest) -> DropResponse:
        """
        Drop a card on a zone.
        ----

        1. which card? (from the request, or else the one being dragged)
        2. pointer pixels --> cell of the target zone
        3. let the engine decide (a rejection is silent: the card just stays where it was)
        4. the drag is over either way
        """
        card_id = request.card_id or self.view.dragging
        if card_id is None:
            raise InvalidRequestError("Drop without a card: no card_id given and no drag in progress.")

        cell = pixel_to_cell(self.config, request.x, request.y)
        outcome = self.engine.drop(card_id, request.zone_id, cell)
        self.view = ViewState()

        return DropResponse(
            status=outcome.status,
            accepted=outcome.accepted,
            card_id=card_id,
            layout=self.layout(),
        )

    # -- READ ACCESS ---
    def locate(self, x: float, y: float) -> Optional[tuple[str, float, float]]:
        """Which zone is under a board pixel? Returns (zone_id, x, y relative to the zone's origin), or None."""
        dimensions = [self.engine.drop_range(zone.zone_id) for zone in self.zones]
        for zone, rect in zip(self.zones, stack_zones(self.config, dimensions)):
            if rect.contains(x, y):
                return zone.zone_id, x - rect.x, y - rect.y
        return None

    def layout(self) -> BoardLayout:
        return self._create_layout(self.engine.to_model())

    # -- Internal helpers --
    def _create_layout(self, model: BoardModel) -> BoardLayout:
        """Convert the engine's BoardModel into pixel coordinates for rendering."""
        drop_dimensions = [model.drop_dimensions[zone.zone_id] for zone in self.zones]
        rects = stack_zones(self.config, drop_dimensions)
        width, height = board_bounds(self.config, rects)

        zone_layouts: list[ZoneLayout] = []
        card_layouts: list[CardLayout] = []
        for zone, (drop_columns, drop_rows), rect in zip(
            self.zones, drop_dimensions, rects
        ):
            columns, rows = model.zone_dimensions[zone.zone_id]
            members = sorted(
                (
                    (row, column, card)
                    for card, (zone_id, column, row) in model.placements.items()
                    if zone_id == zone.zone_id
                ),
            )
            zone_layouts.append(
                ZoneLayout(
                    zone_id=zone.zone_id,
                    title=zone.title,
                    kind=zone.kind,
                    columns=columns,
                    rows=rows,
                    drop_columns=drop_columns,
                    drop_rows=drop_rows,
                    x=rect.x,
                    y=rect.y,
                    width=rect.width,
                    height=rect.height,
                    card_count=len(members),
                    capacity=capacity(zone),
                )
            )
            for row, column, card in members:
                origin = cell_origin(self.config, column, row)
                card_layouts.append(
                    CardLayout(
                        card_id=card,
                        zone_id=zone.zone_id,
                        column=column,
                        row=row,
                        x=rect.x + origin.x,
                        y=rect.y + origin.y,
                    )
                )

        return BoardLayout(
            column_bound=model.column_bound,
            width=width,
            height=height,
            zones=zone_layouts,
            cards=card_layouts,
            view=self.view,
        )
