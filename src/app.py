"""
Application root: owns the pose catalog and the board for one session.

The board only exists once the catalog is loaded. If loading fails the application stays in the FAILED state,
there is never a board built from part of the dataset.
"""

import logging
from typing import Optional

from src.board.geometry import DEFAULT_GRID_CONFIG, GridConfig
from src.board.zones import DEFAULT_ZONES, Zone
from src.catalog.poses import PoseCatalog
from src.core.config import Settings, configure_logging, load_settings
from src.core.exceptions import CatalogLoadError, NotInitializedError
from src.core.shared_types import LoadStatus
from src.render.board import render_board
from src.services.board_service import BoardService

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading poses..."


class BoardApplication:
    def __init__(
        self,
        settings: Settings,
        config: GridConfig = DEFAULT_GRID_CONFIG,
        zones: tuple[Zone, ...] = DEFAULT_ZONES,
    ) -> None:
        self.settings = settings
        self.config = config
        self.zones = zones
        self.catalog = PoseCatalog()
        self.status = LoadStatus.LOADING
        self.error: Optional[str] = None
        self._board: Optional[BoardService] = None

    def start(self) -> LoadStatus:
        """Load the catalog, then lay out every pose in the draw pile."""
        try:
            self.catalog.load(self.settings.poses_csv)
        except CatalogLoadError as exc:
            logger.error("Failed to load poses: %s", exc)
            self.status = LoadStatus.FAILED
            self.error = str(exc)
            return self.status

        self._board = BoardService(
            self.catalog.names(),
            viewport_width=self.settings.viewport_width,
            config=self.config,
            zones=self.zones,
        )
        self.status = LoadStatus.READY
        return self.status

    @property
    def board(self) -> BoardService:
        if self._board is None:
            raise NotInitializedError(
                f"Board is not available (status: {self.status}). Call start() first."
            )
        return self._board

    def render(self) -> str:
        if self.status == LoadStatus.FAILED:
            return f"Error loading poses: {self.error}"
        if self.status == LoadStatus.LOADING:
            return LOADING_TEXT
        return render_board(self.board.layout(), self.catalog, self.config)

    def close(self) -> None:
        """End of the session"""
        self._board = None
        self.catalog.close()
        self.status = LoadStatus.LOADING


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    app = BoardApplication(settings)
    app.start()
    try:
        print(app.render())
    finally:
        app.close()


if __name__ == "__main__":
    main()
