"""
Pose Catalog: the dataset of yoga poses the cards are made from.

CSV layout (header row required):
    name,categories,inversion,standing,kneeling,supine,prone
    Downward Dog,standing|inversion,1,0,,,

* categories are separated by "|"
* the five position columns hold the transition cost towards that position (empty: no transition)
* a pose counts as being "in" a position when its value for that position is a number >= 0

Missing or malformed values never break loading, they simply count as absent.
"""

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Self

from pydantic import BaseModel, ConfigDict, field_validator

from src.core.exceptions import (
    CatalogLoadError,
    NotInitializedError,
    UnknownCardError,
)
from src.core.shared_types import PosePosition

logger = logging.getLogger(__name__)

CATEGORY_SEPARATOR = "|"


def format_transition(value: float) -> str:
    """Text shown on a card: whole numbers without a fraction (2.0 -> "2")"""
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass(frozen=True)
class PoseAttributes:
    """Typed attributes of a single pose. Opaque to the Placement Engine, which only uses the name."""

    name: str
    categories: tuple[str, ...] = ()
    positions: tuple[PosePosition, ...] = ()
    transitions: dict[PosePosition, str] = field(default_factory=dict)

    def has_category(self, category: str) -> bool:
        return category in self.categories

    def transition(self, position: PosePosition) -> Optional[str]:
        return self.transitions.get(position)


class PoseRow(BaseModel):
    """One CSV row. Parses the raw strings into typed values."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Optional[str] = None
    categories: list[str] = []
    inversion: Optional[float] = None
    standing: Optional[float] = None
    kneeling: Optional[float] = None
    supine: Optional[float] = None
    prone: Optional[float] = None

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_is_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("categories", mode="before")
    @classmethod
    def split_categories(cls, value: Any) -> list[str]:
        if not value:
            return []
        return [
            category.strip()
            for category in str(value).split(CATEGORY_SEPARATOR)
            if category.strip()
        ]

    @field_validator(*[position.value for position in PosePosition], mode="before")
    @classmethod
    def parse_transition(cls, value: Any) -> Optional[float]:
        """Empty, non-numeric, NaN or infinite values all mean: no transition"""
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            logger.warning("Ignoring malformed transition value %r", text)
            return None
        return number if math.isfinite(number) else None

    def to_attributes(self) -> PoseAttributes:
        # for the type checker: rows without a name are filtered out before this gets called
        assert self.name is not None
        values = {position: getattr(self, position.value) for position in PosePosition}
        return PoseAttributes(
            name=self.name,
            categories=tuple(self.categories),
            positions=tuple(
                position
                for position, value in values.items()
                if value is not None and value >= 0
            ),
            transitions={
                position: format_transition(value)
                for position, value in values.items()
                if value is not None
            },
        )


def parse_poses_csv(csv_text: str) -> dict[str, PoseAttributes]:
    """
    Parse the whole dataset, keeping the order of the file.
    ----

    * rows without a name are skipped
    * a name appearing twice: the later row wins
    """
    reader = csv.DictReader(io.StringIO(csv_text), skipinitialspace=True)
    try:
        if reader.fieldnames is None:
            raise CatalogLoadError("Pose dataset is empty (no header row).")
        headers = [header.strip() for header in reader.fieldnames]
        if "name" not in headers:
            raise CatalogLoadError(
                f"Pose dataset has no 'name' column. Found: {', '.join(headers)}"
            )
        reader.fieldnames = headers

        poses: dict[str, PoseAttributes] = {}
        for line_number, raw_row in enumerate(reader, start=2):
            # surplus values on a row end up under the key None
            row = {key: value for key, value in raw_row.items() if key is not None}
            if not any(row.values()):
                continue
            parsed = PoseRow.model_validate(row)
            if parsed.name is None:
                logger.warning("Skipping line %d: pose has no name", line_number)
                continue
            if parsed.name in poses:
                logger.warning(
                    "Line %d: pose %r appears more than once, keeping the last one",
                    line_number,
                    parsed.name,
                )
            poses[parsed.name] = parsed.to_attributes()
    except csv.Error as exc:
        raise CatalogLoadError(f"Cannot parse pose dataset: {exc}") from exc
    return poses


class PoseCatalog:
    """
    Explicitly initialized context holding the parsed dataset.
    ----

    Lifecycle:
    1. constructed (empty) by the application root
    2. load() once at startup
    3. read-only afterwards, passed to whoever needs pose data
    4. close() at the end of the session
    """

    def __init__(self) -> None:
        self._poses: Optional[dict[str, PoseAttributes]] = None
        self.source: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._poses is not None

    def load(self, path: str | Path) -> Self:
        """Read and parse the CSV file. Loading an already loaded catalog does nothing."""
        if self.is_loaded:
            logger.debug("Pose catalog already loaded from %s", self.source)
            return self
        try:
            csv_text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CatalogLoadError(f"Cannot read pose dataset {str(path)!r}: {exc}") from exc
        return self.load_text(csv_text, source=str(path))

    def load_text(self, csv_text: str, source: str = "<text>") -> Self:
        if self.is_loaded:
            logger.debug("Pose catalog already loaded from %s", self.source)
            return self
        self._poses = parse_poses_csv(csv_text)
        self.source = source
        logger.info("Loaded %d poses from %s", len(self._poses), source)
        return self

    def close(self) -> None:
        self._poses = None
        self.source = None

    def get(self, name: str) -> PoseAttributes:
        poses = self._loaded()
        try:
            return poses[name]
        except KeyError:
            raise UnknownCardError(f"No pose named {name!r} in the catalog.") from None

    def by_category(self, category: str) -> list[PoseAttributes]:
        return [pose for pose in self._loaded().values() if pose.has_category(category)]

    def names(self) -> list[str]:
        """Pose names in dataset order"""
        return list(self._loaded().keys())

    def __len__(self) -> int:
        return len(self._loaded())

    def __contains__(self, name: object) -> bool:
        return name in self._loaded()

    def _loaded(self) -> dict[str, PoseAttributes]:
        if self._poses is None:
            raise NotInitializedError("Poses not initialized. Call load() first.")
        return self._poses
