"""
Raster Module
=============

In-memory raster types consumed by the accessibility aggregator. Every raster
sits in a shared integer pixel-coordinate space: ``west`` and ``north`` locate
its top-left pixel, and its values are stored as a flat row-major sequence.

Classes:
    RasterWindow: Position and extent of a raster, with bounds checking.
    TravelTimeSurface: Per-pixel travel minutes from a single origin.
    OpportunityGrid: Per-pixel opportunity counts (jobs, workers, ...).

Example:
    >>> from src.raster import OpportunityGrid, TravelTimeSurface
    >>> surface = TravelTimeSurface.from_rows([[10, 70], [30, 60]])
    >>> grid = OpportunityGrid.from_rows([[5, 5], [5, 5]])
    >>> grid.contains(1, 1)
    True
"""

# Standard library imports
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

# Third-party imports
import pandas as pd

# Local imports
from src.utils.logging_utils import with_log_context
from src.utils.error_utils import handle_exception, DataValidationError


@dataclass(frozen=True)
class RasterWindow:
    """Extent of a raster in pixel space."""

    west: int
    north: int
    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Whether window-local coordinates fall inside [0, width) x [0, height)."""
        return 0 <= x < self.width and 0 <= y < self.height


def _flatten_rows(rows: Sequence[Sequence[float]]) -> List[float]:
    widths = {len(row) for row in rows}
    if len(widths) > 1:
        raise DataValidationError(
            f"Raster rows must all have the same width, got widths {sorted(widths)}"
        )
    return [value for row in rows for value in row]


@dataclass(frozen=True)
class TravelTimeSurface:
    """
    Travel times from one origin, in minutes, for every pixel of ``query``.

    Pixels the origin never reaches hold the UNREACHED sentinel.
    """

    query: RasterWindow
    surface: Sequence[float] = field(repr=False)

    @property
    def west(self) -> int:
        return self.query.west

    @property
    def north(self) -> int:
        return self.query.north

    @classmethod
    @handle_exception(custom_mapping={TypeError: DataValidationError})
    @with_log_context(module="raster", operation="surface_from_rows")
    def from_rows(cls, rows, west: int = 0, north: int = 0) -> "TravelTimeSurface":
        """
        Build a surface from a list of raster rows, north to south.

        Args:
            rows: Sequence of equally sized rows of travel times
            west: Pixel x of the first column
            north: Pixel y of the first row

        Returns:
            TravelTimeSurface: The surface covering len(rows[0]) x len(rows) pixels

        Raises:
            DataValidationError: If the rows are ragged
        """
        values = _flatten_rows(rows)
        width = len(rows[0]) if rows else 0
        logging.debug(f"Building {width}x{len(rows)} surface at ({west}, {north})")
        return cls(RasterWindow(west, north, width, len(rows)), values)


@dataclass(frozen=True)
class OpportunityGrid(RasterWindow):
    """Opportunity counts per pixel over the grid's own window."""

    data: Sequence[float] = field(repr=False)

    @property
    def total(self) -> float:
        """Every opportunity on the grid, reachable or not."""
        return sum(self.data)

    @classmethod
    @handle_exception(custom_mapping={TypeError: DataValidationError})
    @with_log_context(module="raster", operation="grid_from_rows")
    def from_rows(cls, rows, west: int = 0, north: int = 0) -> "OpportunityGrid":
        """
        Build a grid from a list of raster rows, north to south.

        Raises:
            DataValidationError: If the rows are ragged
        """
        values = _flatten_rows(rows)
        width = len(rows[0]) if rows else 0
        logging.debug(f"Building {width}x{len(rows)} grid at ({west}, {north})")
        return cls(west, north, width, len(rows), values)

    @classmethod
    @handle_exception(
        custom_mapping={ValueError: DataValidationError, TypeError: DataValidationError}
    )
    @with_log_context(module="raster", operation="grid_from_frame")
    def from_frame(
        cls, frame: pd.DataFrame, west: int = 0, north: int = 0
    ) -> "OpportunityGrid":
        """
        Build a grid from a DataFrame whose rows are raster rows.

        Column labels are ignored; column order is the pixel order.

        Args:
            frame: DataFrame of numeric opportunity counts
            west: Pixel x of the first column
            north: Pixel y of the first row

        Returns:
            OpportunityGrid: The grid covering the frame's shape

        Raises:
            DataValidationError: If the frame holds missing or non-numeric values
        """
        if frame.isna().to_numpy().any():
            raise DataValidationError("Opportunity frame contains missing values")

        height, width = frame.shape
        values = frame.astype(float).to_numpy().ravel().tolist()
        logging.debug(f"Building {width}x{height} grid from frame at ({west}, {north})")
        return cls(west, north, width, height, values)
