"""
Accessibility Module
====================

Cumulative opportunity accessibility from a single travel-time surface.

Accessibility is the number of opportunities (jobs, workers, ...) on an
opportunity grid whose pixel can be reached from the surface's origin within
the cutoff. The cutoff is the one the surface was generated with; to use a
different cutoff the surface has to be regenerated upstream, but computing
accessibility for additional grids against the same surface is cheap.

The cutoff is a hard edge: a pixel reached in exactly ``cutoff`` minutes
counts fully and a pixel one minute later counts for nothing. This always
measures average accessibility; best and worst case over a departure window
need per-minute surfaces and are computed elsewhere.

Main Functions:
-------------
* accessibility_for_grid: Sum one grid's opportunities reachable within the cutoff
* accessibility_for_grids: Accessibility for several named grids as a pandas Series
* summarize_accessibility: Per-grid accessibility, totals and reachable share

Example:
-------
>>> from src.accessibility import accessibility_for_grid
>>> from src.raster import OpportunityGrid, TravelTimeSurface
>>> surface = TravelTimeSurface.from_rows([[10, 70], [30, 60]])
>>> grid = OpportunityGrid.from_rows([[5, 5], [5, 5]])
>>> accessibility_for_grid(grid, surface, cutoff=60)
15
"""

# Standard Library Imports
import logging
import numbers
from typing import Mapping

# Third-party Imports
import pandas as pd

# Local Imports
from src.config import DEFAULT_CUTOFF, UNREACHED
from src.utils.logging_utils import LogContext, with_log_context
from src.utils.error_utils import (
    handle_exception,
    ExceptionContext,
    DataValidationError,
    DataProcessingError,
)


def validate_inputs(cutoff, surface, grid) -> None:
    """
    Check that a cutoff, surface and grid can be aggregated together.

    Raises:
        DataValidationError: Describing the first problem found
    """
    if (
        isinstance(cutoff, bool)
        or not isinstance(cutoff, numbers.Real)
        or not 0 <= cutoff < UNREACHED
    ):
        raise DataValidationError(
            f"Cutoff must be a number between 0 and {UNREACHED - 1} minutes, got {cutoff!r}"
        )

    query = getattr(surface, "query", None)
    if query is None:
        raise DataValidationError("Travel time surface has no query window")

    expected = query.width * query.height
    if len(surface.surface) < expected:
        raise DataValidationError(
            f"Travel time surface holds {len(surface.surface)} values, "
            f"its {query.width}x{query.height} window needs {expected}"
        )

    if not callable(getattr(grid, "contains", None)):
        raise DataValidationError("Opportunity grid has no containment check")

    # Grids only have to expose their width; the height bounds the data when known
    height = getattr(grid, "height", None)
    if height is None:
        if grid.width and len(grid.data) % grid.width:
            raise DataValidationError(
                f"Opportunity grid holds {len(grid.data)} values, "
                f"not a whole number of rows of width {grid.width}"
            )
        return

    expected = grid.width * height
    if len(grid.data) < expected:
        raise DataValidationError(
            f"Opportunity grid holds {len(grid.data)} values, "
            f"its {grid.width}x{height} window needs {expected}"
        )


def _sum_reachable(cutoff, surface, grid):
    query = surface.query
    values = surface.surface
    dx = query.west - grid.west
    dy = query.north - grid.north

    accessibility = 0
    pixel = 0
    for y in range(query.height):
        for x in range(query.width):
            travel_time = values[pixel]
            pixel += 1

            # Unreached pixels carry a sentinel above any cutoff
            if travel_time > cutoff:
                continue

            grid_x = x + dx
            grid_y = y + dy
            if grid.contains(grid_x, grid_y):
                accessibility += grid.data[grid_y * grid.width + grid_x]

    return accessibility


@handle_exception(
    custom_mapping={
        IndexError: DataProcessingError,
        TypeError: DataValidationError,
        AttributeError: DataValidationError,
    }
)
def accessibility_for_grid(grid, surface, cutoff=DEFAULT_CUTOFF, validate=True):
    """
    Count the opportunities on ``grid`` reachable within ``cutoff`` minutes.

    Surface pixels are translated into grid pixels through their ``west`` and
    ``north`` offsets. Pixels that land outside the grid contribute nothing.

    Args:
        grid: OpportunityGrid, or any object with west, north, width, data
            and contains(x, y); height is optional
        surface: TravelTimeSurface, or any object with a query window and a
            flat surface sequence
        cutoff (int): Maximum travel time in minutes, inclusive. Must be the
            cutoff the surface was generated with.
        validate (bool): Check the inputs before aggregating

    Returns:
        The sum of grid values at every reachable pixel, in the grid's units.

    Raises:
        DataValidationError: If validation is enabled and an input is malformed
        DataProcessingError: If a raster is shorter than its window
    """
    if validate:
        validate_inputs(cutoff, surface, grid)

    accessibility = _sum_reachable(cutoff, surface, grid)
    logging.debug(f"Accessibility within {cutoff} minutes: {accessibility}")
    return accessibility


@handle_exception
@with_log_context(module="accessibility", operation="accessibility_for_grids")
def accessibility_for_grids(
    grids: Mapping[str, object], surface, cutoff=DEFAULT_CUTOFF
) -> pd.Series:
    """
    Compute accessibility for several opportunity grids from one surface.

    Args:
        grids: Mapping of grid name to opportunity grid, in output order
        surface: Travel time surface shared by every grid
        cutoff: Maximum travel time in minutes, inclusive

    Returns:
        pd.Series: Accessibility indexed by grid name, named "accessibility"
    """
    results = {}
    for name, grid in grids.items():
        with LogContext(grid=name):
            with ExceptionContext(f"Accessibility for grid {name!r}", DataProcessingError):
                results[name] = accessibility_for_grid(grid, surface, cutoff=cutoff)

    logging.info(f"Computed accessibility for {len(results)} grids at {cutoff} minutes")
    return pd.Series(results, name="accessibility", dtype=float)


@handle_exception
@with_log_context(module="accessibility", operation="summarize_accessibility")
def summarize_accessibility(
    grids: Mapping[str, object], surface, cutoff=DEFAULT_CUTOFF
) -> pd.DataFrame:
    """
    Tabulate accessibility against the total opportunities on each grid.

    Returns:
        pd.DataFrame: One row per grid with columns grid, cutoff,
        accessibility, total and share (accessibility / total, 0.0 for
        empty grids)
    """
    accessibility = accessibility_for_grids(grids, surface, cutoff=cutoff)
    totals = pd.Series(
        {name: float(sum(grid.data)) for name, grid in grids.items()}, dtype=float
    )

    summary = pd.DataFrame(
        {
            "grid": accessibility.index,
            "cutoff": cutoff,
            "accessibility": accessibility.to_numpy(),
            "total": totals.reindex(accessibility.index).to_numpy(),
        }
    )
    summary["share"] = (summary["accessibility"] / summary["total"]).where(
        summary["total"] > 0, 0.0
    )
    return summary
