"""
Geometric validation functions for the Orientation module.

Validates that the detected red, pink and green centroids form the expected
marker pattern before a heading is computed: pink on the red-green line,
between the two, and roughly at their midpoint.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from src.common.types import Point
from src.markers.types import MarkerSet
from src.orientation.types import (
    InvalidReason,
    ToleranceConfig,
    ValidationResult,
    ValidationStatus,
)

logger = logging.getLogger(__name__)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(p1.x - p2.x, p1.y - p2.y))


def point_line_distance(p: Point, p1: Point, p2: Point) -> float:
    """
    Perpendicular distance from `p` to the infinite line through `p1` and `p2`.

    When `p1` and `p2` coincide the line is undefined and the distance is
    reported as 0, so the collinearity check passes trivially.

    Example:
        >>> point_line_distance(Point(x=50, y=60), Point(x=0, y=0), Point(x=100, y=0))
        60.0
    """
    cross = abs(
        (p2.y - p1.y) * p.x - (p2.x - p1.x) * p.y + p2.x * p1.y - p2.y * p1.x
    )
    length = distance(p1, p2)
    return 0.0 if length == 0 else cross / length


def check_collinear(
    red: Point, pink: Point, green: Point, threshold: float
) -> Tuple[bool, float]:
    """
    Check that pink lies close to the line through red and green.

    Returns:
        Tuple of (is_collinear, line_distance).
    """
    line_distance = point_line_distance(pink, red, green)
    return line_distance < threshold, line_distance


def check_order(
    red: Point, pink: Point, green: Point, threshold: float
) -> Tuple[bool, float]:
    """
    Check that pink sits between red and green along the line.

    Uses the near-degenerate triangle inequality: if pink is between the two,
    dRP + dPG equals dRG.

    Returns:
        Tuple of (is_ordered, slack) where slack = |dRP + dPG - dRG|.
    """
    slack = abs(distance(red, pink) + distance(pink, green) - distance(red, green))
    return slack < threshold, slack


def check_equal_intervals(
    red: Point, pink: Point, green: Point, tolerance: float
) -> bool:
    """
    Check that pink is roughly equidistant from red and green.

    Requires dPG in (dRP(1-tol), dRP(1+tol)) and dRG in
    (2dRP(1-tol), 2dRP(1+tol)), both open intervals.

    Example:
        >>> check_equal_intervals(
        ...     Point(x=0, y=0), Point(x=50, y=0), Point(x=104, y=0), 0.1
        ... )
        True
    """
    d_rp = distance(red, pink)
    d_pg = distance(pink, green)
    d_rg = distance(red, green)

    low = 1 - tolerance
    high = 1 + tolerance

    return (
        d_rp * low < d_pg < d_rp * high
        and 2 * d_rp * low < d_rg < 2 * d_rp * high
    )


def validate_markers(
    markers: MarkerSet, config: Optional[ToleranceConfig] = None
) -> ValidationResult:
    """
    Validate the marker pattern.

    Checks run in a fixed order and the first failure wins:
    1. All three markers present
    2. Collinearity (pink near the red-green line)
    3. Ordering (pink between red and green)
    4. Equal intervals (pink near the midpoint)

    Args:
        markers: Marker centroids for the current frame.
        config: Tolerances. Uses defaults if None.

    Returns:
        ValidationResult with status, reason and the measured distances.

    Example:
        >>> markers = MarkerSet(
        ...     red=Point(x=0, y=0), pink=Point(x=50, y=0), green=Point(x=100, y=0)
        ... )
        >>> validate_markers(markers).is_valid()
        True
    """
    if config is None:
        config = ToleranceConfig()

    if not markers.is_complete():
        logger.debug(f"Only {markers.detected_count()}/3 markers detected")
        return ValidationResult(
            status=ValidationStatus.INVALID,
            reason=InvalidReason.INSUFFICIENT_MARKERS,
        )

    red, pink, green = markers.red, markers.pink, markers.green
    d_rp = distance(red, pink)
    d_pg = distance(pink, green)
    d_rg = distance(red, green)

    if d_rg == 0:
        logger.debug("Red and green coincide, line through them is undefined")

    is_collinear, line_distance = check_collinear(
        red, pink, green, config.collinearity_threshold
    )
    is_ordered, slack = check_order(red, pink, green, config.order_threshold)
    is_spaced = check_equal_intervals(red, pink, green, config.interval_tolerance)

    logger.debug(
        f"Marker geometry - line distance: {line_distance:.1f}, order slack: "
        f"{slack:.1f}, dRP: {d_rp:.1f}, dPG: {d_pg:.1f}, dRG: {d_rg:.1f}"
    )

    if not is_collinear:
        reason = InvalidReason.NOT_COLLINEAR
    elif not is_ordered:
        reason = InvalidReason.WRONG_ORDER
    elif not is_spaced:
        reason = InvalidReason.UNEQUAL_INTERVALS
    else:
        reason = InvalidReason.NONE

    if reason != InvalidReason.NONE:
        logger.debug(f"Marker geometry rejected: {reason.value}")

    return ValidationResult(
        status=(
            ValidationStatus.VALID
            if reason == InvalidReason.NONE
            else ValidationStatus.INVALID
        ),
        reason=reason,
        line_distance=line_distance,
        dist_red_pink=d_rp,
        dist_pink_green=d_pg,
        dist_red_green=d_rg,
    )
