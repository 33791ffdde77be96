"""
Heading computation for a validated marker set.

The front of the object is the red marker. Rotation is measured about the
pivot halfway between pink and red, from the pivot->red direction to the
pivot->target direction, in image coordinates (y grows downwards, so a
positive angle is clockwise on screen, i.e. a right turn).
"""

import logging
import math
from typing import Tuple

from src.common.types import Point
from src.markers.types import MarkerSet
from src.orientation.types import HeadingResult, SteeringDirection, SteeringMode

logger = logging.getLogger(__name__)

SIMPLE_TURN_LIMIT = 90.0


def compute_pivot(pink: Point, red: Point) -> Point:
    """Midpoint of pink and red, biased toward the front of the object."""
    return pink.midpoint(red)


def normalize_angle(degrees: float) -> float:
    """
    Wrap an angle into (-180, 180].

    Example:
        >>> normalize_angle(270.0)
        -90.0
        >>> normalize_angle(-180.0)
        180.0
    """
    angle = math.fmod(degrees, 360.0)
    if angle > 180.0:
        angle -= 360.0
    elif angle <= -180.0:
        angle += 360.0
    return angle


def compute_rotation(pivot: Point, front: Point, target: Point) -> float:
    """
    Signed rotation in degrees that points pivot->front at the target.

    Args:
        pivot: Center of rotation.
        front: Point the object currently faces.
        target: Point the object should face.

    Returns:
        Rotation in (-180, 180].
    """
    current = math.atan2(front.y - pivot.y, front.x - pivot.x)
    wanted = math.atan2(target.y - pivot.y, target.x - pivot.x)
    return normalize_angle(math.degrees(wanted - current))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_steering(
    rotation: float,
) -> Tuple[SteeringDirection, int, SteeringMode]:
    """
    Map a rotation to a steering direction, magnitude and mode.

    Below 90 degrees the object rotates in place with magnitude
    |rotation| / 180. From 90 degrees on it turns first, and the remaining
    (|rotation| - 90) / 180 becomes the rotation magnitude.

    Returns:
        Tuple of (direction, magnitude_percent, mode).
    """
    magnitude = abs(rotation)
    direction = SteeringDirection.RIGHT if rotation > 0 else SteeringDirection.LEFT

    if magnitude < SIMPLE_TURN_LIMIT:
        return direction, _round_half_up(magnitude / 180 * 100), SteeringMode.SIMPLE

    return (
        direction,
        _round_half_up((magnitude - SIMPLE_TURN_LIMIT) / 180 * 100),
        SteeringMode.COMBINED,
    )


def compute_heading(markers: MarkerSet, target: Point) -> HeadingResult:
    """
    Compute the steering correction toward a target.

    Only call this for a marker set that passed validation.

    Args:
        markers: Validated marker set (red and pink must be present).
        target: Point to face, in frame coordinates.

    Returns:
        HeadingResult with pivot, rotation and steering classification.

    Raises:
        ValueError: If red or pink is missing.

    Example:
        >>> markers = MarkerSet(
        ...     red=Point(x=10, y=0), pink=Point(x=-10, y=0), green=Point(x=-30, y=0)
        ... )
        >>> compute_heading(markers, Point(x=0, y=10)).rotation_degrees
        90.0
    """
    if markers.red is None or markers.pink is None:
        raise ValueError("Heading requires red and pink markers")

    pivot = compute_pivot(markers.pink, markers.red)
    rotation = compute_rotation(pivot, markers.red, target)
    direction, magnitude, mode = classify_steering(rotation)

    logger.debug(
        f"Pivot ({pivot.x:.1f}, {pivot.y:.1f}), rotation {rotation:.2f} deg, "
        f"{mode.value} {direction.value} {magnitude}%"
    )

    return HeadingResult(
        pivot=pivot,
        rotation_degrees=rotation,
        direction=direction,
        magnitude_percent=magnitude,
        mode=mode,
    )
