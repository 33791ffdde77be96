"""
Color classifiers for the three tracker markers.

Each predicate takes 8-bit red, green and blue values and works elementwise,
so the same function classifies a single pixel or whole numpy channel planes.
"""

from enum import Enum
from functools import partial
from typing import Callable

import numpy as np

from src.markers.types import ColorThresholds

DEFAULT_THRESHOLDS = ColorThresholds()

ColorPredicate = Callable[..., np.ndarray]


def _max_channel(r, g, b):
    return np.maximum(np.maximum(r, g), b)


def is_red(r, g, b, thresholds: ColorThresholds = DEFAULT_THRESHOLDS):
    """
    Classify pixels as marker red.

    Red must be the brightest channel, at least `brightness_floor`, with green
    and blue both below `dominance_ratio` of red.

    Example:
        >>> bool(is_red(220, 30, 40))
        True
    """
    max_c = _max_channel(r, g, b)
    limit = r * thresholds.dominance_ratio
    return (
        (max_c >= thresholds.brightness_floor)
        & (r == max_c)
        & (g < limit)
        & (b < limit)
    )


def is_pink(r, g, b, thresholds: ColorThresholds = DEFAULT_THRESHOLDS):
    """
    Classify pixels as marker pink.

    Red dominant as for `is_red` and green below `dominance_ratio` of red, but
    blue has to exceed `pink_blue_floor`. Blue is not capped relative to red,
    which is what lets saturated pinks like (255, 105, 180) through.

    Example:
        >>> bool(is_pink(255, 105, 180))
        True
    """
    max_c = _max_channel(r, g, b)
    return (
        (max_c >= thresholds.brightness_floor)
        & (r == max_c)
        & (b > thresholds.pink_blue_floor)
        & (g < r * thresholds.dominance_ratio)
    )


def is_green(r, g, b, thresholds: ColorThresholds = DEFAULT_THRESHOLDS):
    """
    Classify pixels as marker green.

    Example:
        >>> bool(is_green(30, 200, 40))
        True
    """
    max_c = _max_channel(r, g, b)
    limit = g * thresholds.dominance_ratio
    return (
        (max_c >= thresholds.brightness_floor)
        & (g == max_c)
        & (r < limit)
        & (b < limit)
    )


class MarkerColor(Enum):
    """The closed set of marker colors, front to rear."""

    RED = "red"
    PINK = "pink"
    GREEN = "green"

    @property
    def predicate(self) -> ColorPredicate:
        """Classifier for this color with default thresholds."""
        return _PREDICATES[self]

    def bind(self, thresholds: ColorThresholds) -> ColorPredicate:
        """Classifier for this color with the given thresholds."""
        return partial(_PREDICATES[self], thresholds=thresholds)


_PREDICATES = {
    MarkerColor.RED: is_red,
    MarkerColor.PINK: is_pink,
    MarkerColor.GREEN: is_green,
}
