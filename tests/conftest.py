"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest

# RGB
MARKER_RED = (220, 30, 30)
MARKER_PINK = (255, 105, 180)
MARKER_GREEN = (30, 200, 40)
BACKGROUND = (40, 40, 40)


def draw_marker_frame(
    red=(100, 100),
    pink=(200, 100),
    green=(300, 100),
    radius=12,
    height=240,
    width=400,
    channels=3,
):
    """Draw the three marker dots on a dark RGB(A) frame; None skips a dot."""
    import cv2
    import numpy as np

    from src.common.types import PixelBuffer

    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:] = BACKGROUND

    for center, color in ((red, MARKER_RED), (pink, MARKER_PINK), (green, MARKER_GREEN)):
        if center is not None:
            cv2.circle(image, center, radius, color, -1)

    if channels == 4:
        alpha = np.full((height, width, 1), 255, dtype=np.uint8)
        image = np.concatenate([image, alpha], axis=2)

    return PixelBuffer(data=image)


@pytest.fixture
def marker_frame():
    """Fixture providing a frame with red, pink and green dots on one line."""
    return draw_marker_frame()


@pytest.fixture
def make_marker_frame():
    """Fixture providing the marker frame factory."""
    return draw_marker_frame
