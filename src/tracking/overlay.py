"""
OpenCV overlay renderer.

Draws detected markers, the marker axis, pivot and target on a BGR copy of
each frame. The latest drawing is kept in `canvas` for display.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from src.common.types import PixelBuffer, Point
from src.tracking.orchestrator import TickOutcome

logger = logging.getLogger(__name__)

# BGR
RED = (0, 0, 255)
PINK = (203, 192, 255)
GREEN = (0, 128, 0)
DARK_PINK = (100, 30, 180)
BLUE = (255, 0, 0)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

MARKER_RADIUS = 10

# Canvas used for status messages before any frame has been drawn
BLANK_SHAPE = (480, 640, 3)


def draw_circle(
    canvas: np.ndarray, center: Point, radius: int, color: Tuple[int, int, int]
) -> None:
    """Filled circle with a white rim."""
    cv2.circle(canvas, center.to_pixel(), radius, color, -1, cv2.LINE_AA)
    cv2.circle(canvas, center.to_pixel(), radius, WHITE, 2, cv2.LINE_AA)


def draw_line(
    canvas: np.ndarray,
    p1: Point,
    p2: Point,
    color: Tuple[int, int, int],
    width: int = 3,
) -> None:
    cv2.line(canvas, p1.to_pixel(), p2.to_pixel(), color, width, cv2.LINE_AA)


def draw_text(canvas: np.ndarray, text: str, row: int) -> None:
    """Status text with a dark outline, one line per row."""
    origin = (10, 25 + row * 25)
    cv2.putText(canvas, text, origin, cv2.FONT_HERSHEY_SIMPLEX, 0.6, BLACK, 3, cv2.LINE_AA)
    cv2.putText(canvas, text, origin, cv2.FONT_HERSHEY_SIMPLEX, 0.6, WHITE, 1, cv2.LINE_AA)


class OverlayRenderer:
    """Render sink that annotates frames with OpenCV."""

    def __init__(self, draw_status: bool = True):
        self.draw_status = draw_status
        self.canvas: Optional[np.ndarray] = None

    def render(self, buffer: PixelBuffer, outcome: TickOutcome) -> None:
        canvas = buffer.to_bgr()
        markers = outcome.markers

        if markers is not None:
            for point, color in (
                (markers.red, RED),
                (markers.pink, PINK),
                (markers.green, GREEN),
            ):
                if point is not None:
                    draw_circle(canvas, point, MARKER_RADIUS, color)

        if outcome.validation is not None and outcome.validation.is_valid():
            draw_line(canvas, markers.red, markers.pink, RED, 4)
            draw_line(canvas, markers.pink, markers.green, GREEN, 4)
            draw_circle(canvas, markers.pink, 8, DARK_PINK)
            draw_line(canvas, markers.green, markers.red, BLACK, 5)

        if outcome.heading is not None:
            draw_circle(canvas, outcome.heading.pivot, MARKER_RADIUS, BLUE)
            if outcome.target is not None:
                draw_circle(canvas, outcome.target, 5, BLUE)
                draw_line(canvas, outcome.heading.pivot, outcome.target, BLUE)

        if self.draw_status:
            draw_text(canvas, outcome.message, 0)
            if outcome.heading is not None:
                draw_text(canvas, outcome.heading.rotation_text(), 1)

        self.canvas = canvas

    def render_status(self, message: str) -> None:
        """
        Replace the canvas with a blank frame showing only `message`.

        Used when no frame is available, so a stale heading is never left on
        screen.
        """
        shape = self.canvas.shape if self.canvas is not None else BLANK_SHAPE
        canvas = np.zeros(shape, dtype=np.uint8)
        draw_text(canvas, message, 0)
        self.canvas = canvas
