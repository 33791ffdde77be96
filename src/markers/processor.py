"""
Main processor for the Markers module.

Runs the color clusterer once per marker color and assembles the frame's
MarkerSet. Detection is a pure function of the frame and configuration.
"""

import logging
from typing import Optional

from src.common.types import PixelBuffer
from src.markers.clusterer import cluster_color
from src.markers.color_predicates import MarkerColor
from src.markers.types import DetectionConfig, MarkerSet

logger = logging.getLogger(__name__)


class MarkerDetector:
    """
    Detector for the red, pink and green tracker markers.

    Example:
        >>> detector = MarkerDetector()
        >>> markers = detector.detect(PixelBuffer.from_bgr(cv2.imread("boat.jpg")))
        >>> print(markers.is_complete())
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        Initialize the marker detector.

        Args:
            config: Detection configuration. If None, uses defaults
                (100px merge radius, stride 2).
        """
        self.config = config if config is not None else DetectionConfig()

    def detect(self, buffer: PixelBuffer) -> MarkerSet:
        """
        Locate all three markers in a frame.

        Args:
            buffer: Frame in RGB(A) order.

        Returns:
            MarkerSet with one optional centroid per color.
        """
        found = {}
        for color in MarkerColor:
            found[color.value] = cluster_color(
                buffer,
                color.bind(self.config.colors),
                merge_radius=self.config.cluster_radius,
                stride=self.config.stride,
            )

        markers = MarkerSet(**found)
        logger.debug(
            f"Detected {markers.detected_count()}/3 markers: "
            f"red={markers.red}, pink={markers.pink}, green={markers.green}"
        )
        return markers


def detect_markers(
    buffer: PixelBuffer, config: Optional[DetectionConfig] = None
) -> MarkerSet:
    """
    Convenience function for one-shot marker detection.

    Args:
        buffer: Frame in RGB(A) order.
        config: Optional detection configuration. Uses defaults if None.

    Returns:
        MarkerSet for the frame.
    """
    return MarkerDetector(config=config).detect(buffer)
