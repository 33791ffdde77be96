"""
Data types and structures for the Markers module.

Provides type-safe containers for detection configuration, transient
clusters and the per-frame marker set.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from src.common.types import Point


class ColorThresholds(BaseModel):
    """Tuned thresholds shared by the marker color predicates.

    Attributes:
        brightness_floor: Minimum value of the dominant channel (0-255).
        dominance_ratio: Non-dominant channels must stay below this fraction
            of the dominant channel.
        pink_blue_floor: Blue must exceed this value for a pixel to be pink
            rather than pure red.
    """

    brightness_floor: int = Field(default=110, ge=0, le=255)
    dominance_ratio: float = Field(default=0.5, gt=0.0, le=1.0)
    pink_blue_floor: int = Field(default=80, ge=0, le=255)


class DetectionConfig(BaseModel):
    """Configuration for marker detection.

    Attributes:
        cluster_radius: Merge radius in pixels for the greedy clusterer.
        stride: Sampling step for rows and columns (2 = every other pixel).
        colors: Color predicate thresholds.
    """

    cluster_radius: float = Field(default=100.0, gt=0.0)
    stride: int = Field(default=2, ge=1)
    colors: ColorThresholds = Field(default_factory=ColorThresholds)


@dataclass
class Cluster:
    """Running centroid of pixels accumulated during one clustering pass."""

    sum_x: float
    sum_y: float
    count: int = 1

    @property
    def centroid_x(self) -> float:
        return self.sum_x / self.count

    @property
    def centroid_y(self) -> float:
        return self.sum_y / self.count

    @property
    def centroid(self) -> Point:
        return Point(x=self.centroid_x, y=self.centroid_y)

    def add(self, x: float, y: float) -> None:
        """Accumulate one pixel into the cluster."""
        self.sum_x += x
        self.sum_y += y
        self.count += 1


@dataclass(frozen=True)
class MarkerSet:
    """
    Centroids of the three markers found in a single frame.

    Attributes:
        red: Front marker centroid, None if no red pixel matched.
        pink: Center marker centroid, None if no pink pixel matched.
        green: Rear marker centroid, None if no green pixel matched.
    """

    red: Optional[Point] = None
    pink: Optional[Point] = None
    green: Optional[Point] = None

    def is_complete(self) -> bool:
        """Check whether all three markers were found."""
        return self.red is not None and self.pink is not None and self.green is not None

    def detected_count(self) -> int:
        """Number of markers present in this set."""
        return sum(p is not None for p in (self.red, self.pink, self.green))
