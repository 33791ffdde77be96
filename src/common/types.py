"""
Common type definitions for the marker heading tracker.

This module provides Pydantic-based type definitions for the two data
structures shared by every stage of the pipeline: pixel buffers (frames)
and points in pixel space.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Helper methods for common geometric operations
- Integration with numpy arrays and OpenCV
"""

from typing import Tuple, Union

import cv2
import numpy as np
from pydantic import BaseModel, Field, field_validator


class PixelBuffer(BaseModel):
    """
    Type-safe wrapper for an RGB or RGBA frame.

    The core pipeline reads pixels in RGB(A) channel order. Frames coming from
    OpenCV (BGR order) must be converted with `from_bgr` first.

    Attributes:
        data: The underlying numpy array containing pixel samples.
            Shape: (H, W, C) with C in {3, 4}.
            Dtype: uint8 (0-255).

    Example:
        >>> image = cv2.imread("boat.jpg")
        >>> buffer = PixelBuffer.from_bgr(image)
        >>> print(buffer.width, buffer.height, buffer.channels)  # 640 480 3
    """

    data: np.ndarray = Field(..., description="Pixel samples as (H, W, C) array")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def _validate_pixels(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is an RGB or RGBA frame.

        Raises:
            ValueError: If array is not a valid frame.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Pixel array is empty")

        if len(v.shape) != 3:
            raise ValueError(f"Expected (H, W, C) color frame, got shape {v.shape}")

        if v.shape[2] not in (3, 4):
            raise ValueError(f"Expected 3 or 4 channels, got {v.shape[2]}")

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for frame, got {v.dtype}. "
                "Samples should be in range [0, 255]"
            )

        return v

    @classmethod
    def from_samples(
        cls, width: int, height: int, channels: int, samples: Union[bytes, bytearray]
    ) -> "PixelBuffer":
        """
        Create a buffer from row-major interleaved byte samples.

        Args:
            width: Frame width in pixels.
            height: Frame height in pixels.
            channels: Samples per pixel (3 for RGB, 4 for RGBA).
            samples: Raw bytes of length width * height * channels.

        Returns:
            PixelBuffer instance.

        Raises:
            ValueError: If the sample count does not match the dimensions.
        """
        expected = width * height * channels
        if len(samples) != expected:
            raise ValueError(
                f"Expected {expected} samples for {width}x{height}x{channels}, "
                f"got {len(samples)}"
            )
        arr = np.frombuffer(bytes(samples), dtype=np.uint8)
        return cls(data=arr.reshape(height, width, channels).copy())

    @classmethod
    def from_bgr(cls, image: np.ndarray) -> "PixelBuffer":
        """
        Create a buffer from an OpenCV BGR or BGRA image.

        Args:
            image: Image as returned by cv2.imread or VideoCapture.read.

        Returns:
            PixelBuffer in RGB(A) order.
        """
        if image.ndim == 3 and image.shape[2] == 4:
            return cls(data=cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA))
        return cls(data=cv2.cvtColor(image, cv2.COLOR_BGR2RGB))

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get frame shape (H, W, C)."""
        return self.data.shape

    @property
    def height(self) -> int:
        """Get frame height in pixels."""
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        """Get frame width in pixels."""
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        """Get number of channels (3 for RGB, 4 for RGBA)."""
        return int(self.data.shape[2])

    def to_bgr(self) -> np.ndarray:
        """
        Convert the frame back to a 3-channel OpenCV BGR image.

        Returns:
            New BGR array suitable for drawing with cv2.
        """
        if self.channels == 4:
            return cv2.cvtColor(self.data, cv2.COLOR_RGBA2BGR)
        return cv2.cvtColor(self.data, cv2.COLOR_RGB2BGR)

    def __repr__(self) -> str:
        """String representation of PixelBuffer."""
        return f"PixelBuffer(shape={self.shape}, dtype={self.data.dtype})"


class Point(BaseModel):
    """
    Immutable 2D point (x, y) in pixel space.

    Points are frozen: every arithmetic operation returns a new Point, so a
    detected centroid is never modified after it is produced.

    Attributes:
        x: X-coordinate (horizontal, 0 to frame width).
        y: Y-coordinate (vertical, 0 to frame height, growing downwards).

    Example:
        >>> pink = Point(x=50, y=0)
        >>> red = Point(x=0, y=0)
        >>> pink.midpoint(red)
        Point(x=25.0, y=0.0)
    """

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    model_config = {"frozen": True}

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v) -> float:
        """Accept Python and numpy scalars alike."""
        if isinstance(v, (int, float, np.integer, np.floating)):
            return float(v)
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """
        Create Point from numpy array.

        Args:
            arr: Numpy array of shape (2,) with [x, y] coordinates.

        Raises:
            ValueError: If array shape is not (2,).
        """
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    @classmethod
    def from_tuple(cls, coords: Tuple[float, float]) -> "Point":
        """Create Point from an (x, y) tuple."""
        if len(coords) != 2:
            raise ValueError(f"Expected 2 coordinates, got {len(coords)}")
        return cls(x=coords[0], y=coords[1])

    def to_numpy(self, dtype: type = np.float64) -> np.ndarray:
        """Convert Point to a numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=dtype)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert Point to tuple (x, y)."""
        return (self.x, self.y)

    def to_pixel(self) -> Tuple[int, int]:
        """Round to integer pixel coordinates for drawing."""
        return (int(round(self.x)), int(round(self.y)))

    def distance_to(self, other: "Point") -> float:
        """
        Calculate Euclidean distance to another point.

        Args:
            other: Target point.

        Returns:
            Euclidean distance as float.
        """
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def midpoint(self, other: "Point") -> "Point":
        """Return the point halfway between this point and `other`."""
        return self + (other - self) * 0.5

    def __add__(self, other: "Point") -> "Point":
        """Add two points (vector addition)."""
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        """Subtract two points (vector subtraction)."""
        return Point(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        """Scale both coordinates by a scalar."""
        return Point(x=self.x * factor, y=self.y * factor)

    def __repr__(self) -> str:
        """String representation of Point."""
        return f"Point(x={self.x}, y={self.y})"
