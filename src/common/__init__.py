"""
Common types shared across all modules.

This module provides standardized data types for the marker heading tracker,
ensuring consistency and type safety across the markers, orientation and
tracking modules.
"""

from src.common.types import PixelBuffer, Point

__all__ = ["PixelBuffer", "Point"]
