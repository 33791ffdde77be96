"""
Markers: color-based detection of the three tracker dots.

Pipeline stages:
1. Color classification (red, pink, green predicates)
2. Greedy spatial clustering of matching pixels
3. Dominant-cluster centroid per color
"""

from src.markers.clusterer import cluster_color, find_clusters
from src.markers.color_predicates import MarkerColor, is_green, is_pink, is_red
from src.markers.processor import MarkerDetector, detect_markers
from src.markers.types import ColorThresholds, DetectionConfig, MarkerSet

__all__ = [
    "MarkerDetector",
    "detect_markers",
    "cluster_color",
    "find_clusters",
    "MarkerColor",
    "is_red",
    "is_pink",
    "is_green",
    "ColorThresholds",
    "DetectionConfig",
    "MarkerSet",
]
