"""
Greedy single-pass color clustering.

Pixels matching a color predicate are sampled on a fixed stride in row-major
scan order and accumulated into running-centroid clusters. The dominant
cluster's centroid is the marker position.
"""

import logging
import math
from typing import List, Optional

import numpy as np

from src.common.types import PixelBuffer, Point
from src.markers.color_predicates import ColorPredicate
from src.markers.types import Cluster

logger = logging.getLogger(__name__)


def matching_pixels(
    buffer: PixelBuffer, predicate: ColorPredicate, stride: int = 2
) -> np.ndarray:
    """
    Find sampled pixels that pass the predicate.

    Args:
        buffer: Frame in RGB(A) order.
        predicate: Elementwise classifier `(r, g, b) -> bool array`.
        stride: Sampling step for rows and columns.

    Returns:
        Array of shape (N, 2) with [x, y] pixel coordinates in scan order
        (row by row, left to right).
    """
    if stride < 1:
        raise ValueError(f"stride must be at least 1, got {stride}")

    sampled = buffer.data[::stride, ::stride]
    mask = np.asarray(
        predicate(sampled[..., 0], sampled[..., 1], sampled[..., 2]), dtype=bool
    )

    # np.nonzero walks a C-ordered array row by row
    rows, cols = np.nonzero(mask)
    return np.stack([cols * stride, rows * stride], axis=1)


def add_to_clusters(clusters: List[Cluster], x: float, y: float, radius: float) -> None:
    """
    Accumulate a pixel into the first cluster whose centroid is within
    `radius`, or start a new cluster.
    """
    for cluster in clusters:
        if math.hypot(x - cluster.centroid_x, y - cluster.centroid_y) < radius:
            cluster.add(x, y)
            return
    clusters.append(Cluster(sum_x=x, sum_y=y))


def find_clusters(
    buffer: PixelBuffer,
    predicate: ColorPredicate,
    merge_radius: float = 100.0,
    stride: int = 2,
) -> List[Cluster]:
    """
    Group matching pixels into clusters, in creation order.

    Clusters are never merged after creation, so a scene with many small
    same-colored regions produces many clusters.
    """
    clusters: List[Cluster] = []
    for x, y in matching_pixels(buffer, predicate, stride).tolist():
        add_to_clusters(clusters, x, y, merge_radius)
    return clusters


def dominant_cluster(clusters: List[Cluster]) -> Optional[Cluster]:
    """Largest cluster; on equal counts the one created first wins."""
    if not clusters:
        return None
    best = clusters[0]
    for cluster in clusters[1:]:
        if cluster.count > best.count:
            best = cluster
    return best


def cluster_color(
    buffer: PixelBuffer,
    predicate: ColorPredicate,
    merge_radius: float = 100.0,
    stride: int = 2,
) -> Optional[Point]:
    """
    Locate the dominant blob of a color.

    Args:
        buffer: Frame in RGB(A) order.
        predicate: Elementwise color classifier.
        merge_radius: Pixels closer than this to a cluster centroid join it.
        stride: Sampling step for rows and columns.

    Returns:
        Centroid of the largest cluster, or None if no pixel matched.

    Example:
        >>> point = cluster_color(buffer, is_red, merge_radius=100)
        >>> if point is not None:
        ...     print(point.to_pixel())
    """
    clusters = find_clusters(buffer, predicate, merge_radius, stride)
    best = dominant_cluster(clusters)

    if best is None:
        logger.debug("No pixels matched predicate")
        return None

    logger.debug(
        f"{len(clusters)} cluster(s), dominant has {best.count} px at "
        f"({best.centroid_x:.1f}, {best.centroid_y:.1f})"
    )
    return best.centroid
