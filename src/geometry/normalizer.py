"""
Perspective Normalization Utilities

Provides corner ordering, edge measurement and the perspective warp that
turns a detected card quadrilateral into a canonical ID-1 rectangle
(856x540 landscape or 540x856 portrait) for OCR processing.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

import cv2
import numpy as np

from src.common.image_ops import ImageLike, is_empty, unwrap
from src.common.types import Point
from src.geometry.config_loader import get_default_config
from src.geometry.types import GeometryConfig, Orientation

logger = logging.getLogger(__name__)

CornersLike = Union[np.ndarray, Sequence[Sequence[float]], Sequence[Point]]

INTERPOLATION_FLAGS = {
    "linear": cv2.INTER_LINEAR,
    "cubic": cv2.INTER_CUBIC,
    "nearest": cv2.INTER_NEAREST,
    "area": cv2.INTER_AREA,
    "lanczos": cv2.INTER_LANCZOS4,
}


def as_point_array(corners: CornersLike) -> np.ndarray:
    """
    Convert corners in any accepted form to a float32 array of shape (N, 2).

    Accepts (N, 2) arrays, OpenCV contours of shape (N, 1, 2), lists of
    [x, y] pairs and lists of Point.
    """
    if len(corners) > 0 and isinstance(corners[0], Point):
        return np.array([p.to_numpy() for p in corners], dtype=np.float32)
    return np.asarray(corners, dtype=np.float32).reshape(-1, 2)


def order_corners(pts: CornersLike) -> np.ndarray:
    """
    Order 4 points as Top-Left, Top-Right, Bottom-Right, Bottom-Left.

    The points are sorted by Y; the upper pair is split by X into TL/TR and
    the lower pair into BL/BR. Every downstream consumer of corners relies on
    this order.

    Args:
        pts: 4 points in any order, e.g. an approxPolyDP contour.

    Returns:
        Ordered float32 array of shape (4, 2): [TL, TR, BR, BL].

    Raises:
        ValueError: If input does not contain exactly 4 points.

    Example:
        >>> order_corners([[300, 150], [100, 200], [320, 400], [80, 380]])
        array([[100., 200.], [300., 150.], [320., 400.], [80., 380.]])
    """
    pts = as_point_array(pts)

    if pts.shape != (4, 2):
        raise ValueError(
            f"Expected exactly 4 points with shape (4, 2), got shape {pts.shape}"
        )

    by_y = pts[np.argsort(pts[:, 1], kind="stable")]
    top, bottom = by_y[:2], by_y[2:]

    tl, tr = (top[0], top[1]) if top[0][0] <= top[1][0] else (top[1], top[0])
    bl, br = (
        (bottom[0], bottom[1]) if bottom[0][0] <= bottom[1][0] else (bottom[1], bottom[0])
    )

    return np.array([tl, tr, br, bl], dtype=np.float32)


def calculate_edge_lengths(
    ordered: np.ndarray,
) -> Tuple[float, float, float, float]:
    """
    Calculate the 4 edge lengths of an ordered quadrilateral.

    Args:
        ordered: Corners in [TL, TR, BR, BL] order.

    Returns:
        Tuple of (width_top, width_bottom, height_left, height_right).
    """
    tl, tr, br, bl = ordered

    width_top = float(np.linalg.norm(tr - tl))
    width_bottom = float(np.linalg.norm(br - bl))
    height_left = float(np.linalg.norm(bl - tl))
    height_right = float(np.linalg.norm(br - tr))

    return width_top, width_bottom, height_left, height_right


def calculate_aspect_ratio(pts: CornersLike) -> float:
    """
    Calculate the width/height ratio of a quadrilateral.

    Averages the two width edges (TL-TR, BL-BR) and the two height edges
    (TL-BL, TR-BR) after ordering.

    Returns:
        Aspect ratio, or 0.0 for a degenerate shape (point count other than
        4, or average height below 1px).
    """
    pts = as_point_array(pts)
    if pts.shape != (4, 2):
        return 0.0

    width_top, width_bottom, height_left, height_right = calculate_edge_lengths(
        order_corners(pts)
    )
    avg_width = (width_top + width_bottom) / 2.0
    avg_height = (height_left + height_right) / 2.0

    if avg_height < 1.0:
        return 0.0

    return avg_width / avg_height


def target_size(
    ordered: np.ndarray, config: Optional[GeometryConfig] = None
) -> Tuple[int, int, Orientation]:
    """
    Choose the canonical output size for an ordered quadrilateral.

    Portrait sources (longest height edge above longest width edge) get the
    swapped target size.

    Returns:
        Tuple of (width, height, orientation).
    """
    norm = (config or get_default_config()).normalization
    width_top, width_bottom, height_left, height_right = calculate_edge_lengths(ordered)

    max_width = max(width_top, width_bottom)
    max_height = max(height_left, height_right)

    if max_height > max_width:
        return norm.target_height, norm.target_width, Orientation.PORTRAIT
    return norm.target_width, norm.target_height, Orientation.LANDSCAPE


def warp_to_canonical(
    frame: ImageLike,
    corners: CornersLike,
    config: Optional[GeometryConfig] = None,
) -> Optional[np.ndarray]:
    """
    Rectify a card quadrilateral to the canonical ID-1 rectangle.

    Args:
        frame: Source frame containing the card.
        corners: 4 card corners in any order.
        config: Geometry configuration. Uses the bundled config if None.

    Returns:
        New image of size 856x540 (landscape) or 540x856 (portrait), or None
        if the frame is empty or the corner count is not 4.

    Example:
        >>> card = warp_to_canonical(frame, result.corners)
        >>> card.shape
        (540, 856, 3)
    """
    config = config or get_default_config()

    if is_empty(frame):
        logger.warning("warp_to_canonical: empty frame")
        return None

    pts = as_point_array(corners) if corners is not None else np.empty((0, 2))
    if pts.shape != (4, 2):
        logger.warning(f"warp_to_canonical: expected 4 corners, got {len(pts)}")
        return None

    image, _ = unwrap(frame)
    ordered = order_corners(pts)
    dst_width, dst_height, orientation = target_size(ordered, config)

    logger.debug(
        f"{orientation.value} orientation detected, warping to {dst_width}x{dst_height}. "
        f"Corners: TL={ordered[0]}, TR={ordered[1]}, BR={ordered[2]}, BL={ordered[3]}"
    )

    dst = np.array(
        [
            [0, 0],  # Top-Left
            [dst_width - 1, 0],  # Top-Right
            [dst_width - 1, dst_height - 1],  # Bottom-Right
            [0, dst_height - 1],  # Bottom-Left
        ],
        dtype=np.float32,
    )

    M = cv2.getPerspectiveTransform(ordered, dst)

    warped = cv2.warpPerspective(
        image,
        M,
        (dst_width, dst_height),
        flags=INTERPOLATION_FLAGS[config.normalization.interpolation],
    )

    logger.info(f"Rectified card to {dst_width}x{dst_height} ({orientation.value})")

    return warped
