"""
Card localization for the Geometry module.

Finds the card boundary in a raw camera frame using classical contour
analysis:
1. Grayscale + Gaussian blur
2. Canny edges with fixed thresholds
3. Dilation to bridge gaps
4. Contour extraction and quadrilateral scoring (largest convex 4-gon wins)
"""

import logging
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from src.common.image_ops import ImageLike, is_empty, to_grayscale
from src.geometry.config_loader import get_default_config
from src.geometry.normalizer import calculate_aspect_ratio
from src.geometry.types import DetectionConfig, GeometryConfig, GeometryResult

logger = logging.getLogger(__name__)


def detect_edges(gray: np.ndarray, config: DetectionConfig) -> np.ndarray:
    """
    Produce a dilated edge map for contour extraction.

    The Canny thresholds are fixed (30/100 by default). A frame-adaptive
    variant would use (0.66 * median, 1.33 * median) of the blurred image;
    it is not applied so results stay comparable across frames.

    Args:
        gray: Single-channel image.
        config: Detection configuration.

    Returns:
        Binary edge map (uint8, 0 or 255).
    """
    k = config.blur_kernel_size
    blurred = cv2.GaussianBlur(gray, (k, k), 0)

    logger.debug(f"Canny thresholds {config.canny_low:.1f}, {config.canny_high:.1f}")
    edges = cv2.Canny(blurred, config.canny_low, config.canny_high)

    kernel = cv2.getStructuringElement(
        cv2.MORPH_RECT, (config.dilate_kernel_size, config.dilate_kernel_size)
    )
    return cv2.dilate(edges, kernel, iterations=config.dilate_iterations)


def select_card_quad(
    contours: Sequence[np.ndarray], frame_area: float, config: DetectionConfig
) -> Tuple[Optional[np.ndarray], float]:
    """
    Pick the card quadrilateral among contours.

    Candidates must cover at least ``min_area_ratio`` of the frame, reduce to
    exactly 4 vertices, be convex and have an aspect ratio within
    [aspect_ratio_min, aspect_ratio_max]. The largest area wins; a later
    candidate has to exceed the current best, so ties keep the first one.

    Args:
        contours: Contours as returned by cv2.findContours.
        frame_area: Frame area in pixels.
        config: Detection configuration.

    Returns:
        Tuple of (approximated 4-point contour or None, its area).
    """
    min_area = frame_area * config.min_area_ratio
    best_approx = None
    best_area = 0.0

    for contour in contours:
        area = cv2.contourArea(contour)
        if area < min_area:
            continue

        peri = cv2.arcLength(contour, True)
        approx = cv2.approxPolyDP(contour, config.approx_epsilon_ratio * peri, True)

        if len(approx) != 4:
            continue

        if not cv2.isContourConvex(approx):
            continue

        aspect_ratio = calculate_aspect_ratio(approx)
        logger.debug(f"Contour area={area:.0f}, ratio={aspect_ratio:.2f}")

        if aspect_ratio < config.aspect_ratio_min or aspect_ratio > config.aspect_ratio_max:
            logger.debug(f"Reject ratio {aspect_ratio:.2f}")
            continue

        # Score is area only: the largest quadrilateral is the card
        if area > best_area:
            best_area = area
            best_approx = approx

    return best_approx, best_area


def find_card_corners(
    frame: ImageLike, config: Optional[GeometryConfig] = None
) -> GeometryResult:
    """
    Locate the card quadrilateral in a frame.

    Every closed contour (no hierarchy filtering) is approximated as a
    polygon and scored by select_card_quad.

    Args:
        frame: Raw camera frame.
        config: Geometry configuration. Uses the bundled config if None.

    Returns:
        GeometryResult. ``detected`` is False (confidence 0.0) when no
        candidate survives or the frame is empty.

    Example:
        >>> result = find_card_corners(frame)
        >>> if result.detected:
        ...     card = warp_to_canonical(frame, result.corners)
    """
    det = (config or get_default_config()).detection

    if is_empty(frame):
        logger.warning("find_card_corners: empty frame")
        return GeometryResult.not_detected()

    gray = to_grayscale(frame)
    frame_area = float(gray.shape[0] * gray.shape[1])
    logger.debug(f"Processing frame {gray.shape[1]}x{gray.shape[0]}")

    edges = detect_edges(gray, det)
    contours, _ = cv2.findContours(edges, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)

    if not contours:
        logger.debug("No contours found")
        return GeometryResult.not_detected()

    logger.debug(f"Found {len(contours)} contours")

    best_approx, best_area = select_card_quad(contours, frame_area, det)

    if best_approx is None:
        logger.info("No card-like quadrilateral found")
        return GeometryResult.not_detected()

    confidence = min(1.0, best_area / (frame_area * det.full_confidence_area_ratio))

    logger.info(f"Card found with confidence {confidence:.2f} (area={best_area:.0f})")

    return GeometryResult(
        detected=True,
        corners=best_approx.reshape(4, 2).astype(np.float32),
        confidence=float(confidence),
        area=float(best_area),
    )
