"""
Frame quality scoring for auto-capture gating.

Evaluates frames (raw or normalized) using:
1. Glare (share of saturated pixels)
2. Blur (variance of Laplacian)
3. Stability (mean absolute difference to the previous frame)

Each metric is computed independently per call; the only history is the
previous frame the caller passes in.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from src.common.image_ops import ImageLike, is_empty, to_grayscale, unwrap
from src.common.types import Frame
from src.preprocessing.region_extractor import extract_zone
from src.preprocessing.regions import CardZone
from src.quality.types import QualityConfig, QualityMetrics

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = QualityConfig()


def detect_glare(
    image: ImageLike,
    mask: Optional[np.ndarray] = None,
    config: QualityConfig = DEFAULT_CONFIG,
) -> float:
    """
    Calculate the share of saturated (glare) pixels.

    Args:
        image: Input image (grayscale or color).
        mask: Optional mask of the same size (2D, or HxWxC with a pixel
              selected when any channel is non-zero); only selected pixels
              are counted, both as glare and as total.
        config: Quality configuration.

    Returns:
        Glare score in [0.0, 1.0]. An empty image (or an empty mask) scores
        1.0, the worst case.

    Example:
        >>> image = np.full((100, 100), 128, dtype=np.uint8)
        >>> image[:10] = 255
        >>> detect_glare(image)
        0.1
    """
    if is_empty(image):
        return 1.0

    gray = to_grayscale(image)
    bright = gray >= config.glare_threshold

    if mask is not None:
        if mask.shape[:2] != gray.shape:
            raise ValueError(
                f"Mask shape {mask.shape[:2]} does not match image shape {gray.shape}"
            )
        if mask.ndim == 3:
            # Multi-channel masks select a pixel when any channel is set
            selected = np.any(mask > 0, axis=2)
        else:
            selected = mask > 0
        total_pixels = int(np.count_nonzero(selected))
        bright_pixels = int(np.count_nonzero(bright & selected))
    else:
        total_pixels = gray.size
        bright_pixels = int(np.count_nonzero(bright))

    if total_pixels == 0:
        return 1.0

    glare = bright_pixels / total_pixels
    logger.debug(f"Glare: {bright_pixels}/{total_pixels} = {glare:.3f}")

    return float(glare)


def zone_glare(
    card: ImageLike, zone: CardZone, config: QualityConfig = DEFAULT_CONFIG
) -> float:
    """
    Calculate glare inside an auxiliary card zone (hologram, chip).

    Args:
        card: Normalized card image.
        zone: Zone to inspect.

    Returns:
        Glare score of the zone crop, 1.0 for an empty card.
    """
    _, order = unwrap(card)
    roi = extract_zone(card, zone)
    if roi is None:
        return 1.0
    return detect_glare(Frame(data=roi, channel_order=order), config=config)


def calculate_blur_score(image: ImageLike, config: QualityConfig = DEFAULT_CONFIG) -> float:
    """
    Calculate a sharpness score from the variance of the Laplacian.

    Typical raw variance is below 10 for blurry frames and above 100 for very
    sharp ones; the variance is multiplied by 20 and capped at 100.

    Returns:
        Score in [0.0, 100.0]; higher is sharper. 0.0 for an empty image.
    """
    if is_empty(image):
        return 0.0

    gray = to_grayscale(image)
    laplacian = cv2.Laplacian(gray, cv2.CV_64F)
    variance = float(laplacian.var())

    scaled = variance * config.blur_scale
    score = float(min(config.blur_max, max(0.0, scaled)))

    logger.debug(f"Blur score: raw={variance:.2f}, scaled={scaled:.2f}")

    return score


def calculate_stability(
    current: ImageLike,
    previous: ImageLike,
    config: QualityConfig = DEFAULT_CONFIG,
) -> float:
    """
    Compare a frame with the previous one.

    Frames of different size are both resized to 200x126 first.

    Returns:
        1 - mean(|current - previous|) / 255, in [0.0, 1.0] for 8-bit
        input; 0.0 if either frame is empty.
    """
    if is_empty(current) or is_empty(previous):
        return 0.0

    curr_gray = to_grayscale(current)
    prev_gray = to_grayscale(previous)

    if curr_gray.shape != prev_gray.shape:
        size = (config.stability_width, config.stability_height)
        curr_gray = cv2.resize(curr_gray, size)
        prev_gray = cv2.resize(prev_gray, size)

    diff = cv2.absdiff(curr_gray, prev_gray)
    mean_diff = float(np.mean(diff))
    stability = 1.0 - mean_diff / 255.0

    logger.debug(f"Stability: {stability:.3f} (mean diff={mean_diff:.2f})")

    return stability


def assess_frame_quality(
    image: ImageLike,
    previous: Optional[ImageLike] = None,
    config: QualityConfig = DEFAULT_CONFIG,
) -> QualityMetrics:
    """
    Compute all quality metrics for a frame.

    Args:
        image: Current frame (raw or normalized).
        previous: Previous frame; stability is None when omitted.
        config: Quality configuration.

    Returns:
        QualityMetrics.

    Example:
        >>> metrics = assess_frame_quality(frame, previous=last_frame)
        >>> print(f"glare={metrics.glare_score:.2f}, blur={metrics.blur_score:.0f}")
        glare=0.01, blur=87
    """
    metrics = QualityMetrics(
        glare_score=detect_glare(image, config=config),
        blur_score=calculate_blur_score(image, config),
        stability_score=(
            calculate_stability(image, previous, config) if previous is not None else None
        ),
    )

    logger.info(
        f"Frame quality: glare={metrics.glare_score:.3f}, "
        f"blur={metrics.blur_score:.1f}, stability={metrics.stability_score}"
    )

    return metrics
