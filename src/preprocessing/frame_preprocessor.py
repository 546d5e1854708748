"""Image enhancement and binarization primitives for OCR.

Two binarization profiles are provided:

1. **OCR profile** (whole card): CLAHE -> non-local means denoise ->
   adaptive Gaussian threshold -> close -> median blur. The denoise step
   suppresses the guilloche/hologram background printed on ID cards.
2. **MRZ profile** (bottom band): light Gaussian blur -> adaptive Gaussian
   threshold. CLAHE and denoising are skipped because they erode the thin
   OCR-B strokes (notably the '<' filler).

All functions return new arrays and return None for empty input.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from src.common.image_ops import ImageLike, is_empty, to_grayscale, unwrap
from src.common.types import Frame
from src.preprocessing.config_loader import (
    MRZProfileConfig,
    PreprocessingModuleConfig,
    get_default_config,
)

logger = logging.getLogger(__name__)


def apply_clahe(gray: np.ndarray, clip_limit: float, tile_size: int) -> np.ndarray:
    """Clip-limited adaptive histogram equalization on a grayscale image."""
    clahe = cv2.createCLAHE(clipLimit=clip_limit, tileGridSize=(tile_size, tile_size))
    return clahe.apply(gray)


def morph_close(binary: np.ndarray, kernel_size: int) -> np.ndarray:
    """Morphological close with a rectangular kernel."""
    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))
    return cv2.morphologyEx(binary, cv2.MORPH_CLOSE, kernel)


def enhance_contrast(
    image: ImageLike, config: Optional[PreprocessingModuleConfig] = None
) -> Optional[np.ndarray]:
    """
    Return a contrast-enhanced grayscale copy of an image.

    The input buffer is never modified.

    Args:
        image: Image to enhance.
        config: Preprocessing configuration. Uses defaults if None.

    Returns:
        CLAHE-enhanced grayscale image, or None for empty input.
    """
    if is_empty(image):
        return None

    contrast = (config or get_default_config()).contrast
    return apply_clahe(
        to_grayscale(image), contrast.clahe_clip_limit, contrast.clahe_tile_size
    )


def binarize_for_ocr(
    image: ImageLike, config: Optional[PreprocessingModuleConfig] = None
) -> Optional[np.ndarray]:
    """
    Binarize an image for OCR with the full (denoising) profile.

    Args:
        image: Normalized card or any crop of it.
        config: Preprocessing configuration. Uses defaults if None.

    Returns:
        Binary image (0/255), or None for empty input.

    Example:
        >>> binary = binarize_for_ocr(card)
        >>> set(np.unique(binary)) <= {0, 255}
        True
    """
    if is_empty(image):
        return None

    profile = (config or get_default_config()).ocr_profile

    gray = to_grayscale(image)
    enhanced = apply_clahe(gray, profile.clahe_clip_limit, profile.clahe_tile_size)

    denoised = cv2.fastNlMeansDenoising(
        enhanced,
        None,
        profile.denoise_strength,
        profile.denoise_template_window,
        profile.denoise_search_window,
    )

    binary = cv2.adaptiveThreshold(
        denoised,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY,
        profile.threshold_block_size,
        profile.threshold_c,
    )

    binary = morph_close(binary, profile.close_kernel_size)
    cleaned = cv2.medianBlur(binary, profile.median_blur_size)

    logger.debug(
        f"Binarized {gray.shape[1]}x{gray.shape[0]} image "
        f"(block_size={profile.threshold_block_size}, C={profile.threshold_c})"
    )

    return cleaned


def binarize_mrz(
    image: ImageLike, profile: Optional[MRZProfileConfig] = None
) -> Optional[np.ndarray]:
    """
    Binarize an MRZ crop with the light profile (blur + adaptive threshold).

    Args:
        image: MRZ crop.
        profile: MRZ profile. Uses defaults if None.

    Returns:
        Binary image (0/255), or None for empty input.
    """
    if is_empty(image):
        return None

    profile = profile or get_default_config().mrz_profile

    gray = to_grayscale(image)
    k = profile.blur_kernel_size
    blurred = cv2.GaussianBlur(gray, (k, k), 0)

    return cv2.adaptiveThreshold(
        blurred,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY,
        profile.threshold_block_size,
        profile.threshold_c,
    )


def extract_mrz_region(
    card: ImageLike, config: Optional[PreprocessingModuleConfig] = None
) -> Optional[np.ndarray]:
    """
    Crop the MRZ band (bottom 28%) of a normalized card and binarize it.

    Args:
        card: Normalized card image.
        config: Preprocessing configuration. Uses defaults if None.

    Returns:
        Binary MRZ band spanning the full card width, or None for empty input.
    """
    if is_empty(card):
        return None

    profile = (config or get_default_config()).mrz_profile
    image, order = unwrap(card)

    height = image.shape[0]
    mrz_top = int(height * profile.top_ratio)
    band = image[mrz_top:height].copy()

    logger.debug(f"MRZ band rows [{mrz_top}, {height})")

    if band.size == 0:
        return None

    return binarize_mrz(Frame(data=band, channel_order=order), profile)
