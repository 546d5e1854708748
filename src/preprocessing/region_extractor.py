"""Field region extraction from a normalized card.

Crops a named field's rectangle and applies the preprocessing that suits it:

- PHOTO: returned untouched (feeds face matching, not OCR)
- MRZ: light MRZ profile (blur + adaptive threshold)
- text fields: CLAHE -> optional inversion -> adaptive threshold with the
  region's block size/constant, or Otsu when the block size is 0 -> close

Example:
    >>> region = extract_region(card, FieldType.TCKN)
    >>> region.rect
    PixelRect(x=25, y=108, width=239, height=64)
"""

import logging
from typing import List, Optional, Union

import cv2
import numpy as np

from src.common.image_ops import ImageLike, crop, is_empty, to_grayscale, unwrap
from src.common.types import Frame
from src.preprocessing.config_loader import (
    PreprocessingModuleConfig,
    RegionProfileConfig,
    get_default_config,
)
from src.preprocessing.frame_preprocessor import apply_clahe, binarize_mrz, morph_close
from src.preprocessing.regions import (
    MRZ_LINE_ZONES,
    ZONES,
    CardZone,
    FieldType,
    RegionDefinition,
    as_field_type,
    get_region_definition,
)
from src.preprocessing.types import ExtractedRegion, PixelRect

logger = logging.getLogger(__name__)


def region_to_pixel_rect(
    region: RegionDefinition, card_width: int, card_height: int
) -> PixelRect:
    """
    Convert a normalized region to a pixel rectangle inside the card.

    x and y are clamped to [0, dim - 1]; width and height to at least 1px
    and at most what is left of the card past x/y.

    Raises:
        ValueError: If the card size is not positive.
    """
    if card_width < 1 or card_height < 1:
        raise ValueError(f"Invalid card size: {card_width}x{card_height}")

    x = int(region.x_pct * card_width)
    y = int(region.y_pct * card_height)
    w = int(region.w_pct * card_width)
    h = int(region.h_pct * card_height)

    x = max(0, min(x, card_width - 1))
    y = max(0, min(y, card_height - 1))
    w = max(1, min(w, card_width - x))
    h = max(1, min(h, card_height - y))

    return PixelRect(x=x, y=y, width=w, height=h)


def binarize_region(
    roi: ImageLike,
    region: RegionDefinition,
    profile: Optional[RegionProfileConfig] = None,
) -> Optional[np.ndarray]:
    """
    Binarize a text field crop with its region-specific parameters.

    Args:
        roi: Field crop.
        region: Region definition carrying invert/block/C hints.
        profile: Shared contrast parameters. Uses defaults if None.

    Returns:
        Binary image (0/255), or None for empty input.
    """
    if is_empty(roi):
        return None

    profile = profile or get_default_config().region_profile

    gray = to_grayscale(roi)
    enhanced = apply_clahe(gray, profile.clahe_clip_limit, profile.clahe_tile_size)

    if region.invert:
        enhanced = cv2.bitwise_not(enhanced)

    if region.uses_global_threshold:
        _, binary = cv2.threshold(enhanced, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
    else:
        binary = cv2.adaptiveThreshold(
            enhanced,
            255,
            cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY,
            region.effective_block_size,
            region.constant_c,
        )

    return morph_close(binary, profile.close_kernel_size)


def _crop_region(card: ImageLike, region: RegionDefinition):
    image, order = unwrap(card)
    rect = region_to_pixel_rect(region, image.shape[1], image.shape[0])
    roi = crop(image, rect.x, rect.y, rect.width, rect.height)
    return Frame(data=roi, channel_order=order), rect


def extract_region(
    card: ImageLike,
    field_type: Union[FieldType, int],
    is_back_side: bool = False,
    config: Optional[PreprocessingModuleConfig] = None,
) -> Optional[ExtractedRegion]:
    """
    Crop and preprocess one field of a normalized card.

    Args:
        card: Normalized card image.
        field_type: Field to extract (FieldType or its integer ordinal).
        is_back_side: Look the field up in the back-side table.
        config: Preprocessing configuration. Uses defaults if None.

    Returns:
        ExtractedRegion, or None for an empty card.

    Raises:
        ValueError: If field_type is not a known ordinal.
    """
    if is_empty(card):
        logger.warning("extract_region: empty card")
        return None

    config = config or get_default_config()
    field_type = as_field_type(field_type)
    region = get_region_definition(field_type, is_back_side)

    roi, rect = _crop_region(card, region)
    logger.debug(f"extract_region: type={field_type.name}, rect={rect.to_tuple()}")

    if field_type == FieldType.PHOTO:
        image = roi.data
    elif field_type == FieldType.MRZ:
        image = binarize_mrz(roi, config.mrz_profile)
    else:
        image = binarize_region(roi, region, config.region_profile)

    return ExtractedRegion(field_type=field_type, image=image, rect=rect)


def extract_zone(card: ImageLike, zone: CardZone) -> Optional[np.ndarray]:
    """
    Crop an auxiliary zone (hologram, chip, barcode, MRZ line) unprocessed.

    Returns:
        Raw crop, or None for an empty card.
    """
    if is_empty(card):
        return None

    roi, _ = _crop_region(card, ZONES[zone])
    return roi.data


def extract_mrz_lines(
    card: ImageLike, config: Optional[PreprocessingModuleConfig] = None
) -> List[np.ndarray]:
    """
    Crop the three MRZ lines of a back-side card for line-by-line OCR.

    Each line is binarized with its own region hints (inverted, block 11).

    Returns:
        List of three binary line images, or an empty list for an empty card.
    """
    if is_empty(card):
        return []

    profile = (config or get_default_config()).region_profile
    lines = []
    for zone in MRZ_LINE_ZONES:
        region = ZONES[zone]
        roi, rect = _crop_region(card, region)
        logger.debug(f"MRZ {zone.value}: rect={rect.to_tuple()}")
        lines.append(binarize_region(roi, region, profile))

    return lines
