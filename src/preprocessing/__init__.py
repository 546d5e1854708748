"""Image Preprocessing & Field Region Extraction.

Prepares normalized card images for an external OCR engine:

Core Components:
    - frame_preprocessor: Whole-card and MRZ binarization, contrast enhancement
    - regions: Static field rectangle table and OCR whitelists
    - region_extractor: Field crops with region-specific binarization
    - config_loader: Profile configuration with Pydantic validation

Example:
    >>> from src.preprocessing import FieldType, extract_region
    >>> region = extract_region(card, FieldType.SURNAME)
    >>> ocr_engine.read(region.image, whitelist=get_ocr_whitelist(FieldType.SURNAME))
"""

from .config_loader import (
    ContrastConfig,
    MRZProfileConfig,
    OCRProfileConfig,
    PreprocessingModuleConfig,
    RegionProfileConfig,
    get_default_config,
    load_config,
)
from .frame_preprocessor import (
    binarize_for_ocr,
    binarize_mrz,
    enhance_contrast,
    extract_mrz_region,
)
from .region_extractor import (
    binarize_region,
    extract_mrz_lines,
    extract_region,
    extract_zone,
    region_to_pixel_rect,
)
from .regions import (
    BACK_MRZ_REGION,
    FRONT_REGIONS,
    ZONES,
    CardZone,
    FieldType,
    RegionDefinition,
    get_ocr_whitelist,
    get_region_definition,
    get_side_fields,
)
from .types import ExtractedRegion, PixelRect

__all__ = [
    # Configuration
    "PreprocessingModuleConfig",
    "OCRProfileConfig",
    "MRZProfileConfig",
    "RegionProfileConfig",
    "ContrastConfig",
    "load_config",
    "get_default_config",
    # Whole-card preprocessing
    "binarize_for_ocr",
    "binarize_mrz",
    "enhance_contrast",
    "extract_mrz_region",
    # Regions
    "FieldType",
    "CardZone",
    "RegionDefinition",
    "FRONT_REGIONS",
    "BACK_MRZ_REGION",
    "ZONES",
    "get_region_definition",
    "get_side_fields",
    "get_ocr_whitelist",
    "region_to_pixel_rect",
    "binarize_region",
    "extract_region",
    "extract_zone",
    "extract_mrz_lines",
    "ExtractedRegion",
    "PixelRect",
]
