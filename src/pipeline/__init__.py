"""
Card Processing Pipeline

Caller-facing entry points for turning camera frames into OCR-ready images
and validating the text read back from them. Every entry point maps
unexpected errors to a neutral value.

Example:
    >>> from src.pipeline import process_for_ocr, validate_mrz
    >>> result = process_for_ocr(frame)
    >>> if result.detected:
    ...     lines = ocr_engine.read_lines(result.mrz_region)
    ...     print(validate_mrz(*lines).total_score)
"""

from src.pipeline.processor import (
    CardPipeline,
    binarize_for_ocr,
    blur_score,
    detect_glare,
    extract_mrz_region,
    extract_region,
    find_card_corners,
    process_for_ocr,
    stability,
    validate_mrz,
    validate_tckn,
    warp_to_canonical,
)
from src.pipeline.types import ProcessedFrame

__all__ = [
    "CardPipeline",
    "ProcessedFrame",
    "process_for_ocr",
    "find_card_corners",
    "warp_to_canonical",
    "binarize_for_ocr",
    "extract_mrz_region",
    "detect_glare",
    "extract_region",
    "blur_score",
    "stability",
    "validate_mrz",
    "validate_tckn",
]
