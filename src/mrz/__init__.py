"""MRZ Validation.

OCR error correction, ICAO 9303 check digits and TD-1 parsing for the machine
readable zone on the back of the Turkish ID card, plus TCKN validation.

Core Components:
    - corrector: Digit-biased OCR correction and line normalization
    - validator: Check digits, 4-field scoring and TCKN rules
    - parser: TD-1 field extraction and MRZ dates
    - extractor: MRZ line selection from free OCR text

Example:
    >>> from src.mrz import validate_with_score
    >>> result = validate_with_score(line1, line2, line3)
    >>> if result.is_fully_valid():
    ...     print(result.corrected_line2)
"""

from .corrector import (
    MRZ_LINE_LENGTH,
    OCR_CORRECTIONS,
    correct_ocr_errors,
    normalize_line,
    pad_line,
)
from .extractor import (
    clean_mrz_text,
    extract_mrz_lines_from_text,
    looks_like_mrz,
)
from .parser import parse_mrz_date, parse_names, parse_td1
from .types import (
    CHECK_SCORE,
    MAX_TOTAL_SCORE,
    MRZData,
    MRZExtraction,
    ValidationResult,
)
from .validator import (
    WEIGHTS,
    calculate_checksum,
    char_value,
    contains_valid_tckn,
    extract_first_valid_tckn,
    extract_valid_tckns,
    validate_check_digit,
    validate_tckn,
    validate_with_score,
)

# Alias used by the pipeline boundary
validate_mrz = validate_with_score

__all__ = [
    # Types
    "ValidationResult",
    "MRZData",
    "MRZExtraction",
    "CHECK_SCORE",
    "MAX_TOTAL_SCORE",
    # Correction
    "MRZ_LINE_LENGTH",
    "OCR_CORRECTIONS",
    "correct_ocr_errors",
    "normalize_line",
    "pad_line",
    # Validation
    "WEIGHTS",
    "char_value",
    "calculate_checksum",
    "validate_check_digit",
    "validate_with_score",
    "validate_mrz",
    "validate_tckn",
    "extract_valid_tckns",
    "extract_first_valid_tckn",
    "contains_valid_tckn",
    # Parsing
    "parse_td1",
    "parse_names",
    "parse_mrz_date",
    # Text extraction
    "clean_mrz_text",
    "looks_like_mrz",
    "extract_mrz_lines_from_text",
]
