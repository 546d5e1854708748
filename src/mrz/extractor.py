"""MRZ line selection from free OCR text.

An OCR engine run on the MRZ band returns whatever it reads, one string per
detected text line: noise, partial lines and the MRZ itself. This module
cleans those strings into the MRZ alphabet and picks the lines that look like
MRZ, ready for validate_with_score and parse_td1.

Selection:
    1. Clean every line (uppercase, separators to '<', drop other characters)
    2. Keep lines of at least 15 characters that look like MRZ
    3. Pad or truncate to 30, drop duplicates, keep the first three
    4. Without any MRZ-like line, fall back to the three longest lines that
       are mostly uppercase letters and fillers

Example:
    >>> extraction = extract_mrz_lines_from_text(ocr_text)
    >>> if extraction.has_td1_lines:
    ...     data = parse_td1(*extraction.lines)
"""

import logging
from typing import List, Sequence, Union

from .corrector import FILLER, MRZ_LINE_LENGTH, pad_line
from .types import MRZExtraction

logger = logging.getLogger(__name__)

MRZ_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<")

MIN_CANDIDATE_LENGTH = 15
MIN_MRZ_CHAR_RATIO = 0.6
MIN_FALLBACK_UPPER_RATIO = 0.7
MAX_LINES = 3

# Data lines 2 and 3 are the minimum for a usable read
EXPECTED_DATA_LINES = 2

MIN_FILLER_RATIO = 0.15
MAX_FILLER_RATIO = 0.40
MAX_STRUCTURE_SCORE = 20
MAX_FALLBACK_SCORE = 10

# Separators OCR engines produce where the MRZ prints '<'
_SEPARATORS = " -_.,"
# Vertical strokes read in place of 'I'
_STROKES = "|!"


def clean_mrz_text(text: str) -> str:
    """Map raw OCR text onto the MRZ alphabet.

    Separators become '<', vertical strokes become 'I', and any other
    character outside [A-Z0-9<] is dropped. Digits are kept as read; the
    digit-biased correction happens later, during validation.

    Example:
        >>> clean_mrz_text("i<tur a12c34567-2 |")
        'I<TUR<A12C34567<2<I'
    """
    cleaned = []
    for c in text.upper():
        if c in _SEPARATORS:
            cleaned.append(FILLER)
        elif c in _STROKES:
            cleaned.append("I")
        elif c in MRZ_ALPHABET:
            cleaned.append(c)
    return "".join(cleaned)


def looks_like_mrz(line: str) -> bool:
    """Check if a line plausibly belongs to an MRZ.

    The line needs at least 15 characters, at least 60% of them from the MRZ
    alphabet, an uppercase letter, and a filler or a digit.
    """
    if len(line) < MIN_CANDIDATE_LENGTH:
        return False

    valid_ratio = sum(c in MRZ_ALPHABET for c in line) / len(line)
    has_upper = any("A" <= c <= "Z" for c in line)
    has_filler_or_digit = any(c == FILLER or "0" <= c <= "9" for c in line)

    return valid_ratio >= MIN_MRZ_CHAR_RATIO and has_upper and has_filler_or_digit


def calculate_filler_ratio(lines: Sequence[str]) -> float:
    total = sum(len(line) for line in lines)
    if total == 0:
        return 0.0
    return sum(line.count(FILLER) for line in lines) / total


def calculate_structure_score(lines: Sequence[str], filler_ratio: float) -> int:
    """Score how much a set of lines resembles a TD-1 MRZ (0-20).

    Points:
        - Line count: 8 for two or more lines, 4 for a single line
        - Length: 6 if every line has 30 characters, 3 if at least one does
        - Alphabet: 3 if every line only uses [A-Z0-9<]
        - Fillers: 3 if the filler ratio is within [0.15, 0.40]
    """
    score = 0

    if len(lines) >= EXPECTED_DATA_LINES:
        score += 8
    elif len(lines) == 1:
        score += 4

    if lines and all(len(line) == MRZ_LINE_LENGTH for line in lines):
        score += 6
    elif any(len(line) == MRZ_LINE_LENGTH for line in lines):
        score += 3

    if lines and all(set(line) <= MRZ_ALPHABET for line in lines):
        score += 3

    if MIN_FILLER_RATIO <= filler_ratio <= MAX_FILLER_RATIO:
        score += 3

    return min(score, MAX_STRUCTURE_SCORE)


def _upper_ratio(line: str) -> float:
    return sum(("A" <= c <= "Z") or c == FILLER for c in line) / len(line)


def _fallback_lines(cleaned: List[str]) -> List[str]:
    """Three longest mostly-uppercase lines, in their original order."""
    indexed = [
        (i, line) for i, line in enumerate(cleaned) if _upper_ratio(line) > MIN_FALLBACK_UPPER_RATIO
    ]
    longest = sorted(indexed, key=lambda item: len(item[1]), reverse=True)[:MAX_LINES]
    return [pad_line(line) for _, line in sorted(longest)]


def extract_mrz_lines_from_text(ocr_text: Union[str, Sequence[str]]) -> MRZExtraction:
    """
    Pick the MRZ lines out of raw OCR output.

    Args:
        ocr_text: Multi-line OCR text, or one string per OCR line.

    Returns:
        MRZExtraction with up to three 30-character lines. Lines found by
        the fallback are flagged and get a partial structure score of at
        most 10; no usable line yields an empty extraction.

    Example:
        >>> text = "REPUBLIC OF TURKEY\\nI<TURA12C345672<<<<<<<<<<<<<<<\\n..."
        >>> extract_mrz_lines_from_text(text).lines[0]
        'I<TURA12C345672<<<<<<<<<<<<<<<'
    """
    raw_lines = ocr_text.splitlines() if isinstance(ocr_text, str) else list(ocr_text)

    cleaned = [clean_mrz_text(line) for line in raw_lines]
    cleaned = [line for line in cleaned if len(line) >= MIN_CANDIDATE_LENGTH]
    logger.debug(f"MRZ text: {len(raw_lines)} raw lines, {len(cleaned)} after cleaning")

    candidates = [line for line in cleaned if looks_like_mrz(line)]

    if not candidates:
        fallback = _fallback_lines(cleaned)
        if not fallback:
            logger.info("No MRZ-like lines in OCR text")
            return MRZExtraction()

        logger.info(f"No MRZ-like lines, using {len(fallback)} fallback lines")
        return MRZExtraction(
            lines=fallback,
            used_fallback=True,
            structure_score=min(len(fallback) * 3, MAX_FALLBACK_SCORE),
        )

    # dict keeps the first occurrence of each line in order
    lines = list(dict.fromkeys(pad_line(line) for line in candidates))[:MAX_LINES]
    filler_ratio = calculate_filler_ratio(lines)
    score = calculate_structure_score(lines, filler_ratio)

    logger.info(
        f"MRZ text: {len(lines)} lines, filler_ratio={filler_ratio:.2f}, score={score}"
    )

    return MRZExtraction(
        lines=lines,
        is_valid=True,
        filler_ratio=filler_ratio,
        structure_score=score,
    )
