"""ICAO 9303 check digit validation for TD-1 MRZ and TCKN validation.

This module implements the 7-3-1 weighted check digit used by machine
readable travel documents, the four-field TD-1 scoring protocol, and the
check digit rules of the Turkish national identifier (TCKN), including the
search for valid TCKNs in free OCR text.

TD-1 layout checked here (0-indexed, 30 characters per line):
    Line 1: [0:5) doc type + issuer, [5:14) document number, [14] check
    Line 2: [0:6) birth date, [6] check, [7] sex, [8:14) expiry, [14] check,
            [15:18) nationality, [18:29) optional data (TCKN), [29] composite

References:
    - ICAO Doc 9303 Part 3 (check digits) and Part 5 (TD1)
"""

import logging
import re
from typing import List, Optional

from .corrector import correct_ocr_errors, pad_line
from .types import CHECK_SCORE, ValidationResult

logger = logging.getLogger(__name__)

# Cyclic check digit weights
WEIGHTS = (7, 3, 1)

TCKN_LENGTH = 11

_NON_DIGITS = re.compile(r"[^0-9\s]")
_TCKN_RUN = re.compile(r"[0-9]{11}")


def char_value(c: str) -> int:
    """Map an MRZ character to its check digit value.

    Digits map to themselves, A-Z to 10-35, '<' and anything else to 0.

    Example:
        >>> char_value("7"), char_value("A"), char_value("Z"), char_value("<")
        (7, 10, 35, 0)
    """
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "A" <= c <= "Z":
        return ord(c) - ord("A") + 10
    return 0


def calculate_checksum(data: str) -> int:
    """Calculate the ICAO 9303 check digit of a field.

    Each character value is multiplied by the weight 7, 3, 1 (cycling by
    position) and the sum is taken modulo 10.

    Args:
        data: Field text (any length, '<' counts as 0)

    Returns:
        Check digit (0-9)

    Example:
        >>> calculate_checksum("123456789")
        7
    """
    total = sum(char_value(c) * WEIGHTS[i % 3] for i, c in enumerate(data))
    return total % 10


def validate_check_digit(data: str, check_digit: str) -> bool:
    """Validate a field against its check digit character.

    Args:
        data: Field text
        check_digit: Single check digit character from the MRZ

    Returns:
        True if check_digit is an ASCII digit equal to the calculated value

    Example:
        >>> validate_check_digit("123456789", "7")
        True
        >>> validate_check_digit("123456789", "<")
        False
    """
    if len(check_digit) != 1 or not ("0" <= check_digit <= "9"):
        return False
    return calculate_checksum(data) == int(check_digit)


def _check_field(name: str, data: str, check_digit: str) -> bool:
    valid = validate_check_digit(data, check_digit)
    if valid:
        logger.debug(f"MRZ {name} valid: {data} check={check_digit}")
    else:
        logger.debug(
            f"MRZ {name} INVALID: {data} check={check_digit}, "
            f"expected={calculate_checksum(data)}"
        )
    return valid


def validate_with_score(line1: str, line2: str, line3: str) -> ValidationResult:
    """Validate three TD-1 MRZ lines and score the result.

    All lines are OCR-corrected first. For the checks each corrected line is
    padded with '<' to 30 characters and truncated to 30, so characters past
    position 30 never take part in validation. The corrected lines returned
    in the result are the unpadded corrected text.

    Checks (15 points each, 60 maximum):
        1. Document number: line1[5:14] vs line1[14]
        2. Birth date: line2[0:6] vs line2[6]
        3. Expiry date: line2[8:14] vs line2[14]
        4. Composite: line1[5:30] + line2[0:7] + line2[8:15] + line2[18:29]
           vs line2[29]

    Args:
        line1: Raw OCR text of MRZ line 1
        line2: Raw OCR text of MRZ line 2
        line3: Raw OCR text of MRZ line 3 (names; no check digit)

    Returns:
        ValidationResult with per-field flags, scores and corrected lines

    Example:
        >>> result = validate_with_score(
        ...     "I<TURA12C345672<<<<<<<<<<<<<<<",
        ...     "9001158M3001019TUR123456789504",
        ...     "YILMAZ<<AHMET<<<<<<<<<<<<<<<<<",
        ... )
        >>> result.total_score
        60
    """
    result = ValidationResult(
        corrected_line1=correct_ocr_errors(line1),
        corrected_line2=correct_ocr_errors(line2),
        corrected_line3=correct_ocr_errors(line3),
    )

    l1 = pad_line(result.corrected_line1)
    l2 = pad_line(result.corrected_line2)

    if _check_field("document number", l1[5:14], l1[14]):
        result.document_number_valid = True
        result.document_number_score = CHECK_SCORE

    if _check_field("birth date", l2[0:6], l2[6]):
        result.birth_date_valid = True
        result.birth_date_score = CHECK_SCORE

    if _check_field("expiry", l2[8:14], l2[14]):
        result.expiry_valid = True
        result.expiry_score = CHECK_SCORE

    composite = l1[5:30] + l2[0:7] + l2[8:15] + l2[18:29]
    if _check_field("composite", composite, l2[29]):
        result.composite_valid = True
        result.composite_score = CHECK_SCORE

    logger.info(
        f"MRZ validation: total={result.total_score} "
        f"(doc={result.document_number_score}, dob={result.birth_date_score}, "
        f"exp={result.expiry_score}, comp={result.composite_score})"
    )

    return result


def validate_tckn(tckn: str) -> bool:
    """Validate a Turkish national identifier (TCKN).

    Rules:
        - Exactly 11 digits, first digit not 0
        - odd = d1 + d3 + d5 + d7 + d9, even = d2 + d4 + d6 + d8
        - d10 = (odd * 7 - even) mod 10
        - d11 = (d1 + ... + d10) mod 10

    Args:
        tckn: Candidate identifier

    Returns:
        True if both check digits match

    Example:
        >>> validate_tckn("12345678950")
        True
        >>> validate_tckn("12345678951")
        False
    """
    if len(tckn) != TCKN_LENGTH or tckn[0] == "0":
        return False

    if not all("0" <= c <= "9" for c in tckn):
        return False

    digits = [int(c) for c in tckn]
    odd_sum = sum(digits[0:9:2])
    even_sum = sum(digits[1:8:2])

    # Python's modulo is already non-negative
    digit10 = (odd_sum * 7 - even_sum) % 10
    if digit10 != digits[9]:
        logger.debug(f"validate_tckn: {tckn} INVALID (d10={digit10})")
        return False

    digit11 = (odd_sum + even_sum + digit10) % 10
    valid = digit11 == digits[10]

    if valid:
        logger.debug(f"validate_tckn: {tckn} is VALID")
    else:
        logger.debug(f"validate_tckn: {tckn} INVALID (d11={digit11})")

    return valid


def extract_valid_tckns(text: str) -> List[str]:
    """Find every valid TCKN in free OCR text from the card front.

    Candidates are runs of 11 digits, plus 11-digit prefixes of digit groups
    joined across whitespace (e.g. "123 456 789 50"). Every character other
    than a digit or whitespace acts as a separator. Only candidates passing
    validate_tckn are returned, first occurrence first, without duplicates.

    Example:
        >>> extract_valid_tckns("T.C. KIMLIK NO: 123 456 789 50")
        ['12345678950']
    """
    cleaned = _NON_DIGITS.sub(" ", text)

    candidates = _TCKN_RUN.findall(cleaned)

    buffer = ""
    for group in cleaned.split():
        buffer += group
        if len(buffer) >= TCKN_LENGTH:
            candidates.append(buffer[:TCKN_LENGTH])
            buffer = group

    valid = [c for c in dict.fromkeys(candidates) if validate_tckn(c)]
    logger.debug(f"extract_valid_tckns: {len(candidates)} candidates, {len(valid)} valid")

    return valid


def extract_first_valid_tckn(text: str) -> Optional[str]:
    """First valid TCKN in the text, or None."""
    tckns = extract_valid_tckns(text)
    return tckns[0] if tckns else None


def contains_valid_tckn(text: str) -> bool:
    return bool(extract_valid_tckns(text))
