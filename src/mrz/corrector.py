"""OCR error correction for MRZ lines.

MRZ text is printed in OCR-B. The correction maps visually ambiguous glyphs
toward digits, since every checked field (document number, dates, check
digits) is numeric on the Turkish ID card:

    O -> 0, I -> 1, S -> 5, B -> 8, G -> 6, D -> 0, Q -> 0, Z -> 2

Spaces and dots become the '<' filler, and anything outside [A-Z0-9<]
after uppercasing becomes '<'. The mapping is lossy: alphabetic fields
(names) must be read from the uncorrected text.

Example:
    >>> correct_ocr_errors("O1S B.")
    '015<8<'
"""

from types import MappingProxyType
from typing import Mapping

MRZ_LINE_LENGTH = 30
FILLER = "<"

OCR_CORRECTIONS: Mapping[str, str] = MappingProxyType(
    {
        "O": "0",
        "I": "1",
        "S": "5",
        "B": "8",
        "G": "6",
        "D": "0",
        "Q": "0",
        "Z": "2",
        " ": FILLER,
        ".": FILLER,
    }
)


def _is_mrz_char(c: str) -> bool:
    return ("A" <= c <= "Z") or ("0" <= c <= "9") or c == FILLER


def _upper_chars(line: str):
    """Uppercase character by character, keeping the line length."""
    for c in line:
        upper = c.upper()
        yield upper if len(upper) == 1 else FILLER


def normalize_line(line: str) -> str:
    """Uppercase a line and replace characters outside [A-Z0-9<] with '<'.

    No glyph substitution is applied, so letters survive.
    """
    return "".join(c if _is_mrz_char(c) else FILLER for c in _upper_chars(line))


def correct_ocr_errors(line: str) -> str:
    """Apply the digit-biased OCR correction to a single MRZ line.

    Args:
        line: Raw OCR text (any case, any length).

    Returns:
        Corrected line of the same length.
    """
    corrected = []
    for c in _upper_chars(line):
        if c in OCR_CORRECTIONS:
            corrected.append(OCR_CORRECTIONS[c])
        elif _is_mrz_char(c):
            corrected.append(c)
        else:
            corrected.append(FILLER)
    return "".join(corrected)


def pad_line(line: str, length: int = MRZ_LINE_LENGTH) -> str:
    """Pad a line with '<' to exactly ``length`` characters, truncating longer input."""
    return line[:length].ljust(length, FILLER)
