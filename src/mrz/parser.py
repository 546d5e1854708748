"""TD-1 MRZ field extraction.

Turns three OCR'd MRZ lines into structured identity data. Numeric fields
(dates, TCKN) come from the OCR-corrected lines used for checksum validation;
alphanumeric and alphabetic fields (document type, document number,
countries, sex, names) come from the normalized raw text, since the
digit-biased correction would turn letters such as I, O, S or Z into digits.
"""

import logging
from datetime import date
from typing import Optional

from .corrector import FILLER, normalize_line, pad_line
from .types import MRZData
from .validator import validate_tckn, validate_with_score

logger = logging.getLogger(__name__)

NAME_SEPARATOR = FILLER * 2

# Two-digit years up to this value are read as 20YY, later ones as 19YY
CENTURY_PIVOT = 30


def _strip_filler(value: str) -> str:
    return value.replace(FILLER, "").strip()


def _filler_to_space(value: str) -> str:
    return " ".join(value.replace(FILLER, " ").split())


def parse_mrz_date(yymmdd: str, pivot: int = CENTURY_PIVOT) -> Optional[date]:
    """Convert an MRZ YYMMDD field to a date.

    Args:
        yymmdd: Six ASCII digits.
        pivot: Largest two-digit year mapped to the 2000s.

    Returns:
        The date, or None when the field is not six digits, the month is
        outside 1-12, the day outside 1-31, or the day does not exist in
        that month.

    Example:
        >>> parse_mrz_date("900115")
        datetime.date(1990, 1, 15)
        >>> parse_mrz_date("300101")
        datetime.date(2030, 1, 1)
        >>> parse_mrz_date("901315") is None
        True
    """
    if len(yymmdd) != 6 or not all("0" <= c <= "9" for c in yymmdd):
        return None

    yy, mm, dd = int(yymmdd[0:2]), int(yymmdd[2:4]), int(yymmdd[4:6])
    if not (1 <= mm <= 12 and 1 <= dd <= 31):
        return None

    year = 2000 + yy if yy <= pivot else 1900 + yy
    try:
        return date(year, mm, dd)
    except ValueError:
        logger.debug(f"parse_mrz_date: {yymmdd} is not a calendar date")
        return None


def parse_names(line3: str):
    """Split the name line into (surname, given names).

    Example:
        >>> parse_names("YILMAZ<<AHMET<MEHMET<<<<<<<<<<<")
        ('YILMAZ', 'AHMET MEHMET')
    """
    surname, _, given = normalize_line(line3).partition(NAME_SEPARATOR)
    return _filler_to_space(surname), _filler_to_space(given)


def parse_td1(line1: str, line2: str, line3: str) -> MRZData:
    """
    Parse a TD-1 MRZ (three lines of 30 characters).

    Args:
        line1: Raw OCR text of line 1
        line2: Raw OCR text of line 2
        line3: Raw OCR text of line 3

    Returns:
        MRZData with the extracted fields and the checksum result. Missing
        characters read as '<', so short input yields empty fields rather
        than an error.

    Example:
        >>> data = parse_td1(
        ...     "I<TURA12C345672<<<<<<<<<<<<<<<",
        ...     "9001158M3001019TUR123456789504",
        ...     "YILMAZ<<AHMET<<<<<<<<<<<<<<<<<",
        ... )
        >>> data.tckn, data.surname, data.checksum_valid
        ('12345678950', 'YILMAZ', True)
    """
    validation = validate_with_score(line1, line2, line3)

    corrected2 = pad_line(validation.corrected_line2)
    text1 = pad_line(normalize_line(line1))
    text2 = pad_line(normalize_line(line2))

    tckn = _strip_filler(corrected2[18:29])
    birth_date = corrected2[0:6]
    expiry_date = corrected2[8:14]
    surname, given_names = parse_names(line3)

    data = MRZData(
        document_type=_strip_filler(text1[0]),
        issuing_country=_strip_filler(text1[2:5]),
        document_number=_strip_filler(text1[5:14]),
        birth_date=birth_date,
        sex=text2[7],
        expiry_date=expiry_date,
        nationality=_strip_filler(text2[15:18]),
        tckn=tckn,
        surname=surname,
        given_names=given_names,
        checksum_valid=validation.is_fully_valid(),
        tckn_valid=validate_tckn(tckn),
        validation=validation,
        raw_lines=[line1, line2, line3],
        birth_date_parsed=parse_mrz_date(birth_date),
        expiry_date_parsed=parse_mrz_date(expiry_date),
    )

    logger.info(
        f"Parsed MRZ: doc={data.document_number}, tckn={data.tckn}, "
        f"checksum_valid={data.checksum_valid}, tckn_valid={data.tckn_valid}"
    )

    return data
