"""Type definitions for MRZ validation.

This module defines the result structures of the TD-1 MRZ checksum protocol
and the parsed identity data.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

# Points awarded per valid check digit; four checks give a maximum of 60
CHECK_SCORE = 15
MAX_TOTAL_SCORE = 4 * CHECK_SCORE


@dataclass
class ValidationResult:
    """Checksum validation outcome for three MRZ lines.

    Attributes:
        document_number_valid: Line 1 document number matches its check digit
        birth_date_valid: Line 2 birth date matches its check digit
        expiry_valid: Line 2 expiry date matches its check digit
        composite_valid: Composite check digit (line 2, last position) matches
        document_number_score: 15 if valid, else 0
        birth_date_score: 15 if valid, else 0
        expiry_score: 15 if valid, else 0
        composite_score: 15 if valid, else 0
        corrected_line1: Line 1 after OCR error correction (unpadded)
        corrected_line2: Line 2 after OCR error correction (unpadded)
        corrected_line3: Line 3 after OCR error correction (unpadded)
    """

    document_number_valid: bool = False
    birth_date_valid: bool = False
    expiry_valid: bool = False
    composite_valid: bool = False
    document_number_score: int = 0
    birth_date_score: int = 0
    expiry_score: int = 0
    composite_score: int = 0
    corrected_line1: str = ""
    corrected_line2: str = ""
    corrected_line3: str = ""

    @property
    def total_score(self) -> int:
        """Sum of awarded points (0-60)."""
        return (
            self.document_number_score
            + self.birth_date_score
            + self.expiry_score
            + self.composite_score
        )

    @property
    def corrected_lines(self) -> List[str]:
        return [self.corrected_line1, self.corrected_line2, self.corrected_line3]

    def is_fully_valid(self) -> bool:
        """Check if all four check digits matched."""
        return self.total_score == MAX_TOTAL_SCORE


@dataclass
class MRZData:
    """Identity data parsed from a TD-1 MRZ.

    Attributes:
        document_type: "I" for ID cards
        issuing_country: e.g. "TUR"
        document_number: Document number without fillers, letters kept
        birth_date: YYMMDD
        sex: "M", "F" or "<"
        expiry_date: YYMMDD
        nationality: e.g. "TUR"
        tckn: National identifier from the optional data field
        surname: Primary identifier with fillers turned into spaces
        given_names: Secondary identifier with fillers turned into spaces
        checksum_valid: All four check digits matched
        tckn_valid: The TCKN passed its own check digits
        validation: Full checksum result
        raw_lines: Lines as received from OCR
        birth_date_parsed: birth_date as a date, None if not a valid date
        expiry_date_parsed: expiry_date as a date, None if not a valid date
    """

    document_type: str
    issuing_country: str
    document_number: str
    birth_date: str
    sex: str
    expiry_date: str
    nationality: str
    tckn: str
    surname: str
    given_names: str
    checksum_valid: bool
    tckn_valid: bool
    validation: ValidationResult
    raw_lines: List[str] = field(default_factory=list)
    birth_date_parsed: Optional[date] = None
    expiry_date_parsed: Optional[date] = None


@dataclass
class MRZExtraction:
    """MRZ lines picked out of free OCR text.

    Attributes:
        lines: Up to three cleaned lines, each exactly 30 characters
        is_valid: MRZ-like lines were found (not the fallback)
        used_fallback: Lines came from the longest mostly-uppercase lines
        filler_ratio: Share of '<' over all returned characters
            (0.0 for the fallback)
        structure_score: Layout plausibility, 0-20
    """

    lines: List[str] = field(default_factory=list)
    is_valid: bool = False
    used_fallback: bool = False
    filler_ratio: float = 0.0
    structure_score: int = 0

    @property
    def has_td1_lines(self) -> bool:
        """Check if all three TD-1 lines are available."""
        return len(self.lines) == 3
