"""Unit tests for ICAO 9303 MRZ and TCKN validation."""

from src.mrz.validator import (
    calculate_checksum,
    char_value,
    contains_valid_tckn,
    extract_first_valid_tckn,
    extract_valid_tckns,
    validate_check_digit,
    validate_tckn,
    validate_with_score,
)


class TestCharValue:
    """Test character to value mapping."""

    def test_digits(self):
        """Test that digits map to themselves."""
        assert [char_value(c) for c in "0123456789"] == list(range(10))

    def test_letters(self):
        """Test that A-Z map to 10-35."""
        assert char_value("A") == 10
        assert char_value("M") == 22
        assert char_value("Z") == 35

    def test_filler_and_others(self):
        """Test that '<' and unknown characters map to 0."""
        assert char_value("<") == 0
        assert char_value("a") == 0
        assert char_value("Ş") == 0


class TestCalculateChecksum:
    """Test the 7-3-1 weighted check digit."""

    def test_known_values(self):
        """Test with hand-computed fields."""
        assert calculate_checksum("123456789") == 7
        assert calculate_checksum("900115") == 8
        assert calculate_checksum("300101") == 9
        assert calculate_checksum("A12C34567") == 2

    def test_filler_only(self):
        """Test that filler-only fields check to 0."""
        assert calculate_checksum("<<<<<<<<<") == 0
        assert calculate_checksum("") == 0

    def test_single_letter(self):
        """Test letter values with the first weight."""
        assert calculate_checksum("Z") == 5


class TestValidateCheckDigit:
    """Test check digit comparison."""

    def test_match(self):
        """Test a matching check digit."""
        assert validate_check_digit("123456789", "7") is True

    def test_mismatch(self):
        """Test a wrong check digit."""
        assert validate_check_digit("123456789", "8") is False

    def test_non_digit(self):
        """Test that non-digit check characters never match."""
        assert validate_check_digit("<<<<<<<<<", "<") is False
        assert validate_check_digit("123456789", "") is False
        assert validate_check_digit("123456789", "٧") is False


class TestValidateWithScore:
    """Test the 4-field TD-1 scoring."""

    def test_valid_mrz(self, valid_mrz_lines):
        """Test that a valid MRZ scores 60."""
        result = validate_with_score(*valid_mrz_lines)

        assert result.document_number_valid
        assert result.birth_date_valid
        assert result.expiry_valid
        assert result.composite_valid
        assert result.total_score == 60
        assert result.is_fully_valid()

    def test_ocr_errors_corrected(self, valid_mrz_lines):
        """Test that O/0 confusion in numeric fields is repaired."""
        line1, _, line3 = valid_mrz_lines
        noisy_line2 = "9OO1158M3OO1O19TUR1234567895O4"

        result = validate_with_score(line1.lower(), noisy_line2, line3)

        assert result.total_score == 60
        assert result.corrected_line2 == "9001158M3001019TUR123456789504"

    def test_composite_only_failure(self, valid_mrz_lines):
        """Test that a change in the optional data only breaks the composite."""
        line1, _, line3 = valid_mrz_lines

        result = validate_with_score(line1, "9001158M3001019TUR123456789514", line3)

        assert result.document_number_valid
        assert result.birth_date_valid
        assert result.expiry_valid
        assert not result.composite_valid
        assert result.composite_score == 0
        assert result.total_score == 45

    def test_wrong_expiry_check(self, valid_mrz_lines):
        """Test that a wrong expiry check digit also breaks the composite."""
        line1, _, line3 = valid_mrz_lines

        result = validate_with_score(line1, "9001158M3001018TUR123456789504", line3)

        assert not result.expiry_valid
        assert not result.composite_valid
        assert result.total_score == 30

    def test_extra_characters_ignored(self, valid_mrz_lines):
        """Test that characters past position 30 are ignored."""
        line1, line2, line3 = valid_mrz_lines

        result = validate_with_score(line1 + "999", line2 + "123", line3)

        assert result.total_score == 60

    def test_short_lines(self):
        """Test that short lines score 0 without raising."""
        result = validate_with_score("I<TUR", "", "")

        assert result.total_score == 0
        assert not result.is_fully_valid()
        # Corrected lines are returned without padding
        assert result.corrected_line1 == "1<TUR"
        assert result.corrected_line2 == ""

    def test_corrected_lines(self, valid_mrz_lines):
        """Test that corrected lines are exposed in order."""
        result = validate_with_score(*valid_mrz_lines)

        assert len(result.corrected_lines) == 3
        assert result.corrected_lines[0].startswith("1<TUR")


class TestValidateTCKN:
    """Test Turkish national identifier validation."""

    def test_valid_numbers(self):
        """Test known valid identifiers."""
        assert validate_tckn("12345678950") is True
        assert validate_tckn("10000000146") is True
        assert validate_tckn("11111111110") is True

    def test_negative_intermediate(self):
        """Test d10 when 7 * odd is smaller than even."""
        assert validate_tckn("19090909018") is True

    def test_wrong_check_digits(self):
        """Test wrong 10th and 11th digits."""
        assert validate_tckn("12345678940") is False
        assert validate_tckn("12345678951") is False

    def test_leading_zero(self):
        """Test that a leading zero is rejected."""
        assert validate_tckn("02345678950") is False

    def test_wrong_length(self):
        """Test that lengths other than 11 are rejected."""
        assert validate_tckn("") is False
        assert validate_tckn("1234567895") is False
        assert validate_tckn("123456789500") is False

    def test_non_digits(self):
        """Test that non-digit characters are rejected."""
        assert validate_tckn("1234567895O") is False
        assert validate_tckn("12345A78950") is False


class TestExtractValidTCKNs:
    """Test TCKN search in free OCR text."""

    def test_grouped_digits(self):
        """Test that digit groups split by spaces are joined."""
        assert extract_valid_tckns("T.C. KIMLIK NO: 123 456 789 50") == ["12345678950"]

    def test_punctuation_separated(self):
        """Test that punctuation between digit groups acts as a separator."""
        assert extract_valid_tckns("12345-678-950") == ["12345678950"]

    def test_multiple_numbers_in_order(self):
        """Test that every valid number is returned once, in reading order."""
        text = "TCKN 12345678950 ve 10000000146 (12345678950)"

        assert extract_valid_tckns(text) == ["12345678950", "10000000146"]

    def test_invalid_numbers_dropped(self):
        """Test that 11-digit runs failing the check digits are ignored."""
        assert extract_valid_tckns("12345678951") == []
        assert extract_valid_tckns("01234567890") == []

    def test_no_digits(self):
        """Test text without any digits."""
        assert extract_valid_tckns("SOYADI / SURNAME") == []
        assert extract_first_valid_tckn("SOYADI / SURNAME") is None
        assert contains_valid_tckn("SOYADI / SURNAME") is False

    def test_first_valid(self):
        """Test that the first valid number is returned."""
        text = "12345678951 10000000146 12345678950"

        assert extract_first_valid_tckn(text) == "10000000146"
        assert contains_valid_tckn(text) is True
