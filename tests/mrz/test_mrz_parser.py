"""Unit tests for TD-1 MRZ parsing."""

from datetime import date

from src.mrz.parser import parse_mrz_date, parse_names, parse_td1


class TestParseTD1:
    """Test field extraction from three MRZ lines."""

    def test_valid_mrz(self, valid_mrz_lines):
        """Test extraction of every field from a valid MRZ."""
        data = parse_td1(*valid_mrz_lines)

        assert data.document_type == "I"
        assert data.issuing_country == "TUR"
        assert data.document_number == "A12C34567"
        assert data.birth_date == "900115"
        assert data.sex == "M"
        assert data.expiry_date == "300101"
        assert data.nationality == "TUR"
        assert data.tckn == "12345678950"
        assert data.surname == "YILMAZ"
        assert data.given_names == "AHMET"
        assert data.checksum_valid is True
        assert data.tckn_valid is True
        assert data.validation.total_score == 60
        assert data.raw_lines == list(valid_mrz_lines)
        assert data.birth_date_parsed == date(1990, 1, 15)
        assert data.expiry_date_parsed == date(2030, 1, 1)

    def test_numeric_fields_corrected(self, valid_mrz_lines):
        """Test that dates and TCKN come from the corrected text."""
        line1, _, line3 = valid_mrz_lines

        data = parse_td1(line1, "9OO1158M3OO1O19TUR1234567895O4", line3)

        assert data.birth_date == "900115"
        assert data.tckn == "12345678950"
        assert data.checksum_valid is True

    def test_alphabetic_fields_not_corrected(self, valid_mrz_lines):
        """Test that names containing I, O, S, Z keep their letters."""
        line1, line2, _ = valid_mrz_lines

        data = parse_td1(line1, line2, "ozdemir<<ismail<<<<<<<<<<<<<<<")

        assert data.surname == "OZDEMIR"
        assert data.given_names == "ISMAIL"

    def test_document_number_keeps_letters(self, valid_mrz_lines):
        """Test that letters in the document number are not turned into digits."""
        _, line2, line3 = valid_mrz_lines
        # Check digit 3 is computed over the corrected text A12534567
        line1 = "I<TURA12S345673" + "<" * 15

        data = parse_td1(line1, line2, line3)

        assert data.document_number == "A12S34567"
        assert data.validation.document_number_valid is True
        assert data.validation.corrected_line1[5:14] == "A12534567"

    def test_invalid_checksum_still_parsed(self, valid_mrz_lines):
        """Test that fields are returned even when checks fail."""
        line1, _, line3 = valid_mrz_lines

        data = parse_td1(line1, "9001158M3001019TUR123456789514", line3)

        assert data.tckn == "12345678951"
        assert data.checksum_valid is False
        assert data.tckn_valid is False

    def test_empty_lines(self):
        """Test that empty input yields empty fields."""
        data = parse_td1("", "", "")

        assert data.document_number == ""
        assert data.tckn == ""
        assert data.surname == ""
        assert data.checksum_valid is False
        assert data.tckn_valid is False
        assert data.birth_date_parsed is None
        assert data.expiry_date_parsed is None


class TestParseNames:
    """Test name line splitting."""

    def test_multiple_given_names(self):
        """Test that single fillers separate given names."""
        assert parse_names("YILMAZ<<AHMET<MEHMET<<<<<<<<<<<") == ("YILMAZ", "AHMET MEHMET")

    def test_compound_surname(self):
        """Test that a filler inside the surname becomes a space."""
        assert parse_names("KARA<KAYA<<AYSE<<<<<<<<<<<<<<<") == ("KARA KAYA", "AYSE")

    def test_surname_only(self):
        """Test a line without given names."""
        assert parse_names("YILMAZ<<<<<<<<<<<<<<<<<<<<<<<<") == ("YILMAZ", "")


class TestParseMRZDate:
    """Test YYMMDD conversion."""

    def test_century_pivot(self):
        """Test that years up to 30 map to the 2000s and later ones to the 1900s."""
        assert parse_mrz_date("300101") == date(2030, 1, 1)
        assert parse_mrz_date("310101") == date(1931, 1, 1)
        assert parse_mrz_date("000229") == date(2000, 2, 29)

    def test_custom_pivot(self):
        """Test that the pivot year is configurable."""
        assert parse_mrz_date("400101", pivot=50) == date(2040, 1, 1)

    def test_out_of_range(self):
        """Test that invalid months and days yield None."""
        assert parse_mrz_date("901315") is None
        assert parse_mrz_date("900100") is None
        assert parse_mrz_date("900132") is None
        assert parse_mrz_date("900231") is None

    def test_malformed(self):
        """Test that non-digit or wrong-length input yields None."""
        assert parse_mrz_date("9001A5") is None
        assert parse_mrz_date("90011") is None
        assert parse_mrz_date("<<<<<<") is None
