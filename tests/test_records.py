"""
Intel HEX Record Unit Tests
===========================

Tests for record parsing, checksum calculation and record rendering.

Test Categories
---------------
1. RecordType: Names and membership
2. Checksum: Calculation and the checksum law
3. Parsing: Grammar acceptance and rejection
4. Validation: Checksum verification on parsed records
5. Views: Integer, hex, description and canonical text
"""

import pytest

from hexbin.ihex import (
    RecordType,
    HexRecord,
    parse_record,
    calculate_record_checksum,
    verify_record_checksum,
)
from hexbin.errors import (
    HexBinError,
    RecordError,
    MalformedLineError,
    ChecksumMismatchError,
)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def data_line() -> str:
    """
    A DATA record: 3 bytes (02 33 7A) at 0x0030.

    Checksum: 0x03 + 0x00 + 0x30 + 0x00 + 0x02 + 0x33 + 0x7A = 0xE2
              0x100 - 0xE2 = 0x1E
    """
    return ":0300300002337A1E"


@pytest.fixture
def data_record(data_line: str) -> HexRecord:
    return HexRecord.parse(1, data_line)


# =============================================================================
# Record Type Tests
# =============================================================================

class TestRecordType:
    """Tests for RecordType enum and methods."""

    def test_standard_codes(self):
        assert RecordType.DATA == 0x00
        assert RecordType.EOF == 0x01
        assert RecordType.EXTENDED_SEGMENT_ADDRESS == 0x02
        assert RecordType.START_SEGMENT_ADDRESS == 0x03
        assert RecordType.EXTENDED_LINEAR_ADDRESS == 0x04
        assert RecordType.START_LINEAR_ADDRESS == 0x05

    def test_is_known(self):
        for code in range(6):
            assert RecordType.is_known(code)
        assert not RecordType.is_known(0x06)
        assert not RecordType.is_known(0xFF)

    def test_get_name(self):
        assert RecordType.get_name(0) == "DATA"
        assert RecordType.get_name(2) == "EXTENDED_SEGMENT_ADDRESS"
        assert RecordType.get_name(5) == "START_LINEAR_ADDRESS"

    def test_get_name_unknown(self):
        assert RecordType.get_name(0x07) == "UNKNOWN(0x07)"


# =============================================================================
# Checksum Tests
# =============================================================================

class TestChecksum:
    """Tests for record checksum calculation."""

    def test_data_record_checksum(self):
        assert calculate_record_checksum(3, 0x0030, 0, bytes([0x02, 0x33, 0x7A])) == 0x1E

    def test_eof_checksum(self):
        assert calculate_record_checksum(0, 0x0000, 1, b"") == 0xFF

    def test_zero_sum_gives_zero_checksum(self):
        """(0x100 - 0) & 0xFF must be 0, not 0x100."""
        assert calculate_record_checksum(0, 0x0000, 0, b"") == 0x00

    def test_data_sum_truncated(self):
        """Data sums above 0xFF wrap before being added."""
        data = bytes([0xFF] * 16)
        # 16 * 0xFF = 0xFF0 -> 0xF0; 0x10 + 0xF0 = 0x100 -> 0x00
        assert calculate_record_checksum(16, 0x0000, 0, data) == 0x00

    def test_address_bytes_both_counted(self):
        assert calculate_record_checksum(0, 0x1234, 0, b"") == (0x100 - 0x46) & 0xFF

    def test_verify_valid(self):
        assert verify_record_checksum(3, 0x0030, 0, bytes([0x02, 0x33, 0x7A]), 0x1E)

    def test_verify_invalid(self):
        assert not verify_record_checksum(3, 0x0030, 0, bytes([0x02, 0x33, 0x7A]), 0x1F)

    @pytest.mark.parametrize("line", [
        ":0300300002337A1E",
        ":00000001FF",
        ":020000021000EC",
        ":0400000300003800C1",
        ":10010000214601360121470136007EFE09D2190140",
    ])
    def test_checksum_law(self, line):
        """All record bytes including the checksum sum to 0 mod 256."""
        record = HexRecord.parse(1, line)
        total = (
            record.size
            + (record.address >> 8)
            + (record.address & 0xFF)
            + record.record_type
            + sum(record.data)
            + record.checksum
        )
        assert total % 256 == 0
        assert record.is_valid()


# =============================================================================
# Parser Tests
# =============================================================================

class TestParse:
    """Tests for HexRecord.parse()."""

    def test_parse_data_record(self, data_record: HexRecord):
        assert data_record.line_number == 1
        assert data_record.size == 3
        assert data_record.address == 0x0030
        assert data_record.record_type == RecordType.DATA
        assert data_record.data == bytes([0x02, 0x33, 0x7A])
        assert data_record.checksum == 0x1E

    def test_parse_eof_record(self):
        record = HexRecord.parse(7, ":00000001FF")
        assert record.line_number == 7
        assert record.size == 0
        assert record.record_type == RecordType.EOF
        assert record.data == b""
        assert record.checksum == 0xFF

    def test_parse_lowercase(self):
        record = HexRecord.parse(1, ":0300300002337a1e")
        assert record.data == bytes([0x02, 0x33, 0x7A])
        assert record.checksum == 0x1E

    @pytest.mark.parametrize("suffix", ["\n", "\r\n", "  ", "\t\n"])
    def test_trailing_whitespace_allowed(self, data_line: str, suffix: str):
        record = HexRecord.parse(1, data_line + suffix)
        assert record.checksum == 0x1E

    def test_unknown_type_parses(self):
        """Undefined type codes are only rejected by the assembler."""
        record = HexRecord.parse(1, ":00000007F9")
        assert record.record_type == 0x07
        assert record.type_name == "UNKNOWN(0x07)"

    def test_size_not_cross_checked(self):
        """Declared size is kept even when it disagrees with the data."""
        record = HexRecord.parse(1, ":0500300002337A1E")
        assert record.size == 5
        assert len(record.data) == 3
        assert not record.is_valid()

    def test_parse_record_function(self, data_line: str):
        assert parse_record(3, data_line) == HexRecord.parse(3, data_line)

    @pytest.mark.parametrize("text", [
        "0300300002337A1E",         # missing colon
        ";0300300002337A1E",        # wrong start code
        ":0300300002337A1",         # odd number of digits
        ":0300300002337G1E",        # non-hex character
        ":00000001",                # no checksum
        ":",                        # nothing at all
        " :00000001FF",             # leading whitespace
        ":00000001FF x",            # trailing garbage
        ":0000 0001FF",             # embedded space
        ":00000001FF\x1c",          # non-ASCII whitespace
        ":00000001FF\u2028",        # line separator
    ])
    def test_malformed(self, text: str):
        with pytest.raises(MalformedLineError):
            HexRecord.parse(4, text)

    def test_malformed_error_details(self):
        with pytest.raises(MalformedLineError) as exc_info:
            HexRecord.parse(12, "garbage")
        error = exc_info.value
        assert error.line_number == 12
        assert error.text == "garbage"
        assert "line 12" in str(error)
        assert "garbage" in str(error)

    def test_malformed_is_record_error(self):
        with pytest.raises(RecordError):
            HexRecord.parse(1, "nope")
        with pytest.raises(HexBinError):
            HexRecord.parse(1, "nope")

    def test_records_are_immutable(self, data_record: HexRecord):
        with pytest.raises(AttributeError):
            data_record.address = 0


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidate:
    """Tests for checksum validation of parsed records."""

    def test_valid_record(self, data_record: HexRecord):
        data_record.validate()
        assert data_record.is_valid()
        assert data_record.expected_checksum() == 0x1E

    def test_checksum_mismatch(self):
        record = HexRecord.parse(1, ":0300300002337A1F")
        assert not record.is_valid()

        with pytest.raises(ChecksumMismatchError) as exc_info:
            record.validate()

        error = exc_info.value
        assert error.line_number == 1
        assert error.expected == 0x1E
        assert error.actual == 0x1F
        assert "expected 0x1E" in str(error)
        assert "got 0x1F" in str(error)
        assert "(INVALID CHECKSUM)" in error.detail


# =============================================================================
# View Tests
# =============================================================================

class TestViews:
    """Tests for record rendering helpers."""

    def test_data_as_integer(self):
        record = HexRecord.parse(1, ":020000021000EC")
        assert record.data_as_integer() == 0x1000

    def test_data_as_integer_big_endian(self, data_record: HexRecord):
        assert data_record.data_as_integer() == 0x02337A

    def test_data_as_integer_empty(self):
        assert HexRecord.parse(1, ":00000001FF").data_as_integer() == 0

    def test_data_as_bytes(self, data_record: HexRecord):
        assert data_record.data_as_bytes() == b"\x02\x33\x7A"

    def test_data_as_hex(self, data_record: HexRecord):
        assert data_record.data_as_hex() == "02337A"
        assert data_record.data_as_hex(" ") == "02 33 7A"

    def test_describe(self, data_record: HexRecord):
        assert data_record.describe() == "0001: DATA: 3 bytes from 0x0030: 02 33 7A"
        assert str(data_record) == data_record.describe()

    def test_describe_eof(self):
        record = HexRecord.parse(2, ":00000001FF")
        assert record.describe() == "0002: EOF: 0 bytes from 0x0000: "

    def test_describe_invalid_checksum(self):
        record = HexRecord.parse(1, ":0300300002337A1F")
        assert record.describe().endswith("02 33 7A (INVALID CHECKSUM)")

    @pytest.mark.parametrize("line", [
        ":0300300002337A1E",
        ":00000001FF",
        ":020000021000EC",
        ":10010000214601360121470136007EFE09D2190140",
    ])
    def test_round_trip(self, line: str):
        assert HexRecord.parse(1, line).to_text() == line

    def test_round_trip_normalizes(self):
        assert HexRecord.parse(1, ":0300300002337a1e \n").to_text() == ":0300300002337A1E"
