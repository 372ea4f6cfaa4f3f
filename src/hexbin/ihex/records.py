"""
Intel HEX Record Definitions
============================

This module defines the data structure for a single Intel HEX record
(one line of a .hex file) and the parser that produces it.

Record Format
-------------
Each record is one ASCII line:

    :SSAAAATTDD...DDCC

    :       Start code
    SS      Data byte count (2 hex digits)
    AAAA    16-bit load address, big-endian (4 hex digits)
    TT      Record type (2 hex digits)
    DD..DD  Data, SS bytes (2 hex digits per byte)
    CC      Checksum (2 hex digits)

Hex digits may be upper or lower case. Trailing whitespace (including
the line terminator) is allowed; nothing else is.

Record Types
------------
- $00: Data
- $01: End Of File
- $02: Extended Segment Address (data << 4 is the new base address)
- $03: Start Segment Address (CS:IP of the entry point)
- $04: Extended Linear Address
- $05: Start Linear Address

Reference
---------
- Intel HEX: https://en.wikipedia.org/wiki/Intel_HEX
"""

from dataclasses import dataclass
from enum import IntEnum
import re

from hexbin.errors import ChecksumMismatchError, MalformedLineError
from hexbin.ihex.checksum import calculate_record_checksum


# =============================================================================
# Enumeration Types
# =============================================================================

class RecordType(IntEnum):
    """Intel HEX record type codes."""
    DATA = 0x00
    EOF = 0x01
    EXTENDED_SEGMENT_ADDRESS = 0x02
    START_SEGMENT_ADDRESS = 0x03
    EXTENDED_LINEAR_ADDRESS = 0x04
    START_LINEAR_ADDRESS = 0x05

    @classmethod
    def is_known(cls, type_byte: int) -> bool:
        """Check if a type byte is one of the six defined record types."""
        try:
            cls(type_byte)
        except ValueError:
            return False
        return True

    @classmethod
    def get_name(cls, type_byte: int) -> str:
        """Get the name of a record type, or UNKNOWN(0xNN) for other codes."""
        if cls.is_known(type_byte):
            return cls(type_byte).name
        return f"UNKNOWN(0x{type_byte:02X})"


# =============================================================================
# Record Grammar
# =============================================================================

RECORD_PATTERN = re.compile(
    r"""
    \A
    :
    ([0-9A-Fa-f]{2})             # size
    ([0-9A-Fa-f]{4})             # address
    ([0-9A-Fa-f]{2})             # type
    ((?:[0-9A-Fa-f]{2})*)        # data
    ([0-9A-Fa-f]{2})             # checksum
    \s*
    \Z
    """,
    re.VERBOSE | re.ASCII,
)


# =============================================================================
# Hex Record
# =============================================================================

@dataclass(frozen=True)
class HexRecord:
    """
    One parsed Intel HEX record.

    Records are immutable values. The declared size is kept as read from
    the line and is not compared with len(data); the checksum is the only
    cross-check between the fields.

    Attributes:
        line_number: 1-based line number in the source (diagnostics only)
        size: Declared data byte count (0-255)
        address: 16-bit line-local address
        record_type: Record type code (may be outside RecordType)
        data: Data bytes
        checksum: Checksum byte stored on the line
    """
    line_number: int
    size: int
    address: int
    record_type: int
    data: bytes
    checksum: int

    @classmethod
    def parse(cls, line_number: int, text: str) -> "HexRecord":
        """
        Parse one line of Intel HEX text.

        Args:
            line_number: 1-based line number, used in error messages
            text: The line, with or without its line terminator

        Returns:
            A HexRecord with all fields decoded

        Raises:
            MalformedLineError: If the text does not match the record grammar

        Example:
            >>> record = HexRecord.parse(1, ":0300300002337A1E")
            >>> record.address, record.data.hex()
            (48, '02337a')
        """
        match = RECORD_PATTERN.match(text)
        if match is None:
            raise MalformedLineError(text, line_number=line_number)

        size, address, record_type, data, checksum = match.groups()
        return cls(
            line_number=line_number,
            size=int(size, 16),
            address=int(address, 16),
            record_type=int(record_type, 16),
            data=bytes.fromhex(data),
            checksum=int(checksum, 16),
        )

    # =========================================================================
    # Checksum
    # =========================================================================

    def expected_checksum(self) -> int:
        """Checksum computed from size, address, type and data."""
        return calculate_record_checksum(
            self.size, self.address, self.record_type, self.data
        )

    def is_valid(self) -> bool:
        """Whether the stored checksum matches the record contents."""
        return self.checksum == self.expected_checksum()

    def validate(self) -> None:
        """
        Raise if the stored checksum is wrong.

        Raises:
            ChecksumMismatchError: With the line number, both checksum
                values and the rendered record
        """
        expected = self.expected_checksum()
        if self.checksum != expected:
            raise ChecksumMismatchError(
                line_number=self.line_number,
                expected=expected,
                actual=self.checksum,
                description=self.describe(),
            )

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def type_name(self) -> str:
        """Record type name, e.g. 'DATA' or 'UNKNOWN(0x07)'."""
        return RecordType.get_name(self.record_type)

    def data_as_bytes(self) -> bytes:
        return self.data

    def data_as_hex(self, separator: str = "") -> str:
        """Data as uppercase hex pairs joined by separator."""
        return separator.join(f"{byte:02X}" for byte in self.data)

    def data_as_integer(self) -> int:
        """Data as a big-endian unsigned integer (0 when there is no data)."""
        return int.from_bytes(self.data, "big")

    def describe(self) -> str:
        """
        Human-readable one-line rendering.

        Example:
            0001: DATA: 3 bytes from 0x0030: 02 33 7A
        """
        return "%04d: %s: %d bytes from 0x%04X: %s%s" % (
            self.line_number,
            self.type_name,
            self.size,
            self.address,
            self.data_as_hex(" "),
            "" if self.is_valid() else " (INVALID CHECKSUM)",
        )

    def to_text(self) -> str:
        """Canonical record text: uppercase hex, no separators."""
        return ":%02X%04X%02X%s%02X" % (
            self.size,
            self.address,
            self.record_type,
            self.data_as_hex(),
            self.checksum,
        )

    def __str__(self) -> str:
        return self.describe()


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_record(line_number: int, text: str) -> HexRecord:
    """
    Parse one line of Intel HEX text.

    This is a convenience function that calls HexRecord.parse().
    """
    return HexRecord.parse(line_number, text)
