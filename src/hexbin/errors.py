"""
hexbin Error Hierarchy
======================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from HexBinError, allowing callers to catch every
conversion failure with a single except clause if desired.

Exception Hierarchy
-------------------
HexBinError (base)
├── RecordError (problems with a single line of input)
│   ├── MalformedLineError - line does not match the record grammar
│   └── ChecksumMismatchError - stored checksum differs from computed one
└── AssemblyError (problems with the record sequence)
    ├── UnexpectedRecordAfterEofError - record found after the EOF record
    ├── UnhandledRecordTypeError - record type the assembler cannot apply
    └── MissingEofError - input ended without an EOF record

Design Philosophy
-----------------
Every error is fatal. Nothing in the package catches its own errors;
they propagate to the caller, which decides how to report them. Record
errors carry the 1-based line number of the offending line so messages
read like compiler diagnostics:

    line 3: error: checksum mismatch, expected 0x1E, got 0x1F
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HexBinError(Exception):
    """
    Base exception for all hexbin errors.

        try:
            image = hex_to_bin(text)
        except HexBinError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordError(HexBinError):
    """
    Base exception for errors tied to one line of input.

    Attributes:
        message: The error description
        line_number: 1-based line number in the source (optional)
        detail: Extra context printed under the message (optional)
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.detail = detail
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the message with the line prefix and optional detail.

        Example output:
            line 1: error: checksum mismatch, expected 0x1E, got 0x1F
                0001: DATA: 3 bytes from 0x0030: 02 33 7A (INVALID CHECKSUM)
        """
        if self.line_number is not None:
            parts = [f"line {self.line_number}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.detail:
            parts.append(f"    {self.detail}")

        return "\n".join(parts)


class MalformedLineError(RecordError):
    """
    Line text does not match the Intel HEX record grammar.

    Examples:
        - Missing leading colon
        - Non-hex characters
        - Odd number of hex digits
        - Too short to hold size, address, type and checksum
    """

    def __init__(
        self,
        text: str,
        line_number: Optional[int] = None,
        reason: str = "invalid record",
    ):
        self.text = text
        self.reason = reason
        super().__init__(
            f"{reason}: '{text.rstrip()}'",
            line_number=line_number,
        )


class ChecksumMismatchError(RecordError):
    """
    Record checksum does not match the computed value.

    Attributes:
        expected: Checksum computed from the record fields
        actual: Checksum stored on the line
    """

    def __init__(
        self,
        line_number: int,
        expected: int,
        actual: int,
        description: Optional[str] = None,
    ):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"checksum mismatch, expected 0x{expected:02X}, got 0x{actual:02X}",
            line_number=line_number,
            detail=description,
        )


# =============================================================================
# Assembly Exceptions
# =============================================================================

class AssemblyError(HexBinError):
    """Base exception for record sequence (protocol) errors."""
    pass


class UnexpectedRecordAfterEofError(AssemblyError):
    """A record appeared after the EOF record was already processed."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"line {line_number}: unexpected record after EOF record")


class UnhandledRecordTypeError(AssemblyError):
    """
    Record type cannot be applied to the image.

    Covers undefined type codes as well as EXTENDED_LINEAR_ADDRESS and
    START_LINEAR_ADDRESS, which are recognized by name but not supported.
    """

    def __init__(self, record_type: int, type_name: str, line_number: int):
        self.record_type = record_type
        self.type_name = type_name
        self.line_number = line_number
        super().__init__(
            f"line {line_number}: unhandled record type {type_name} "
            f"(0x{record_type:02X})"
        )


class MissingEofError(AssemblyError):
    """Input ended without an EOF record."""

    def __init__(self, message: str = "missing EOF record"):
        super().__init__(message)
