"""
hexbin - Intel HEX to Binary Converter
======================================

This package decodes Intel HEX files into raw binary memory images, the
form an emulator, flasher or loader expects.

Main Components
---------------
- **ihex**: Intel HEX record parser and image assembler
    Parses and checks each record, resolves segment addressing and
    enforces the EOF protocol

- **cli**: Command-line tool (hex2bin)
    Reads Intel HEX from stdin and writes binary to stdout, or explains
    each record in human-readable form

Quick Start
-----------
Convert a file:
    >>> from hexbin import HexImage
    >>> with open("firmware.bin", "wb") as f:
    ...     HexImage.from_file("firmware.hex").dump(f)

Or use the command-line tool:
    $ hex2bin < firmware.hex > firmware.bin
    $ hex2bin explain < firmware.hex

Reference Documentation
-----------------------
- Intel HEX: https://en.wikipedia.org/wiki/Intel_HEX

Version History
---------------
1.0.0 - Initial release with DATA, EOF and segment address records
"""

__version__ = "1.0.0"
__author__ = "hexbin contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from hexbin.errors import (
    HexBinError,
    RecordError,
    MalformedLineError,
    ChecksumMismatchError,
    AssemblyError,
    UnexpectedRecordAfterEofError,
    UnhandledRecordTypeError,
    MissingEofError,
)

from hexbin.ihex import (
    RecordType,
    HexRecord,
    HexReader,
    ImageAssembler,
    HexImage,
    hex_to_bin,
    convert_file,
)

from hexbin.config import HexBinConfig

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Exception hierarchy
    "HexBinError",
    "RecordError",
    "MalformedLineError",
    "ChecksumMismatchError",
    "AssemblyError",
    "UnexpectedRecordAfterEofError",
    "UnhandledRecordTypeError",
    "MissingEofError",
    # Intel HEX
    "RecordType",
    "HexRecord",
    "HexReader",
    "ImageAssembler",
    "HexImage",
    "hex_to_bin",
    "convert_file",
    # Configuration
    "HexBinConfig",
]
