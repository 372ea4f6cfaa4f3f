"""
Intel HEX Handling
==================

This module decodes Intel HEX text into binary memory images.

Overview
--------
Intel HEX is a line-oriented ASCII format for memory images. Each line
is a checksummed record carrying data bytes for a 16-bit address, an
address extension, a start address, or the end-of-file marker.

This module provides:
- **HexRecord**: One parsed line, with checksum and rendering helpers
- **HexReader**: Lazy line source yielding records
- **ImageAssembler**: State machine that places data into an image
- **HexImage**: Input file plus its cached binary image
- **Checksum utilities**: Calculate and verify record checksums

Quick Start
-----------
Converting text to bytes:

    >>> from hexbin.ihex import hex_to_bin
    >>> image = hex_to_bin(open("firmware.hex").read())

Explaining a file record by record:

    >>> from hexbin.ihex import HexImage
    >>> for line in HexImage.from_file("firmware.hex").explain():
    ...     print(line)

Supported Records
-----------------
DATA, EOF, EXTENDED_SEGMENT_ADDRESS and START_SEGMENT_ADDRESS. The
linear address records (types 4 and 5) are recognized but rejected.
"""

# =============================================================================
# Public API Exports
# =============================================================================

from hexbin.ihex.records import (
    RecordType,
    HexRecord,
    RECORD_PATTERN,
    parse_record,
)

from hexbin.ihex.checksum import (
    calculate_record_checksum,
    verify_record_checksum,
)

from hexbin.ihex.image import (
    ImageBuffer,
    dump,
)

from hexbin.ihex.reader import (
    HexReader,
    iter_numbered_lines,
    split_lines,
)

from hexbin.ihex.assembler import (
    AssemblerState,
    ImageAssembler,
)

from hexbin.ihex.converter import (
    HexImage,
    hex_to_bin,
    convert_file,
)

__all__ = [
    # Records
    "RecordType",
    "HexRecord",
    "RECORD_PATTERN",
    "parse_record",
    # Checksum
    "calculate_record_checksum",
    "verify_record_checksum",
    # Image buffer and sink
    "ImageBuffer",
    "dump",
    # Line source
    "HexReader",
    "iter_numbered_lines",
    "split_lines",
    # Assembler
    "AssemblerState",
    "ImageAssembler",
    # Conversion
    "HexImage",
    "hex_to_bin",
    "convert_file",
]
