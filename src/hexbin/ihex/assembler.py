"""
Intel HEX Image Assembler
=========================

This module turns a sequence of Intel HEX records into a binary memory
image.

State Machine
-------------
The assembler keeps a small set of registers for the duration of one
run (see AssemblerState). For each record, in order:

1. A record after the EOF record is rejected.
2. The record checksum is verified.
3. The record is dispatched by type:

   ============================  =======================================
   DATA                          write data at base_address + address
   EOF                           mark the end of input
   EXTENDED_SEGMENT_ADDRESS      base_address = data << 4
   START_SEGMENT_ADDRESS         capture CS and IP bytes
   anything else                 UnhandledRecordTypeError
   ============================  =======================================

When the input runs out the EOF record must have been seen; the buffer
is then finalized into bytes.

Address Range
-------------
Absolute addresses are base_address + record.address and are never
masked. With segment addressing the highest reachable offset is
0xFFFF0 + 0xFFFF, so an image may grow to just over 1 MB.

Linear Addressing
-----------------
EXTENDED_LINEAR_ADDRESS and START_LINEAR_ADDRESS records are recognized
by name but not supported; they fail like undefined type codes.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional
import logging

from hexbin.errors import (
    MissingEofError,
    UnexpectedRecordAfterEofError,
    UnhandledRecordTypeError,
)
from hexbin.ihex.image import ImageBuffer
from hexbin.ihex.records import HexRecord, RecordType

# Logger for this module
logger = logging.getLogger(__name__)


@dataclass
class AssemblerState:
    """
    Registers of one assembly run.

    Attributes:
        base_address: High-order address bits from the last segment record
        eof_seen: Set once the EOF record has been processed
        start_cs: CS byte from a START_SEGMENT_ADDRESS record (informational)
        start_ip: IP byte from a START_SEGMENT_ADDRESS record (informational)
        image: Output buffer
    """
    base_address: int = 0
    eof_seen: bool = False
    start_cs: Optional[int] = None
    start_ip: Optional[int] = None
    image: ImageBuffer = field(default_factory=ImageBuffer)

    def resolve_address(self, address: int) -> int:
        """Apply the current base address to a line-local address."""
        return self.base_address + address


class ImageAssembler:
    """
    Builds a binary image from Intel HEX records.

    An instance owns its state for a single run and is not reusable:
    once an EOF record has been fed, any further record fails.

    Example:
        >>> from hexbin.ihex.reader import HexReader
        >>> reader = HexReader([":0300300002337A1E", ":00000001FF"])
        >>> image = ImageAssembler().run(reader)
        >>> len(image), image[-3:].hex()
        (51, '02337a')
    """

    def __init__(self) -> None:
        self.state = AssemblerState()

    def run(self, records: Iterable[HexRecord]) -> bytes:
        """
        Consume every record and return the finalized image.

        Records are pulled one at a time; the sequence is never
        materialized.

        Raises:
            MalformedLineError: From the record source
            ChecksumMismatchError: If any record has a bad checksum
            UnexpectedRecordAfterEofError: If a record follows the EOF record
            UnhandledRecordTypeError: For unsupported record types
            MissingEofError: If the input has no EOF record
        """
        for record in records:
            self.feed(record)
        return self.finish()

    def feed(self, record: HexRecord) -> None:
        """Check and apply a single record."""
        if self.state.eof_seen:
            raise UnexpectedRecordAfterEofError(record.line_number)

        record.validate()
        self._dispatch(record)

    def finish(self) -> bytes:
        """
        Finalize the image.

        Raises:
            MissingEofError: If no EOF record was fed
        """
        if not self.state.eof_seen:
            raise MissingEofError()

        image = self.state.image.to_bytes()
        logger.debug(f"Assembled image of {len(image)} bytes")
        return image

    # =========================================================================
    # Record Handlers
    # =========================================================================

    def _dispatch(self, record: HexRecord) -> None:
        record_type = record.record_type

        if record_type == RecordType.DATA:
            self._handle_data(record)
        elif record_type == RecordType.EOF:
            self.state.eof_seen = True
            logger.debug(f"EOF record at line {record.line_number}")
        elif record_type == RecordType.EXTENDED_SEGMENT_ADDRESS:
            self.state.base_address = record.data_as_integer() << 4
            logger.debug(f"Base address set to 0x{self.state.base_address:05X}")
        elif record_type == RecordType.START_SEGMENT_ADDRESS:
            self._handle_start_segment(record)
        else:
            raise UnhandledRecordTypeError(
                record_type, record.type_name, record.line_number
            )

    def _handle_data(self, record: HexRecord) -> None:
        offset = self.state.resolve_address(record.address)
        self.state.image.write(offset, record.data)
        logger.debug(f"Wrote {len(record.data)} bytes at 0x{offset:05X}")

    def _handle_start_segment(self, record: HexRecord) -> None:
        # CS and IP are taken as single bytes, not 16-bit words; a short
        # record leaves the missing ones unset
        data = record.data
        self.state.start_cs = data[0] if len(data) > 0 else None
        self.state.start_ip = data[1] if len(data) > 1 else None
        logger.debug(
            f"Start address CS={self.state.start_cs} IP={self.state.start_ip}"
        )
