"""
Intel HEX Line Source
=====================

HexReader turns a stream of text lines into a lazy stream of parsed
records. It is the only place where input lines are numbered and where
blank lines are dropped.

Line Numbering
--------------
Every physical line counts, including the blank ones that are skipped,
so line numbers in error messages match what an editor shows.

Usage Examples
--------------
Reading from an open file:
    >>> with open("firmware.hex") as f:
    ...     for record in HexReader(f):
    ...         print(record)

Reading from a string:
    >>> reader = HexReader.from_text(":00000001FF\\n")
    >>> [r.type_name for r in reader]
    ['EOF']
"""

from pathlib import Path
from typing import Iterable, Iterator, Union
import logging

from hexbin.ihex.records import HexRecord

# Logger for this module
logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    r"""
    Split text into lines on "\n" only.

    Other Unicode line boundaries (form feed, \x1c, lone \r, ...) stay
    inside the line, where the record grammar rejects them.
    """
    return text.split("\n")


def iter_numbered_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """
    Number lines from 1 and drop the whitespace-only ones.

    Yields:
        (line_number, text) tuples, in input order
    """
    for number, text in enumerate(lines, start=1):
        if not text.strip():
            continue
        yield number, text


class HexReader:
    """
    Lazy, single-pass source of HexRecord objects.

    The reader is restartable only if the underlying line iterable is
    (a list or a string is; an open stream is not).

    Attributes:
        lines: Iterable of text lines (file object, list of str, ...)
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self.lines = lines

    @classmethod
    def from_text(cls, text: str) -> "HexReader":
        """Create a reader over the lines of a string."""
        return cls(split_lines(text))

    @classmethod
    def from_bytes(cls, data: bytes, encoding: str = "ascii") -> "HexReader":
        """Create a reader over raw bytes decoded with encoding."""
        return cls.from_text(data.decode(encoding))

    @classmethod
    def from_file(
        cls, filepath: Union[str, Path], encoding: str = "ascii"
    ) -> "HexReader":
        """
        Create a reader over a file on disk.

        The file is read eagerly so no handle is left open.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        filepath = Path(filepath)
        return cls.from_bytes(filepath.read_bytes(), encoding=encoding)

    def __iter__(self) -> Iterator[HexRecord]:
        """
        Yield one parsed record per non-blank line.

        Raises:
            MalformedLineError: On the first line that fails to parse
        """
        for number, text in iter_numbered_lines(self.lines):
            record = HexRecord.parse(number, text)
            logger.debug(f"Parsed line {number}: {record.type_name}")
            yield record
