"""
Intel HEX Conversion
====================

HexImage ties the line source and the assembler together: it represents
one Intel HEX input and its binary image.

Usage Examples
--------------
Convert a file:
    >>> from hexbin.ihex import HexImage
    >>> hex_image = HexImage.from_file("firmware.hex")
    >>> with open("firmware.bin", "wb") as f:
    ...     hex_image.dump(f)

Explain a file without assembling it:
    >>> for line in HexImage.from_file("firmware.hex").explain():
    ...     print(line)
"""

from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Optional, Union

from hexbin.ihex.assembler import AssemblerState, ImageAssembler
from hexbin.ihex.image import dump
from hexbin.ihex.reader import HexReader, split_lines
from hexbin.ihex.records import HexRecord


class HexImage:
    """
    An Intel HEX input and its assembled binary image.

    Assembly is lazy and happens at most once; the resulting bytes are
    cached. A failed assembly caches nothing, so no partial image is
    ever returned.

    Attributes:
        reader: Source of parsed records
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self.reader = HexReader(lines)
        self._assembler: Optional[ImageAssembler] = None
        self._image: Optional[bytes] = None

    @classmethod
    def from_text(cls, text: str) -> "HexImage":
        return cls(split_lines(text))

    @classmethod
    def from_file(
        cls, filepath: Union[str, Path], encoding: str = "ascii"
    ) -> "HexImage":
        """
        Load Intel HEX text from disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        return cls.from_text(Path(filepath).read_bytes().decode(encoding))

    def records(self) -> Iterator[HexRecord]:
        """Iterate over parsed records (checksums are not checked here)."""
        return iter(self.reader)

    def explain(self) -> Iterator[str]:
        """
        Describe each record, one string per line.

        Never assembles; bad checksums are marked rather than raised.
        """
        for record in self.reader:
            yield record.describe()

    def to_bytes(self) -> bytes:
        """Assemble (once) and return the binary image."""
        if self._image is None:
            assembler = ImageAssembler()
            self._image = assembler.run(self.reader)
            self._assembler = assembler
        return self._image

    @property
    def state(self) -> Optional[AssemblerState]:
        """Final assembler registers, available after a successful assembly."""
        return self._assembler.state if self._assembler else None

    def dump(self, sink: BinaryIO) -> int:
        """
        Write the binary image to sink.

        Returns:
            Number of bytes written
        """
        return dump(self.to_bytes(), sink)


# =============================================================================
# Convenience Functions
# =============================================================================

def hex_to_bin(text: str) -> bytes:
    """
    Convert Intel HEX text to a binary image.

    Example:
        >>> hex_to_bin(":0100000041BE\\n:00000001FF\\n")
        b'A'
    """
    return HexImage.from_text(text).to_bytes()


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    encoding: str = "ascii",
) -> int:
    """
    Convert an Intel HEX file to a binary file.

    The output file is only created once assembly has succeeded.

    Returns:
        Number of bytes written
    """
    image = HexImage.from_file(input_path, encoding=encoding).to_bytes()
    with open(output_path, "wb") as f:
        return dump(image, f)
