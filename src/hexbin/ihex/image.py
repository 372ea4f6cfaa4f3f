"""
Image Buffer
============

A growable byte buffer for the assembled memory image.

Intel HEX files are sparse: records may leave gaps and need not arrive in
address order. The buffer behaves like a file opened for writing where
seeking past the end and writing fills the gap with zero bytes.

    >>> buf = ImageBuffer()
    >>> buf.write(4, b"\\x01\\x02")
    >>> buf.to_bytes()
    b'\\x00\\x00\\x00\\x00\\x01\\x02'
"""

from typing import BinaryIO


class ImageBuffer:
    """
    Zero-filled growable byte buffer.

    Every offset that has not been written reads as 0x00. Writes may
    overwrite existing bytes, extend the buffer, or both.
    """

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def write(self, offset: int, data: bytes) -> None:
        """
        Write data starting at offset, zero-padding any gap before it.

        Args:
            offset: Absolute byte offset (must not be negative)
            data: Bytes to store
        """
        if offset < 0:
            raise ValueError(f"negative image offset: {offset}")

        if offset > len(self._data):
            self._data.extend(bytes(offset - len(self._data)))
        self._data[offset:offset + len(data)] = data

    def read(self, offset: int, length: int) -> bytes:
        """Read length bytes from offset; offsets past the end read as zero."""
        chunk = bytes(self._data[offset:offset + length])
        return chunk + bytes(length - len(chunk))

    def to_bytes(self) -> bytes:
        """Finalize the buffer contents into immutable bytes."""
        return bytes(self._data)


def dump(image: bytes, sink: BinaryIO) -> int:
    """
    Write a finalized image to a binary sink.

    The whole image is written in one call, first byte to last, with no
    framing.

    Args:
        image: Finalized image bytes
        sink: Any object with a write(bytes) method

    Returns:
        Number of bytes written
    """
    sink.write(image)
    return len(image)
