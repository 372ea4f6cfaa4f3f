"""
Intel HEX Record Checksums
==========================

Every Intel HEX record ends with an 8-bit checksum byte. It is the
two's complement of the low byte of the sum of every other byte on the
line:

    size + address_high + address_low + type + data[0] + ... + data[n-1]

Adding the checksum to that sum therefore gives 0 modulo 256, which is
the property `verify_record_checksum()` checks.

Example
-------
    :03 0030 00 02337A 1E

    0x03 + 0x00 + 0x30 + 0x00 + 0x02 + 0x33 + 0x7A = 0xE2
    (0x100 - 0xE2) & 0xFF = 0x1E

Reference
---------
- Intel HEX: https://en.wikipedia.org/wiki/Intel_HEX
"""

from typing import Iterable


def _byte_sum(values: Iterable[int]) -> int:
    """Sum values, truncating to 8 bits after every addition."""
    total = 0
    for value in values:
        total = (total + (value & 0xFF)) & 0xFF
    return total


def calculate_record_checksum(
    size: int,
    address: int,
    record_type: int,
    data: bytes,
) -> int:
    """
    Calculate the checksum byte for a record.

    Args:
        size: Declared data byte count
        address: 16-bit record address
        record_type: Record type code
        data: Record data bytes

    Returns:
        Checksum value (0x00-0xFF)

    Example:
        >>> calculate_record_checksum(3, 0x0030, 0, bytes([0x02, 0x33, 0x7A]))
        30
    """
    total = _byte_sum(
        (size, address >> 8, address, record_type, _byte_sum(data))
    )
    return (0x100 - total) & 0xFF


def verify_record_checksum(
    size: int,
    address: int,
    record_type: int,
    data: bytes,
    checksum: int,
) -> bool:
    """
    Check that all record bytes, checksum included, sum to 0 mod 256.

    Returns:
        True if the stored checksum is consistent with the record fields
    """
    total = _byte_sum(
        (size, address >> 8, address, record_type, _byte_sum(data), checksum)
    )
    return total == 0
