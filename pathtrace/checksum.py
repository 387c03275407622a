"""
Internet checksum (RFC 1071)
"""


def sum_words(data: bytes) -> int:
    """
    Sum a buffer as big-endian 16-bit words.

    An odd trailing byte is the high byte of a zero-padded word.
    """
    total = 0
    end = len(data) - (len(data) % 2)

    for i in range(0, end, 2):
        total += (data[i] << 8) + data[i + 1]

    if len(data) % 2:
        total += data[-1] << 8

    return total


def calc_checksum(data: bytes) -> int:
    """
    Calculate the Internet checksum of a buffer.

    Callers computing an outbound checksum must zero the checksum
    field first. An empty buffer yields 0xFFFF.
    """
    s = sum_words(data)

    while s >> 16:
        s = (s >> 16) + (s & 0xFFFF)

    return ~s & 0xFFFF


def verify_checksum(data: bytes) -> bool:
    """Check a buffer that carries its own checksum field"""
    return calc_checksum(data) == 0
