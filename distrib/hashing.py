import math
import zlib

INT32_MIN = -2147483648
UINT32_MASK = 0xFFFFFFFF


def crc32(s: str) -> int:
    # Unsigned 32-bit CRC (zlib / IEEE 802.3 polynomial) of the UTF-8 bytes.
    return zlib.crc32(s.encode("utf-8")) & UINT32_MASK


def to_signed(v: int) -> int:
    v &= UINT32_MASK
    return v - 0x100000000 if v & 0x80000000 else v


def crc32_signed(s: str) -> int:
    return to_signed(crc32(s))


def round_half_up(x: float) -> int:
    # 2.5 -> 3, -2.5 -> -3; the builtin round() would give 2 and -2.
    if x < 0:
        return -int(math.floor(-x + 0.5))
    return int(math.floor(x + 0.5))
