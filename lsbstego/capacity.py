from __future__ import annotations

from .bits import HEADER_BITS
from .traversal import CHANNELS_PER_PIXEL


def capacity_bits(width: int, height: int) -> int:
    return width * height * CHANNELS_PER_PIXEL


def required_bits(payload_len: int) -> int:
    return HEADER_BITS + payload_len * 8


def fits(width: int, height: int, payload_len: int) -> bool:
    return required_bits(payload_len) <= capacity_bits(width, height)


def max_payload_bytes(width: int, height: int) -> int:
    return max(0, (capacity_bits(width, height) - HEADER_BITS) // 8)
