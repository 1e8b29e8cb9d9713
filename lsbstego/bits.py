from __future__ import annotations

import numpy as np

HEADER_BITS = 32
MAX_PAYLOAD_LEN = (1 << HEADER_BITS) - 1


def embed_bit(channel_byte: int, bit: int) -> int:
    return (channel_byte & 0xFE) | (bit & 1)


def extract_bit(channel_byte: int) -> int:
    return channel_byte & 1


def bits_from_bytes(data: bytes) -> np.ndarray:
    # LSB first within each byte
    a = np.frombuffer(bytes(data), dtype=np.uint8)
    bits = ((a[:, None] >> np.arange(8)) & 1).astype(np.uint8)
    return bits.reshape(-1)


def bytes_from_bits(bits: np.ndarray) -> bytes:
    bits = np.asarray(bits, dtype=np.uint8)
    nbytes = (len(bits) + 7) // 8
    pad = nbytes * 8 - len(bits)
    if pad:
        bits = np.pad(bits, (0, pad), constant_values=0)
    b = np.packbits(bits.reshape(-1, 8), axis=1, bitorder='little')
    return b.tobytes()


def header_bits(length: int) -> np.ndarray:
    """32-bit payload length, least-significant bit first."""
    if length < 0 or length > MAX_PAYLOAD_LEN:
        raise ValueError(f"Payload length {length} does not fit in a {HEADER_BITS}-bit header")
    return bits_from_bytes(length.to_bytes(4, 'little'))


def int_from_bits(bits: np.ndarray) -> int:
    return int.from_bytes(bytes_from_bits(bits), 'little')
