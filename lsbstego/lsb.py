from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from PIL import Image

from .bits import HEADER_BITS, bits_from_bytes, bytes_from_bits, embed_bit, extract_bit, header_bits, int_from_bits
from .capacity import capacity_bits, required_bits
from .carrier import ArrayCarrier, PixelBuffer
from .results import DecodeResult, EncodeResult, Status
from .traversal import iter_slots, slot_arrays

logger = logging.getLogger(__name__)


def _write_bits(buf: PixelBuffer, bits: np.ndarray) -> None:
    if isinstance(buf, ArrayCarrier):
        y, x, c = slot_arrays(buf.width, buf.height, 0, len(bits))
        buf.array[y, x, c] = (buf.array[y, x, c] & 0xFE) | bits
        return
    for slot, bit in zip(iter_slots(buf.width, buf.height, 0, len(bits)), bits):
        value = buf.get_channel(slot.x, slot.y, slot.channel)
        buf.set_channel(slot.x, slot.y, slot.channel, embed_bit(value, int(bit)))


def _read_bits(buf: PixelBuffer, start: int, count: int) -> np.ndarray:
    if isinstance(buf, ArrayCarrier):
        y, x, c = slot_arrays(buf.width, buf.height, start, count)
        return (buf.array[y, x, c] & 1).astype(np.uint8)
    bits = np.empty(count, dtype=np.uint8)
    for k, slot in enumerate(iter_slots(buf.width, buf.height, start, count)):
        bits[k] = extract_bit(buf.get_channel(slot.x, slot.y, slot.channel))
    return bits


def encode(buf: PixelBuffer, payload: bytes) -> EncodeResult:
    """Hide ``payload`` in the channel LSBs of ``buf``, in place.

    Layout: 32-bit payload length then the payload bytes, every value
    least-significant bit first, one bit per slot in traversal order.
    Nothing is written unless header and payload fit.
    """
    payload = bytes(payload)
    n = len(payload)
    hdr = header_bits(n)
    cap = capacity_bits(buf.width, buf.height)
    need = required_bits(n)
    if need > cap:
        logger.debug("encode rejected: need %d bits, capacity %d", need, cap)
        return EncodeResult(Status.INSUFFICIENT_CAPACITY,
                            "Error: Carrier image is too small to hold the secret data.",
                            capacity_bits=cap, required_bits=need, payload_len=n)

    _write_bits(buf, np.concatenate([hdr, bits_from_bytes(payload)]))
    logger.debug("encoded %d bytes into %d/%d slots", n, need, cap)
    return EncodeResult(Status.OK, "Success! Data encoded.",
                        capacity_bits=cap, required_bits=need, payload_len=n)


def read_length(buf: PixelBuffer) -> int:
    return int_from_bits(_read_bits(buf, 0, HEADER_BITS))


def decode(buf: PixelBuffer) -> DecodeResult:
    """Recover the payload hidden by :func:`encode`. ``buf`` is only read.

    The length check is a plausibility test: any image whose header
    fits its own capacity decodes to *something*.
    """
    cap = capacity_bits(buf.width, buf.height)
    if cap < HEADER_BITS:
        return DecodeResult(Status.INVALID_LENGTH,
                            "Error: Image is too small to hold a length header.",
                            capacity_bits=cap, payload_len=None)

    n = read_length(buf)
    if required_bits(n) > cap:
        logger.debug("decode rejected: header claims %d bytes, capacity %d bits", n, cap)
        return DecodeResult(Status.INVALID_LENGTH,
                            "Error: Decoded size is invalid or larger than image capacity.",
                            capacity_bits=cap, payload_len=n)
    if n == 0:
        return DecodeResult(Status.EMPTY_PAYLOAD,
                            "Warning: Decoded size is 0. Nothing to extract.",
                            capacity_bits=cap)

    payload = bytes_from_bits(_read_bits(buf, HEADER_BITS, n * 8))
    logger.debug("decoded %d bytes", n)
    return DecodeResult(Status.OK, f"Success! Decoded {n} bytes.",
                        capacity_bits=cap, payload_len=n, payload=payload)


def embed_lsb(img: Image.Image, payload: bytes) -> Tuple[Image.Image, EncodeResult]:
    """Encode into a copy of ``img``; the input image is left as is."""
    carrier = ArrayCarrier.from_image(img)
    result = encode(carrier, payload)
    return carrier.to_image(), result


def extract_lsb(img: Image.Image) -> DecodeResult:
    return decode(ArrayCarrier.from_image(img))
