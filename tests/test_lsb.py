import numpy as np
import pytest
from PIL import Image

from lsbstego.bits import bits_from_bytes
from lsbstego.carrier import ArrayCarrier, PixelBuffer
from lsbstego.errors import InsufficientCapacityError, InvalidLengthError
from lsbstego.lsb import decode, embed_lsb, encode, extract_lsb, read_length
from lsbstego.results import Status


class DictBuffer:
    """Minimal PixelBuffer that is not backed by numpy."""

    def __init__(self, width, height, fill=0x80):
        self.width = width
        self.height = height
        self.pixels = {(x, y): [fill, fill, fill] for x in range(width) for y in range(height)}

    def get_channel(self, x, y, channel):
        return self.pixels[(x, y)][channel]

    def set_channel(self, x, y, channel, value):
        self.pixels[(x, y)][channel] = value


def lsb_stream(carrier):
    # slot order is the row-major flattening of the RGB planes
    return (carrier.rgb.reshape(-1) & 1).tolist()


def test_ab_scenario():
    carrier = ArrayCarrier.blank(10, 10, (200, 100, 50))
    result = encode(carrier, b'AB')
    assert result.status is Status.OK
    assert result.capacity_bits == 300
    assert result.used_bits == 48

    out = decode(carrier)
    assert out.status is Status.OK
    assert out.payload == b'\x41\x42'


def test_round_trip_random_payload(noisy_carrier, rng):
    before = noisy_carrier.copy()
    payload = rng.integers(0, 256, size=200, dtype=np.uint8).tobytes()
    assert encode(noisy_carrier, payload).ok

    assert decode(noisy_carrier).payload == payload
    assert noisy_carrier.array.shape == before.array.shape
    # high 7 bits everywhere, and every channel past the written slots, unchanged
    assert np.array_equal(noisy_carrier.array >> 1, before.array >> 1)
    used = 32 + 8 * len(payload)
    assert np.array_equal(noisy_carrier.rgb.reshape(-1)[used:], before.rgb.reshape(-1)[used:])


def test_wire_layout():
    carrier = ArrayCarrier.blank(4, 4)
    encode(carrier, b'\x41')
    expected = [1] + [0] * 31 + [1, 0, 0, 0, 0, 0, 1, 0]
    assert lsb_stream(carrier)[:40] == expected
    assert not any(lsb_stream(carrier)[40:])


def test_exact_capacity_fits():
    carrier = ArrayCarrier.blank(8, 4)  # 96 bits = 32 + 8*8
    result = encode(carrier, b'12345678')
    assert result.status is Status.OK
    assert result.required_bits == result.capacity_bits
    assert decode(carrier).payload == b'12345678'


def test_one_bit_short_fails_without_mutation(rng):
    arr = rng.integers(0, 256, size=(1, 13, 3), dtype=np.uint8)  # 39 bits = 32 + 8 - 1
    carrier = ArrayCarrier(arr.copy())
    result = encode(carrier, b'x')
    assert result.status is Status.INSUFFICIENT_CAPACITY
    assert not result.ok
    assert result.used_bits == 0
    assert np.array_equal(carrier.array, arr)
    with pytest.raises(InsufficientCapacityError) as exc:
        result.raise_for_status()
    assert exc.value.required == 40
    assert exc.value.available == 39


def test_empty_payload(noisy_carrier):
    before = noisy_carrier.copy()
    result = encode(noisy_carrier, b'')
    assert result.status is Status.OK
    assert result.used_bits == 32
    assert lsb_stream(noisy_carrier)[:32] == [0] * 32
    assert np.array_equal(noisy_carrier.rgb.reshape(-1)[32:], before.rgb.reshape(-1)[32:])

    out = decode(noisy_carrier)
    assert out.status is Status.EMPTY_PAYLOAD
    assert out.ok
    assert out.payload == b''
    out.raise_for_status()


def test_corrupt_length_rejected():
    carrier = ArrayCarrier.blank(10, 10, (255, 255, 255))  # every LSB set
    assert read_length(carrier) == 0xFFFFFFFF
    out = decode(carrier)
    assert out.status is Status.INVALID_LENGTH
    assert out.payload == b''
    with pytest.raises(InvalidLengthError):
        out.raise_for_status()


def test_length_just_over_capacity_rejected():
    carrier = ArrayCarrier.blank(10, 10)
    encode(carrier, b'\0' * 33)  # fills 296 of 300 bits
    flat = carrier.array.reshape(-1)
    flat[:32] = (flat[:32] & 0xFE) | bits_from_bytes((34).to_bytes(4, 'little'))
    assert decode(carrier).status is Status.INVALID_LENGTH


def test_carrier_too_small_for_header():
    carrier = ArrayCarrier.blank(2, 2)
    assert encode(carrier, b'').status is Status.INSUFFICIENT_CAPACITY
    assert decode(carrier).status is Status.INVALID_LENGTH


def test_decode_does_not_mutate(noisy_carrier):
    encode(noisy_carrier, b'payload')
    snapshot = noisy_carrier.array.copy()
    decode(noisy_carrier)
    assert np.array_equal(noisy_carrier.array, snapshot)


def test_encode_is_deterministic(noisy_carrier):
    a, b = noisy_carrier.copy(), noisy_carrier.copy()
    encode(a, b'same input')
    encode(b, b'same input')
    assert np.array_equal(a.array, b.array)


def test_alpha_plane_untouched(rng):
    arr = rng.integers(0, 256, size=(6, 6, 4), dtype=np.uint8)
    carrier = ArrayCarrier(arr.copy())
    encode(carrier, b'rgba')
    assert np.array_equal(carrier.array[..., 3], arr[..., 3])
    assert decode(carrier).payload == b'rgba'


def test_custom_pixel_buffer():
    buf = DictBuffer(5, 5)
    assert isinstance(buf, PixelBuffer)
    assert encode(buf, b'hi').ok
    assert decode(buf).payload == b'hi'
    assert buf.get_channel(4, 4, 2) == 0x80


def test_embed_lsb_leaves_input_image_alone():
    img = Image.new('RGB', (16, 16), (7, 7, 7))
    stego, result = embed_lsb(img, b'image')
    assert result.ok
    assert img.getpixel((0, 0)) == (7, 7, 7)
    assert stego.size == img.size
    assert extract_lsb(stego).payload == b'image'


def test_array_and_custom_buffer_agree():
    carrier = ArrayCarrier.blank(5, 5, (0x80, 0x80, 0x80))
    buf = DictBuffer(5, 5)
    encode(carrier, b'hi')
    encode(buf, b'hi')
    dict_stream = [buf.get_channel(x, y, c) & 1 for y in range(5) for x in range(5) for c in range(3)]
    assert lsb_stream(carrier) == dict_stream
    assert decode(carrier).payload == decode(buf).payload == b'hi'


def test_large_carrier_bulk_round_trip(rng):
    arr = rng.integers(0, 256, size=(500, 600, 3), dtype=np.uint8)
    carrier = ArrayCarrier(arr.copy())
    payload = rng.integers(0, 256, size=100_000, dtype=np.uint8).tobytes()
    assert encode(carrier, payload).ok
    assert decode(carrier).payload == payload
    used = 32 + 8 * len(payload)
    assert np.array_equal(carrier.array.reshape(-1)[used:], arr.reshape(-1)[used:])


def test_too_small_carrier_reports_missing_header():
    out = decode(ArrayCarrier.blank(2, 2))
    assert out.payload_len is None
    with pytest.raises(InvalidLengthError) as exc:
        out.raise_for_status()
    assert exc.value.length is None
    assert str(exc.value) == "Carrier of 12 bits cannot hold a 32-bit length header"
