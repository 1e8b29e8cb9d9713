from __future__ import annotations

from typing import Iterator, NamedTuple

import numpy as np

RED, GREEN, BLUE = 0, 1, 2
CHANNEL_NAMES = ("R", "G", "B")
CHANNELS_PER_PIXEL = 3


class Slot(NamedTuple):
    x: int
    y: int
    channel: int


def slot_position(index: int, width: int) -> Slot:
    """Map a linear slot index to its pixel and channel.

    Pixels are scanned row by row; within a pixel the slots cycle
    red, green, blue before moving on to the next pixel.
    """
    if index < 0:
        raise IndexError(f"Slot index must be non-negative, got {index}")
    pixel = index // CHANNELS_PER_PIXEL
    return Slot(pixel % width, pixel // width, index % CHANNELS_PER_PIXEL)


def iter_slots(width: int, height: int, start: int = 0, count: int | None = None) -> Iterator[Slot]:
    total = width * height * CHANNELS_PER_PIXEL
    stop = total if count is None else start + count
    if start < 0 or stop > total:
        raise IndexError(f"Slots {start}..{stop - 1} run past capacity of {total} slots")
    for i in range(start, stop):
        yield slot_position(i, width)


def slot_arrays(width: int, height: int, start: int = 0, count: int | None = None):
    """Vectorized :func:`iter_slots`: (y, x, channel) index arrays for numpy fancy indexing."""
    total = width * height * CHANNELS_PER_PIXEL
    stop = total if count is None else start + count
    if start < 0 or stop > total:
        raise IndexError(f"Slots {start}..{stop - 1} run past capacity of {total} slots")
    idx = np.arange(start, stop, dtype=np.int64)
    pixel = idx // CHANNELS_PER_PIXEL
    return pixel // width, pixel % width, idx % CHANNELS_PER_PIXEL
