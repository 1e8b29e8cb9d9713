from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
from PIL import Image


@runtime_checkable
class PixelBuffer(Protocol):
    """What the codec needs from an image: its size and per-channel access."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_channel(self, x: int, y: int, channel: int) -> int: ...

    def set_channel(self, x: int, y: int, channel: int, value: int) -> None: ...


class ArrayCarrier:
    """PixelBuffer over an (H, W, 3) or (H, W, 4) uint8 array.

    The array is used in place. A fourth plane is treated as alpha and
    never read or written by the codec.
    """

    def __init__(self, arr: np.ndarray):
        arr = np.asarray(arr)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) array, got shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError(f"Carrier must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}")
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"Channel values must be integers, got dtype {arr.dtype}")
        if arr.dtype != np.uint8:
            if arr.min() < 0 or arr.max() > 255:
                raise ValueError("Channel values must lie in 0..255")
            arr = arr.astype(np.uint8)
        self.array = arr

    @classmethod
    def blank(cls, width: int, height: int, color=(0, 0, 0)) -> 'ArrayCarrier':
        arr = np.empty((height, width, len(color)), dtype=np.uint8)
        arr[...] = color
        return cls(arr)

    @classmethod
    def from_image(cls, img: Image.Image) -> 'ArrayCarrier':
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
        return cls(np.array(img, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.array.astype(np.uint8))

    @property
    def width(self) -> int:
        return self.array.shape[1]

    @property
    def height(self) -> int:
        return self.array.shape[0]

    @property
    def has_alpha(self) -> bool:
        return self.array.shape[2] == 4

    @property
    def rgb(self) -> np.ndarray:
        return self.array[..., :3]

    def get_channel(self, x: int, y: int, channel: int) -> int:
        return int(self.array[y, x, channel])

    def set_channel(self, x: int, y: int, channel: int, value: int) -> None:
        self.array[y, x, channel] = value

    def copy(self) -> 'ArrayCarrier':
        return ArrayCarrier(self.array.copy())

    def __repr__(self) -> str:
        return f"ArrayCarrier({self.width}x{self.height}, alpha={self.has_alpha})"
