from __future__ import annotations

import numpy as np
from typing import Dict

from .carrier import ArrayCarrier
from .traversal import CHANNEL_NAMES


def lsb_plane(carrier: ArrayCarrier) -> np.ndarray:
    # mean LSB over R, G, B per pixel
    return (carrier.rgb & 1).mean(axis=2)


def hist_256(carrier: ArrayCarrier) -> Dict[str, np.ndarray]:
    out: Dict[str, np.ndarray] = {}
    for c, name in enumerate(CHANNEL_NAMES):
        h, _ = np.histogram(carrier.rgb[..., c].reshape(-1), bins=256, range=(0, 256))
        out[name] = h
    return out


def lsb_ratios(carrier: ArrayCarrier) -> Dict[str, float]:
    stats: Dict[str, float] = {}
    for c, name in enumerate(CHANNEL_NAMES):
        plane = carrier.rgb[..., c].reshape(-1)
        ones = int(np.count_nonzero(plane & 1))
        zeros = plane.size - ones
        stats[f"{name}_ones"] = ones
        stats[f"{name}_zeros"] = zeros
        stats[f"{name}_ones_ratio"] = ones / max(1, plane.size)
    return stats


def psnr(before: ArrayCarrier, after: ArrayCarrier) -> float:
    a = before.rgb.astype(np.float64)
    b = after.rgb.astype(np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Carrier sizes differ: {before.width}x{before.height} vs {after.width}x{after.height}")
    mse = np.mean((a - b) ** 2)
    if mse == 0:
        return 99.0
    return float(20 * np.log10(255.0 / np.sqrt(mse)))


def changed_slots(before: ArrayCarrier, after: ArrayCarrier) -> int:
    if before.rgb.shape != after.rgb.shape:
        raise ValueError("Carrier sizes differ")
    return int(np.count_nonzero(before.rgb != after.rgb))


def embed_report(before: ArrayCarrier, after: ArrayCarrier, info: Dict) -> Dict:
    """Diagnostics for one embedding; ``info`` is the codec summary (see ``EncodeResult.as_dict``)."""
    return {
        **info,
        "width": after.width,
        "height": after.height,
        "fill_ratio": info["used_bits"] / max(1, info["capacity_bits"]),
        "changed_slots": changed_slots(before, after),
        "psnr": psnr(before, after),
        "lsb_before": lsb_ratios(before),
        "lsb_after": lsb_ratios(after),
    }
