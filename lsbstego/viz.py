from __future__ import annotations

import matplotlib
matplotlib.use('Agg')  # headless
import matplotlib.pyplot as plt

from .analysis import hist_256, lsb_plane
from .carrier import ArrayCarrier


def plot_histograms(before: ArrayCarrier, after: ArrayCarrier, out_path: str) -> None:
    hb = hist_256(before)
    ha = hist_256(after)
    fig, axs = plt.subplots(len(hb), 1, figsize=(8, 3 * len(hb)), tight_layout=True)
    for ax, k in zip(axs, hb):
        ax.plot(hb[k], label='before')
        ax.plot(ha[k], label='after')
        ax.set_title(f'Histogram {k}')
        ax.legend()
    fig.savefig(out_path)
    plt.close(fig)


def plot_lsb_planes(before: ArrayCarrier, after: ArrayCarrier, out_path: str) -> None:
    fig, axs = plt.subplots(1, 2, figsize=(8, 4), tight_layout=True)
    for ax, carrier, title in ((axs[0], before, 'LSB plane before'), (axs[1], after, 'LSB plane after')):
        ax.imshow(lsb_plane(carrier), cmap='gray', vmin=0, vmax=1)
        ax.set_title(title)
        ax.axis('off')
    fig.savefig(out_path)
    plt.close(fig)
