from __future__ import annotations

import os, sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import numpy as np
from lsbstego.carrier import ArrayCarrier
from lsbstego.lsb import encode, decode
from lsbstego.capacity import max_payload_bytes
from lsbstego.imageio import save_carrier, load_carrier
from lsbstego.analysis import psnr, changed_slots
from lsbstego.viz import plot_histograms, plot_lsb_planes


def run():
    out_dir = 'out_lsb'
    os.makedirs(out_dir, exist_ok=True)
    out_img = os.path.join(out_dir, 'stego.png')

    # gradient cover so the histograms have something to show
    h, w = 120, 160
    yy, xx = np.mgrid[0:h, 0:w]
    arr = np.stack([xx * 255 // w, yy * 255 // h, (xx + yy) % 256], axis=-1).astype(np.uint8)
    cover = ArrayCarrier(arr)

    msg = 'Hidden in plain sight: 32-bit length header, LSB-first, R->G->B.'.encode('utf-8')
    print(f'Capacity: {max_payload_bytes(w, h)} bytes, payload: {len(msg)} bytes')

    stego = cover.copy()
    result = encode(stego, msg)
    print(result.message)
    save_carrier(stego, out_img)

    plot_histograms(cover, stego, os.path.join(out_dir, 'hist.png'))
    plot_lsb_planes(cover, stego, os.path.join(out_dir, 'lsb_plane.png'))

    print('PSNR:', psnr(cover, stego))
    print('Changed slots:', changed_slots(cover, stego), 'of', result.used_bits)

    rec = decode(load_carrier(out_img))
    print(rec.message)
    print('Recovered:', rec.payload.decode('utf-8', errors='ignore'))


if __name__ == '__main__':
    run()
