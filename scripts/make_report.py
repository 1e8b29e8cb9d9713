from __future__ import annotations

import argparse
import sys
import json
import logging
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from lsbstego.analysis import embed_report
from lsbstego.capacity import capacity_bits, fits, max_payload_bytes, required_bits
from lsbstego.imageio import load_carrier, read_secret, save_carrier
from lsbstego.lsb import decode, encode
from lsbstego.viz import plot_histograms, plot_lsb_planes

logger = logging.getLogger('make_report')


def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)


def gen_capacity(report_dir: Path, carrier_path: Path, secret_path: Path) -> dict:
    carrier = load_carrier(carrier_path)
    w, h = carrier.width, carrier.height
    secret_len = len(read_secret(secret_path))
    cap = capacity_bits(w, h)
    feasible = fits(w, h, secret_len)

    md = report_dir / 'capacity.md'
    md.write_text((
        f"# Capacity\n\n"
        f"- Carrier: {carrier_path} ({w}x{h}, 3 channels) -> {cap} bits, "
        f"{max_payload_bytes(w, h)} bytes after the 32-bit header.\n"
        f"- Secret: {secret_path}, {secret_len} bytes -> {required_bits(secret_len)} bits with header.\n"
        f"- Result: {'fits' if feasible else 'does not fit'}.\n"
    ), encoding='utf-8')

    return {
        'capacity_bits': cap,
        'capacity_bytes': max_payload_bytes(w, h),
        'secret_bytes': secret_len,
        'feasible': feasible,
    }


def gen_embedding(report_dir: Path, carrier_path: Path, secret_path: Path) -> dict:
    out_dir = report_dir / 'artifacts'
    ensure_dir(out_dir)

    cover = load_carrier(carrier_path)
    secret = read_secret(secret_path)
    stego = cover.copy()
    result = encode(stego, secret)
    result.raise_for_status()
    stego_path = out_dir / 'stego.png'
    save_carrier(stego, stego_path)

    plot_histograms(cover, stego, str(out_dir / 'hist.png'))
    plot_lsb_planes(cover, stego, str(out_dir / 'lsb_plane.png'))

    met = embed_report(cover, stego, result.as_dict())
    recovered = decode(load_carrier(stego_path))
    met['round_trip'] = recovered.payload == secret

    md = report_dir / 'embedding.md'
    md.write_text((
        f"# Embedding\n\n"
        f"- Stego image: artifacts/stego.png\n"
        f"- PSNR = {met['psnr']:.2f} dB, changed slots = {met['changed_slots']} of {met['used_bits']} written.\n"
        f"- Fill ratio: {met['fill_ratio']:.4%} of {met['capacity_bits']} bits.\n"
        f"- Round trip: {'ok' if met['round_trip'] else 'FAILED'}.\n\n"
        f"## Figures\n"
        f"- Histograms: artifacts/hist.png\n"
        f"- LSB planes: artifacts/lsb_plane.png\n"
    ), encoding='utf-8')

    return met


def main():
    ap = argparse.ArgumentParser(description="Capacity and embedding report for one carrier/secret pair")
    ap.add_argument('--carrier', required=True, type=Path)
    ap.add_argument('--secret', required=True, type=Path)
    ap.add_argument('--outdir', default=ROOT / 'reports', type=Path)
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO)

    report_dir = args.outdir
    ensure_dir(report_dir)

    summary = {'capacity': gen_capacity(report_dir, args.carrier, args.secret)}
    if summary['capacity']['feasible']:
        summary['embedding'] = gen_embedding(report_dir, args.carrier, args.secret)
    else:
        logger.warning("Secret does not fit; skipping embedding")

    (report_dir / 'summary.json').write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding='utf-8')
    print(f"Report written to {report_dir}")


if __name__ == '__main__':
    main()
