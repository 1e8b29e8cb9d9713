from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .analysis import embed_report
from .imageio import load_carrier
from .tool import StegoConfig, encode_file
from .viz import plot_histograms, plot_lsb_planes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="LSB embedder: hide a file inside a lossless image")
    ap.add_argument('--input', required=True, help='carrier image (PNG/BMP/TIFF)')
    ap.add_argument('--secret', required=True, help='file to hide')
    ap.add_argument('--out', default='output.png', help='output stego image path')
    ap.add_argument('--format', default=None, choices=['PNG', 'BMP', 'TIFF'], help='output format (default: from --out suffix)')
    ap.add_argument('--allow-lossy', action='store_true', help='accept a JPEG carrier')
    ap.add_argument('--report', default=None, help='optional JSON report path')
    ap.add_argument('--figdir', default=None, help='optional directory to save figures')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    cfg = StegoConfig(output_format=args.format, allow_lossy_carrier=args.allow_lossy)
    report = encode_file(args.input, args.secret, args.out, cfg)
    print(report.message)
    if not report.ok:
        return 1

    if args.report or args.figdir:
        before = load_carrier(args.input, allow_lossy=cfg.allow_lossy_carrier)
        after = load_carrier(args.out)
        meta = {'input': args.input, 'output': args.out, **embed_report(before, after, report.info)}

        if args.figdir:
            os.makedirs(args.figdir, exist_ok=True)
            plot_histograms(before, after, os.path.join(args.figdir, 'hist.png'))
            plot_lsb_planes(before, after, os.path.join(args.figdir, 'lsb_plane.png'))
            logger.info("Figures written to %s", args.figdir)

        if args.report:
            with open(args.report, 'w', encoding='utf-8') as f:
                json.dump(meta, f, ensure_ascii=False, indent=2)
            logger.info("Report written to %s", args.report)

        print(f"PSNR = {meta['psnr']:.2f} dB")
        print(f"Used bits = {meta['used_bits']}/{meta['capacity_bits']}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
