from __future__ import annotations

import argparse
import logging
import sys

from .tool import StegoConfig, decode_file


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="LSB extractor: recover a file hidden by lsbstego-embed")
    ap.add_argument('--input', required=True, help='stego image')
    ap.add_argument('--out', default='decoded_file', help='where to write the recovered bytes')
    ap.add_argument('--allow-lossy', action='store_true', help='accept a JPEG input')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    report = decode_file(args.input, args.out, StegoConfig(allow_lossy_carrier=args.allow_lossy))
    print(report.message)
    return 0 if report.ok else 1


if __name__ == '__main__':
    sys.exit(main())
