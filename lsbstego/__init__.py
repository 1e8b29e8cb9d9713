"""
LSB image steganography: hide a byte payload in the R, G, B least-significant bits.

Modules:
- bits / traversal / capacity: bit packing, slot order, capacity arithmetic.
- carrier: the pixel-buffer interface and a numpy-backed implementation.
- lsb: encode/decode with a 32-bit length header.
- imageio, tool: Pillow and file collaborators, file-level encode/decode.
- analysis, viz: embedding diagnostics and plotting helpers.
- embedder, extractor: command-line entry points.
"""
from .carrier import ArrayCarrier, PixelBuffer
from .lsb import decode, embed_lsb, encode, extract_lsb
from .results import DecodeResult, EncodeResult, Status, ToolReport
from .tool import StegoConfig, decode_file, encode_file

__all__ = [
    "ArrayCarrier", "PixelBuffer",
    "encode", "decode", "embed_lsb", "extract_lsb",
    "Status", "EncodeResult", "DecodeResult", "ToolReport",
    "StegoConfig", "encode_file", "decode_file",
]
