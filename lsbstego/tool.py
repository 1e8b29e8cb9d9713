"""File-level encode/decode: load the carrier, run the codec, write the result.

Every failure is returned as a :class:`ToolReport` with a status and a
one-line message; nothing is written when a step before the final save
fails.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import IOFailure, UnsupportedFormatError
from .imageio import format_for_path, load_carrier, read_secret, save_carrier, write_secret
from .lsb import decode, encode
from .results import Status, ToolReport

logger = logging.getLogger(__name__)


@dataclass
class StegoConfig:
    output_format: str | None = None  # PNG|BMP|TIFF, inferred from the output suffix if unset
    allow_lossy_carrier: bool = False


def _failed(status: Status, err: Exception, path) -> ToolReport:
    logger.error("%s: %s", status.value, err)
    return ToolReport(status, f"Error: {err}", info={"path": str(path)})


def encode_file(carrier_path, secret_path, output_path, cfg: StegoConfig | None = None) -> ToolReport:
    cfg = cfg or StegoConfig()
    try:
        fmt = format_for_path(output_path, cfg.output_format)
    except UnsupportedFormatError as e:
        return _failed(Status.OUTPUT_WRITE_FAILED, e, output_path)

    try:
        carrier = load_carrier(carrier_path, allow_lossy=cfg.allow_lossy_carrier)
    except IOFailure as e:
        return _failed(Status.CARRIER_LOAD_FAILED, e, carrier_path)

    try:
        secret = read_secret(secret_path)
    except IOFailure as e:
        return _failed(Status.SECRET_READ_FAILED, e, secret_path)

    result = encode(carrier, secret)
    if not result.ok:
        logger.warning("%s (need %d bits, have %d)", result.message, result.required_bits, result.capacity_bits)
        return ToolReport(result.status, result.message, info=result.as_dict())

    try:
        save_carrier(carrier, output_path, fmt)
    except IOFailure as e:
        return _failed(Status.OUTPUT_WRITE_FAILED, e, output_path)

    info = result.as_dict()
    info["path"] = str(output_path)
    return ToolReport(Status.OK, f"Success! Data encoded and saved to {output_path}",
                      output_path=str(output_path), info=info)


def decode_file(stego_path, output_path, cfg: StegoConfig | None = None) -> ToolReport:
    cfg = cfg or StegoConfig()
    try:
        carrier = load_carrier(stego_path, allow_lossy=cfg.allow_lossy_carrier)
    except IOFailure as e:
        return _failed(Status.CARRIER_LOAD_FAILED, e, stego_path)

    result = decode(carrier)
    if result.status is not Status.OK:
        if result.ok:
            logger.info(result.message)
        else:
            logger.warning(result.message)
        return ToolReport(result.status, result.message, info=result.as_dict())

    try:
        write_secret(output_path, result.payload)
    except IOFailure as e:
        return _failed(Status.OUTPUT_WRITE_FAILED, e, output_path)

    info = result.as_dict()
    info["path"] = str(output_path)
    return ToolReport(Status.OK, f"Success! Decoded data saved to {output_path}",
                      output_path=str(output_path), info=info)
