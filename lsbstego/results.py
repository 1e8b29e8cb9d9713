from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .errors import (CarrierLoadError, InsufficientCapacityError, InvalidLengthError,
                     OutputWriteError, SecretReadError)


class Status(str, Enum):
    OK = "ok"
    EMPTY_PAYLOAD = "empty_payload"
    INSUFFICIENT_CAPACITY = "insufficient_capacity"
    INVALID_LENGTH = "invalid_length"
    CARRIER_LOAD_FAILED = "carrier_load_failed"
    SECRET_READ_FAILED = "secret_read_failed"
    OUTPUT_WRITE_FAILED = "output_write_failed"


# statuses that describe a usable outcome
_OK_STATUSES = {Status.OK, Status.EMPTY_PAYLOAD}


def _raise_for(status: Status, message: str, info: Dict) -> None:
    if status in _OK_STATUSES:
        return
    if status is Status.INSUFFICIENT_CAPACITY:
        raise InsufficientCapacityError(info.get("required_bits"), info.get("capacity_bits"))
    if status is Status.INVALID_LENGTH:
        raise InvalidLengthError(info.get("payload_len"), info.get("capacity_bits"))
    exc = {
        Status.CARRIER_LOAD_FAILED: CarrierLoadError,
        Status.SECRET_READ_FAILED: SecretReadError,
        Status.OUTPUT_WRITE_FAILED: OutputWriteError,
    }[status]
    raise exc(info.get("path", ""), message)


@dataclass
class EncodeResult:
    status: Status
    message: str
    capacity_bits: int
    required_bits: int
    payload_len: int

    @property
    def ok(self) -> bool:
        return self.status in _OK_STATUSES

    @property
    def used_bits(self) -> int:
        return self.required_bits if self.status is Status.OK else 0

    def as_dict(self) -> Dict:
        return {
            "status": self.status.value,
            "capacity_bits": self.capacity_bits,
            "required_bits": self.required_bits,
            "used_bits": self.used_bits,
            "payload_len": self.payload_len,
        }

    def raise_for_status(self) -> None:
        _raise_for(self.status, self.message, self.as_dict())


@dataclass
class DecodeResult:
    status: Status
    message: str
    capacity_bits: int
    payload_len: int | None = 0  # None when no header could be read
    payload: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status in _OK_STATUSES

    def as_dict(self) -> Dict:
        return {
            "status": self.status.value,
            "capacity_bits": self.capacity_bits,
            "payload_len": self.payload_len,
        }

    def raise_for_status(self) -> None:
        _raise_for(self.status, self.message, self.as_dict())


@dataclass
class ToolReport:
    """Outcome of a file-level encode or decode."""
    status: Status
    message: str
    output_path: str | None = None
    info: Dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status in _OK_STATUSES

    def raise_for_status(self) -> None:
        _raise_for(self.status, self.message, self.info)
