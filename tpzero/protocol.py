"""Wire format shared by the client and the server.

Every frame is a 4-byte operation code, a 4-byte payload size and the
payload itself. Integers are signed 32-bit little-endian. A package payload
is a sequence of values, each one prefixed by its own 4-byte length.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

_INT = struct.Struct("<i")
INT_SIZE = _INT.size


class ProtocolError(ValueError):
    """Raised when bytes do not follow the wire format."""


class OpCode(IntEnum):
    """Operation carried by a frame."""

    MESSAGE = 0
    PACKAGE = 1


def serialize(op_code: int, payload: bytes) -> bytes:
    """Build a frame from an operation code and a payload."""
    payload = bytes(payload)
    return _INT.pack(int(op_code)) + _INT.pack(len(payload)) + payload


def encode_message(message: str) -> bytes:
    """Frame a text message, NUL-terminated, as a MESSAGE operation."""
    return serialize(OpCode.MESSAGE, message.encode("utf-8") + b"\0")


def _as_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8") + b"\0"
    return bytes(value)


@dataclass
class Package:
    """A PACKAGE frame under construction."""

    op_code: OpCode = OpCode.PACKAGE
    payload: bytearray = field(default_factory=bytearray)

    def add(self, value: str | bytes) -> None:
        """Append a value; text is stored UTF-8 encoded with a NUL terminator."""
        data = _as_bytes(value)
        self.payload += _INT.pack(len(data)) + data

    def serialize(self) -> bytes:
        """Return the complete frame for this package."""
        return serialize(self.op_code, bytes(self.payload))


def decode_values(payload: bytes) -> list[bytes]:
    """Split a package payload into its length-prefixed values."""
    view = memoryview(bytes(payload))
    values: list[bytes] = []
    offset = 0
    while offset < len(view):
        if offset + INT_SIZE > len(view):
            raise ProtocolError("truncated value length")
        (size,) = _INT.unpack_from(view, offset)
        offset += INT_SIZE
        if size < 0:
            raise ProtocolError(f"negative value length {size}")
        if offset + size > len(view):
            raise ProtocolError("truncated value")
        values.append(bytes(view[offset:offset + size]))
        offset += size
    return values


def as_text(raw: bytes) -> str:
    """Read a C-style string: everything up to the first NUL."""
    return raw.split(b"\0", 1)[0].decode("utf-8", "replace")