"""Byte-level encodings: hex strings, fixed-width integers, compact felts."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import FELT_BYTES
from .errors import BadHex, BadInput, MissingPrefix
from .types import Felt, parse_hex_digits

# Compact felt encoding: the high nibble of the first byte selects the width.
CHOOSER_FULL = 15
CHOOSER_HALF = 14


@dataclass
class Writer:
    buf: bytearray = field(default_factory=bytearray)

    def write_u8(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(1, "big", signed=False))

    def write_u64(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(8, "big", signed=False))

    def write_u128(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(16, "big", signed=False))

    def write_bytes(self, b: bytes) -> None:
        self.buf.extend(b)

    def to_bytes(self) -> bytes:
        return bytes(self.buf)


@dataclass
class Reader:
    data: bytes
    pos: int = 0

    def read_exact(self, n: int) -> bytes:
        end = self.pos + n
        if end > len(self.data):
            raise BadInput(f"need {n} bytes at offset {self.pos}, have {len(self.data) - self.pos}")
        out = self.data[self.pos:end]
        self.pos = end
        return out

    def remaining(self) -> int:
        return len(self.data) - self.pos


def hex_str_from_bytes(data: bytes, prefixed: bool = True) -> str:
    """Lowercase hex with leading zeros stripped (``"0x0"`` / ``"0"`` for zero)."""
    digits = data.hex().lstrip("0") or "0"
    return f"0x{digits}" if prefixed else digits


def bytes_from_hex_str(value: str, n_bytes: int, prefixed: bool = True) -> bytes:
    """Decode ``value`` into exactly ``n_bytes`` bytes, left-padded with zeros."""
    if prefixed:
        if not value.startswith("0x"):
            raise MissingPrefix(f"{value!r} is missing the '0x' prefix")
        digits = parse_hex_digits(value)
    else:
        if not value:
            raise BadHex("empty hex string")
        for idx, ch in enumerate(value):
            if ch not in "0123456789abcdefABCDEF":
                raise BadHex(f"invalid hex character {ch!r} at index {idx} in {value!r}")
        digits = value
    if len(digits) % 2:
        digits = "0" + digits
    raw = bytes.fromhex(digits)
    if len(raw) > n_bytes:
        raise BadInput(f"expected at most {n_bytes} bytes, got {len(raw)} in {value!r}")
    return raw.rjust(n_bytes, b"\0")


def fixed_width_hex(value: int, n_bytes: int) -> str:
    """Prefixed hex of ``value`` as ``n_bytes`` big-endian bytes, zeros collapsed."""
    return hex_str_from_bytes(int(value).to_bytes(n_bytes, "big"))


def int_from_fixed_width_hex(value: str, n_bytes: int) -> int:
    return int.from_bytes(bytes_from_hex_str(value, n_bytes), "big")


def serialize_felt_compact(value: int, w: Writer) -> None:
    """Storage-efficient felt encoding.

    Felts of up to 27 nibbles take ``chooser + 1`` bytes, 28 to 33 nibbles
    take 17 bytes, anything longer takes the full 32 bytes. The chooser lives
    in the high nibble of the first byte, which is free since felts are below
    ``2**252``.
    """
    raw = Felt(value).to_bytes_be()
    first_index = FELT_BYTES - 1
    for idx, byte in enumerate(raw):
        if byte == 0:
            continue
        first_index = idx if byte < 16 else idx - 1
        break

    if first_index < 15:
        chooser, first_index = CHOOSER_FULL, 0
    elif first_index < 18:
        chooser, first_index = CHOOSER_HALF, 15
    else:
        chooser = FELT_BYTES - 1 - first_index

    w.write_u8((chooser << 4) | raw[first_index])
    w.write_bytes(raw[first_index + 1:])


def deserialize_felt_compact(r: Reader) -> Felt:
    first = r.read_exact(1)[0]
    chooser = first >> 4
    if chooser == CHOOSER_FULL:
        first_index = 0
    elif chooser == CHOOSER_HALF:
        first_index = 15
    else:
        first_index = FELT_BYTES - 1 - chooser
    tail = r.read_exact(FELT_BYTES - 1 - first_index)
    raw = bytes(first_index) + bytes([first & 0x0F]) + tail
    return Felt.from_bytes_be(raw)


def encode_felt_compact(value: int) -> bytes:
    w = Writer()
    serialize_felt_compact(value, w)
    return w.to_bytes()


def decode_felt_compact(data: bytes) -> Felt:
    r = Reader(data)
    out = deserialize_felt_compact(r)
    if r.remaining():
        raise BadInput(f"{r.remaining()} trailing bytes after compact felt")
    return out
