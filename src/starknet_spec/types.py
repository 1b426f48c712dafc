"""Core numeric types for Starknet Python specs.

Every identifier that wraps a field element is an ``int`` subclass whose
constructor enforces its range, so a value that exists is always valid.
Arithmetic on these types yields plain ``int``; wrap the result again to
re-validate it.
"""

from __future__ import annotations

import operator
import string
from typing import Iterator, Optional

from .config import (
    ETH_ADDRESS_BYTES,
    FELT_BYTES,
    FIELD_PRIME,
    MAX_FELT_HEX_DIGITS,
    PATRICIA_KEY_UPPER_BOUND,
    QUERY_VERSION_BASE,
    U64_MAX,
    U128_MAX,
)
from .errors import BadHex, BadInput, OutOfRange

_HEX_DIGITS = frozenset(string.hexdigits)


def strip_hex_prefix(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def parse_hex_digits(value: str) -> str:
    """Return the bare hex digits of ``value`` (prefix optional)."""
    digits = strip_hex_prefix(value)
    if not digits:
        raise BadHex(f"empty hex string {value!r}")
    for idx, ch in enumerate(digits):
        if ch not in _HEX_DIGITS:
            raise BadHex(f"invalid hex character {ch!r} at index {idx} in {value!r}")
    return digits


class BoundedUint(int):
    """Unsigned integer restricted to ``[0, _upper_bound)``."""

    _upper_bound: int = U64_MAX + 1

    def __new__(cls, value: int = 0):
        value = operator.index(value)
        if not 0 <= value < cls._upper_bound:
            raise OutOfRange(
                f"{cls.__name__} value {value:#x} not in [0, {cls._upper_bound:#x})"
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self):#x})"

    def to_hex(self) -> str:
        return hex(self)


class Felt(BoundedUint):
    """Element of the STARK prime field, kept as its canonical residue."""

    _upper_bound = FIELD_PRIME

    @classmethod
    def from_hex(cls, value: str):
        digits = parse_hex_digits(value).lstrip("0")
        if len(digits) > MAX_FELT_HEX_DIGITS:
            raise OutOfRange(f"{value!r} has more than {MAX_FELT_HEX_DIGITS} hex digits")
        return cls(int(digits or "0", 16))

    @classmethod
    def from_bytes_be(cls, data: bytes):
        if len(data) != FELT_BYTES:
            raise BadInput(f"expected {FELT_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    def to_bytes_be(self) -> bytes:
        return int(self).to_bytes(FELT_BYTES, "big")


def felt_from_hex(value: str) -> Felt:
    return Felt.from_hex(value)


def felt_from_bytes_be(data: bytes) -> Felt:
    return Felt.from_bytes_be(data)


def felt_to_bytes_be(value: int) -> bytes:
    return Felt(value).to_bytes_be()


class PatriciaKey(Felt):
    """A felt that addresses a leaf of a height-251 Patricia tree."""

    _upper_bound = PATRICIA_KEY_UPPER_BOUND


class ContractAddress(PatriciaKey):
    pass


class StorageKey(PatriciaKey):
    pass


class ClassHash(Felt):
    pass


class CompiledClassHash(Felt):
    pass


class EntryPointSelector(Felt):
    pass


class ContractAddressSalt(Felt):
    pass


class TransactionHash(Felt):
    pass


class BlockHash(Felt):
    pass


class GlobalRoot(Felt):
    pass


class TransactionCommitment(Felt):
    pass


class EventCommitment(Felt):
    pass


class ReceiptCommitment(Felt):
    pass


class StateDiffCommitment(Felt):
    pass


class Nonce(Felt):
    def try_increment(self) -> "Nonce":
        return Nonce(self + 1)


class TransactionVersion(Felt):
    """Signed version of a transaction; query versions set bit 128."""

    def to_query_version(self) -> "TransactionVersion":
        return TransactionVersion(self + QUERY_VERSION_BASE)

    def is_query(self) -> bool:
        return self >= QUERY_VERSION_BASE


TransactionVersion.ZERO = TransactionVersion(0)
TransactionVersion.ONE = TransactionVersion(1)
TransactionVersion.TWO = TransactionVersion(2)
TransactionVersion.THREE = TransactionVersion(3)


class BlockNumber(BoundedUint):
    _upper_bound = U64_MAX + 1

    def next(self) -> Optional["BlockNumber"]:
        if self == U64_MAX:
            return None
        return BlockNumber(self + 1)

    def prev(self) -> Optional["BlockNumber"]:
        if self == 0:
            return None
        return BlockNumber(self - 1)

    def iter_up_to(self, up_to: int) -> Iterator["BlockNumber"]:
        """Yield ``self, self + 1, ..., up_to - 1``."""
        for value in range(int(self), int(up_to)):
            yield BlockNumber(value)


class BlockTimestamp(BoundedUint):
    _upper_bound = U64_MAX + 1


class GasPrice(BoundedUint):
    _upper_bound = U128_MAX + 1


class Fee(BoundedUint):
    _upper_bound = U128_MAX + 1


class Tip(BoundedUint):
    _upper_bound = U64_MAX + 1


class EthAddress(BoundedUint):
    """A 20-byte L1 address; as a felt the upper 12 bytes are zero."""

    _upper_bound = 2 ** (8 * ETH_ADDRESS_BYTES)

    @classmethod
    def from_felt(cls, value: int) -> "EthAddress":
        return cls(Felt(value))

    def to_felt(self) -> Felt:
        return Felt(self)

    def to_bytes(self) -> bytes:
        return int(self).to_bytes(ETH_ADDRESS_BYTES, "big")
