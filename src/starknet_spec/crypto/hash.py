"""Field hash primitives: Pedersen, Poseidon, Starknet keccak, ASCII felts.

Pedersen and Poseidon come from cairo-lang so that the Starkware curve
points, round constants and MDS matrix are exactly the on-chain ones.
"""

from __future__ import annotations

from typing import Iterable

from Cryptodome.Hash import keccak as _keccak
from starkware.cairo.common.poseidon_hash import poseidon_hash, poseidon_hash_many
from starkware.crypto.signature.fast_pedersen_hash import pedersen_hash

from ..config import KECCAK_MASK, MAX_ASCII_FELT_LENGTH
from ..errors import BadInput, OutOfRange
from ..types import Felt


def pedersen(a: int, b: int) -> Felt:
    return Felt(pedersen_hash(Felt(a), Felt(b)))


def poseidon_pair(a: int, b: int) -> Felt:
    return Felt(poseidon_hash(Felt(a), Felt(b)))


def poseidon_many(values: Iterable[int]) -> Felt:
    return Felt(poseidon_hash_many([Felt(v) for v in values]))


def keccak256(data: bytes) -> bytes:
    h = _keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()


def starknet_keccak(data: bytes) -> Felt:
    """Keccak-256 with the six most significant bits of the digest cleared."""
    return Felt(int.from_bytes(keccak256(data), "big") & KECCAK_MASK)


def ascii_bytes(value: str) -> bytes:
    try:
        return value.encode("ascii")
    except UnicodeEncodeError as exc:
        raise BadInput(f"{value!r} is not ASCII") from exc


def ascii_as_felt(value: str) -> Felt:
    """Interpret the ASCII bytes of ``value`` as a big-endian integer."""
    raw = ascii_bytes(value)
    if len(raw) > MAX_ASCII_FELT_LENGTH:
        raise OutOfRange(f"{value!r} is longer than {MAX_ASCII_FELT_LENGTH} bytes")
    return Felt(int.from_bytes(raw, "big"))


def selector_from_name(name: str) -> Felt:
    return starknet_keccak(ascii_bytes(name))
