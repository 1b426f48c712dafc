"""Hash test vector generators for the Starknet field primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import FIELD_PRIME
from .hash import keccak256, pedersen, poseidon_many, poseidon_pair, starknet_keccak


@dataclass
class BytesHashVector:
    name: str
    description: Optional[str]
    input_hex: str
    input_ascii: Optional[str]
    input_length: int
    expected_hex: str


@dataclass
class FeltHashVector:
    name: str
    description: Optional[str]
    inputs: List[str]
    expected: str


def _bytes_vector(
    name: str, data: bytes, expected: str, description: Optional[str] = None
) -> BytesHashVector:
    printable = data.isascii() and data.decode("ascii").isprintable()
    return BytesHashVector(
        name=name,
        description=description,
        input_hex=data.hex(),
        input_ascii=data.decode("ascii") if printable else None,
        input_length=len(data),
        expected_hex=expected,
    )


_BYTE_INPUTS = (
    ("empty_string", b"", None),
    ("hello", b"hello", None),
    ("selector_transfer", b"transfer", "Entry point name"),
    ("selector_increase_balance", b"increase_balance", "Entry point name"),
    ("all_bytes", bytes(range(256)), "All byte values 0x00-0xFF"),
)

_FELT_PAIRS = (
    ("zeros", 0, 0),
    ("one_two", 1, 2),
    (
        "reference_pair",
        0x03D937C035C878245CAF64531A5756109C53068DA139362728FEB561405371CB,
        0x0208A0A10250E382E1E4BBE2880906C2791BF6275695E02FBBC6AEFF9CD8B31A,
    ),
    ("max_felts", FIELD_PRIME - 1, FIELD_PRIME - 1),
)

_FELT_ARRAYS = (
    ("empty", []),
    ("single", [1]),
    ("three", [1, 2, 3]),
    ("max_felt", [FIELD_PRIME - 1, 0, FIELD_PRIME - 1]),
)


def keccak256_vectors() -> Dict[str, Any]:
    vectors = [
        _bytes_vector(name, data, keccak256(data).hex(), desc)
        for name, data, desc in _BYTE_INPUTS
    ]
    return {
        "algorithm": "Keccak256",
        "output_size": 32,
        "test_vectors": [v.__dict__ for v in vectors],
    }


def starknet_keccak_vectors() -> Dict[str, Any]:
    vectors = [
        _bytes_vector(name, data, hex(starknet_keccak(data)), desc)
        for name, data, desc in _BYTE_INPUTS
    ]
    return {
        "algorithm": "StarknetKeccak",
        "output_bits": 250,
        "test_vectors": [v.__dict__ for v in vectors],
    }


def pedersen_vectors() -> Dict[str, Any]:
    vectors = [
        FeltHashVector(
            name=name,
            description=None,
            inputs=[hex(a), hex(b)],
            expected=hex(pedersen(a, b)),
        )
        for name, a, b in _FELT_PAIRS
    ]
    return {
        "algorithm": "Pedersen",
        "arity": 2,
        "test_vectors": [v.__dict__ for v in vectors],
    }


def poseidon_vectors() -> Dict[str, Any]:
    vectors: List[FeltHashVector] = [
        FeltHashVector(
            name=f"pair_{name}",
            description="hades permutation over (a, b, 2)",
            inputs=[hex(a), hex(b)],
            expected=hex(poseidon_pair(a, b)),
        )
        for name, a, b in _FELT_PAIRS
    ]
    vectors.extend(
        FeltHashVector(
            name=f"many_{name}",
            description="padded sponge over the whole array",
            inputs=[hex(v) for v in values],
            expected=hex(poseidon_many(values)),
        )
        for name, values in _FELT_ARRAYS
    )
    return {
        "algorithm": "Poseidon",
        "test_vectors": [v.__dict__ for v in vectors],
    }
