"""Length-aware sequential hash accumulator."""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Optional

from ..types import Felt
from .hash import pedersen, poseidon_many


class HashChain:
    """Collects felts in order and hashes them with Pedersen or Poseidon.

    All ``chain*`` methods return ``self`` so formulas read top to bottom::

        HashChain().chain(tag).chain_iter(calldata).get_pedersen_hash()
    """

    def __init__(self) -> None:
        self.elements: list[Felt] = []

    def chain(self, value: int) -> "HashChain":
        self.elements.append(Felt(value))
        return self

    def chain_iter(self, values: Iterable[int]) -> "HashChain":
        for value in values:
            self.chain(value)
        return self

    def chain_size_and_elements(self, values: Iterable[int]) -> "HashChain":
        items = list(values)
        return self.chain(len(items)).chain_iter(items)

    def chain_if(self, value: Optional[int]) -> "HashChain":
        if value is not None:
            self.chain(value)
        return self

    def __len__(self) -> int:
        return len(self.elements)

    def get_pedersen_hash(self) -> Felt:
        acc = reduce(pedersen, self.elements, Felt(0))
        return pedersen(acc, len(self.elements))

    def get_poseidon_hash(self) -> Felt:
        return poseidon_many(self.elements)


def pedersen_hash_array(values: Iterable[int]) -> Felt:
    return HashChain().chain_iter(values).get_pedersen_hash()


def poseidon_hash_array(values: Iterable[int]) -> Felt:
    return HashChain().chain_iter(values).get_poseidon_hash()
