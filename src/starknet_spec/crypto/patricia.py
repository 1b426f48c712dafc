"""Patricia-tree root over an ordered list of leaves.

Leaf ``i`` sits at key ``i`` in a binary tree of height 64; keys are read
most significant bit first. Empty subtrees are never materialized:

* binary node: ``H(left, right)``
* edge node of ``length`` bits along ``path``: ``H(child, path) + length``
* leaf: the leaf value itself
"""

from __future__ import annotations

from typing import Callable, Sequence

from ..config import FIELD_PRIME, PATRICIA_TREE_HEIGHT
from ..types import Felt
from .hash import pedersen, poseidon_pair

HashFn = Callable[[int, int], Felt]

_Leaf = tuple[int, Felt]


def _bit(key: int, height: int) -> int:
    return (key >> (PATRICIA_TREE_HEIGHT - 1 - height)) & 1


def _common_length(first_key: int, last_key: int, height: int) -> int:
    length = 0
    while (
        height + length < PATRICIA_TREE_HEIGHT
        and _bit(first_key, height + length) == _bit(last_key, height + length)
    ):
        length += 1
    return length


def _get_hash(leaves: Sequence[_Leaf], height: int, hash_fn: HashFn) -> Felt:
    if height == PATRICIA_TREE_HEIGHT:
        return leaves[0][1]

    first_key = leaves[0][0]
    last_key = leaves[-1][0]

    if _bit(first_key, height) != _bit(last_key, height):
        split = next(i for i, (key, _) in enumerate(leaves) if _bit(key, height))
        left = _get_hash(leaves[:split], height + 1, hash_fn)
        right = _get_hash(leaves[split:], height + 1, hash_fn)
        return Felt(hash_fn(left, right))

    # Leaves are sorted, so bits shared by the first and last key are shared by all.
    length = _common_length(first_key, last_key, height)
    remaining = PATRICIA_TREE_HEIGHT - height - length
    path = (first_key >> remaining) & ((1 << length) - 1)
    child = _get_hash(leaves, height + length, hash_fn)
    return Felt((hash_fn(child, path) + length) % FIELD_PRIME)


def calculate_root(leaves: Sequence[int], hash_fn: HashFn = poseidon_pair) -> Felt:
    """Root of the tree holding ``leaves[i]`` at key ``i``; ``0`` when empty."""
    if not leaves:
        return Felt(0)
    if len(leaves) > 2**PATRICIA_TREE_HEIGHT:
        raise ValueError("too many leaves for a height-64 tree")
    indexed = [(idx, Felt(leaf)) for idx, leaf in enumerate(leaves)]
    return _get_hash(indexed, 0, hash_fn)


def calculate_pedersen_root(leaves: Sequence[int]) -> Felt:
    return calculate_root(leaves, pedersen)
