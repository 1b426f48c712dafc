"""State-diff hash.

Every map is emitted in ascending key order regardless of how it was built,
so two diffs with the same content always hash the same. Replaced classes
do not enter the hash, and neither do nonces.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from ..config import STATE_DIFF_HASH_PREFIX
from ..crypto.hash import ascii_as_felt
from ..crypto.hash_chain import HashChain
from ..state import ThinStateDiff
from ..types import StateDiffCommitment

_STATE_DIFF_HASH_PREFIX = ascii_as_felt(STATE_DIFF_HASH_PREFIX)


def _chain_sorted_map(chain: HashChain, mapping: Mapping[int, int]) -> HashChain:
    chain.chain(len(mapping))
    for key in sorted(mapping):
        chain.chain(key).chain(mapping[key])
    return chain


def _chain_sorted_set(chain: HashChain, values: Iterable[int]) -> HashChain:
    return chain.chain_size_and_elements(sorted(values))


def _chain_storage_diffs(
    chain: HashChain, storage_diffs: Mapping[int, Mapping[int, int]]
) -> HashChain:
    non_empty = {address: updates for address, updates in storage_diffs.items() if updates}
    chain.chain(len(non_empty))
    for address in sorted(non_empty):
        chain.chain(address)
        _chain_sorted_map(chain, non_empty[address])
    return chain


def calculate_state_diff_hash(diff: ThinStateDiff) -> StateDiffCommitment:
    chain = HashChain().chain(_STATE_DIFF_HASH_PREFIX)
    _chain_sorted_map(chain, diff.deployed_contracts)
    _chain_sorted_map(chain, diff.declared_classes)
    _chain_sorted_set(chain, diff.deprecated_declared_classes)
    chain.chain(1).chain(0)  # placeholders
    _chain_storage_diffs(chain, diff.storage_diffs)
    return StateDiffCommitment(chain.get_poseidon_hash())
