"""Transaction commitment: Patricia root over Poseidon(tx_hash, signature...)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..crypto.hash import poseidon_pair
from ..crypto.hash_chain import HashChain
from ..crypto.patricia import HashFn, calculate_root
from ..types import Felt, TransactionCommitment, TransactionHash


@dataclass(frozen=True)
class TransactionLeafElement:
    transaction_hash: TransactionHash
    # None for transaction kinds without a signature field.
    transaction_signature: Optional[tuple[Felt, ...]] = None


def calculate_transaction_leaf(leaf: TransactionLeafElement) -> Felt:
    signature = leaf.transaction_signature
    if signature is None:
        signature = (Felt(0),)
    return HashChain().chain(leaf.transaction_hash).chain_iter(signature).get_poseidon_hash()


def calculate_transactions_commitment(
    leaves: Sequence[TransactionLeafElement], hash_fn: HashFn = poseidon_pair
) -> TransactionCommitment:
    return TransactionCommitment(
        calculate_root([calculate_transaction_leaf(l) for l in leaves], hash_fn)
    )
