"""Event commitment: Patricia root over per-event Poseidon hashes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..crypto.hash_chain import HashChain
from ..crypto.patricia import HashFn, calculate_root
from ..crypto.hash import poseidon_pair
from ..transaction import Event
from ..types import EventCommitment, Felt, TransactionHash


@dataclass(frozen=True)
class EventLeafElement:
    event: Event
    transaction_hash: TransactionHash


def calculate_event_hash(leaf: EventLeafElement) -> Felt:
    """Poseidon(from_address, tx_hash, |keys|, keys..., |data|, data...)."""
    return (
        HashChain()
        .chain(leaf.event.from_address)
        .chain(leaf.transaction_hash)
        .chain_size_and_elements(leaf.event.keys)
        .chain_size_and_elements(leaf.event.data)
        .get_poseidon_hash()
    )


def calculate_events_commitment(
    leaves: Sequence[EventLeafElement], hash_fn: HashFn = poseidon_pair
) -> EventCommitment:
    return EventCommitment(calculate_root([calculate_event_hash(l) for l in leaves], hash_fn))
