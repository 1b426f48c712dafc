"""Block commitments and block hash."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..block import (
    BlockHeaderCommitments,
    BlockHeaderWithoutHash,
    GasPricePerToken,
    concat_counts,
)
from ..config import BLOCK_HASH_PREFIX
from ..crypto.hash import ascii_as_felt
from ..crypto.hash_chain import HashChain
from ..data_availability import L1DataAvailabilityMode
from ..state import ThinStateDiff
from ..transaction import TransactionOutput
from ..types import BlockHash, Felt, TransactionHash, TransactionVersion
from .events import EventLeafElement, calculate_events_commitment
from .receipts import ReceiptElement, calculate_receipt_commitment
from .state_diff import calculate_state_diff_hash
from .transactions import TransactionLeafElement, calculate_transactions_commitment

_BLOCK_HASH_PREFIX = ascii_as_felt(BLOCK_HASH_PREFIX)


@dataclass(frozen=True)
class TransactionHashingData:
    """Everything about one transaction that enters the block commitments."""

    transaction_signature: Optional[tuple[Felt, ...]]
    transaction_output: TransactionOutput
    transaction_hash: TransactionHash
    transaction_version: TransactionVersion


def calculate_block_commitments(
    transactions_data: Sequence[TransactionHashingData],
    state_diff: ThinStateDiff,
    l1_data_gas_price: GasPricePerToken,
    l1_gas_price: GasPricePerToken,
    l1_da_mode: L1DataAvailabilityMode,
) -> BlockHeaderCommitments:
    transaction_leaves = [
        TransactionLeafElement(data.transaction_hash, data.transaction_signature)
        for data in transactions_data
    ]
    event_leaves = [
        EventLeafElement(event, data.transaction_hash)
        for data in transactions_data
        for event in data.transaction_output.events
    ]
    receipt_elements = [
        ReceiptElement(data.transaction_hash, data.transaction_output, data.transaction_version)
        for data in transactions_data
    ]
    return BlockHeaderCommitments(
        transaction_commitment=calculate_transactions_commitment(transaction_leaves),
        event_commitment=calculate_events_commitment(event_leaves),
        receipt_commitment=calculate_receipt_commitment(
            receipt_elements, l1_data_gas_price, l1_gas_price
        ),
        state_diff_commitment=calculate_state_diff_hash(state_diff),
        concatenated_counts=concat_counts(
            len(transactions_data), len(event_leaves), state_diff.length(), l1_da_mode
        ),
    )


def calculate_block_hash(
    header: BlockHeaderWithoutHash, commitments: BlockHeaderCommitments
) -> BlockHash:
    """Poseidon over the header fields, the commitments and the gas prices."""
    return BlockHash(
        HashChain()
        .chain(_BLOCK_HASH_PREFIX)
        .chain(header.block_number)
        .chain(header.state_root)
        .chain(header.sequencer)
        .chain(header.timestamp)
        .chain(commitments.concatenated_counts)
        .chain(commitments.state_diff_commitment)
        .chain(commitments.transaction_commitment)
        .chain(commitments.event_commitment)
        .chain(commitments.receipt_commitment)
        .chain(header.l1_gas_price.price_in_wei)
        .chain(header.l1_gas_price.price_in_fri)
        .chain(header.l1_data_gas_price.price_in_wei)
        .chain(header.l1_data_gas_price.price_in_fri)
        .chain(ascii_as_felt(header.starknet_version))
        .chain(0)
        .chain(header.parent_hash)
        .get_poseidon_hash()
    )
