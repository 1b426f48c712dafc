"""Receipt commitment: Patricia root over per-transaction receipt hashes.

Each leaf is::

    Poseidon(tx_hash, actual_fee, messages_hash, revert_reason_hash,
             0 (L2 gas), l1_gas_consumed, l1_data_gas_consumed)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..block import GasPricePerToken
from ..crypto.hash import poseidon_pair, starknet_keccak
from ..crypto.hash_chain import HashChain
from ..crypto.patricia import HashFn, calculate_root
from ..errors import ErrorCode, GasAccountingError
from ..transaction import MessageToL1, TransactionExecutionStatus, TransactionOutput
from ..types import Felt, ReceiptCommitment, TransactionHash, TransactionVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReceiptElement:
    transaction_hash: TransactionHash
    transaction_output: TransactionOutput
    transaction_version: TransactionVersion


def calculate_messages_sent_hash(messages: Sequence[MessageToL1]) -> Felt:
    chain = HashChain().chain(len(messages))
    for message in messages:
        (
            chain.chain(message.from_address)
            .chain(message.to_address.to_felt())
            .chain_size_and_elements(message.payload)
        )
    return chain.get_poseidon_hash()


def get_revert_reason_hash(status: TransactionExecutionStatus) -> Felt:
    if status.revert_reason is None:
        return Felt(0)
    return starknet_keccak(status.revert_reason.encode("utf-8"))


def _select_price(price: GasPricePerToken, version: int) -> int:
    # Fees of V3 transactions are paid in fri, older ones in wei.
    return price.price_in_fri if version >= TransactionVersion.THREE else price.price_in_wei


def calculate_l1_gas_consumed(
    actual_fee: int,
    da_l1_data_gas_consumed: int,
    l1_gas_price: GasPricePerToken,
    l1_data_gas_price: GasPricePerToken,
    transaction_version: int,
) -> int:
    """(actual_fee - l1_data_gas_price * l1_data_gas) // l1_gas_price."""
    gas_price = _select_price(l1_gas_price, transaction_version)
    data_gas_price = _select_price(l1_data_gas_price, transaction_version)
    data_gas_cost = data_gas_price * da_l1_data_gas_consumed
    if data_gas_cost > actual_fee:
        raise GasAccountingError(
            ErrorCode.UNDERFLOW,
            f"data gas cost {data_gas_cost} exceeds actual fee {actual_fee}",
        )
    if gas_price == 0:
        raise GasAccountingError(ErrorCode.DIVISION_BY_ZERO, "l1 gas price is zero")
    return (actual_fee - data_gas_cost) // gas_price


def calculate_receipt_hash(
    receipt: ReceiptElement,
    l1_data_gas_price: GasPricePerToken,
    l1_gas_price: GasPricePerToken,
) -> Felt:
    output = receipt.transaction_output
    resources = output.execution_resources
    l1_gas_consumed = calculate_l1_gas_consumed(
        output.actual_fee,
        resources.da_l1_data_gas_consumed,
        l1_gas_price,
        l1_data_gas_price,
        receipt.transaction_version,
    )
    logger.debug(
        "receipt %#x: l1_gas_consumed=%d", receipt.transaction_hash, l1_gas_consumed
    )
    return (
        HashChain()
        .chain(receipt.transaction_hash)
        .chain(output.actual_fee)
        .chain(calculate_messages_sent_hash(output.messages_sent))
        .chain(get_revert_reason_hash(output.execution_status))
        .chain(0)  # L2 gas consumed
        .chain(l1_gas_consumed)
        .chain(resources.da_l1_data_gas_consumed)
        .get_poseidon_hash()
    )


def calculate_receipt_commitment(
    receipts: Sequence[ReceiptElement],
    l1_data_gas_price: GasPricePerToken,
    l1_gas_price: GasPricePerToken,
    hash_fn: HashFn = poseidon_pair,
) -> ReceiptCommitment:
    leaves = [calculate_receipt_hash(r, l1_data_gas_price, l1_gas_price) for r in receipts]
    return ReceiptCommitment(calculate_root(leaves, hash_fn))
