"""Invoke transaction hash formulas (V0 current and deprecated, V1, V3)."""

from __future__ import annotations

from ..core import ChainId
from ..crypto.hash import poseidon_many
from ..crypto.hash_chain import HashChain
from ..transaction import InvokeTransactionV0, InvokeTransactionV1, InvokeTransactionV3
from ..types import TransactionHash
from .common import (
    INVOKE,
    calldata_pedersen,
    chain_id_felt,
    concat_data_availability_mode,
    tip_resource_bounds_hash,
)


def _common_v0_hash(
    tx: InvokeTransactionV0, chain_id: ChainId, version: int, deprecated: bool
) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(INVOKE)
        .chain_if(None if deprecated else version)
        .chain(tx.contract_address)
        .chain(tx.entry_point_selector)
        .chain(calldata_pedersen(tx.calldata))
        .chain_if(None if deprecated else tx.max_fee)
        .chain(chain_id_felt(chain_id))
        .get_pedersen_hash()
    )


def hash_v0(tx: InvokeTransactionV0, chain_id: ChainId, version: int) -> TransactionHash:
    return _common_v0_hash(tx, chain_id, version, deprecated=False)


def hash_v0_deprecated(
    tx: InvokeTransactionV0, chain_id: ChainId, version: int
) -> TransactionHash:
    """Formula without the version and the max fee."""
    return _common_v0_hash(tx, chain_id, version, deprecated=True)


def hash_v1(tx: InvokeTransactionV1, chain_id: ChainId, version: int) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(INVOKE)
        .chain(version)
        .chain(tx.sender_address)
        .chain(0)  # no entry point selector
        .chain(calldata_pedersen(tx.calldata))
        .chain(tx.max_fee)
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .get_pedersen_hash()
    )


def hash_v3(tx: InvokeTransactionV3, chain_id: ChainId, version: int) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(INVOKE)
        .chain(version)
        .chain(tx.sender_address)
        .chain(tip_resource_bounds_hash(tx.resource_bounds, tx.tip))
        .chain(poseidon_many(tx.paymaster_data))
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .chain(
            concat_data_availability_mode(
                tx.nonce_data_availability_mode, tx.fee_data_availability_mode
            )
        )
        .chain(poseidon_many(tx.account_deployment_data))
        .chain(poseidon_many(tx.calldata))
        .get_poseidon_hash()
    )
