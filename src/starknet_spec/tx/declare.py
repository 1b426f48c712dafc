"""Declare transaction hash formulas (V0, V1, V2 Pedersen; V3 Poseidon)."""

from __future__ import annotations

from ..core import ChainId
from ..crypto.hash import poseidon_many
from ..crypto.hash_chain import HashChain
from ..transaction import (
    DeclareTransactionV0,
    DeclareTransactionV1,
    DeclareTransactionV2,
    DeclareTransactionV3,
)
from ..types import TransactionHash
from .common import (
    DECLARE,
    calldata_pedersen,
    chain_id_felt,
    concat_data_availability_mode,
    tip_resource_bounds_hash,
)


def hash_v0(tx: DeclareTransactionV0, chain_id: ChainId, version: int) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(DECLARE)
        .chain(version)
        .chain(tx.sender_address)
        .chain(0)  # no entry point selector
        .chain(calldata_pedersen([]))
        .chain(tx.max_fee)
        .chain(chain_id_felt(chain_id))
        .chain(tx.class_hash)
        .get_pedersen_hash()
    )


def hash_v1(tx: DeclareTransactionV1, chain_id: ChainId, version: int) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(DECLARE)
        .chain(version)
        .chain(tx.sender_address)
        .chain(0)
        .chain(calldata_pedersen([tx.class_hash]))
        .chain(tx.max_fee)
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .get_pedersen_hash()
    )


def hash_v2(tx: DeclareTransactionV2, chain_id: ChainId, version: int) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(DECLARE)
        .chain(version)
        .chain(tx.sender_address)
        .chain(0)
        .chain(calldata_pedersen([tx.class_hash]))
        .chain(tx.max_fee)
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .chain(tx.compiled_class_hash)
        .get_pedersen_hash()
    )


def hash_v3(tx: DeclareTransactionV3, chain_id: ChainId, version: int) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(DECLARE)
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
        .chain(tx.class_hash)
        .chain(tx.compiled_class_hash)
        .get_poseidon_hash()
    )
