"""Deploy-account transaction hash formulas (V1 Pedersen, V3 Poseidon)."""

from __future__ import annotations

from ..core import ChainId, calculate_contract_address
from ..crypto.hash import poseidon_many
from ..crypto.hash_chain import HashChain
from ..transaction import DeployAccountTransactionV1, DeployAccountTransactionV3
from ..types import TransactionHash
from .common import (
    DEPLOY_ACCOUNT,
    calldata_pedersen,
    chain_id_felt,
    concat_data_availability_mode,
    tip_resource_bounds_hash,
)


def hash_v1(
    tx: DeployAccountTransactionV1, chain_id: ChainId, version: int
) -> TransactionHash:
    contract_address = calculate_contract_address(
        tx.contract_address_salt, tx.class_hash, tx.constructor_calldata
    )
    calldata_hash = calldata_pedersen(
        [tx.class_hash, tx.contract_address_salt, *tx.constructor_calldata]
    )
    return TransactionHash(
        HashChain()
        .chain(DEPLOY_ACCOUNT)
        .chain(version)
        .chain(contract_address)
        .chain(0)  # no entry point selector
        .chain(calldata_hash)
        .chain(tx.max_fee)
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .get_pedersen_hash()
    )


def hash_v3(
    tx: DeployAccountTransactionV3, chain_id: ChainId, version: int
) -> TransactionHash:
    contract_address = calculate_contract_address(
        tx.contract_address_salt, tx.class_hash, tx.constructor_calldata
    )
    # The DA mode precedes the nonce here, unlike declare and invoke.
    return TransactionHash(
        HashChain()
        .chain(DEPLOY_ACCOUNT)
        .chain(version)
        .chain(contract_address)
        .chain(tip_resource_bounds_hash(tx.resource_bounds, tx.tip))
        .chain(poseidon_many(tx.paymaster_data))
        .chain(chain_id_felt(chain_id))
        .chain(
            concat_data_availability_mode(
                tx.nonce_data_availability_mode, tx.fee_data_availability_mode
            )
        )
        .chain(tx.nonce)
        .chain(poseidon_many(tx.constructor_calldata))
        .chain(tx.class_hash)
        .chain(tx.contract_address_salt)
        .get_poseidon_hash()
    )
