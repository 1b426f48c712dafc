"""Deploy transaction hash formulas (current and pre-version deprecated)."""

from __future__ import annotations

from ..config import CONSTRUCTOR_ENTRY_POINT_SELECTOR
from ..core import ChainId, calculate_contract_address
from ..crypto.hash_chain import HashChain
from ..transaction import DeployTransaction
from ..types import TransactionHash
from .common import DEPLOY, calldata_pedersen, chain_id_felt


def _common_hash(
    tx: DeployTransaction, chain_id: ChainId, version: int, deprecated: bool
) -> TransactionHash:
    contract_address = calculate_contract_address(
        tx.contract_address_salt, tx.class_hash, tx.constructor_calldata
    )
    return TransactionHash(
        HashChain()
        .chain(DEPLOY)
        .chain_if(None if deprecated else version)
        .chain(contract_address)
        .chain(CONSTRUCTOR_ENTRY_POINT_SELECTOR)
        .chain(calldata_pedersen(tx.constructor_calldata))
        .chain_if(None if deprecated else 0)  # no fee
        .chain(chain_id_felt(chain_id))
        .get_pedersen_hash()
    )


def hash_deploy(tx: DeployTransaction, chain_id: ChainId, version: int) -> TransactionHash:
    return _common_hash(tx, chain_id, version, deprecated=False)


def hash_deploy_deprecated(
    tx: DeployTransaction, chain_id: ChainId, version: int
) -> TransactionHash:
    """Formula without the version and the zero fee element."""
    return _common_hash(tx, chain_id, version, deprecated=True)
