"""Transaction hash entrypoints for Starknet Python specs."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import MAINNET_TRANSACTION_HASH_WITH_VERSION
from .core import ChainId
from .errors import InvalidTransaction
from .transaction import (
    DeclareTransactionV0,
    DeclareTransactionV1,
    DeclareTransactionV2,
    DeclareTransactionV3,
    DeployAccountTransactionV1,
    DeployAccountTransactionV3,
    DeployTransaction,
    InvokeTransactionV0,
    InvokeTransactionV1,
    InvokeTransactionV3,
    L1HandlerTransaction,
    Transaction,
    transaction_version,
)
from .tx import declare as tx_declare
from .tx import deploy as tx_deploy
from .tx import deploy_account as tx_deploy_account
from .tx import invoke as tx_invoke
from .tx import l1_handler as tx_l1_handler
from .types import TransactionHash

logger = logging.getLogger(__name__)

HashFormula = Callable[[Transaction, ChainId, int], TransactionHash]

_CURRENT_FORMULAS: dict[type, HashFormula] = {
    DeclareTransactionV0: tx_declare.hash_v0,
    DeclareTransactionV1: tx_declare.hash_v1,
    DeclareTransactionV2: tx_declare.hash_v2,
    DeclareTransactionV3: tx_declare.hash_v3,
    DeployTransaction: tx_deploy.hash_deploy,
    DeployAccountTransactionV1: tx_deploy_account.hash_v1,
    DeployAccountTransactionV3: tx_deploy_account.hash_v3,
    InvokeTransactionV0: tx_invoke.hash_v0,
    InvokeTransactionV1: tx_invoke.hash_v1,
    InvokeTransactionV3: tx_invoke.hash_v3,
    L1HandlerTransaction: tx_l1_handler.hash_l1_handler,
}

# Historical formulas, still accepted for early blocks and non-mainnet chains.
_DEPRECATED_FORMULAS: dict[type, tuple[HashFormula, ...]] = {
    DeployTransaction: (tx_deploy.hash_deploy_deprecated,),
    InvokeTransactionV0: (tx_invoke.hash_v0_deprecated,),
    L1HandlerTransaction: (
        tx_l1_handler.hash_l1_handler_as_invoke,
        tx_l1_handler.hash_l1_handler_deprecated,
    ),
}


def _resolve_version(tx: Transaction, version: Optional[int]) -> int:
    return transaction_version(tx) if version is None else int(version)


def get_transaction_hash(
    tx: Transaction, chain_id: ChainId, transaction_version: Optional[int] = None
) -> TransactionHash:
    """Hash ``tx`` with its current formula.

    ``transaction_version`` overrides the version that enters the hash; pass a
    query version (``version + 2**128``) to hash a simulation-only transaction.
    """
    formula = _CURRENT_FORMULAS.get(type(tx))
    if formula is None:
        raise InvalidTransaction(f"no hash formula for {type(tx).__name__}")
    return formula(tx, chain_id, _resolve_version(tx, transaction_version))


def get_deprecated_transaction_hashes(
    tx: Transaction,
    block_number: int,
    chain_id: ChainId,
    transaction_version: Optional[int] = None,
) -> list[TransactionHash]:
    if chain_id.is_mainnet and block_number > MAINNET_TRANSACTION_HASH_WITH_VERSION:
        logger.debug("block %d is past the mainnet legacy hash cutoff", block_number)
        return []
    version = _resolve_version(tx, transaction_version)
    return [formula(tx, chain_id, version) for formula in _DEPRECATED_FORMULAS.get(type(tx), ())]


def validate_transaction_hash(
    tx: Transaction,
    block_number: int,
    chain_id: ChainId,
    expected_hash: int,
    transaction_version: Optional[int] = None,
) -> bool:
    """Check ``expected_hash`` against every formula valid at ``block_number``.

    Recent mainnet blocks only accept the current formula; testnets and early
    mainnet blocks also accept the historical ones.
    """
    if get_transaction_hash(tx, chain_id, transaction_version) == expected_hash:
        return True
    for candidate in get_deprecated_transaction_hashes(
        tx, block_number, chain_id, transaction_version
    ):
        if candidate == expected_hash:
            logger.debug(
                "%s %#x matched a deprecated hash formula at block %d on %s",
                type(tx).__name__,
                expected_hash,
                block_number,
                chain_id,
            )
            return True
    return False
