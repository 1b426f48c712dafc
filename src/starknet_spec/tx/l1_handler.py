"""L1 handler transaction hash formulas.

Besides the current formula, two historical ones are still accepted for old
blocks: one hashed as if the transaction were an invoke (no version, no fee,
no nonce) and one with the L1 handler tag but without version and fee.
"""

from __future__ import annotations

from ..core import ChainId
from ..crypto.hash_chain import HashChain
from ..transaction import L1HandlerTransaction
from ..types import TransactionHash
from .common import INVOKE, L1_HANDLER, calldata_pedersen, chain_id_felt


def hash_l1_handler(
    tx: L1HandlerTransaction, chain_id: ChainId, version: int
) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(L1_HANDLER)
        .chain(version)
        .chain(tx.contract_address)
        .chain(tx.entry_point_selector)
        .chain(calldata_pedersen(tx.calldata))
        .chain(0)  # no fee
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .get_pedersen_hash()
    )


def hash_l1_handler_as_invoke(
    tx: L1HandlerTransaction, chain_id: ChainId, version: int
) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(INVOKE)
        .chain(tx.contract_address)
        .chain(tx.entry_point_selector)
        .chain(calldata_pedersen(tx.calldata))
        .chain(chain_id_felt(chain_id))
        .get_pedersen_hash()
    )


def hash_l1_handler_deprecated(
    tx: L1HandlerTransaction, chain_id: ChainId, version: int
) -> TransactionHash:
    return TransactionHash(
        HashChain()
        .chain(L1_HANDLER)
        .chain(tx.contract_address)
        .chain(tx.entry_point_selector)
        .chain(calldata_pedersen(tx.calldata))
        .chain(chain_id_felt(chain_id))
        .chain(tx.nonce)
        .get_pedersen_hash()
    )
