"""Shared pieces of the transaction-hash formulas (domain tags, V3 packing)."""

from __future__ import annotations

from typing import Iterable

from ..config import (
    DATA_AVAILABILITY_MODE_BITS,
    DECLARE_TAG,
    DEPLOY_ACCOUNT_TAG,
    DEPLOY_TAG,
    INVOKE_TAG,
    L1_GAS_NAME,
    L1_HANDLER_TAG,
    L2_GAS_NAME,
)
from ..core import ChainId
from ..crypto.hash import ascii_as_felt, poseidon_many
from ..crypto.hash_chain import pedersen_hash_array
from ..data_availability import DataAvailabilityMode
from ..encoding import Writer
from ..transaction import ResourceBounds, ResourceBoundsMapping
from ..types import Felt

DECLARE = ascii_as_felt(DECLARE_TAG)
DEPLOY = ascii_as_felt(DEPLOY_TAG)
DEPLOY_ACCOUNT = ascii_as_felt(DEPLOY_ACCOUNT_TAG)
INVOKE = ascii_as_felt(INVOKE_TAG)
L1_HANDLER = ascii_as_felt(L1_HANDLER_TAG)


def chain_id_felt(chain_id: ChainId) -> Felt:
    return ascii_as_felt(chain_id.name)


def calldata_pedersen(values: Iterable[int]) -> Felt:
    return pedersen_hash_array(values)


def concat_resource(bounds: ResourceBounds, name: bytes) -> Felt:
    """``0 | name (56 bits) | max_amount (64 bits) | max_price_per_unit (128 bits)``."""
    w = Writer()
    w.write_u8(0)
    w.write_bytes(name)
    w.write_u64(bounds.max_amount)
    w.write_u128(bounds.max_price_per_unit)
    return Felt.from_bytes_be(w.to_bytes())


def tip_resource_bounds_hash(bounds: ResourceBoundsMapping, tip: int) -> Felt:
    return poseidon_many(
        [
            tip,
            concat_resource(bounds.l1_gas, L1_GAS_NAME),
            concat_resource(bounds.l2_gas, L2_GAS_NAME),
        ]
    )


def concat_data_availability_mode(
    nonce_mode: DataAvailabilityMode, fee_mode: DataAvailabilityMode
) -> Felt:
    """``0 (192 bits) | nonce_mode (32 bits) | fee_mode (32 bits)``."""
    return Felt((int(nonce_mode) << DATA_AVAILABILITY_MODE_BITS) + int(fee_mode))
