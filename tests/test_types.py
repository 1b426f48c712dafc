"""Bounded integers, identifiers, chain ids, contract addresses and DA modes."""

from __future__ import annotations

import pytest

from starknet_spec.config import (
    CONTRACT_ADDRESS_PREFIX,
    FIELD_PRIME,
    L2_ADDRESS_UPPER_BOUND,
    MAX_STORAGE_ITEM_SIZE,
    PATRICIA_KEY_UPPER_BOUND,
    U64_MAX,
    U128_MAX,
)
from starknet_spec.core import ChainId, calculate_contract_address
from starknet_spec.crypto.hash import ascii_as_felt
from starknet_spec.crypto.hash_chain import pedersen_hash_array
from starknet_spec.data_availability import DataAvailabilityMode, L1DataAvailabilityMode
from starknet_spec.errors import (
    BadInput,
    ErrorCode,
    InvalidDataAvailabilityMode,
    InvalidResourceMapping,
    OutOfRange,
)
from starknet_spec.state import StateNumber
from starknet_spec.transaction import Resource, ResourceBounds, ResourceBoundsMapping
from starknet_spec.types import (
    BlockNumber,
    EthAddress,
    Fee,
    Felt,
    GasPrice,
    Nonce,
    Tip,
    TransactionVersion,
)


# --- Bounded integers ---


def test_block_number_iteration() -> None:
    assert list(BlockNumber(3).iter_up_to(10)) == [BlockNumber(i) for i in range(3, 10)]
    assert list(BlockNumber(5).iter_up_to(5)) == []


def test_block_number_next_prev() -> None:
    assert BlockNumber(7).next() == 8
    assert BlockNumber(7).prev() == 6
    assert BlockNumber(0).prev() is None
    assert BlockNumber(U64_MAX).next() is None
    with pytest.raises(OutOfRange):
        BlockNumber(U64_MAX + 1)


def test_fee_and_gas_price_are_u128() -> None:
    assert Fee(U128_MAX) == U128_MAX
    assert GasPrice(U128_MAX) == U128_MAX
    with pytest.raises(OutOfRange):
        Fee(U128_MAX + 1)
    with pytest.raises(OutOfRange):
        Tip(U64_MAX + 1)


def test_nonce_increment() -> None:
    assert Nonce(5).try_increment() == 6
    assert isinstance(Nonce(5).try_increment(), Nonce)
    with pytest.raises(OutOfRange):
        Nonce(FIELD_PRIME - 1).try_increment()


def test_query_version() -> None:
    query = TransactionVersion.THREE.to_query_version()
    assert query == 2**128 + 3
    assert query.is_query()
    assert not TransactionVersion.THREE.is_query()


def test_eth_address_felt_conversion() -> None:
    addr = EthAddress.from_felt(0xDA8054E0E5D2ED7A6F1E9A3D2B8C8F1A2D3C4B5A)
    assert addr.to_felt() == 0xDA8054E0E5D2ED7A6F1E9A3D2B8C8F1A2D3C4B5A
    assert len(addr.to_bytes()) == 20
    with pytest.raises(OutOfRange):
        EthAddress.from_felt(2**160)


# --- Chain id ---


def test_chain_id_forms() -> None:
    assert str(ChainId.MAINNET) == "SN_MAIN"
    assert ChainId.MAINNET.as_hex() == "0x534e5f4d41494e"
    assert ChainId.MAINNET.as_felt() == 23448594291968334
    assert ChainId.MAINNET.is_mainnet
    assert not ChainId.SEPOLIA.is_mainnet
    assert ChainId("SN_GOERLI").as_felt() == ascii_as_felt("SN_GOERLI")
    with pytest.raises(BadInput):
        ChainId("SN_\u00c9").as_hex()


# --- Contract address ---


def test_l2_address_upper_bound() -> None:
    assert L2_ADDRESS_UPPER_BOUND == PATRICIA_KEY_UPPER_BOUND - MAX_STORAGE_ITEM_SIZE


def test_calculate_contract_address() -> None:
    salt = 1337
    class_hash = 0x110
    calldata = [60, 70, FIELD_PRIME - 1]
    expected = pedersen_hash_array(
        [
            ascii_as_felt(CONTRACT_ADDRESS_PREFIX),
            0,
            salt,
            class_hash,
            pedersen_hash_array(calldata),
        ]
    ) % L2_ADDRESS_UPPER_BOUND
    actual = calculate_contract_address(salt, class_hash, calldata)
    assert actual == expected
    assert actual < L2_ADDRESS_UPPER_BOUND


def test_contract_address_depends_on_deployer() -> None:
    assert calculate_contract_address(1, 2, [3], 0) != calculate_contract_address(1, 2, [3], 4)


# --- Data availability ---


def test_data_availability_mode_parse() -> None:
    assert DataAvailabilityMode.parse("L1") is DataAvailabilityMode.L1
    assert DataAvailabilityMode.parse("L2") is DataAvailabilityMode.L2
    assert DataAvailabilityMode.parse(0) is DataAvailabilityMode.L1
    assert DataAvailabilityMode.parse(Felt(1)) is DataAvailabilityMode.L2


def test_data_availability_mode_parse_rejects() -> None:
    for bad in ("L3", "l1", 2, True):
        with pytest.raises(InvalidDataAvailabilityMode) as exc:
            DataAvailabilityMode.parse(bad)
        assert exc.value.code == ErrorCode.INVALID_DATA_AVAILABILITY_MODE


def test_l1_data_availability_mode_values() -> None:
    assert [m.value for m in L1DataAvailabilityMode] == ["CALLDATA", "BLOB"]


# --- Resource bounds ---


def test_resource_bounds_limits() -> None:
    ResourceBounds(max_amount=U64_MAX, max_price_per_unit=U128_MAX)
    with pytest.raises(OutOfRange):
        ResourceBounds(max_amount=U64_MAX + 1)
    with pytest.raises(OutOfRange):
        ResourceBounds(max_price_per_unit=U128_MAX + 1)


def test_resource_bounds_mapping_from_entries() -> None:
    l1 = ResourceBounds(100, 12)
    l2 = ResourceBounds(58, 31)
    mapping = ResourceBoundsMapping.from_entries([(Resource.L2_GAS, l2), (Resource.L1_GAS, l1)])
    assert mapping[Resource.L1_GAS] == l1
    assert mapping[Resource.L2_GAS] == l2
    assert [r for r, _ in mapping.items()] == [Resource.L1_GAS, Resource.L2_GAS]


def test_resource_bounds_mapping_rejects_bad_entries() -> None:
    rb = ResourceBounds(1, 1)
    with pytest.raises(InvalidResourceMapping):
        ResourceBoundsMapping.from_entries([(Resource.L1_GAS, rb)])
    with pytest.raises(InvalidResourceMapping):
        ResourceBoundsMapping.from_entries(
            [(Resource.L1_GAS, rb), (Resource.L1_GAS, rb), (Resource.L2_GAS, rb)]
        )


# --- State numbers ---


def test_state_number_ordering() -> None:
    before = StateNumber.right_before_block(10)
    after = StateNumber.right_after_block(10)
    assert after.block_after() == 11
    assert before < after
    assert before.is_before(10)
    assert not before.is_after(10)
    assert after.is_after(10)


def test_state_number_after_last_block() -> None:
    with pytest.raises(OutOfRange):
        StateNumber.right_after_block(U64_MAX)
