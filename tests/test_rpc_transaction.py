"""RPC V3 transactions and their conversion to the canonical model."""

from __future__ import annotations

import pytest

from starknet_spec.core import ChainId
from starknet_spec.data_availability import DataAvailabilityMode
from starknet_spec.errors import InvalidTransaction
from starknet_spec.rpc_transaction import (
    RpcDeclareTransactionV3,
    RpcDeployAccountTransactionV3,
    RpcInvokeTransactionV3,
    SierraContractClass,
    SierraEntryPoint,
    SierraEntryPointsByType,
    rpc_transaction_from_json,
    rpc_transaction_to_json,
)
from starknet_spec.transaction import (
    DeclareTransactionV3,
    InvokeTransactionV3,
    ResourceBounds,
    ResourceBoundsMapping,
)
from starknet_spec.transaction_hash import get_transaction_hash
from starknet_spec.types import EntryPointSelector

_BOUNDS = ResourceBoundsMapping(
    l1_gas=ResourceBounds(max_amount=100, max_price_per_unit=12),
    l2_gas=ResourceBounds(max_amount=58, max_price_per_unit=31),
)


def _declare() -> RpcDeclareTransactionV3:
    return RpcDeclareTransactionV3(
        sender_address=0x3,
        compiled_class_hash=0x2,
        signature=(1, 2),
        nonce=1,
        contract_class=SierraContractClass(
            sierra_program=(0x1, 0x2),
            contract_class_version="0.1.0",
            entry_points_by_type=SierraEntryPointsByType(
                external=(SierraEntryPoint(function_idx=0, selector=EntryPointSelector(0x5)),),
            ),
            abi="[]",
        ),
        resource_bounds=_BOUNDS,
        tip=1,
        paymaster_data=(0,),
        account_deployment_data=(3,),
        nonce_data_availability_mode=DataAvailabilityMode.L1,
        fee_data_availability_mode=DataAvailabilityMode.L2,
    )


def _deploy_account() -> RpcDeployAccountTransactionV3:
    return RpcDeployAccountTransactionV3(
        signature=(2,),
        nonce=0x60,
        class_hash=0x2,
        contract_address_salt=0x23,
        constructor_calldata=(0,),
        resource_bounds=_BOUNDS,
        paymaster_data=(2, 0),
        nonce_data_availability_mode=DataAvailabilityMode.L2,
    )


def _invoke() -> RpcInvokeTransactionV3:
    return RpcInvokeTransactionV3(
        sender_address=0x53,
        calldata=(0x2000, 0x1000),
        signature=(),
        nonce=0x32,
        resource_bounds=_BOUNDS,
        tip=50,
        paymaster_data=(2, 0),
        account_deployment_data=(0x87,),
    )


def test_rpc_transactions_json_round_trip() -> None:
    for tx in (_declare(), _deploy_account(), _invoke()):
        data = rpc_transaction_to_json(tx)
        assert data["version"] == "0x3"
        assert rpc_transaction_from_json(data) == tx


def test_rpc_resource_bounds_use_lowercase_keys() -> None:
    data = rpc_transaction_to_json(_invoke())
    assert data["type"] == "INVOKE"
    assert set(data["resource_bounds"]) == {"l1_gas", "l2_gas"}
    assert data["resource_bounds"]["l2_gas"] == {"max_amount": "0x3a", "max_price_per_unit": "0x1f"}


def test_rpc_declare_carries_sierra_class() -> None:
    data = rpc_transaction_to_json(_declare())
    assert data["contract_class"]["entry_points_by_type"] == {
        "CONSTRUCTOR": [],
        "EXTERNAL": [{"function_idx": 0, "selector": "0x5"}],
        "L1_HANDLER": [],
    }
    assert "class_hash" not in data


def test_rpc_declare_to_transaction() -> None:
    tx = _declare().to_transaction(class_hash=0xC1A55)
    assert isinstance(tx, DeclareTransactionV3)
    assert tx.class_hash == 0xC1A55
    assert tx.compiled_class_hash == 0x2
    assert tx.account_deployment_data == (3,)


def test_rpc_invoke_conversion_preserves_hash() -> None:
    rpc = _invoke()
    tx = rpc.to_transaction()
    assert isinstance(tx, InvokeTransactionV3)
    assert RpcInvokeTransactionV3.from_transaction(tx) == rpc
    assert get_transaction_hash(tx, ChainId.SEPOLIA) == get_transaction_hash(
        RpcInvokeTransactionV3.from_transaction(tx).to_transaction(), ChainId.SEPOLIA
    )


def test_rpc_deploy_account_conversion() -> None:
    rpc = _deploy_account()
    assert RpcDeployAccountTransactionV3.from_transaction(rpc.to_transaction()) == rpc


def test_rpc_transaction_from_json_errors() -> None:
    data = rpc_transaction_to_json(_invoke())
    with pytest.raises(InvalidTransaction):
        rpc_transaction_from_json({**data, "version": "0x1"})
    with pytest.raises(InvalidTransaction):
        rpc_transaction_from_json({**data, "type": "L1_HANDLER"})
    del data["calldata"]
    with pytest.raises(InvalidTransaction):
        rpc_transaction_from_json(data)
