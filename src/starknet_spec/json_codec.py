"""Canonical JSON form of the Starknet data model.

Felt-backed identifiers are ``"0x"`` + minimal lowercase hex. Fees and gas
prices are 16-byte and tips 8-byte big-endian values rendered the same way,
so zero is always ``"0x0"``. Enumerations use their documented string tags.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Callable, Optional

from .block import BlockHeader, BlockStatus, GasPricePerToken
from .data_availability import DataAvailabilityMode, L1DataAvailabilityMode
from .encoding import fixed_width_hex, int_from_fixed_width_hex
from .errors import InvalidTransaction
from .state import ThinStateDiff
from .transaction import (
    Builtin,
    DeclareTransactionOutput,
    DeclareTransactionV0,
    DeclareTransactionV1,
    DeclareTransactionV2,
    DeclareTransactionV3,
    DeployAccountTransactionOutput,
    DeployAccountTransactionV1,
    DeployAccountTransactionV3,
    DeployTransaction,
    DeployTransactionOutput,
    Event,
    ExecutionResources,
    InvokeTransactionOutput,
    InvokeTransactionV0,
    InvokeTransactionV1,
    InvokeTransactionV3,
    L1HandlerTransaction,
    L1HandlerTransactionOutput,
    MessageToL1,
    Resource,
    ResourceBounds,
    ResourceBoundsMapping,
    Transaction,
    TransactionExecutionStatus,
    TransactionOutput,
    TransactionReceipt,
    TransactionType,
    transaction_version,
)
from .types import (
    BlockHash,
    BlockNumber,
    BlockTimestamp,
    ClassHash,
    CompiledClassHash,
    ContractAddress,
    ContractAddressSalt,
    EntryPointSelector,
    EthAddress,
    EventCommitment,
    Fee,
    Felt,
    GasPrice,
    GlobalRoot,
    Nonce,
    ReceiptCommitment,
    StateDiffCommitment,
    StorageKey,
    Tip,
    TransactionCommitment,
    TransactionHash,
    TransactionVersion,
)

FEE_BYTES = 16
TIP_BYTES = 8


# --- Scalars ---


def felt_to_json(value: int) -> str:
    return hex(value)


def felts_to_json(values) -> list[str]:
    return [hex(v) for v in values]


def felts_from_json(values: list[str]) -> tuple[Felt, ...]:
    return tuple(Felt.from_hex(v) for v in values)


def fee_to_json(value: int) -> str:
    return fixed_width_hex(value, FEE_BYTES)


def fee_from_json(value: str) -> Fee:
    return Fee(int_from_fixed_width_hex(value, FEE_BYTES))


def gas_price_to_json(value: int) -> str:
    return fixed_width_hex(value, FEE_BYTES)


def gas_price_from_json(value: str) -> GasPrice:
    return GasPrice(int_from_fixed_width_hex(value, FEE_BYTES))


def tip_to_json(value: int) -> str:
    return fixed_width_hex(value, TIP_BYTES)


def tip_from_json(value: str) -> Tip:
    return Tip(int_from_fixed_width_hex(value, TIP_BYTES))


def resource_bounds_to_json(bounds: ResourceBoundsMapping) -> dict[str, Any]:
    return {
        resource.value: {
            "max_amount": hex(rb.max_amount),
            "max_price_per_unit": hex(rb.max_price_per_unit),
        }
        for resource, rb in bounds.items()
    }


def resource_bounds_from_json(data: dict[str, Any]) -> ResourceBoundsMapping:
    entries = []
    for name, rb in data.items():
        try:
            resource = Resource(name)
        except ValueError as exc:
            raise InvalidTransaction(f"unknown resource {name!r}") from exc
        entries.append(
            (
                resource,
                ResourceBounds(
                    max_amount=int(rb["max_amount"], 16),
                    max_price_per_unit=int(rb["max_price_per_unit"], 16),
                ),
            )
        )
    return ResourceBoundsMapping.from_entries(entries)


def da_mode_to_json(mode: DataAvailabilityMode) -> str:
    return mode.name


def gas_price_per_token_to_json(price: GasPricePerToken) -> dict[str, str]:
    return {
        "price_in_fri": gas_price_to_json(price.price_in_fri),
        "price_in_wei": gas_price_to_json(price.price_in_wei),
    }


def gas_price_per_token_from_json(data: dict[str, str]) -> GasPricePerToken:
    return GasPricePerToken(
        price_in_fri=gas_price_from_json(data["price_in_fri"]),
        price_in_wei=gas_price_from_json(data["price_in_wei"]),
    )


def _felt_codec(ctor) -> tuple[Callable[[Any], Any], Callable[[Any], Any]]:
    return felt_to_json, ctor.from_hex


_FELT_LIST_CODEC = (felts_to_json, felts_from_json)

# Transaction fields are named consistently across variants, so one table
# covers every kind.
_TX_FIELD_CODECS: dict[str, tuple[Callable[[Any], Any], Callable[[Any], Any]]] = {
    "max_fee": (fee_to_json, fee_from_json),
    "tip": (tip_to_json, tip_from_json),
    "resource_bounds": (resource_bounds_to_json, resource_bounds_from_json),
    "signature": _FELT_LIST_CODEC,
    "calldata": _FELT_LIST_CODEC,
    "constructor_calldata": _FELT_LIST_CODEC,
    "paymaster_data": _FELT_LIST_CODEC,
    "account_deployment_data": _FELT_LIST_CODEC,
    "nonce": _felt_codec(Nonce),
    "class_hash": _felt_codec(ClassHash),
    "compiled_class_hash": _felt_codec(CompiledClassHash),
    "sender_address": _felt_codec(ContractAddress),
    "contract_address": _felt_codec(ContractAddress),
    "contract_address_salt": _felt_codec(ContractAddressSalt),
    "entry_point_selector": _felt_codec(EntryPointSelector),
    "version": _felt_codec(TransactionVersion),
    "nonce_data_availability_mode": (da_mode_to_json, DataAvailabilityMode.parse),
    "fee_data_availability_mode": (da_mode_to_json, DataAvailabilityMode.parse),
}

_FIXED_VERSION_CLASSES: dict[tuple[TransactionType, int], type] = {
    (cls.TYPE, int(cls.VERSION)): cls
    for cls in (
        DeclareTransactionV0,
        DeclareTransactionV1,
        DeclareTransactionV2,
        DeclareTransactionV3,
        DeployAccountTransactionV1,
        DeployAccountTransactionV3,
        InvokeTransactionV0,
        InvokeTransactionV1,
        InvokeTransactionV3,
    )
}

_ANY_VERSION_CLASSES: dict[TransactionType, type] = {
    TransactionType.DEPLOY: DeployTransaction,
    TransactionType.L1_HANDLER: L1HandlerTransaction,
}


# --- Transactions ---


def transaction_to_json(tx: Transaction) -> dict[str, Any]:
    out: dict[str, Any] = {
        "type": type(tx).TYPE.value,
        "version": felt_to_json(transaction_version(tx)),
    }
    for f in fields(tx):
        encode, _ = _TX_FIELD_CODECS[f.name]
        out[f.name] = encode(getattr(tx, f.name))
    return out


def _transaction_class(data: dict[str, Any]) -> type:
    try:
        tx_type = TransactionType(data["type"])
        version = int(TransactionVersion.from_hex(data.get("version", "0x0")))
    except (KeyError, ValueError) as exc:
        raise InvalidTransaction(f"bad transaction envelope: {exc}") from exc
    if tx_type in _ANY_VERSION_CLASSES:
        return _ANY_VERSION_CLASSES[tx_type]
    cls = _FIXED_VERSION_CLASSES.get((tx_type, version))
    if cls is None:
        raise InvalidTransaction(f"unsupported {tx_type.value} version {version:#x}")
    return cls


def transaction_from_json(data: dict[str, Any]) -> Transaction:
    cls = _transaction_class(data)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            raise InvalidTransaction(f"{cls.__name__} is missing field {f.name!r}")
        _, decode = _TX_FIELD_CODECS[f.name]
        kwargs[f.name] = decode(data[f.name])
    return cls(**kwargs)


# --- Execution ---


def event_to_json(event: Event) -> dict[str, Any]:
    return {
        "from_address": felt_to_json(event.from_address),
        "keys": felts_to_json(event.keys),
        "data": felts_to_json(event.data),
    }


def event_from_json(data: dict[str, Any]) -> Event:
    return Event(
        from_address=ContractAddress.from_hex(data["from_address"]),
        keys=felts_from_json(data["keys"]),
        data=felts_from_json(data["data"]),
    )


def message_to_l1_to_json(message: MessageToL1) -> dict[str, Any]:
    return {
        "from_address": felt_to_json(message.from_address),
        "to_address": felt_to_json(message.to_address),
        "payload": felts_to_json(message.payload),
    }


def message_to_l1_from_json(data: dict[str, Any]) -> MessageToL1:
    return MessageToL1(
        from_address=ContractAddress.from_hex(data["from_address"]),
        to_address=EthAddress(int(data["to_address"], 16)),
        payload=felts_from_json(data["payload"]),
    )


def execution_resources_to_json(resources: ExecutionResources) -> dict[str, Any]:
    return {
        "steps": resources.steps,
        "builtin_instance_counter": {
            b.value: resources.builtin_instance_counter[b]
            for b in Builtin
            if b in resources.builtin_instance_counter
        },
        "n_memory_holes": resources.memory_holes,
        "data_availability": {
            "l1_gas": resources.da_l1_gas_consumed,
            "l1_data_gas": resources.da_l1_data_gas_consumed,
        },
    }


def execution_resources_from_json(data: dict[str, Any]) -> ExecutionResources:
    da = data.get("data_availability", {})
    return ExecutionResources(
        steps=int(data["steps"]),
        builtin_instance_counter={
            Builtin(k): int(v) for k, v in data.get("builtin_instance_counter", {}).items()
        },
        memory_holes=int(data.get("n_memory_holes", 0)),
        da_l1_gas_consumed=int(da.get("l1_gas", 0)),
        da_l1_data_gas_consumed=int(da.get("l1_data_gas", 0)),
    )


def execution_status_to_json(status: TransactionExecutionStatus) -> dict[str, str]:
    out = {"execution_status": status.name}
    if status.revert_reason is not None:
        out["revert_reason"] = status.revert_reason
    return out


def execution_status_from_json(data: dict[str, Any]) -> TransactionExecutionStatus:
    # Old blocks predate execution statuses; they all succeeded.
    status = data.get("execution_status", "SUCCEEDED")
    if status == "SUCCEEDED":
        return TransactionExecutionStatus()
    if status == "REVERTED":
        return TransactionExecutionStatus(revert_reason=data.get("revert_reason", ""))
    raise InvalidTransaction(f"unknown execution status {status!r}")


_OUTPUT_CLASSES: dict[TransactionType, type] = {
    TransactionType.DECLARE: DeclareTransactionOutput,
    TransactionType.DEPLOY: DeployTransactionOutput,
    TransactionType.DEPLOY_ACCOUNT: DeployAccountTransactionOutput,
    TransactionType.INVOKE: InvokeTransactionOutput,
    TransactionType.L1_HANDLER: L1HandlerTransactionOutput,
}


def transaction_output_to_json(output: TransactionOutput) -> dict[str, Any]:
    out: dict[str, Any] = {
        "type": type(output).TYPE.value,
        "actual_fee": fee_to_json(output.actual_fee),
        "messages_sent": [message_to_l1_to_json(m) for m in output.messages_sent],
        "events": [event_to_json(e) for e in output.events],
    }
    out.update(execution_status_to_json(output.execution_status))
    out["execution_resources"] = execution_resources_to_json(output.execution_resources)
    if isinstance(output, (DeployTransactionOutput, DeployAccountTransactionOutput)):
        out["contract_address"] = felt_to_json(output.contract_address)
    return out


def transaction_output_from_json(data: dict[str, Any]) -> TransactionOutput:
    try:
        cls = _OUTPUT_CLASSES[TransactionType(data["type"])]
    except (KeyError, ValueError) as exc:
        raise InvalidTransaction(f"bad transaction output type: {exc}") from exc
    kwargs: dict[str, Any] = {
        "actual_fee": fee_from_json(data["actual_fee"]),
        "messages_sent": tuple(message_to_l1_from_json(m) for m in data.get("messages_sent", [])),
        "events": tuple(event_from_json(e) for e in data.get("events", [])),
        "execution_status": execution_status_from_json(data),
        "execution_resources": execution_resources_from_json(data["execution_resources"]),
    }
    if cls in (DeployTransactionOutput, DeployAccountTransactionOutput):
        kwargs["contract_address"] = ContractAddress.from_hex(data["contract_address"])
    return cls(**kwargs)


def receipt_to_json(receipt: TransactionReceipt) -> dict[str, Any]:
    out: dict[str, Any] = {
        "transaction_hash": felt_to_json(receipt.transaction_hash),
        "block_hash": felt_to_json(receipt.block_hash),
        "block_number": int(receipt.block_number),
    }
    out.update(transaction_output_to_json(receipt.output))
    return out


def receipt_from_json(data: dict[str, Any]) -> TransactionReceipt:
    return TransactionReceipt(
        transaction_hash=TransactionHash.from_hex(data["transaction_hash"]),
        block_hash=BlockHash.from_hex(data["block_hash"]),
        block_number=BlockNumber(data["block_number"]),
        output=transaction_output_from_json(data),
    )


# --- State ---


def _map_to_json(mapping) -> dict[str, str]:
    return {hex(k): hex(v) for k, v in mapping.items()}


def _map_from_json(data: dict[str, str], key_type, value_type) -> dict:
    return {key_type.from_hex(k): value_type.from_hex(v) for k, v in data.items()}


def state_diff_to_json(diff: ThinStateDiff) -> dict[str, Any]:
    return {
        "deployed_contracts": _map_to_json(diff.deployed_contracts),
        "storage_diffs": {
            hex(address): _map_to_json(updates) for address, updates in diff.storage_diffs.items()
        },
        "declared_classes": _map_to_json(diff.declared_classes),
        "deprecated_declared_classes": felts_to_json(diff.deprecated_declared_classes),
        "nonces": _map_to_json(diff.nonces),
        "replaced_classes": _map_to_json(diff.replaced_classes),
    }


def state_diff_from_json(data: dict[str, Any]) -> ThinStateDiff:
    return ThinStateDiff(
        deployed_contracts=_map_from_json(
            data.get("deployed_contracts", {}), ContractAddress, ClassHash
        ),
        storage_diffs={
            ContractAddress.from_hex(address): _map_from_json(updates, StorageKey, Felt)
            for address, updates in data.get("storage_diffs", {}).items()
        },
        declared_classes=_map_from_json(
            data.get("declared_classes", {}), ClassHash, CompiledClassHash
        ),
        deprecated_declared_classes=[
            ClassHash.from_hex(v) for v in data.get("deprecated_declared_classes", [])
        ],
        nonces=_map_from_json(data.get("nonces", {}), ContractAddress, Nonce),
        replaced_classes=_map_from_json(
            data.get("replaced_classes", {}), ContractAddress, ClassHash
        ),
    )


# --- Blocks ---

_OPTIONAL_HEADER_FELTS = {
    "state_diff_commitment": StateDiffCommitment,
    "transaction_commitment": TransactionCommitment,
    "event_commitment": EventCommitment,
    "receipt_commitment": ReceiptCommitment,
}


def block_header_to_json(header: BlockHeader) -> dict[str, Any]:
    out: dict[str, Any] = {
        "block_hash": felt_to_json(header.block_hash),
        "parent_hash": felt_to_json(header.parent_hash),
        "block_number": int(header.block_number),
        "l1_gas_price": gas_price_per_token_to_json(header.l1_gas_price),
        "l1_data_gas_price": gas_price_per_token_to_json(header.l1_data_gas_price),
        "state_root": felt_to_json(header.state_root),
        "sequencer": felt_to_json(header.sequencer),
        "timestamp": int(header.timestamp),
        "l1_da_mode": header.l1_da_mode.value,
        "starknet_version": header.starknet_version,
    }
    for name in _OPTIONAL_HEADER_FELTS:
        value = getattr(header, name)
        if value is not None:
            out[name] = felt_to_json(value)
    if header.state_diff_length is not None:
        out["state_diff_length"] = header.state_diff_length
    out["n_transactions"] = header.n_transactions
    out["n_events"] = header.n_events
    return out


def block_header_from_json(data: dict[str, Any]) -> BlockHeader:
    optional: dict[str, Optional[Felt]] = {
        name: ctor.from_hex(data[name]) if name in data else None
        for name, ctor in _OPTIONAL_HEADER_FELTS.items()
    }
    return BlockHeader(
        block_hash=BlockHash.from_hex(data["block_hash"]),
        parent_hash=BlockHash.from_hex(data["parent_hash"]),
        block_number=BlockNumber(data["block_number"]),
        l1_gas_price=gas_price_per_token_from_json(data["l1_gas_price"]),
        l1_data_gas_price=gas_price_per_token_from_json(data["l1_data_gas_price"]),
        state_root=GlobalRoot.from_hex(data["state_root"]),
        sequencer=ContractAddress.from_hex(data["sequencer"]),
        timestamp=BlockTimestamp(data["timestamp"]),
        l1_da_mode=L1DataAvailabilityMode(data.get("l1_da_mode", "CALLDATA")),
        starknet_version=data["starknet_version"],
        state_diff_length=data.get("state_diff_length"),
        n_transactions=int(data.get("n_transactions", 0)),
        n_events=int(data.get("n_events", 0)),
        **optional,
    )


def block_status_to_json(status: BlockStatus) -> str:
    return status.value


def block_status_from_json(value: str) -> BlockStatus:
    return BlockStatus(value)
