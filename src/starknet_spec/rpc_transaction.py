"""RPC (broadcast) view of V3 transactions.

These are transactions submitted to a node, before they are part of a block.
A declare carries the full Sierra class instead of its hash. The wire form
differs from the canonical JSON only in the resource-bounds keys, which are
lowercase here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .data_availability import DataAvailabilityMode
from .errors import InvalidTransaction
from .json_codec import (
    da_mode_to_json,
    felt_to_json,
    felts_from_json,
    felts_to_json,
    tip_from_json,
    tip_to_json,
)
from .transaction import (
    DeclareTransactionV3,
    DeployAccountTransactionV3,
    InvokeTransactionV3,
    ResourceBounds,
    ResourceBoundsMapping,
    TransactionType,
    _freeze_felts,
)
from .types import (
    ClassHash,
    CompiledClassHash,
    ContractAddress,
    ContractAddressSalt,
    EntryPointSelector,
    Felt,
    Nonce,
    Tip,
)

RPC_VERSION = "0x3"


@dataclass(frozen=True)
class SierraEntryPoint:
    function_idx: int
    selector: EntryPointSelector


@dataclass(frozen=True)
class SierraEntryPointsByType:
    constructor: tuple[SierraEntryPoint, ...] = ()
    external: tuple[SierraEntryPoint, ...] = ()
    l1_handler: tuple[SierraEntryPoint, ...] = ()


@dataclass(frozen=True)
class SierraContractClass:
    sierra_program: tuple[Felt, ...] = ()
    contract_class_version: str = ""
    entry_points_by_type: SierraEntryPointsByType = field(default_factory=SierraEntryPointsByType)
    abi: str = ""

    def __post_init__(self) -> None:
        _freeze_felts(self, "sierra_program")


@dataclass(frozen=True)
class RpcDeclareTransactionV3:
    sender_address: ContractAddress
    compiled_class_hash: CompiledClassHash
    signature: tuple[Felt, ...]
    nonce: Nonce
    contract_class: SierraContractClass
    resource_bounds: ResourceBoundsMapping
    tip: Tip = Tip(0)
    paymaster_data: tuple[Felt, ...] = ()
    account_deployment_data: tuple[Felt, ...] = ()
    nonce_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    fee_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "paymaster_data", "account_deployment_data")

    def to_transaction(self, class_hash: int) -> DeclareTransactionV3:
        """Canonical declare; the Sierra class hash is computed by the caller."""
        return DeclareTransactionV3(
            resource_bounds=self.resource_bounds,
            tip=self.tip,
            signature=self.signature,
            nonce=self.nonce,
            class_hash=ClassHash(class_hash),
            compiled_class_hash=self.compiled_class_hash,
            sender_address=self.sender_address,
            nonce_data_availability_mode=self.nonce_data_availability_mode,
            fee_data_availability_mode=self.fee_data_availability_mode,
            paymaster_data=self.paymaster_data,
            account_deployment_data=self.account_deployment_data,
        )


@dataclass(frozen=True)
class RpcDeployAccountTransactionV3:
    signature: tuple[Felt, ...]
    nonce: Nonce
    class_hash: ClassHash
    contract_address_salt: ContractAddressSalt
    constructor_calldata: tuple[Felt, ...]
    resource_bounds: ResourceBoundsMapping
    tip: Tip = Tip(0)
    paymaster_data: tuple[Felt, ...] = ()
    nonce_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    fee_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "constructor_calldata", "paymaster_data")

    def to_transaction(self) -> DeployAccountTransactionV3:
        return DeployAccountTransactionV3(
            resource_bounds=self.resource_bounds,
            tip=self.tip,
            signature=self.signature,
            nonce=self.nonce,
            class_hash=self.class_hash,
            contract_address_salt=self.contract_address_salt,
            constructor_calldata=self.constructor_calldata,
            nonce_data_availability_mode=self.nonce_data_availability_mode,
            fee_data_availability_mode=self.fee_data_availability_mode,
            paymaster_data=self.paymaster_data,
        )

    @classmethod
    def from_transaction(cls, tx: DeployAccountTransactionV3) -> "RpcDeployAccountTransactionV3":
        return cls(
            signature=tx.signature,
            nonce=tx.nonce,
            class_hash=tx.class_hash,
            contract_address_salt=tx.contract_address_salt,
            constructor_calldata=tx.constructor_calldata,
            resource_bounds=tx.resource_bounds,
            tip=tx.tip,
            paymaster_data=tx.paymaster_data,
            nonce_data_availability_mode=tx.nonce_data_availability_mode,
            fee_data_availability_mode=tx.fee_data_availability_mode,
        )


@dataclass(frozen=True)
class RpcInvokeTransactionV3:
    sender_address: ContractAddress
    calldata: tuple[Felt, ...]
    signature: tuple[Felt, ...]
    nonce: Nonce
    resource_bounds: ResourceBoundsMapping
    tip: Tip = Tip(0)
    paymaster_data: tuple[Felt, ...] = ()
    account_deployment_data: tuple[Felt, ...] = ()
    nonce_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    fee_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1

    def __post_init__(self) -> None:
        _freeze_felts(self, "calldata", "signature", "paymaster_data", "account_deployment_data")

    def to_transaction(self) -> InvokeTransactionV3:
        return InvokeTransactionV3(
            resource_bounds=self.resource_bounds,
            tip=self.tip,
            signature=self.signature,
            nonce=self.nonce,
            sender_address=self.sender_address,
            calldata=self.calldata,
            nonce_data_availability_mode=self.nonce_data_availability_mode,
            fee_data_availability_mode=self.fee_data_availability_mode,
            paymaster_data=self.paymaster_data,
            account_deployment_data=self.account_deployment_data,
        )

    @classmethod
    def from_transaction(cls, tx: InvokeTransactionV3) -> "RpcInvokeTransactionV3":
        return cls(
            sender_address=tx.sender_address,
            calldata=tx.calldata,
            signature=tx.signature,
            nonce=tx.nonce,
            resource_bounds=tx.resource_bounds,
            tip=tx.tip,
            paymaster_data=tx.paymaster_data,
            account_deployment_data=tx.account_deployment_data,
            nonce_data_availability_mode=tx.nonce_data_availability_mode,
            fee_data_availability_mode=tx.fee_data_availability_mode,
        )


RpcTransaction = Union[
    RpcDeclareTransactionV3, RpcDeployAccountTransactionV3, RpcInvokeTransactionV3
]

_RPC_TYPES: dict[type, TransactionType] = {
    RpcDeclareTransactionV3: TransactionType.DECLARE,
    RpcDeployAccountTransactionV3: TransactionType.DEPLOY_ACCOUNT,
    RpcInvokeTransactionV3: TransactionType.INVOKE,
}


# --- JSON ---


def _rpc_resource_bounds_to_json(bounds: ResourceBoundsMapping) -> dict[str, Any]:
    return {
        name: {
            "max_amount": hex(rb.max_amount),
            "max_price_per_unit": hex(rb.max_price_per_unit),
        }
        for name, rb in (("l1_gas", bounds.l1_gas), ("l2_gas", bounds.l2_gas))
    }


def _rpc_resource_bounds_from_json(data: dict[str, Any]) -> ResourceBoundsMapping:
    def parse(rb: dict[str, str]) -> ResourceBounds:
        return ResourceBounds(
            max_amount=int(rb["max_amount"], 16),
            max_price_per_unit=int(rb["max_price_per_unit"], 16),
        )

    return ResourceBoundsMapping(l1_gas=parse(data["l1_gas"]), l2_gas=parse(data["l2_gas"]))


def _sierra_entry_points_to_json(eps: tuple[SierraEntryPoint, ...]) -> list[dict[str, Any]]:
    return [{"function_idx": ep.function_idx, "selector": felt_to_json(ep.selector)} for ep in eps]


def _sierra_entry_points_from_json(items: list[dict[str, Any]]) -> tuple[SierraEntryPoint, ...]:
    return tuple(
        SierraEntryPoint(
            function_idx=int(i["function_idx"]),
            selector=EntryPointSelector.from_hex(i["selector"]),
        )
        for i in items
    )


def sierra_class_to_json(cls: SierraContractClass) -> dict[str, Any]:
    eps = cls.entry_points_by_type
    return {
        "sierra_program": felts_to_json(cls.sierra_program),
        "contract_class_version": cls.contract_class_version,
        "entry_points_by_type": {
            "CONSTRUCTOR": _sierra_entry_points_to_json(eps.constructor),
            "EXTERNAL": _sierra_entry_points_to_json(eps.external),
            "L1_HANDLER": _sierra_entry_points_to_json(eps.l1_handler),
        },
        "abi": cls.abi,
    }


def sierra_class_from_json(data: dict[str, Any]) -> SierraContractClass:
    eps = data.get("entry_points_by_type", {})
    return SierraContractClass(
        sierra_program=felts_from_json(data["sierra_program"]),
        contract_class_version=data["contract_class_version"],
        entry_points_by_type=SierraEntryPointsByType(
            constructor=_sierra_entry_points_from_json(eps.get("CONSTRUCTOR", [])),
            external=_sierra_entry_points_from_json(eps.get("EXTERNAL", [])),
            l1_handler=_sierra_entry_points_from_json(eps.get("L1_HANDLER", [])),
        ),
        abi=data.get("abi", ""),
    )


def rpc_transaction_to_json(tx: RpcTransaction) -> dict[str, Any]:
    out: dict[str, Any] = {"type": _RPC_TYPES[type(tx)].value, "version": RPC_VERSION}
    if isinstance(tx, RpcDeclareTransactionV3):
        out["sender_address"] = felt_to_json(tx.sender_address)
        out["compiled_class_hash"] = felt_to_json(tx.compiled_class_hash)
        out["contract_class"] = sierra_class_to_json(tx.contract_class)
    elif isinstance(tx, RpcDeployAccountTransactionV3):
        out["class_hash"] = felt_to_json(tx.class_hash)
        out["contract_address_salt"] = felt_to_json(tx.contract_address_salt)
        out["constructor_calldata"] = felts_to_json(tx.constructor_calldata)
    else:
        out["sender_address"] = felt_to_json(tx.sender_address)
        out["calldata"] = felts_to_json(tx.calldata)
    out["signature"] = felts_to_json(tx.signature)
    out["nonce"] = felt_to_json(tx.nonce)
    out["resource_bounds"] = _rpc_resource_bounds_to_json(tx.resource_bounds)
    out["tip"] = tip_to_json(tx.tip)
    out["paymaster_data"] = felts_to_json(tx.paymaster_data)
    if not isinstance(tx, RpcDeployAccountTransactionV3):
        out["account_deployment_data"] = felts_to_json(tx.account_deployment_data)
    out["nonce_data_availability_mode"] = da_mode_to_json(tx.nonce_data_availability_mode)
    out["fee_data_availability_mode"] = da_mode_to_json(tx.fee_data_availability_mode)
    return out


def _common_v3_kwargs(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "signature": felts_from_json(data["signature"]),
        "nonce": Nonce.from_hex(data["nonce"]),
        "resource_bounds": _rpc_resource_bounds_from_json(data["resource_bounds"]),
        "tip": tip_from_json(data["tip"]),
        "paymaster_data": felts_from_json(data["paymaster_data"]),
        "nonce_data_availability_mode": DataAvailabilityMode.parse(
            data["nonce_data_availability_mode"]
        ),
        "fee_data_availability_mode": DataAvailabilityMode.parse(
            data["fee_data_availability_mode"]
        ),
    }


def rpc_transaction_from_json(data: dict[str, Any]) -> RpcTransaction:
    if data.get("version") != RPC_VERSION:
        raise InvalidTransaction(f"unsupported RPC transaction version {data.get('version')!r}")
    kind = data.get("type")
    if kind not in {t.value for t in _RPC_TYPES.values()}:
        raise InvalidTransaction(f"unknown RPC transaction type {kind!r}")
    try:
        kwargs = _common_v3_kwargs(data)
        if kind == TransactionType.DECLARE.value:
            return RpcDeclareTransactionV3(
                sender_address=ContractAddress.from_hex(data["sender_address"]),
                compiled_class_hash=CompiledClassHash.from_hex(data["compiled_class_hash"]),
                contract_class=sierra_class_from_json(data["contract_class"]),
                account_deployment_data=felts_from_json(data["account_deployment_data"]),
                **kwargs,
            )
        if kind == TransactionType.DEPLOY_ACCOUNT.value:
            return RpcDeployAccountTransactionV3(
                class_hash=ClassHash.from_hex(data["class_hash"]),
                contract_address_salt=ContractAddressSalt.from_hex(data["contract_address_salt"]),
                constructor_calldata=felts_from_json(data["constructor_calldata"]),
                **kwargs,
            )
        return RpcInvokeTransactionV3(
            sender_address=ContractAddress.from_hex(data["sender_address"]),
            calldata=felts_from_json(data["calldata"]),
            account_deployment_data=felts_from_json(data["account_deployment_data"]),
            **kwargs,
        )
    except KeyError as exc:
        raise InvalidTransaction(f"RPC {kind} transaction is missing field {exc}") from exc
