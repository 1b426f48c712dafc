"""Starknet transaction model: variants, resources, outputs and receipts.

Each (kind, version) pair is its own frozen dataclass. ``Transaction`` is the
closed union of all of them; code that needs per-variant behaviour dispatches
on ``type(tx)`` rather than on methods of the classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Iterator, Optional, Union

from .config import U64_MAX, U128_MAX
from .data_availability import DataAvailabilityMode
from .errors import InvalidResourceMapping, OutOfRange
from .types import (
    BlockHash,
    BlockNumber,
    ClassHash,
    CompiledClassHash,
    ContractAddress,
    ContractAddressSalt,
    EntryPointSelector,
    EthAddress,
    Fee,
    Felt,
    Nonce,
    Tip,
    TransactionHash,
    TransactionVersion,
)


def felts(values: Iterable[int]) -> tuple[Felt, ...]:
    return tuple(Felt(v) for v in values)


def _freeze_felts(obj: object, *names: str) -> None:
    for name in names:
        object.__setattr__(obj, name, felts(getattr(obj, name)))


class TransactionType(Enum):
    DECLARE = "DECLARE"
    DEPLOY = "DEPLOY"
    DEPLOY_ACCOUNT = "DEPLOY_ACCOUNT"
    INVOKE = "INVOKE"
    L1_HANDLER = "L1_HANDLER"


class Resource(Enum):
    L1_GAS = "L1_GAS"
    L2_GAS = "L2_GAS"


@dataclass(frozen=True)
class ResourceBounds:
    max_amount: int = 0
    max_price_per_unit: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.max_amount <= U64_MAX:
            raise OutOfRange(f"max_amount {self.max_amount} does not fit in u64")
        if not 0 <= self.max_price_per_unit <= U128_MAX:
            raise OutOfRange(f"max_price_per_unit {self.max_price_per_unit} does not fit in u128")


@dataclass(frozen=True)
class ResourceBoundsMapping:
    """Bounds for exactly the two recognized resources."""

    l1_gas: ResourceBounds = ResourceBounds()
    l2_gas: ResourceBounds = ResourceBounds()

    @classmethod
    def from_entries(
        cls, entries: Iterable[tuple[Resource, ResourceBounds]]
    ) -> "ResourceBoundsMapping":
        found: dict[Resource, ResourceBounds] = {}
        for resource, bounds in entries:
            if resource in found:
                raise InvalidResourceMapping(f"duplicate resource {resource.value}")
            found[resource] = bounds
        missing = [r.value for r in Resource if r not in found]
        if missing:
            raise InvalidResourceMapping(f"missing resources: {', '.join(missing)}")
        return cls(l1_gas=found[Resource.L1_GAS], l2_gas=found[Resource.L2_GAS])

    def __getitem__(self, resource: Resource) -> ResourceBounds:
        if resource is Resource.L1_GAS:
            return self.l1_gas
        return self.l2_gas

    def items(self) -> Iterator[tuple[Resource, ResourceBounds]]:
        yield Resource.L1_GAS, self.l1_gas
        yield Resource.L2_GAS, self.l2_gas


# --- Declare ---


@dataclass(frozen=True)
class DeclareTransactionV0:
    TYPE: ClassVar[TransactionType] = TransactionType.DECLARE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.ZERO

    max_fee: Fee = Fee(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    class_hash: ClassHash = ClassHash(0)
    sender_address: ContractAddress = ContractAddress(0)

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature")


@dataclass(frozen=True)
class DeclareTransactionV1:
    TYPE: ClassVar[TransactionType] = TransactionType.DECLARE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.ONE

    max_fee: Fee = Fee(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    class_hash: ClassHash = ClassHash(0)
    sender_address: ContractAddress = ContractAddress(0)

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature")


@dataclass(frozen=True)
class DeclareTransactionV2:
    TYPE: ClassVar[TransactionType] = TransactionType.DECLARE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.TWO

    max_fee: Fee = Fee(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    class_hash: ClassHash = ClassHash(0)
    compiled_class_hash: CompiledClassHash = CompiledClassHash(0)
    sender_address: ContractAddress = ContractAddress(0)

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature")


@dataclass(frozen=True)
class DeclareTransactionV3:
    TYPE: ClassVar[TransactionType] = TransactionType.DECLARE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.THREE

    resource_bounds: ResourceBoundsMapping = ResourceBoundsMapping()
    tip: Tip = Tip(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    class_hash: ClassHash = ClassHash(0)
    compiled_class_hash: CompiledClassHash = CompiledClassHash(0)
    sender_address: ContractAddress = ContractAddress(0)
    nonce_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    fee_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    paymaster_data: tuple[Felt, ...] = ()
    account_deployment_data: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "paymaster_data", "account_deployment_data")


# --- Deploy ---


@dataclass(frozen=True)
class DeployTransaction:
    TYPE: ClassVar[TransactionType] = TransactionType.DEPLOY

    version: TransactionVersion = TransactionVersion.ZERO
    class_hash: ClassHash = ClassHash(0)
    contract_address_salt: ContractAddressSalt = ContractAddressSalt(0)
    constructor_calldata: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "constructor_calldata")


@dataclass(frozen=True)
class DeployAccountTransactionV1:
    TYPE: ClassVar[TransactionType] = TransactionType.DEPLOY_ACCOUNT
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.ONE

    max_fee: Fee = Fee(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    class_hash: ClassHash = ClassHash(0)
    contract_address_salt: ContractAddressSalt = ContractAddressSalt(0)
    constructor_calldata: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "constructor_calldata")


@dataclass(frozen=True)
class DeployAccountTransactionV3:
    TYPE: ClassVar[TransactionType] = TransactionType.DEPLOY_ACCOUNT
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.THREE

    resource_bounds: ResourceBoundsMapping = ResourceBoundsMapping()
    tip: Tip = Tip(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    class_hash: ClassHash = ClassHash(0)
    contract_address_salt: ContractAddressSalt = ContractAddressSalt(0)
    constructor_calldata: tuple[Felt, ...] = ()
    nonce_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    fee_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    paymaster_data: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "constructor_calldata", "paymaster_data")


# --- Invoke ---


@dataclass(frozen=True)
class InvokeTransactionV0:
    TYPE: ClassVar[TransactionType] = TransactionType.INVOKE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.ZERO

    max_fee: Fee = Fee(0)
    signature: tuple[Felt, ...] = ()
    contract_address: ContractAddress = ContractAddress(0)
    entry_point_selector: EntryPointSelector = EntryPointSelector(0)
    calldata: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "calldata")


@dataclass(frozen=True)
class InvokeTransactionV1:
    TYPE: ClassVar[TransactionType] = TransactionType.INVOKE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.ONE

    max_fee: Fee = Fee(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    sender_address: ContractAddress = ContractAddress(0)
    calldata: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "calldata")


@dataclass(frozen=True)
class InvokeTransactionV3:
    TYPE: ClassVar[TransactionType] = TransactionType.INVOKE
    VERSION: ClassVar[TransactionVersion] = TransactionVersion.THREE

    resource_bounds: ResourceBoundsMapping = ResourceBoundsMapping()
    tip: Tip = Tip(0)
    signature: tuple[Felt, ...] = ()
    nonce: Nonce = Nonce(0)
    sender_address: ContractAddress = ContractAddress(0)
    calldata: tuple[Felt, ...] = ()
    nonce_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    fee_data_availability_mode: DataAvailabilityMode = DataAvailabilityMode.L1
    paymaster_data: tuple[Felt, ...] = ()
    account_deployment_data: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "signature", "calldata", "paymaster_data", "account_deployment_data")


# --- L1 handler ---


@dataclass(frozen=True)
class L1HandlerTransaction:
    TYPE: ClassVar[TransactionType] = TransactionType.L1_HANDLER

    version: TransactionVersion = TransactionVersion.ZERO
    nonce: Nonce = Nonce(0)
    contract_address: ContractAddress = ContractAddress(0)
    entry_point_selector: EntryPointSelector = EntryPointSelector(0)
    calldata: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "calldata")


DeclareTransaction = Union[
    DeclareTransactionV0, DeclareTransactionV1, DeclareTransactionV2, DeclareTransactionV3
]
DeployAccountTransaction = Union[DeployAccountTransactionV1, DeployAccountTransactionV3]
InvokeTransaction = Union[InvokeTransactionV0, InvokeTransactionV1, InvokeTransactionV3]

Transaction = Union[
    DeclareTransactionV0,
    DeclareTransactionV1,
    DeclareTransactionV2,
    DeclareTransactionV3,
    DeployTransaction,
    DeployAccountTransactionV1,
    DeployAccountTransactionV3,
    InvokeTransactionV0,
    InvokeTransactionV1,
    InvokeTransactionV3,
    L1HandlerTransaction,
]

TRANSACTION_CLASSES: tuple[type, ...] = (
    DeclareTransactionV0,
    DeclareTransactionV1,
    DeclareTransactionV2,
    DeclareTransactionV3,
    DeployTransaction,
    DeployAccountTransactionV1,
    DeployAccountTransactionV3,
    InvokeTransactionV0,
    InvokeTransactionV1,
    InvokeTransactionV3,
    L1HandlerTransaction,
)


def transaction_type(tx: Transaction) -> TransactionType:
    return type(tx).TYPE


def transaction_version(tx: Transaction) -> TransactionVersion:
    """The signed version: the class constant, or the field for deploy / L1 handler."""
    if isinstance(tx, (DeployTransaction, L1HandlerTransaction)):
        return TransactionVersion(tx.version)
    return type(tx).VERSION


def transaction_signature(tx: Transaction) -> Optional[tuple[Felt, ...]]:
    """Signature of ``tx``, or ``None`` for kinds that are never signed."""
    if isinstance(tx, (DeployTransaction, L1HandlerTransaction)):
        return None
    return tx.signature


# --- Execution ---


@dataclass(frozen=True)
class MessageToL1:
    from_address: ContractAddress
    to_address: EthAddress
    payload: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "payload")


@dataclass(frozen=True)
class Event:
    from_address: ContractAddress
    keys: tuple[Felt, ...] = ()
    data: tuple[Felt, ...] = ()

    def __post_init__(self) -> None:
        _freeze_felts(self, "keys", "data")


class Builtin(Enum):
    PEDERSEN = "pedersen_builtin"
    RANGE_CHECK = "range_check_builtin"
    ECDSA = "ecdsa_builtin"
    BITWISE = "bitwise_builtin"
    EC_OP = "ec_op_builtin"
    POSEIDON = "poseidon_builtin"
    SEGMENT_ARENA = "segment_arena_builtin"
    KECCAK = "keccak_builtin"


@dataclass(frozen=True)
class ExecutionResources:
    steps: int = 0
    builtin_instance_counter: dict[Builtin, int] = field(default_factory=dict)
    memory_holes: int = 0
    da_l1_gas_consumed: int = 0
    da_l1_data_gas_consumed: int = 0


@dataclass(frozen=True)
class TransactionExecutionStatus:
    """``SUCCEEDED`` when ``revert_reason`` is ``None``, else ``REVERTED``."""

    revert_reason: Optional[str] = None

    @property
    def is_reverted(self) -> bool:
        return self.revert_reason is not None

    @property
    def name(self) -> str:
        return "REVERTED" if self.is_reverted else "SUCCEEDED"


SUCCEEDED = TransactionExecutionStatus()


@dataclass(frozen=True)
class _OutputFields:
    actual_fee: Fee = Fee(0)
    messages_sent: tuple[MessageToL1, ...] = ()
    events: tuple[Event, ...] = ()
    execution_status: TransactionExecutionStatus = SUCCEEDED
    execution_resources: ExecutionResources = field(default_factory=ExecutionResources)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages_sent", tuple(self.messages_sent))
        object.__setattr__(self, "events", tuple(self.events))


@dataclass(frozen=True)
class DeclareTransactionOutput(_OutputFields):
    TYPE: ClassVar[TransactionType] = TransactionType.DECLARE


@dataclass(frozen=True)
class InvokeTransactionOutput(_OutputFields):
    TYPE: ClassVar[TransactionType] = TransactionType.INVOKE


@dataclass(frozen=True)
class L1HandlerTransactionOutput(_OutputFields):
    TYPE: ClassVar[TransactionType] = TransactionType.L1_HANDLER


@dataclass(frozen=True)
class DeployTransactionOutput(_OutputFields):
    TYPE: ClassVar[TransactionType] = TransactionType.DEPLOY

    contract_address: ContractAddress = ContractAddress(0)


@dataclass(frozen=True)
class DeployAccountTransactionOutput(_OutputFields):
    TYPE: ClassVar[TransactionType] = TransactionType.DEPLOY_ACCOUNT

    contract_address: ContractAddress = ContractAddress(0)


TransactionOutput = Union[
    DeclareTransactionOutput,
    DeployTransactionOutput,
    DeployAccountTransactionOutput,
    InvokeTransactionOutput,
    L1HandlerTransactionOutput,
]


@dataclass(frozen=True)
class TransactionReceipt:
    transaction_hash: TransactionHash
    block_hash: BlockHash
    block_number: BlockNumber
    output: TransactionOutput
