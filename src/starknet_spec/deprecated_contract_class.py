"""Deprecated (Cairo 0) contract classes and their JSON form.

Program fields are opaque JSON values; only ``hints`` gets special treatment:
its keys are program counters and must be emitted in numeric order so that
the serialized program, and thus the class hash pre-image, is stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .encoding import bytes_from_hex_str
from .errors import BadInput
from .types import EntryPointSelector


class EntryPointType(Enum):
    CONSTRUCTOR = "CONSTRUCTOR"
    EXTERNAL = "EXTERNAL"
    L1_HANDLER = "L1_HANDLER"


class EntryPointOffset(int):
    """Program offset of an entry point; hex string on the wire."""

    def __new__(cls, value: int = 0):
        if value < 0:
            raise BadInput(f"entry point offset {value} is negative")
        return super().__new__(cls, value)

    @classmethod
    def from_json(cls, value: Union[str, int]) -> "EntryPointOffset":
        if isinstance(value, int):
            return cls(value)
        return cls(int.from_bytes(bytes_from_hex_str(value, 8), "big"))

    def to_json(self) -> str:
        return f"0x{int(self):x}"


@dataclass(frozen=True, order=True)
class EntryPoint:
    selector: EntryPointSelector
    offset: EntryPointOffset


@dataclass(frozen=True)
class TypedParameter:
    name: str
    type: str


@dataclass(frozen=True)
class EventAbiEntry:
    name: str
    keys: tuple[TypedParameter, ...] = ()
    data: tuple[TypedParameter, ...] = ()


class FunctionAbiEntryType(Enum):
    CONSTRUCTOR = "constructor"
    L1_HANDLER = "l1_handler"
    REGULAR = "function"


@dataclass(frozen=True)
class FunctionAbiEntry:
    name: str
    inputs: tuple[TypedParameter, ...] = ()
    outputs: tuple[TypedParameter, ...] = ()
    type: FunctionAbiEntryType = FunctionAbiEntryType.REGULAR


@dataclass(frozen=True)
class StructMember:
    name: str
    type: str
    offset: int


@dataclass(frozen=True)
class StructAbiEntry:
    name: str
    size: int
    members: tuple[StructMember, ...] = ()


ContractClassAbiEntry = Union[EventAbiEntry, FunctionAbiEntry, StructAbiEntry]


@dataclass
class Program:
    attributes: Any = field(default_factory=list)
    builtins: Any = field(default_factory=list)
    compiler_version: Any = None
    data: Any = field(default_factory=list)
    debug_info: Any = None
    hints: dict[str, Any] = field(default_factory=dict)
    identifiers: Any = field(default_factory=dict)
    main_scope: Any = ""
    prime: Any = "0x0"
    reference_manager: Any = field(default_factory=dict)


@dataclass
class ContractClass:
    program: Program
    entry_points_by_type: dict[EntryPointType, list[EntryPoint]] = field(default_factory=dict)
    abi: Optional[list[ContractClassAbiEntry]] = None


# --- JSON ---


def sorted_hints(hints: dict[str, Any]) -> dict[str, Any]:
    """Re-key ``hints`` in ascending numeric order of the program counters."""
    try:
        ordered = sorted(hints.items(), key=lambda item: int(item[0]))
    except ValueError as exc:
        raise BadInput(f"hint key is not an integer: {exc}") from exc
    return dict(ordered)


def program_to_json(program: Program) -> dict[str, Any]:
    out: dict[str, Any] = {
        "attributes": program.attributes,
        "builtins": program.builtins,
    }
    if program.compiler_version is not None:
        out["compiler_version"] = program.compiler_version
    out.update(
        {
            "data": program.data,
            "debug_info": program.debug_info,
            "hints": sorted_hints(program.hints),
            "identifiers": program.identifiers,
            "main_scope": program.main_scope,
            "prime": program.prime,
            "reference_manager": program.reference_manager,
        }
    )
    return out


def program_from_json(data: dict[str, Any]) -> Program:
    return Program(
        attributes=data.get("attributes", []),
        builtins=data["builtins"],
        compiler_version=data.get("compiler_version"),
        data=data["data"],
        debug_info=data.get("debug_info"),
        hints=dict(data["hints"]),
        identifiers=data["identifiers"],
        main_scope=data["main_scope"],
        prime=data["prime"],
        reference_manager=data["reference_manager"],
    )


def _params_to_json(params: tuple[TypedParameter, ...]) -> list[dict[str, str]]:
    return [{"name": p.name, "type": p.type} for p in params]


def _params_from_json(items: list[dict[str, str]]) -> tuple[TypedParameter, ...]:
    return tuple(TypedParameter(name=i["name"], type=i["type"]) for i in items)


def abi_entry_to_json(entry: ContractClassAbiEntry) -> dict[str, Any]:
    if isinstance(entry, EventAbiEntry):
        return {
            "type": "event",
            "name": entry.name,
            "keys": _params_to_json(entry.keys),
            "data": _params_to_json(entry.data),
        }
    if isinstance(entry, StructAbiEntry):
        return {
            "type": "struct",
            "name": entry.name,
            "size": entry.size,
            "members": [
                {"name": m.name, "type": m.type, "offset": m.offset} for m in entry.members
            ],
        }
    return {
        "type": entry.type.value,
        "name": entry.name,
        "inputs": _params_to_json(entry.inputs),
        "outputs": _params_to_json(entry.outputs),
    }


def abi_entry_from_json(data: dict[str, Any]) -> ContractClassAbiEntry:
    kind = data.get("type")
    if kind == "event":
        return EventAbiEntry(
            name=data["name"],
            keys=_params_from_json(data.get("keys", [])),
            data=_params_from_json(data.get("data", [])),
        )
    if kind == "struct":
        return StructAbiEntry(
            name=data["name"],
            size=int(data["size"]),
            members=tuple(
                StructMember(name=m["name"], type=m["type"], offset=int(m["offset"]))
                for m in data.get("members", [])
            ),
        )
    try:
        function_type = FunctionAbiEntryType(kind)
    except ValueError as exc:
        raise BadInput(f"unknown abi entry type {kind!r}") from exc
    return FunctionAbiEntry(
        name=data["name"],
        inputs=_params_from_json(data.get("inputs", [])),
        outputs=_params_from_json(data.get("outputs", [])),
        type=function_type,
    )


def entry_point_to_json(ep: EntryPoint) -> dict[str, str]:
    return {"selector": ep.selector.to_hex(), "offset": ep.offset.to_json()}


def entry_point_from_json(data: dict[str, Any]) -> EntryPoint:
    return EntryPoint(
        selector=EntryPointSelector.from_hex(data["selector"]),
        offset=EntryPointOffset.from_json(data["offset"]),
    )


def contract_class_to_json(cls: ContractClass) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if cls.abi is not None:
        out["abi"] = [abi_entry_to_json(e) for e in cls.abi]
    out["program"] = program_to_json(cls.program)
    out["entry_points_by_type"] = {
        ep_type.value: [entry_point_to_json(ep) for ep in cls.entry_points_by_type[ep_type]]
        for ep_type in EntryPointType
        if ep_type in cls.entry_points_by_type
    }
    return out


def contract_class_from_json(data: dict[str, Any]) -> ContractClass:
    abi = data.get("abi")
    return ContractClass(
        abi=None if abi is None else [abi_entry_from_json(e) for e in abi],
        program=program_from_json(data["program"]),
        entry_points_by_type={
            EntryPointType(k): [entry_point_from_json(ep) for ep in v]
            for k, v in data.get("entry_points_by_type", {}).items()
        },
    )
