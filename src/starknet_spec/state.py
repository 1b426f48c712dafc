"""State differences and state numbering."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import OutOfRange
from .types import (
    BlockNumber,
    ClassHash,
    CompiledClassHash,
    ContractAddress,
    Felt,
    Nonce,
    StorageKey,
)

__all__ = ["StateNumber", "StorageKey", "ThinStateDiff"]


@dataclass(frozen=True)
class ThinStateDiff:
    """The state changes of one block, without class definitions.

    Mapping order carries no meaning; hashing sorts every map by key.
    """

    deployed_contracts: dict[ContractAddress, ClassHash] = field(default_factory=dict)
    storage_diffs: dict[ContractAddress, dict[StorageKey, Felt]] = field(default_factory=dict)
    declared_classes: dict[ClassHash, CompiledClassHash] = field(default_factory=dict)
    deprecated_declared_classes: list[ClassHash] = field(default_factory=list)
    nonces: dict[ContractAddress, Nonce] = field(default_factory=dict)
    replaced_classes: dict[ContractAddress, ClassHash] = field(default_factory=dict)

    def length(self) -> int:
        """Number of state entries, counting each storage write separately.

        Replaced classes are not counted.
        """
        return (
            len(self.deployed_contracts)
            + len(self.declared_classes)
            + len(self.deprecated_declared_classes)
            + len(self.nonces)
            + sum(len(updates) for updates in self.storage_diffs.values())
        )

    def is_empty(self) -> bool:
        return self.length() == 0


@dataclass(frozen=True, order=True)
class StateNumber:
    """Index of a state between blocks: state ``n`` is right before block ``n``."""

    block_number: BlockNumber

    @classmethod
    def right_before_block(cls, block_number: int) -> "StateNumber":
        return cls(BlockNumber(block_number))

    @classmethod
    def right_after_block(cls, block_number: int) -> "StateNumber":
        following = BlockNumber(block_number).next()
        if following is None:
            raise OutOfRange(f"no state after block {block_number}")
        return cls(following)

    def is_before(self, block_number: int) -> bool:
        return self.block_number <= block_number

    def is_after(self, block_number: int) -> bool:
        return not self.is_before(block_number)

    def block_after(self) -> BlockNumber:
        return self.block_number
