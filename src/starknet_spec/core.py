"""Chain identity and contract-address derivation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .config import (
    CONTRACT_ADDRESS_PREFIX,
    L2_ADDRESS_UPPER_BOUND,
    SN_INTEGRATION_SEPOLIA,
    SN_MAIN,
    SN_SEPOLIA,
)
from .crypto.hash import ascii_as_felt, ascii_bytes
from .crypto.hash_chain import HashChain, pedersen_hash_array
from .types import ClassHash, ContractAddress, ContractAddressSalt, Felt

_CONTRACT_ADDRESS_PREFIX = ascii_as_felt(CONTRACT_ADDRESS_PREFIX)


@dataclass(frozen=True)
class ChainId:
    """A chain id string such as ``SN_MAIN``; any other string is allowed."""

    name: str

    def __str__(self) -> str:
        return self.name

    def as_hex(self) -> str:
        return "0x" + ascii_bytes(self.name).hex()

    def as_felt(self) -> Felt:
        return ascii_as_felt(self.name)

    @property
    def is_mainnet(self) -> bool:
        return self.name == SN_MAIN


ChainId.MAINNET = ChainId(SN_MAIN)
ChainId.SEPOLIA = ChainId(SN_SEPOLIA)
ChainId.INTEGRATION_SEPOLIA = ChainId(SN_INTEGRATION_SEPOLIA)


def calculate_contract_address(
    salt: int,
    class_hash: int,
    constructor_calldata: Iterable[int],
    deployer_address: int = 0,
) -> ContractAddress:
    """Address of a contract deployed from ``class_hash`` by ``deployer_address``."""
    raw = (
        HashChain()
        .chain(_CONTRACT_ADDRESS_PREFIX)
        .chain(deployer_address)
        .chain(ContractAddressSalt(salt))
        .chain(ClassHash(class_hash))
        .chain(pedersen_hash_array(constructor_calldata))
        .get_pedersen_hash()
    )
    return ContractAddress(raw % L2_ADDRESS_UPPER_BOUND)
