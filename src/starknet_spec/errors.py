"""Starknet Python spec error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class ErrorCategory(IntEnum):
    SUCCESS = 0x00
    VALIDATION = 0x01
    ENCODING = 0x02
    ARITHMETIC = 0x03
    CRYPTO = 0x04
    INTERNAL = 0xFF


class ErrorCode(IntEnum):
    # Success
    SUCCESS = 0x0000

    # Validation
    INVALID_RESOURCE_MAPPING = 0x0100
    INVALID_DATA_AVAILABILITY_MODE = 0x0101
    INVALID_TRANSACTION = 0x0102

    # Encoding
    BAD_HEX = 0x0200
    BAD_INPUT = 0x0201
    MISSING_PREFIX = 0x0202

    # Arithmetic
    OUT_OF_RANGE = 0x0300
    UNDERFLOW = 0x0301
    DIVISION_BY_ZERO = 0x0302

    # Crypto
    BLOCK_SIGNATURE_VERIFICATION_FAILED = 0x0400

    # Internal
    INTERNAL_ERROR = 0xFF00
    UNKNOWN = 0xFFFF

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self >> 8)


class BlockSignatureErrorReason(Enum):
    INVALID_PUBLIC_KEY = "InvalidPublicKey"
    INVALID_MESSAGE_HASH = "InvalidMessageHash"
    INVALID_R = "InvalidR"
    INVALID_S = "InvalidS"


@dataclass(frozen=True)
class SpecError(Exception):
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


class OutOfRange(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.OUT_OF_RANGE, message)


class BadHex(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.BAD_HEX, message)


class BadInput(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.BAD_INPUT, message)


class MissingPrefix(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.MISSING_PREFIX, message)


class InvalidResourceMapping(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_RESOURCE_MAPPING, message)


class InvalidDataAvailabilityMode(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_DATA_AVAILABILITY_MODE, message)


class InvalidTransaction(SpecError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_TRANSACTION, message)


class GasAccountingError(SpecError):
    """Malformed fee / gas price combination in a receipt."""


@dataclass(frozen=True)
class BlockSignatureVerificationFailed(SpecError):
    block_hash: int = 0
    reason: Optional[BlockSignatureErrorReason] = None

    def __str__(self) -> str:
        reason = self.reason.value if self.reason is not None else "unknown"
        return f"{self.code.name}({self.code:#06x}): block {self.block_hash:#x}: {reason}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__"))


def _allow_exception_attrs(cls: type) -> None:
    frozen_setattr = cls.__setattr__

    def _spec_error_setattr(self: SpecError, name: str, value: object) -> None:
        if name in _EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
        else:
            frozen_setattr(self, name, value)

    cls.__setattr__ = _spec_error_setattr  # type: ignore[method-assign]


_allow_exception_attrs(SpecError)
_allow_exception_attrs(BlockSignatureVerificationFailed)


def block_signature_error(
    block_hash: int, reason: BlockSignatureErrorReason
) -> BlockSignatureVerificationFailed:
    return BlockSignatureVerificationFailed(
        code=ErrorCode.BLOCK_SIGNATURE_VERIFICATION_FAILED,
        message=reason.value,
        block_hash=block_hash,
        reason=reason,
    )
