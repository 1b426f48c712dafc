"""Error codes and exception behaviour."""

from __future__ import annotations

import pytest

from starknet_spec.errors import (
    BadHex,
    BlockSignatureErrorReason,
    ErrorCategory,
    ErrorCode,
    GasAccountingError,
    OutOfRange,
    SpecError,
    block_signature_error,
)


def test_error_code_categories() -> None:
    assert ErrorCode.OUT_OF_RANGE.category is ErrorCategory.ARITHMETIC
    assert ErrorCode.BAD_HEX.category is ErrorCategory.ENCODING
    assert ErrorCode.INVALID_TRANSACTION.category is ErrorCategory.VALIDATION
    assert ErrorCode.BLOCK_SIGNATURE_VERIFICATION_FAILED.category is ErrorCategory.CRYPTO


def test_error_string_form() -> None:
    assert str(OutOfRange("too big")) == "OUT_OF_RANGE(0x0300): too big"
    assert str(SpecError(ErrorCode.UNKNOWN, "?")) == "UNKNOWN(0xffff): ?"


def test_errors_are_catchable_as_spec_error() -> None:
    with pytest.raises(SpecError) as exc:
        raise BadHex("bad")
    assert exc.value.code == ErrorCode.BAD_HEX


def test_errors_chain_causes() -> None:
    with pytest.raises(GasAccountingError) as exc:
        try:
            1 // 0
        except ZeroDivisionError as cause:
            raise GasAccountingError(ErrorCode.DIVISION_BY_ZERO, "zero price") from cause
    assert isinstance(exc.value.__cause__, ZeroDivisionError)


def test_errors_are_frozen() -> None:
    error = OutOfRange("x")
    with pytest.raises(AttributeError):
        error.message = "y"  # type: ignore[misc]


def test_block_signature_error() -> None:
    error = block_signature_error(0xABC, BlockSignatureErrorReason.INVALID_S)
    assert error.code == ErrorCode.BLOCK_SIGNATURE_VERIFICATION_FAILED
    assert error.block_hash == 0xABC
    assert str(error) == "BLOCK_SIGNATURE_VERIFICATION_FAILED(0x0400): block 0xabc: InvalidS"