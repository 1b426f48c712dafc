"""Block header packing, block hash and sequencer signature verification."""

from __future__ import annotations

from dataclasses import replace

import pytest

from starknet_spec.block import (
    BlockHeaderWithoutHash,
    BlockSignature,
    GasPricePerToken,
    concat_counts,
    verify_block_signature,
)
from starknet_spec.commitments.block_hash import (
    TransactionHashingData,
    calculate_block_commitments,
    calculate_block_hash,
)
from starknet_spec.commitments.events import EventLeafElement, calculate_events_commitment
from starknet_spec.commitments.state_diff import calculate_state_diff_hash
from starknet_spec.commitments.transactions import (
    TransactionLeafElement,
    calculate_transactions_commitment,
)
from starknet_spec.data_availability import L1DataAvailabilityMode
from starknet_spec.errors import (
    BlockSignatureErrorReason,
    BlockSignatureVerificationFailed,
    ErrorCode,
)
from starknet_spec.state import ThinStateDiff
from starknet_spec.transaction import Event, InvokeTransactionOutput
from starknet_spec.types import (
    BlockHash,
    BlockNumber,
    BlockTimestamp,
    ContractAddress,
    GasPrice,
    GlobalRoot,
    TransactionVersion,
)

_PUBLIC_KEY = 0x48253FF2C3BED7AF18BDE0B611B083B39445959102D4947C51C4DB6AA4F4E58
_BLOCK_HASH = 0x7D5DB04C5CA2AEA828180DC441AFB1580E3CEE7547A3567CED3AA5BB8B273C0
_STATE_DIFF_COMMITMENT = 0x64689C12248E1110AF4B3AF0E2B43CD51AD13E8855F10E37669E2A4BAF919C6
_SIGNATURE = BlockSignature(
    r=0x1B382BBFD693011C9B7692BC932B23ED9C288DEB27C8E75772E172ABBE5950C,
    s=0xBE4438085057E1A7C704A0DA3B30F7B8340FE3D24C86772ABFD24AA597E42,
)


# --- Counts ---


def test_concat_counts_blob() -> None:
    assert concat_counts(4, 3, 2, L1DataAvailabilityMode.BLOB) == (
        0x0000000000000004000000000000000300000000000000028000000000000000
    )


def test_concat_counts_calldata() -> None:
    assert concat_counts(4, 3, 2, L1DataAvailabilityMode.CALLDATA) == (
        0x0000000000000004000000000000000300000000000000020000000000000000
    )


# --- Signature ---


def test_verify_block_signature(vector_test_group) -> None:
    ok = verify_block_signature(_PUBLIC_KEY, _SIGNATURE, _STATE_DIFF_COMMITMENT, _BLOCK_HASH)
    assert ok
    vector_test_group(
        "block/signature.json",
        {
            "name": "block_4256",
            "runnable": False,
            "input": {
                "kind": "block_signature",
                "public_key": hex(_PUBLIC_KEY),
                "block_hash": hex(_BLOCK_HASH),
                "state_diff_commitment": hex(_STATE_DIFF_COMMITMENT),
                "r": hex(_SIGNATURE.r),
                "s": hex(_SIGNATURE.s),
            },
            "expected": {"valid": ok},
        },
    )


def test_verify_block_signature_wrong_message() -> None:
    assert not verify_block_signature(
        _PUBLIC_KEY, _SIGNATURE, _STATE_DIFF_COMMITMENT, _BLOCK_HASH + 1
    )


def test_verify_block_signature_rejects_zero_r() -> None:
    with pytest.raises(BlockSignatureVerificationFailed) as exc:
        verify_block_signature(
            _PUBLIC_KEY, BlockSignature(r=0, s=_SIGNATURE.s), _STATE_DIFF_COMMITMENT, _BLOCK_HASH
        )
    assert exc.value.code == ErrorCode.BLOCK_SIGNATURE_VERIFICATION_FAILED
    assert exc.value.reason is BlockSignatureErrorReason.INVALID_R
    assert exc.value.block_hash == _BLOCK_HASH


def test_verify_block_signature_rejects_zero_s() -> None:
    with pytest.raises(BlockSignatureVerificationFailed) as exc:
        verify_block_signature(
            _PUBLIC_KEY, BlockSignature(r=_SIGNATURE.r, s=0), _STATE_DIFF_COMMITMENT, _BLOCK_HASH
        )
    assert exc.value.reason is BlockSignatureErrorReason.INVALID_S


def test_verify_block_signature_rejects_off_curve_key() -> None:
    # x = 5 has no matching y on the STARK curve.
    with pytest.raises(BlockSignatureVerificationFailed) as exc:
        verify_block_signature(5, _SIGNATURE, 5, 6)
    assert exc.value.reason is BlockSignatureErrorReason.INVALID_PUBLIC_KEY
    assert exc.value.block_hash == 6


# --- Block hash ---


def _header() -> BlockHeaderWithoutHash:
    return BlockHeaderWithoutHash(
        parent_hash=BlockHash(0x1),
        block_number=BlockNumber(10),
        l1_gas_price=GasPricePerToken(GasPrice(7), GasPrice(8)),
        l1_data_gas_price=GasPricePerToken(GasPrice(9), GasPrice(10)),
        state_root=GlobalRoot(0x2),
        sequencer=ContractAddress(0x3),
        timestamp=BlockTimestamp(11),
        l1_da_mode=L1DataAvailabilityMode.BLOB,
        starknet_version="0.13.2",
    )


def _transactions_data() -> list[TransactionHashingData]:
    output = InvokeTransactionOutput(
        actual_fee=100,
        events=(Event(from_address=0x5, keys=(1,), data=(2,)),),
    )
    return [
        TransactionHashingData(
            transaction_signature=(0x6, 0x7),
            transaction_output=output,
            transaction_hash=0x8,
            transaction_version=TransactionVersion.ONE,
        )
    ]


def test_block_commitments() -> None:
    state_diff = ThinStateDiff(nonces={1: 2}, storage_diffs={3: {4: 5}})
    header = _header()
    commitments = calculate_block_commitments(
        _transactions_data(),
        state_diff,
        header.l1_data_gas_price,
        header.l1_gas_price,
        header.l1_da_mode,
    )
    assert commitments.state_diff_commitment == calculate_state_diff_hash(state_diff)
    assert commitments.concatenated_counts == concat_counts(1, 1, 2, L1DataAvailabilityMode.BLOB)
    event = _transactions_data()[0].transaction_output.events[0]
    assert commitments.event_commitment == calculate_events_commitment(
        [EventLeafElement(event, 0x8)]
    )
    assert commitments.transaction_commitment == calculate_transactions_commitment(
        [TransactionLeafElement(0x8, (0x6, 0x7))]
    )


def test_block_hash_covers_every_field() -> None:
    header = _header()
    commitments = calculate_block_commitments(
        _transactions_data(),
        ThinStateDiff(nonces={1: 2}),
        header.l1_data_gas_price,
        header.l1_gas_price,
        header.l1_da_mode,
    )
    base = calculate_block_hash(header, commitments)
    variants = [
        replace(header, parent_hash=BlockHash(0x99)),
        replace(header, block_number=BlockNumber(11)),
        replace(header, state_root=GlobalRoot(0x99)),
        replace(header, sequencer=ContractAddress(0x99)),
        replace(header, timestamp=BlockTimestamp(99)),
        replace(header, starknet_version="0.13.3"),
        replace(header, l1_gas_price=GasPricePerToken(GasPrice(7), GasPrice(9))),
        replace(header, l1_data_gas_price=GasPricePerToken(GasPrice(1), GasPrice(10))),
    ]
    hashes = {calculate_block_hash(v, commitments) for v in variants}
    assert base not in hashes
    assert len(hashes) == len(variants)
    assert calculate_block_hash(header, replace(commitments, receipt_commitment=0x1)) != base


def test_verify_block_signature_rejects_oversized_r() -> None:
    with pytest.raises(BlockSignatureVerificationFailed) as exc:
        verify_block_signature(
            _PUBLIC_KEY,
            BlockSignature(r=2**251, s=_SIGNATURE.s),
            _STATE_DIFF_COMMITMENT,
            _BLOCK_HASH,
        )
    assert exc.value.reason is BlockSignatureErrorReason.INVALID_R
    assert "InvalidR" in str(exc.value)
