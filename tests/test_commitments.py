"""Patricia roots and the transaction / event / receipt commitments."""

from __future__ import annotations

import pytest

from starknet_spec.block import GasPricePerToken
from starknet_spec.commitments.events import (
    EventLeafElement,
    calculate_event_hash,
    calculate_events_commitment,
)
from starknet_spec.commitments.receipts import (
    ReceiptElement,
    calculate_l1_gas_consumed,
    calculate_messages_sent_hash,
    calculate_receipt_commitment,
    calculate_receipt_hash,
    get_revert_reason_hash,
)
from starknet_spec.commitments.transactions import (
    TransactionLeafElement,
    calculate_transaction_leaf,
    calculate_transactions_commitment,
)
from starknet_spec.crypto.hash import pedersen, poseidon_many, poseidon_pair, starknet_keccak
from starknet_spec.crypto.patricia import calculate_pedersen_root, calculate_root
from starknet_spec.errors import ErrorCode, GasAccountingError
from starknet_spec.transaction import (
    Event,
    ExecutionResources,
    InvokeTransactionOutput,
    MessageToL1,
    TransactionExecutionStatus,
)
from starknet_spec.types import EthAddress, GasPrice, TransactionVersion


# --- Patricia ---


def _emit_root(vector_test_group, name: str, leaves: list[int], root: int) -> None:
    vector_test_group(
        "commitments/patricia.json",
        {
            "name": name,
            "input": {"kind": "patricia_root", "hash": "poseidon", "leaves": [hex(v) for v in leaves]},
            "expected": {"hash": hex(root)},
        },
    )


def test_patricia_root_three_leaves(vector_test_group) -> None:
    root = calculate_root([1, 2, 3])
    assert root == 0x3B5CC7F1292EB3847C3F902D048A7E5DC7702D1C191CCD17C2D33F797E6FC32
    _emit_root(vector_test_group, "three_leaves", [1, 2, 3], root)


def test_patricia_root_single_leaf(vector_test_group) -> None:
    root = calculate_root([1])
    assert root == 0x7752582C54A42FE0FA35C40F07293BB7D8EFE90E21D8D2C06A7DB52D7D9B7E1
    # A lone leaf is one edge node of length 64 along the all-zero path.
    assert root == (poseidon_pair(1, 0) + 64) % (2**251 + 17 * 2**192 + 1)
    _emit_root(vector_test_group, "single_leaf", [1], root)


def test_patricia_root_two_leaves(vector_test_group) -> None:
    root = calculate_root([1, 2])
    assert root == 0x1C1BA983EE0A0DE87D87D67EA3CBEE7023AA65F6B7BCF71259F122EA3AF80BF
    assert root == poseidon_pair(poseidon_pair(1, 2), 0) + 63
    _emit_root(vector_test_group, "two_leaves", [1, 2], root)


def test_patricia_root_empty() -> None:
    assert calculate_root([]) == 0
    assert calculate_pedersen_root([]) == 0


def test_patricia_pedersen_root(vector_test_group) -> None:
    leaves = [1, 2, 3]
    root = calculate_pedersen_root(leaves)
    assert root == calculate_root(leaves, pedersen)
    assert root != calculate_root(leaves)
    vector_test_group(
        "commitments/patricia.json",
        {
            "name": "three_leaves_pedersen",
            "input": {"kind": "patricia_root", "hash": "pedersen", "leaves": ["0x1", "0x2", "0x3"]},
            "expected": {"hash": hex(root)},
        },
    )


def test_patricia_root_depends_on_order() -> None:
    assert calculate_root([1, 2, 3]) != calculate_root([3, 2, 1])


# --- Events ---


def _event_leaf(seed: int) -> EventLeafElement:
    return EventLeafElement(
        event=Event(
            from_address=seed + 8,
            keys=(seed, seed + 1),
            data=(seed + 2, seed + 3, seed + 4),
        ),
        transaction_hash=0x1234,
    )


def test_event_hash() -> None:
    leaf = EventLeafElement(
        event=Event(from_address=0xA, keys=(2, 3), data=(4, 5, 6)),
        transaction_hash=0x1234,
    )
    assert calculate_event_hash(leaf) == (
        0x367807F532742A4DCBE2D8A47B974B22DD7496FAA75EDC64A3A5FDB6709057
    )
    assert calculate_event_hash(leaf) == poseidon_many([0xA, 0x1234, 2, 2, 3, 3, 4, 5, 6])


def test_events_commitment() -> None:
    leaves = [_event_leaf(seed) for seed in range(3)]
    assert calculate_events_commitment(leaves) == (
        0x069BB140DDBBEB01D81C7201ECFB933031306E45DAB9C77FF9F9BA3CD4C2B9C3
    )


def test_events_commitment_empty() -> None:
    assert calculate_events_commitment([]) == 0


# --- Transactions ---


def test_transaction_leaf_signature_handling() -> None:
    tx_hash = 0x5
    assert calculate_transaction_leaf(TransactionLeafElement(tx_hash, (1, 2))) == poseidon_many(
        [tx_hash, 1, 2]
    )
    # Unsigned kinds hash as a single zero signature element.
    assert calculate_transaction_leaf(TransactionLeafElement(tx_hash, None)) == poseidon_many(
        [tx_hash, 0]
    )
    assert calculate_transaction_leaf(TransactionLeafElement(tx_hash, ())) == poseidon_many(
        [tx_hash]
    )


def test_transactions_commitment() -> None:
    leaves = [
        TransactionLeafElement(0x1, (0x2, 0x3)),
        TransactionLeafElement(0x4, None),
    ]
    expected = calculate_root([calculate_transaction_leaf(l) for l in leaves])
    assert calculate_transactions_commitment(leaves) == expected


# --- Receipts ---


def _messages(count: int) -> list[MessageToL1]:
    return [
        MessageToL1(from_address=seed, to_address=EthAddress(seed + 1), payload=(seed + 2, seed + 3))
        for seed in range(count)
    ]


def test_messages_sent_hash() -> None:
    assert calculate_messages_sent_hash(_messages(2)) == (
        0x00C89474A9007DC060AED76CAF8B30B927CFEA1EBCE2D134B943B8D7121004E4
    )
    assert calculate_messages_sent_hash([]) == poseidon_many([0])


def test_revert_reason_hash() -> None:
    assert get_revert_reason_hash(TransactionExecutionStatus()) == 0
    assert get_revert_reason_hash(TransactionExecutionStatus(revert_reason="ABC")) == (
        0x01629B9DDA060BB30C7908346F6AF189C16773FA148D3366701FBAA35D54F3C8
    )
    assert get_revert_reason_hash(TransactionExecutionStatus("ABC")) == starknet_keccak(b"ABC")


def test_revert_reason_hash_non_ascii() -> None:
    reason = "caf\u00e9 failed"
    assert get_revert_reason_hash(TransactionExecutionStatus(reason)) == starknet_keccak(
        reason.encode("utf-8")
    )


_GAS = GasPricePerToken(price_in_fri=GasPrice(0x10), price_in_wei=GasPrice(0x2))
_DATA_GAS = GasPricePerToken(price_in_fri=GasPrice(0x3), price_in_wei=GasPrice(0x1))


def test_l1_gas_consumed_uses_version_currency() -> None:
    # V3 pays in fri: (0x100 - 3 * 4) // 0x10
    assert calculate_l1_gas_consumed(0x100, 4, _GAS, _DATA_GAS, 3) == (0x100 - 12) // 0x10
    # Older versions pay in wei: (0x100 - 1 * 4) // 2
    assert calculate_l1_gas_consumed(0x100, 4, _GAS, _DATA_GAS, 1) == (0x100 - 4) // 2


def test_l1_gas_consumed_errors() -> None:
    with pytest.raises(GasAccountingError) as exc:
        calculate_l1_gas_consumed(1, 4, _GAS, _DATA_GAS, 3)
    assert exc.value.code == ErrorCode.UNDERFLOW
    zero = GasPricePerToken()
    with pytest.raises(GasAccountingError) as exc:
        calculate_l1_gas_consumed(0x100, 0, zero, _DATA_GAS, 3)
    assert exc.value.code == ErrorCode.DIVISION_BY_ZERO


def _receipt(revert_reason=None) -> ReceiptElement:
    return ReceiptElement(
        transaction_hash=0x1234,
        transaction_output=InvokeTransactionOutput(
            actual_fee=0x100,
            messages_sent=tuple(_messages(2)),
            events=(),
            execution_status=TransactionExecutionStatus(revert_reason),
            execution_resources=ExecutionResources(steps=98, da_l1_data_gas_consumed=4),
        ),
        transaction_version=TransactionVersion.THREE,
    )


def test_receipt_hash_layout() -> None:
    receipt = _receipt()
    expected = poseidon_many(
        [
            0x1234,
            0x100,
            calculate_messages_sent_hash(_messages(2)),
            0,
            0,
            (0x100 - 12) // 0x10,
            4,
        ]
    )
    assert calculate_receipt_hash(receipt, _DATA_GAS, _GAS) == expected


def test_receipt_commitment_reflects_revert_reason() -> None:
    ok = calculate_receipt_commitment([_receipt()], _DATA_GAS, _GAS)
    reverted = calculate_receipt_commitment([_receipt("ABC")], _DATA_GAS, _GAS)
    assert ok != reverted
    assert ok == calculate_root([calculate_receipt_hash(_receipt(), _DATA_GAS, _GAS)])
