"""Block headers, header commitments and sequencer signature verification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from starkware.crypto.signature.signature import (
    EC_ORDER,
    N_ELEMENT_BITS_ECDSA,
    InvalidPublicKeyError,
    get_y_coordinate,
    inv_mod_curve_size,
    verify,
)

from .config import BLOB_DA_FLAG
from .crypto.hash import poseidon_many
from .data_availability import L1DataAvailabilityMode
from .encoding import Writer
from .errors import BlockSignatureErrorReason, block_signature_error
from .types import (
    BlockHash,
    BlockNumber,
    BlockTimestamp,
    ContractAddress,
    EventCommitment,
    Felt,
    GasPrice,
    GlobalRoot,
    ReceiptCommitment,
    StateDiffCommitment,
    TransactionCommitment,
)

logger = logging.getLogger(__name__)

_SIGNATURE_BOUND = 2**N_ELEMENT_BITS_ECDSA


class BlockStatus(Enum):
    PENDING = "PENDING"
    ACCEPTED_ON_L2 = "ACCEPTED_ON_L2"
    ACCEPTED_ON_L1 = "ACCEPTED_ON_L1"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class GasPricePerToken:
    price_in_fri: GasPrice = GasPrice(0)
    price_in_wei: GasPrice = GasPrice(0)


@dataclass(frozen=True)
class BlockHeaderWithoutHash:
    parent_hash: BlockHash
    block_number: BlockNumber
    l1_gas_price: GasPricePerToken
    l1_data_gas_price: GasPricePerToken
    state_root: GlobalRoot
    sequencer: ContractAddress
    timestamp: BlockTimestamp
    l1_da_mode: L1DataAvailabilityMode
    starknet_version: str


@dataclass(frozen=True)
class BlockHeader(BlockHeaderWithoutHash):
    block_hash: BlockHash = BlockHash(0)
    state_diff_commitment: Optional[StateDiffCommitment] = None
    state_diff_length: Optional[int] = None
    transaction_commitment: Optional[TransactionCommitment] = None
    event_commitment: Optional[EventCommitment] = None
    receipt_commitment: Optional[ReceiptCommitment] = None
    n_transactions: int = 0
    n_events: int = 0


@dataclass(frozen=True)
class BlockHeaderCommitments:
    transaction_commitment: TransactionCommitment
    event_commitment: EventCommitment
    receipt_commitment: ReceiptCommitment
    state_diff_commitment: StateDiffCommitment
    concatenated_counts: Felt


def concat_counts(
    transaction_count: int,
    event_count: int,
    state_diff_length: int,
    l1_da_mode: L1DataAvailabilityMode,
) -> Felt:
    """Pack the header counts into one felt.

    ``tx_count (64) | event_count (64) | state_diff_length (64) |
    blob flag (1) | zero padding (63)``
    """
    w = Writer()
    w.write_u64(transaction_count)
    w.write_u64(event_count)
    w.write_u64(state_diff_length)
    w.write_u8(BLOB_DA_FLAG if l1_da_mode is L1DataAvailabilityMode.BLOB else 0)
    w.write_bytes(bytes(7))
    return Felt.from_bytes_be(w.to_bytes())


# --- Signature ---


@dataclass(frozen=True)
class BlockSignature:
    r: Felt
    s: Felt


def _check_signature_inputs(
    public_key: int, message: int, r: int, s: int
) -> Optional[BlockSignatureErrorReason]:
    if not 0 <= message < _SIGNATURE_BOUND:
        return BlockSignatureErrorReason.INVALID_MESSAGE_HASH
    if not 1 <= r < _SIGNATURE_BOUND:
        return BlockSignatureErrorReason.INVALID_R
    if not 1 <= s < EC_ORDER:
        return BlockSignatureErrorReason.INVALID_S
    try:
        get_y_coordinate(public_key)
    except InvalidPublicKeyError:
        return BlockSignatureErrorReason.INVALID_PUBLIC_KEY
    if not 1 <= inv_mod_curve_size(s) < _SIGNATURE_BOUND:
        return BlockSignatureErrorReason.INVALID_S
    return None


def verify_block_signature(
    public_key: int,
    signature: BlockSignature,
    state_diff_commitment: int,
    block_hash: int,
) -> bool:
    """Check the sequencer signature over Poseidon(block_hash, state_diff_commitment).

    Returns ``False`` for a well-formed signature that does not verify and
    raises ``BlockSignatureVerificationFailed`` for malformed inputs.
    """
    message = poseidon_many([block_hash, state_diff_commitment])
    reason = _check_signature_inputs(public_key, message, signature.r, signature.s)
    if reason is not None:
        logger.debug("block %#x: signature rejected: %s", block_hash, reason.value)
        raise block_signature_error(block_hash, reason)
    return verify(message, signature.r, signature.s, public_key)
