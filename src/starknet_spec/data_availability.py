"""Data-availability modes."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Union

from .errors import InvalidDataAvailabilityMode


class DataAvailabilityMode(IntEnum):
    """Where a V3 transaction's nonce / fee state diff is published."""

    L1 = 0
    L2 = 1

    @classmethod
    def parse(cls, value: Union[int, str]) -> "DataAvailabilityMode":
        """Accept ``0``/``1``, ``"L1"``/``"L2"`` or a felt equal to 0 or 1."""
        if isinstance(value, str):
            if value in cls.__members__:
                return cls[value]
        elif not isinstance(value, bool) and int(value) in (0, 1):
            return cls(int(value))
        raise InvalidDataAvailabilityMode(
            f"data availability mode must be 'L1'/0 or 'L2'/1, got {value!r}"
        )


class L1DataAvailabilityMode(Enum):
    """How a block publishes its state diff on L1."""

    CALLDATA = "CALLDATA"
    BLOB = "BLOB"
