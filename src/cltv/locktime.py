"""
Locktime domain: range validation and block-height / timestamp classification.

nLockTime values share one integer space split at BLOCK_MAX:
  [0, BLOCK_MAX)        block height
  [BLOCK_MAX, INT_MAX]  Unix timestamp
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import LocktimeRangeError, RangeErrorKind
from .outcome import Outcome

INT_MAX = 0x7FFFFFFF      # 2147483647, largest 4-byte signed value
BLOCK_MAX = 500_000_000   # LOCKTIME_THRESHOLD


class Clock(Enum):
    BLOCK_HEIGHT = "block_height"
    TIMESTAMP = "timestamp"


def classify(value: int) -> Clock:
    return Clock.BLOCK_HEIGHT if value < BLOCK_MAX else Clock.TIMESTAMP


def check_range(raw: int) -> None:
    """Raise LocktimeRangeError unless 0 <= raw <= INT_MAX."""
    if raw < 0:
        raise LocktimeRangeError(RangeErrorKind.NEGATIVE, raw)
    if raw > INT_MAX:
        raise LocktimeRangeError(RangeErrorKind.TOO_LARGE, raw)


@dataclass(frozen=True)
class LockValue:
    value: int

    def __post_init__(self) -> None:
        check_range(self.value)

    @classmethod
    def create(cls, raw: int) -> "Outcome[LockValue]":
        try:
            return Outcome.success(cls(raw))
        except LocktimeRangeError as e:
            return Outcome.failure(e)

    @property
    def clock(self) -> Clock:
        return classify(self.value)

    def __int__(self) -> int:
        return self.value
