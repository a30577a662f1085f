"""
Error kinds for CLTV pattern matching and spendability checks.

Every error is a ValueError subclass with an enum ``kind`` so it can travel
inside an Outcome (see outcome.py) or be raised by ``Outcome.unwrap()``.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class RangeErrorKind(Enum):
    NEGATIVE = "negative"
    TOO_LARGE = "too_large"


class PatternErrorKind(Enum):
    WRONG_LENGTH = "wrong_length"
    NOT_A_PUSH = "not_a_push"
    WRONG_OPCODE = "wrong_opcode"
    BAD_NUMERIC_ENCODING = "bad_numeric_encoding"
    LOCKTIME_OUT_OF_RANGE = "locktime_out_of_range"


class ClockMismatchKind(Enum):
    EXPECTED_BLOCK_HEIGHT = "expected_block_height"
    EXPECTED_TIMESTAMP = "expected_timestamp"


class ScriptNumErrorKind(Enum):
    OVERFLOW = "overflow"
    NON_MINIMAL = "non_minimal"


class LocktimeRangeError(ValueError):
    """A locktime or comparison value outside [0, INT_MAX]."""

    def __init__(self, kind: RangeErrorKind, value: int) -> None:
        if kind is RangeErrorKind.NEGATIVE:
            msg = "locktime cannot be negative"
        else:
            msg = "locktime exceeds maximum value"
        super().__init__(f"{msg} (got {value})")
        self.kind = kind
        self.value = value


class PatternError(ValueError):
    """The operations are not a `<n> OP_CHECKLOCKTIMEVERIFY OP_DROP` fragment."""

    def __init__(self, kind: PatternErrorKind, message: str, cause: Optional[ValueError] = None) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.kind = kind
        self.cause = cause


class ClockMismatchError(ValueError):
    """A block-height lock compared against a timestamp, or vice versa."""

    def __init__(self, kind: ClockMismatchKind, locktime: int, now_or_block: int) -> None:
        if kind is ClockMismatchKind.EXPECTED_BLOCK_HEIGHT:
            msg = "CLTV is locked to block-height, but now_or_block is in timestamp range"
        else:
            msg = "CLTV is locked to timestamp, but now_or_block is in block-height range"
        super().__init__(f"{msg} (locktime={locktime}, now_or_block={now_or_block})")
        self.kind = kind
        self.locktime = locktime
        self.now_or_block = now_or_block


class ScriptNumError(ValueError):
    def __init__(self, kind: ScriptNumErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ScriptDecodeError(ValueError):
    """Raw script bytes could not be split into operations."""
