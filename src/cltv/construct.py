"""
CHECKLOCKTIMEVERIFY construct (BIP-65)

Recognizes `<locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP`, keeps the validated
locktime, and answers spendability queries against a block height or a Unix
timestamp. The lock and the comparison value must be on the same clock.

All entry points return an Outcome instead of raising, so a caller
validating many scripts can branch on ``outcome.ok``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import (
    ClockMismatchError,
    ClockMismatchKind,
    LocktimeRangeError,
    PatternError,
    PatternErrorKind,
    ScriptDecodeError,
    ScriptNumError,
)
from .locktime import BLOCK_MAX, Clock, LockValue, classify
from .outcome import Outcome
from .script import OP_CHECKLOCKTIMEVERIFY, OP_DROP, Operation, build_cltv_script, decode_script
from .scriptnum import MAX_CLTV_NUM_SIZE, decode_scriptnum

log = logging.getLogger(__name__)


def _reject(kind: PatternErrorKind, message: str, cause=None) -> "Outcome[CheckLocktimeVerify]":
    err = PatternError(kind, message, cause)
    log.debug("not a CLTV construct: %s", err)
    return Outcome.failure(err)


@dataclass(frozen=True)
class CheckLocktimeVerify:
    """A matched CLTV fragment.

    Attributes:
        lock: the validated locktime, in [0, INT_MAX].
    """

    lock: LockValue

    @property
    def locktime(self) -> int:
        return self.lock.value

    @classmethod
    def match(cls, operations: Sequence[Operation], minimal_encoding_required: bool = False) -> "Outcome[CheckLocktimeVerify]":
        """Match an already decoded operation sequence.

        Shape and opcodes are checked before the push is interpreted as a
        number; the number is decoded with a 5-byte limit.
        """
        if len(operations) != 3:
            return _reject(PatternErrorKind.WRONG_LENGTH,
                           f"invalid number of items for CLTV (expected 3, got {len(operations)})")
        push, cltv_op, drop_op = operations
        if not push.is_push:
            return _reject(PatternErrorKind.NOT_A_PUSH, "CLTV script had invalid value for time")
        if cltv_op.is_push or cltv_op.opcode != OP_CHECKLOCKTIMEVERIFY:
            return _reject(PatternErrorKind.WRONG_OPCODE, "CLTV script invalid opcode (expected OP_CHECKLOCKTIMEVERIFY)")
        if drop_op.is_push or drop_op.opcode != OP_DROP:
            return _reject(PatternErrorKind.WRONG_OPCODE, "CLTV script invalid opcode (expected OP_DROP)")

        try:
            n = decode_scriptnum(push.data or b"", minimal_encoding_required, MAX_CLTV_NUM_SIZE)
        except ScriptNumError as e:
            return _reject(PatternErrorKind.BAD_NUMERIC_ENCODING, "CLTV locktime encoding", e)

        lock = LockValue.create(n)
        if not lock.ok:
            return _reject(PatternErrorKind.LOCKTIME_OUT_OF_RANGE, "CLTV locktime", lock.error)
        return Outcome.success(cls(lock.unwrap()))

    @classmethod
    def from_script(cls, script: bytes) -> "Outcome[CheckLocktimeVerify]":
        """Tokenize ``script`` and match it permissively (no minimality check)."""
        try:
            ops = decode_script(script)
        except ScriptDecodeError as e:
            return Outcome.failure(e)
        return cls.match(ops)

    @classmethod
    def build(cls, locktime: int) -> "Outcome[CheckLocktimeVerify]":
        lock = LockValue.create(locktime)
        if not lock.ok:
            return Outcome.failure(lock.error)  # type: ignore[arg-type]
        return Outcome.success(cls(lock.unwrap()))

    def script(self) -> bytes:
        return build_cltv_script(self.locktime)

    @property
    def clock(self) -> Clock:
        return classify(self.locktime)

    def is_locked_to_block(self) -> bool:
        return self.clock is Clock.BLOCK_HEIGHT

    def _check_same_clock(self, now_or_block: int) -> None:
        # Keyed on the lock's clock, not on classify(now_or_block).
        if self.is_locked_to_block():
            if now_or_block >= BLOCK_MAX:
                raise ClockMismatchError(ClockMismatchKind.EXPECTED_BLOCK_HEIGHT, self.locktime, now_or_block)
        elif now_or_block < BLOCK_MAX:
            raise ClockMismatchError(ClockMismatchKind.EXPECTED_TIMESTAMP, self.locktime, now_or_block)

    def is_spendable(self, now_or_block: int) -> "Outcome[bool]":
        """Whether the lock has matured at ``now_or_block``.

        ``now_or_block`` is a block height for block-height locks and a Unix
        timestamp for time locks. Reaching the locktime exactly counts.
        """
        try:
            now = LockValue(now_or_block)
            self._check_same_clock(now.value)
        except (LocktimeRangeError, ClockMismatchError) as e:
            return Outcome.failure(e)
        return Outcome.success(now.value >= self.locktime)
