import dataclasses

import pytest

from cltv.errors import LocktimeRangeError, RangeErrorKind
from cltv.locktime import BLOCK_MAX, INT_MAX, Clock, LockValue, classify


def test_protocol_constants():
    assert INT_MAX == 2_147_483_647
    assert BLOCK_MAX == 500_000_000


@pytest.mark.parametrize('v,clock', [
    (0, Clock.BLOCK_HEIGHT),
    (1, Clock.BLOCK_HEIGHT),
    (BLOCK_MAX - 1, Clock.BLOCK_HEIGHT),
    (BLOCK_MAX, Clock.TIMESTAMP),
    (1_700_000_000, Clock.TIMESTAMP),
    (INT_MAX, Clock.TIMESTAMP),
])
def test_create_and_classify(v: int, clock: Clock) -> None:
    res = LockValue.create(v)
    assert res.ok
    lock = res.unwrap()
    assert lock.value == v
    assert int(lock) == v
    assert lock.clock is clock
    assert classify(v) is clock


@pytest.mark.parametrize('v,kind', [
    (-1, RangeErrorKind.NEGATIVE),
    (-(2 ** 39), RangeErrorKind.NEGATIVE),
    (INT_MAX + 1, RangeErrorKind.TOO_LARGE),
    (2 ** 39 - 1, RangeErrorKind.TOO_LARGE),
])
def test_create_out_of_range(v: int, kind: RangeErrorKind) -> None:
    res = LockValue.create(v)
    assert not res.ok
    assert isinstance(res.error, LocktimeRangeError)
    assert res.error.kind is kind
    assert res.error.value == v
    with pytest.raises(LocktimeRangeError):
        res.unwrap()


def test_direct_construction_validates():
    with pytest.raises(ValueError, match='negative'):
        LockValue(-5)
    with pytest.raises(ValueError, match='maximum'):
        LockValue(INT_MAX + 1)


def test_lock_value_is_immutable():
    lock = LockValue(10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        lock.value = 11  # type: ignore[misc]
