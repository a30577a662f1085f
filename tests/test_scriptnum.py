import pytest

from cltv.errors import ScriptNumError, ScriptNumErrorKind
from cltv.scriptnum import (
    MAX_CLTV_NUM_SIZE,
    decode_scriptnum,
    encode_scriptnum,
    is_minimally_encoded,
    push_scriptnum,
    pushdata,
)


@pytest.mark.parametrize('n,hex_', [
    (0, ''),
    (1, '01'),
    (-1, '81'),
    (127, '7f'),
    (128, '8000'),
    (-128, '8080'),
    (255, 'ff00'),
    (400_000_000, '0084d717'),
    (1_700_000_000, '00f15365'),
    (2_147_483_647, 'ffffff7f'),
    (2_147_483_648, '0000008000'),
])
def test_encode_vectors(n: int, hex_: str) -> None:
    assert encode_scriptnum(n).hex() == hex_
    assert decode_scriptnum(bytes.fromhex(hex_), True, MAX_CLTV_NUM_SIZE) == n


@pytest.mark.parametrize('hex_', ['00', '80', '0100', '010080', 'ff0000'])
def test_non_minimal_rejected_when_required(hex_: str) -> None:
    data = bytes.fromhex(hex_)
    assert not is_minimally_encoded(data)
    with pytest.raises(ScriptNumError) as ei:
        decode_scriptnum(data, require_minimal=True, max_size=5)
    assert ei.value.kind is ScriptNumErrorKind.NON_MINIMAL


def test_non_minimal_accepted_when_permissive():
    assert decode_scriptnum(bytes.fromhex('0100'), max_size=5) == 1
    assert decode_scriptnum(bytes.fromhex('010080'), max_size=5) == -1
    assert decode_scriptnum(bytes.fromhex('80'), max_size=5) == 0
    assert decode_scriptnum(bytes.fromhex('00'), max_size=5) == 0


@pytest.mark.parametrize('require_minimal', [True, False])
def test_overflow_regardless_of_minimality(require_minimal: bool) -> None:
    with pytest.raises(ScriptNumError) as ei:
        decode_scriptnum(bytes.fromhex('010000000000'), require_minimal, MAX_CLTV_NUM_SIZE)
    assert ei.value.kind is ScriptNumErrorKind.OVERFLOW


def test_default_width_is_four_bytes():
    assert decode_scriptnum(bytes.fromhex('ffffff7f')) == 2_147_483_647
    with pytest.raises(ScriptNumError):
        decode_scriptnum(bytes.fromhex('0000008000'))
    assert decode_scriptnum(bytes.fromhex('ffffffff7f'), max_size=5) == 2 ** 39 - 1


def test_pushdata_forms():
    assert pushdata(b'') == b'\x00'
    assert pushdata(b'\x01' * 0x4b)[:1] == b'\x4b'
    assert pushdata(b'\x01' * 0x4c)[:2] == b'\x4c\x4c'
    assert pushdata(b'\x01' * 0x100)[:3] == b'\x4d\x00\x01'
    assert push_scriptnum(400_000_000).hex() == '040084d717'
