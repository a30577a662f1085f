import os
import tempfile

import pytest

from cltv.hexutil import file_or_hex, parse_hex


def test_parse_hex_valid_and_length():
    assert parse_hex('x', '04 0084d717 b1 75') == bytes.fromhex('040084d717b175')
    assert parse_hex('x', '00ff', length=2) == b'\x00\xff'
    assert parse_hex('x', '') == b''


@pytest.mark.parametrize('s', ['zz', 'abc'])
def test_parse_hex_invalid_raises(s: str) -> None:
    with pytest.raises(ValueError, match='Invalid hex'):
        parse_hex('x', s)


def test_parse_hex_wrong_length():
    with pytest.raises(ValueError, match='must be 3 bytes'):
        parse_hex('x', '00ff', length=3)


def test_file_or_hex_precedence_and_file_reading():
    with tempfile.TemporaryDirectory() as td:
        p = os.path.join(td, 'h.txt')
        with open(p, 'wt') as f:
            f.write('0a\n')
        assert file_or_hex('x', 'ff', p) == b'\xff'
        assert file_or_hex('x', None, p) == b'\x0a'
    with pytest.raises(ValueError, match='required'):
        file_or_hex('x', None, None)
