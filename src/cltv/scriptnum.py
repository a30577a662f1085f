"""
Script number codec (CScriptNum rules)

Numbers on the script stack are little-endian sign-magnitude: the high bit of
the last byte is the sign. Zero is the empty byte string.

Arithmetic opcodes cap operands at 4 bytes; OP_CHECKLOCKTIMEVERIFY reads up to
5 bytes so that locktimes up to 2^39-1 can be represented (and then rejected
by range checks rather than by overflow).
"""
from __future__ import annotations

from .errors import ScriptNumError, ScriptNumErrorKind

DEFAULT_MAX_NUM_SIZE = 4
MAX_CLTV_NUM_SIZE = 5

OP_PUSHDATA1 = 0x4c
OP_PUSHDATA2 = 0x4d
OP_PUSHDATA4 = 0x4e


def pushdata(data: bytes) -> bytes:
    n = len(data)
    if n < OP_PUSHDATA1:
        return bytes([n]) + data
    elif n <= 0xff:
        return bytes([OP_PUSHDATA1, n]) + data
    elif n <= 0xffff:
        return bytes([OP_PUSHDATA2]) + n.to_bytes(2, "little") + data
    else:
        return bytes([OP_PUSHDATA4]) + n.to_bytes(4, "little") + data


def encode_scriptnum(n: int) -> bytes:
    if n == 0:
        return b""
    neg = n < 0
    n = abs(n)
    result = bytearray()
    while n:
        result.append(n & 0xff)
        n >>= 8
    if result[-1] & 0x80:
        result.append(0x80 if neg else 0x00)
    elif neg:
        result[-1] |= 0x80
    return bytes(result)


def push_scriptnum(n: int) -> bytes:
    """Push ``n`` as raw data (never as OP_0/OP_1..OP_16)."""
    return pushdata(encode_scriptnum(n))


def is_minimally_encoded(data: bytes) -> bool:
    if not data:
        return True
    # The last byte may only be 0x00/0x80 when it carries the sign for a
    # preceding byte whose high bit is set.
    if data[-1] & 0x7f == 0:
        if len(data) <= 1 or data[-2] & 0x80 == 0:
            return False
    return True


def decode_scriptnum(data: bytes, require_minimal: bool = False, max_size: int = DEFAULT_MAX_NUM_SIZE) -> int:
    """Decode a stack item as a script number.

    Args:
        data: raw stack bytes.
        require_minimal: reject encodings with a redundant trailing byte.
        max_size: maximum accepted width in bytes.

    Raises:
        ScriptNumError: OVERFLOW when wider than max_size, NON_MINIMAL when
            require_minimal is set and the encoding is not minimal.
    """
    if len(data) > max_size:
        raise ScriptNumError(ScriptNumErrorKind.OVERFLOW,
                             f"script number overflow ({len(data)} > {max_size} bytes)")
    if require_minimal and not is_minimally_encoded(data):
        raise ScriptNumError(ScriptNumErrorKind.NON_MINIMAL, "non-minimally encoded script number")
    if not data:
        return 0
    result = int.from_bytes(data, "little")
    sign_bit = 0x80 << (8 * (len(data) - 1))
    if result & sign_bit:
        return -(result & ~sign_bit)
    return result
