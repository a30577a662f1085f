"""
Script fragment helpers for the CLTV construct

Fragment
  <locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP

Tokenizing raw script bytes is delegated to python-bitcointx (imported
lazily, like the rest of the bitcointx glue). This module also builds the
canonical fragment and produces a simple disassembly for debugging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import ScriptDecodeError
from .locktime import check_range
from .scriptnum import OP_PUSHDATA1, OP_PUSHDATA2, OP_PUSHDATA4, push_scriptnum

# Opcodes
OP_DROP = 0x75
OP_CHECKLOCKTIMEVERIFY = 0xb1  # formerly OP_NOP2 (BIP-65)

_NAMES: Dict[int, str] = {
    OP_DROP: 'OP_DROP',
    OP_CHECKLOCKTIMEVERIFY: 'OP_CHECKLOCKTIMEVERIFY',
}


def _imp_cscript() -> Any:
    import importlib
    return importlib.import_module('bitcointx.core.script').CScript


def _imp_cscript_invalid_error() -> Any:
    import importlib
    return importlib.import_module('bitcointx.core.script').CScriptInvalidError


@dataclass(frozen=True)
class Operation:
    """One decoded script element.

    Attributes:
        opcode: the opcode byte (the push opcode for data pushes).
        data: pushed bytes, or None for a non-push opcode.
    """

    opcode: int
    data: Optional[bytes] = None

    @property
    def is_push(self) -> bool:
        return self.data is not None

    @classmethod
    def push(cls, data: bytes) -> "Operation":
        n = len(data)
        if n < OP_PUSHDATA1:
            opcode = n
        elif n <= 0xff:
            opcode = OP_PUSHDATA1
        elif n <= 0xffff:
            opcode = OP_PUSHDATA2
        else:
            opcode = OP_PUSHDATA4
        return cls(opcode, bytes(data))

    @classmethod
    def op(cls, opcode: int) -> "Operation":
        if opcode <= OP_PUSHDATA4:
            raise ValueError(f"opcode 0x{opcode:02x} is a data push")
        return cls(opcode)

    def __str__(self) -> str:
        if self.data is not None:
            return self.data.hex() if self.data else 'OP_0'
        return _NAMES.get(self.opcode, f'OP_{self.opcode:02x}')


def decode_script(script: bytes) -> List[Operation]:
    """Split raw script bytes into operations.

    Raises:
        ScriptDecodeError: truncated push or missing push length.
    """
    CScript = _imp_cscript()
    CScriptInvalidError = _imp_cscript_invalid_error()
    try:
        return [Operation(int(op), data) for op, data, _ in CScript(bytes(script)).raw_iter()]
    except CScriptInvalidError as e:
        raise ScriptDecodeError(f"invalid script: {e}") from e


def build_cltv_script(locktime: int) -> bytes:
    """Build `<locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP`.

    The locktime is pushed as minimally encoded data so the result matches
    with minimal encoding required.
    """
    check_range(locktime)
    return push_scriptnum(locktime) + bytes([OP_CHECKLOCKTIMEVERIFY, OP_DROP])


def disasm(script: bytes) -> str:
    return ' '.join(str(op) for op in decode_script(script))
