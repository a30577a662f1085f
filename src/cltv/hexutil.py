"""
Hex and file input helpers for the CLI

- parse_hex: strict hex parsing with clear error messages.
- file_or_hex: read a script given either inline or from a file.
"""
from __future__ import annotations

import binascii
import re
from typing import Optional


_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def is_hex_str(s: str) -> bool:
    return bool(_HEX_RE.fullmatch(s or ""))


def parse_hex(name: str, s: Optional[str], length: Optional[int] = None) -> bytes:
    """Parse a hex string into bytes.

    Whitespace anywhere in the string is ignored, so scripts copied from
    block explorers in grouped form are accepted. An empty string is valid
    (the empty script).
    """
    if s is None:
        raise ValueError(f"{name} is required")
    s = ''.join(s.split())
    if not is_hex_str(s) or len(s) % 2 != 0:
        raise ValueError(f"Invalid hex for {name}")
    b = binascii.unhexlify(s)
    if length is not None and len(b) != length:
        raise ValueError(f"{name} must be {length} bytes (got {len(b)})")
    return b


def file_or_hex(name: str, hex_value: Optional[str], file_path: Optional[str]) -> bytes:
    """Bytes from an inline hex value, else from a file containing hex."""
    if hex_value is not None:
        return parse_hex(name, hex_value)
    if file_path:
        with open(file_path, 'rt') as f:
            return parse_hex(name, f.read())
    raise ValueError(f"{name} required")
