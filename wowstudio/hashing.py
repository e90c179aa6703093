"""Jenkins one-at-a-time string hashing."""

from __future__ import annotations

_MASK = 0xFFFFFFFF


def jenkins_hash(data: str | bytes) -> int:
    """Return the 32-bit Jenkins one-at-a-time hash of ``data``.

    Strings are hashed as UTF-8. As with a C string, hashing stops at the
    first NUL byte. Bytes of 0x80 and above count as signed characters.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    value = 0
    for byte in data:
        if byte == 0:
            break
        signed = byte - 0x100 if byte >= 0x80 else byte
        value = (value + signed) & _MASK
        value = (value + (value << 10)) & _MASK
        value ^= value >> 6

    value = (value + (value << 3)) & _MASK
    value ^= value >> 11
    value = (value + (value << 15)) & _MASK
    return value