"""
dump.py
--------
Converts raw payload bytes to the printable text a packet dump shows.

Steps:
1. Convert bytes to str using latin1 (lossless)
2. Replace every character outside printable ASCII (32-126) with '.'

This is what `tcpdump -A` prints, and what regexps from nidsrule.regexp
are meant to be searched against.
"""

_PRINTABLE_LOW = 32
_PRINTABLE_HIGH = 126


def bytes_to_str_latin1(payload: bytes) -> str:
    """Safe lossless conversion from raw bytes to Python str."""
    return payload.decode("latin1")


def ascii_dump(payload: bytes) -> str:
    """Return payload as dump text, non-printables shown as '.'."""
    s = bytes_to_str_latin1(payload)
    return "".join(
        ch if _PRINTABLE_LOW <= ord(ch) <= _PRINTABLE_HIGH else "." for ch in s
    )
