# src/nidsrule/codec/pattern.py
"""
Content pattern codec.

format_pattern() turns raw pattern bytes into the text that goes between the
quotes of content:"...". Printable bytes are copied, everything else is
written as a |..| run of uppercase hex pairs:

    b"GET\x00\x01/"  ->  GET|00 01|/

to_regexp() builds a loose regexp for an ASCII dump of the same bytes
(tcpdump -A style: non-printables show up as '.').

Note the two printable ranges differ: 35-126 (plus space) for content text,
32-126 for dumps. '"' (34) and '!' (33) must be escaped inside content:"...",
but show up literally in a dump.
"""

import regex

from nidsrule.dump import ascii_dump

# ':' and ';' terminate options in the rule grammar
_OPTION_DELIMITERS = (ord(":"), ord(";"))

# the classic metacharacter set; '-', '#', '&' and '~' stay literal
_METACHARS_RE = regex.compile(r"([\\.+*?()|\[\]{}^$])")


def _needs_hex(b: int) -> bool:
    if b == 0x20:
        return False
    return b < 35 or b > 126 or b in _OPTION_DELIMITERS


def format_pattern(data: bytes) -> str:
    """Return the content:"..." text for a byte pattern."""
    out = []
    in_run = False
    for b in data:
        if _needs_hex(b):
            if not in_run:
                out.append("|")
                in_run = True
            else:
                out.append(" ")
            out.append(f"{b:02X}")
        else:
            if in_run:
                out.append("|")
                in_run = False
            out.append(chr(b))
    if in_run:
        out.append("|")
    return "".join(out)


def to_regexp(data: bytes) -> str:
    """
    Return an escaped regexp matching the ASCII dump of data.
    Every byte outside 32-126 is replaced by '.' before escaping, so the
    result matches the dump text, not the wire bytes.
    """
    return _METACHARS_RE.sub(r"\\\1", ascii_dump(data))
