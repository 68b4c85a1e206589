# src/nidsrule/codec/byte_match.py
"""
Encoder for the byte_* keyword family.

Argument order is fixed per keyword:
    byte_extract:<num_bytes>,<offset>,<variable>[,opts];
    byte_jump:<num_bytes>,<offset>[,opts];
    byte_test:<num_bytes>,<operator>,<value>,<offset>[,opts];
"""

from typing import Sequence, Union

from nidsrule.rules.keywords import ByteMatcher, byte_matcher


def encode_byte_match(kind: Union[ByteMatcher, str], num_bytes: int = 0, offset: int = 0,
                      variable: str = "", operator: str = "", value: int = 0,
                      options: Sequence[str] = ()) -> str:
    """Render one byte_* directive. Raises UnknownKeywordError for bad kinds."""
    if not isinstance(kind, ByteMatcher):
        kind = byte_matcher(kind)

    if kind is ByteMatcher.EXTRACT:
        args = [str(num_bytes), str(offset), variable]
    elif kind is ByteMatcher.JUMP:
        args = [str(num_bytes), str(offset)]
    else:
        args = [str(num_bytes), operator, str(value), str(offset)]

    args.extend(options)
    return f"{kind.keyword}:{','.join(args)};"
