# src/nidsrule/rules/model.py
"""
Rule object graph.

A Rule is built once (by a parser or programmatically) and then only read.
Structure:
    Rule(
        disabled, action, protocol,
        source=Network(...), destination=Network(...), bidirectional,
        sid, revision, description,
        references=[Reference, ...],
        contents=[Content, ...], pcres=[PCRE, ...], byte_matchers=[ByteMatch, ...],
        tags={"classtype": "trojan-activity", ...},
        metas=[Metadata, ...], flowbits=[Flowbit, ...],
        matchers=[Content | PCRE | ByteMatch, ...]   # declaration order
    )

`matchers` decides the order of the rendered body. The typed lists are views
over the same objects; use the add_* helpers to keep both in step.

Several values render to "" when they are invalid (see renders_empty on
FastPattern, PCRE and Flowbit). They are dropped from the rendered rule
instead of raising.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Union

from nidsrule.codec.byte_match import encode_byte_match
from nidsrule.codec.pattern import format_pattern, to_regexp
from nidsrule.rules.keywords import (
    ByteMatcher,
    DataPos,
    UnknownKeywordError,
    byte_matcher,
    sticky_buffer,
)

# content options rendered as name:value;
POSITIONAL_OPTIONS = ("byte_extract", "depth", "distance", "offset", "within")

FLOWBIT_ACTIONS = ("noalert", "isset", "isnotset", "set", "unset", "toggle")


def _as_data_position(value) -> DataPos:
    """Accept a DataPos or its keyword ("file_data")."""
    if isinstance(value, DataPos):
        return value
    if not isinstance(value, str):
        raise UnknownKeywordError(str(value), f"{value!r} is not a sticky buffer")
    return sticky_buffer(value)


def _net_string(terms: Sequence[str]) -> str:
    if len(terms) > 1:
        return "[" + ",".join(terms) + "]"
    return "".join(terms)


@dataclass
class Network:
    nets: List[str] = field(default_factory=list)    # "$HOME_NET", "10.0.0.0/8", ...
    ports: List[str] = field(default_factory=list)   # "any", "$HTTP_PORTS", "80", ...

    def __str__(self) -> str:
        return f"{_net_string(self.nets)} {_net_string(self.ports)}"


@dataclass
class ContentOption:
    name: str
    value: str = ""

    def __str__(self) -> str:
        if self.name in POSITIONAL_OPTIONS:
            return f"{self.name}:{self.value};"
        return f"{self.name};"


@dataclass
class FastPattern:
    enabled: bool = False
    only: bool = False
    offset: int = 0
    length: int = 0

    @property
    def renders_empty(self) -> bool:
        """True when enabled but only is combined with offset/length."""
        return self.enabled and self.only and (self.offset != 0 or self.length != 0)

    def __str__(self) -> str:
        if not self.enabled or self.renders_empty:
            return ""
        if self.only:
            return "fast_pattern:only;"
        # chop mode needs both values
        if self.offset != 0 and self.length != 0:
            return f"fast_pattern:{self.offset},{self.length};"
        return "fast_pattern;"


@dataclass
class Content:
    pattern: bytes
    negate: bool = False
    data_position: DataPos = DataPos.PKT_DATA
    fast_pattern: FastPattern = field(default_factory=FastPattern)
    options: List[ContentOption] = field(default_factory=list)

    def __post_init__(self):
        self.data_position = _as_data_position(self.data_position)

    def format_pattern(self) -> str:
        return format_pattern(self.pattern)

    def to_regexp(self) -> str:
        return to_regexp(self.pattern)

    def within(self) -> str:
        """Raw value of the first within option, "" if there is none."""
        for o in self.options:
            if o.name == "within":
                return o.value
        return ""

    def __str__(self) -> str:
        # sticky buffers are handled by the assembler, not here
        neg = "!" if self.negate else ""
        parts = [f'content:{neg}"{self.format_pattern()}";']
        parts.extend(str(o) for o in self.options)
        fp = str(self.fast_pattern)
        if fp:
            parts.append(fp)
        return " ".join(parts)


@dataclass
class PCRE:
    pattern: bytes
    negate: bool = False
    options: bytes = b""

    @property
    def renders_empty(self) -> bool:
        return len(self.pattern) == 0

    def __str__(self) -> str:
        if self.renders_empty:
            return ""
        pattern = self.pattern.replace(b'"', b'\\"').decode("latin1")
        neg = "!" if self.negate else ""
        return f'pcre:{neg}"/{pattern}/{self.options.decode("latin1")}";'


@dataclass
class ByteMatch:
    kind: ByteMatcher
    num_bytes: int = 0
    offset: int = 0
    variable: str = ""       # byte_extract only
    operator: str = ""       # byte_test only
    value: int = 0           # byte_test only
    options: List[str] = field(default_factory=list)
    data_position: DataPos = DataPos.PKT_DATA

    def __post_init__(self):
        if not isinstance(self.kind, ByteMatcher):
            if not isinstance(self.kind, str):
                raise UnknownKeywordError(str(self.kind), f"{self.kind!r} is not a byte_* keyword")
            self.kind = byte_matcher(self.kind)
        self.data_position = _as_data_position(self.data_position)

    @classmethod
    def from_args(cls, keyword: str, args: Sequence[str],
                  data_position: DataPos = DataPos.PKT_DATA) -> "ByteMatch":
        """
        Build a ByteMatch from a keyword and its raw argument list, e.g.
            ByteMatch.from_args("byte_test", ["4", ">", "100", "0", "relative"])
        Raises ValueError if there are fewer arguments than the keyword requires
        or a numeric argument is not an integer.
        """
        kind = byte_matcher(keyword)
        args = [a.strip() for a in args]
        if len(args) < kind.min_args:
            raise ValueError(
                f"{keyword} needs at least {kind.min_args} arguments, got {len(args)}")

        def as_int(raw: str, what: str) -> int:
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{keyword}: {what} must be an integer, got {raw!r}") from None

        bm = cls(kind=kind, num_bytes=as_int(args[0], "num_bytes"),
                 options=list(args[kind.min_args:]), data_position=data_position)
        if kind is ByteMatcher.EXTRACT:
            bm.offset = as_int(args[1], "offset")
            bm.variable = args[2]
        elif kind is ByteMatcher.JUMP:
            bm.offset = as_int(args[1], "offset")
        else:
            bm.operator = args[1]
            bm.value = as_int(args[2], "value")
            bm.offset = as_int(args[3], "offset")
        return bm

    def __str__(self) -> str:
        return encode_byte_match(self.kind, num_bytes=self.num_bytes, offset=self.offset,
                                 variable=self.variable, operator=self.operator,
                                 value=self.value, options=self.options)


@dataclass
class Reference:
    type: str     # cve, url, md5, ...
    value: str

    def __str__(self) -> str:
        return f"reference:{self.type},{self.value};"


@dataclass
class Metadata:
    key: str
    value: str


def render_metadata(metas: Sequence[Metadata]) -> str:
    """metadata:k v, k v; for all pairs in order, "" for none."""
    if not metas:
        return ""
    return "metadata:" + ", ".join(f"{m.key} {m.value}" for m in metas) + ";"


@dataclass
class Flowbit:
    action: str
    value: str = ""

    @property
    def renders_empty(self) -> bool:
        return self.action not in FLOWBIT_ACTIONS

    def __str__(self) -> str:
        if self.renders_empty:
            return ""
        if self.value:
            return f"flowbits:{self.action},{self.value};"
        return f"flowbits:{self.action};"


Matcher = Union[Content, PCRE, ByteMatch]


@dataclass
class Rule:
    sid: int = 0
    revision: int = 0
    action: str = "alert"
    protocol: str = "tcp"
    source: Network = field(default_factory=lambda: Network(["any"], ["any"]))
    destination: Network = field(default_factory=lambda: Network(["any"], ["any"]))
    bidirectional: bool = False
    disabled: bool = False
    description: str = ""
    references: List[Reference] = field(default_factory=list)
    contents: List[Content] = field(default_factory=list)
    pcres: List[PCRE] = field(default_factory=list)
    byte_matchers: List[ByteMatch] = field(default_factory=list)
    # rendered in insertion order
    tags: Dict[str, str] = field(default_factory=dict)
    metas: List[Metadata] = field(default_factory=list)
    flowbits: List[Flowbit] = field(default_factory=list)
    matchers: List[Matcher] = field(default_factory=list)

    def add_content(self, content: Content) -> Content:
        self.contents.append(content)
        self.matchers.append(content)
        return content

    def add_pcre(self, pcre: PCRE) -> PCRE:
        self.pcres.append(pcre)
        self.matchers.append(pcre)
        return pcre

    def add_byte_match(self, bm: ByteMatch) -> ByteMatch:
        self.byte_matchers.append(bm)
        self.matchers.append(bm)
        return bm
