"""
Regexp approximator.

Turns the contents of a rule into one regexp for screening packet dumps
(tcpdump -A output, or nidsrule.dump.ascii_dump()). Contents are joined in
order: `.{0,N}` when the content has a positive `within:N`, `.*` otherwise.

Only contents are used. distance, offset, depth, negation and pcre are not
modelled, so a hit means "worth a closer look", not "the engine would fire".
"""

from typing import Optional

import regex

from nidsrule.rules.model import Content, Rule


_INTEGER_RE = regex.compile(r"[+-]?[0-9]+")


def _within_distance(content: Content) -> Optional[int]:
    # plain decimal only: no surrounding spaces, no "1_0"
    raw = content.within()
    if not _INTEGER_RE.fullmatch(raw):
        return None
    d = int(raw)
    return d if d > 0 else None


def rule_to_regexp(rule: Rule) -> str:
    out = []
    for c in rule.contents:
        d = _within_distance(c)
        out.append(f".{{0,{d}}}" if d is not None else ".*")
        out.append(c.to_regexp())
    return "".join(out)


def compile_rule_regexp(rule: Rule):
    """Compile rule_to_regexp(rule); '.' also matches newlines in the dump."""
    return regex.compile(rule_to_regexp(rule), flags=regex.DOTALL)


def search_dump(rule: Rule, dump: str) -> bool:
    """True if the rule's content regexp occurs anywhere in dump."""
    return compile_rule_regexp(rule).search(dump) is not None
