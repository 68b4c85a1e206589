import regex

from nidsrule.codec.pattern import format_pattern, to_regexp
from nidsrule.dump import ascii_dump


def test_single_bytes_open_their_own_runs():
    assert format_pattern(b"\x00A\x00") == "|00|A|00|"


def test_consecutive_binary_bytes_share_a_run():
    assert format_pattern(b"GET\x00\x01/") == "GET|00 01|/"
    assert format_pattern(b"\xde\xad\xbe\xef") == "|DE AD BE EF|"


def test_run_open_at_end_is_closed():
    assert format_pattern(b"abc\r\n") == "abc|0D 0A|"


def test_space_is_kept_literal():
    assert format_pattern(b"UNION SELECT") == "UNION SELECT"
    # a space also closes a run
    assert format_pattern(b"\x01 \x02") == "|01| |02|"


def test_rule_delimiters_are_escaped():
    assert format_pattern(b"a:b;c") == "a|3A|b|3B|c"
    assert format_pattern(b'say "hi"') == "say |22|hi|22|"
    assert format_pattern(b"!") == "|21|"


def test_empty_pattern():
    assert format_pattern(b"") == ""


def test_printable_bytes_copy_through():
    data = bytes(b for b in range(35, 127) if b not in (ord(":"), ord(";"), ord("|")))
    out = format_pattern(data)
    assert "|" not in out
    assert out == data.decode("ascii")


def test_to_regexp_escapes_metacharacters():
    assert to_regexp(b"a.b") == r"a\.b"
    assert to_regexp(b"a+b(c)") == r"a\+b\(c\)"


def test_to_regexp_wildcards_non_printables():
    # non-printables become '.', then the dot is escaped like any other
    assert to_regexp(b"\x00A\xff") == r"\.A\."
    assert to_regexp(b"a b") == "a b"


def test_to_regexp_matches_dump_for_every_byte():
    data = bytes(range(256))
    pattern = to_regexp(data)
    # must be a valid expression that matches the dumped bytes exactly
    assert regex.fullmatch(pattern, ascii_dump(data)) is not None


def test_ascii_dump():
    assert ascii_dump(b"GET /\r\n\x00\xe9") == "GET /...."
    assert ascii_dump(b"") == ""


def test_to_regexp_leaves_non_metacharacters_alone():
    assert to_regexp(b"a-b#c&d~e") == "a-b#c&d~e"
    assert to_regexp(b"^[x]{2}$|\\") == r"\^\[x\]\{2\}\$\|\\"
