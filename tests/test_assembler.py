import logging

import pytest

from nidsrule.render.assembler import (
    assemble_matchers,
    render_contents,
    render_matcher,
    render_matchers,
)
from nidsrule.render.sticky import StickyBufferTracker
from nidsrule.rules.keywords import ByteMatcher, DataPos
from nidsrule.rules.model import PCRE, ByteMatch, Content, ContentOption


def test_tracker_only_reports_changes():
    t = StickyBufferTracker()
    # default buffer at start emits nothing
    assert t.switch(DataPos.PKT_DATA) is None
    assert t.switch(DataPos.FILE_DATA) == "file_data;"
    assert t.switch(DataPos.FILE_DATA) is None
    assert t.switch(DataPos.PKT_DATA) == "pkt_data;"
    t.switch(DataPos.DNS_QUERY)
    t.reset()
    assert t.current is DataPos.PKT_DATA


def test_order_is_preserved():
    matchers = [
        Content(b"A"),
        PCRE(b"x+", options=b"R"),
        ByteMatch(ByteMatcher.JUMP, num_bytes=2, offset=0, options=["relative"]),
        Content(b"B", options=[ContentOption("distance", "0")]),
    ]
    assert render_matchers(matchers) == (
        'content:"A"; pcre:"/x+/R"; byte_jump:2,0,relative; content:"B"; distance:0;'
    )


def test_buffer_directive_interleaved_once():
    matchers = [
        Content(b"a"),
        Content(b"b", data_position=DataPos.FILE_DATA),
        Content(b"c", data_position=DataPos.FILE_DATA),
    ]
    parts = assemble_matchers(matchers)
    assert parts == ['content:"a";', "file_data;", 'content:"b";', 'content:"c";']


def test_byte_match_switches_buffer():
    matchers = [
        Content(b"MZ", data_position=DataPos.FILE_DATA),
        ByteMatch(ByteMatcher.TEST, num_bytes=4, operator=">", value=100, offset=0,
                  data_position=DataPos.FILE_DATA),
        ByteMatch(ByteMatcher.TEST, num_bytes=1, operator="=", value=0, offset=0),
    ]
    assert render_matchers(matchers) == (
        'file_data; content:"MZ"; byte_test:4,>,100,0; pkt_data; byte_test:1,=,0,0;'
    )


def test_pcre_does_not_move_buffer():
    matchers = [
        Content(b"a", data_position=DataPos.HTTP_REFERER),
        PCRE(b"b"),
        Content(b"c", data_position=DataPos.HTTP_REFERER),
    ]
    assert render_matchers(matchers) == 'http_referer; content:"a"; pcre:"/b/"; content:"c";'


def test_empty_pcre_dropped(caplog):
    caplog.set_level(logging.DEBUG, logger="nidsrule.render.assembler")
    parts = assemble_matchers([Content(b"a"), PCRE(b""), Content(b"b")])
    assert parts == ['content:"a";', 'content:"b";']
    assert "renders empty" in caplog.text


def test_fresh_tracker_per_call():
    matchers = [Content(b"a", data_position=DataPos.TLS_SNI)]
    assert render_matchers(matchers) == 'tls_sni; content:"a";'
    assert render_matchers(matchers) == 'tls_sni; content:"a";'


def test_render_contents():
    contents = [Content(b"a\x00"), Content(b"b", data_position=DataPos.BASE64_DATA)]
    assert render_contents(contents) == 'content:"a|00|"; base64_data; content:"b";'
    assert render_contents([]) == ""


def test_render_matcher_rejects_other_types():
    with pytest.raises(TypeError):
        render_matcher("content:\"a\";")
