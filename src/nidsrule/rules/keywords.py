# src/nidsrule/rules/keywords.py
"""
Closed keyword tables for rule rendering.

Two tables live here:
- DataPos: sticky buffers (file_data, tls_sni, dns_query, ...). A sticky buffer
  applies to every following content until another one is selected.
- ByteMatcher: the byte_extract / byte_jump / byte_test family.

Lookups by member never fail. Lookups by keyword string raise
UnknownKeywordError for anything not in the table.
"""

from enum import Enum
from typing import List


class UnknownKeywordError(ValueError):
    """Raised when a keyword is not part of a closed keyword table."""

    def __init__(self, keyword: str, message: str):
        super().__init__(message)
        self.keyword = keyword


class DataPos(Enum):
    PKT_DATA = "pkt_data"
    FILE_DATA = "file_data"
    BASE64_DATA = "base64_data"
    # HTTP
    HTTP_ACCEPT_ENC = "http_accept_enc"
    HTTP_ACCEPT = "http_accept"
    HTTP_ACCEPT_LANG = "http_accept_lang"
    HTTP_CONNECTION = "http_connection"
    HTTP_CONTENT_LEN = "http_content_len"
    HTTP_CONTENT_TYPE = "http_content_type"
    HTTP_HEADER_NAMES = "http_header_names"
    HTTP_PROTOCOL = "http_protocol"
    HTTP_REFERER = "http_referer"
    HTTP_REQUEST_LINE = "http_request_line"
    HTTP_RESPONSE_LINE = "http_response_line"
    HTTP_START = "http_start"
    # TLS
    TLS_CERT_SUBJECT = "tls_cert_subject"
    TLS_CERT_ISSUER = "tls_cert_issuer"
    TLS_CERT_SERIAL = "tls_cert_serial"
    TLS_CERT_FINGERPRINT = "tls_cert_fingerprint"
    TLS_SNI = "tls_sni"
    # JA3
    JA3_HASH = "ja3_hash"
    JA3_STRING = "ja3_string"
    # SSH
    SSH_PROTO = "ssh_proto"
    SSH_SOFTWARE = "ssh_software"
    # Kerberos
    KRB5_CNAME = "krb5_cname"
    KRB5_SNAME = "krb5_sname"
    # DNS
    DNS_QUERY = "dns_query"
    # SMB
    SMB_NAMED_PIPE = "smb_named_pipe"
    SMB_SHARE = "smb_share"

    @property
    def keyword(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


def sticky_buffer(name: str) -> DataPos:
    """Return the DataPos for a sticky buffer keyword such as "file_data"."""
    try:
        return DataPos(name)
    except ValueError:
        raise UnknownKeywordError(name, f"{name} is not a sticky buffer") from None


def is_sticky_buffer(name: str) -> bool:
    try:
        sticky_buffer(name)
    except UnknownKeywordError:
        return False
    return True


class ByteMatcher(Enum):
    EXTRACT = "byte_extract"
    JUMP = "byte_jump"
    TEST = "byte_test"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def min_args(self) -> int:
        """Number of mandatory arguments for this keyword."""
        return _BYTE_MATCHER_MIN_ARGS[self]

    def __str__(self) -> str:
        return self.value


_BYTE_MATCHER_MIN_ARGS = {
    ByteMatcher.EXTRACT: 3,
    ByteMatcher.JUMP: 2,
    ByteMatcher.TEST: 4,
}


def byte_matcher(name: str) -> ByteMatcher:
    """Return the ByteMatcher for a byte_* keyword."""
    try:
        return ByteMatcher(name)
    except ValueError:
        raise UnknownKeywordError(name, f"{name} is not a byte_* keyword") from None


def all_byte_matcher_names() -> List[str]:
    return [m.keyword for m in ByteMatcher]
