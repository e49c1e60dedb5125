"""Download metadata inferred from HTTP response and request headers.

Every helper accepts a header source: an ``httpx.Headers``, anything
``httpx.Headers`` can be built from (a mapping or a list of pairs), or an
object carrying a ``.headers`` attribute such as ``httpx.Response`` and
``httpx.Request``. ``None`` means no headers at all.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple
import logging
import re

import httpx

from .errors import DecodingError
from .strings import DecodeResult, lookup_charset, percent_decode, repair_charset

logger = logging.getLogger(__name__)

_QUOTED_PAIR_RE = re.compile(r"\\(.)")
_CONTENT_RANGE_RE = re.compile(r"^\s*bytes\s+(?:\d+-\d+|\*)/(?P<total>\d+|\*)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class HeaderElement:
    name: str
    value: Optional[str] = None
    params: Tuple[Tuple[str, Optional[str]], ...] = ()

    def get_param(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for param_name, param_value in self.params:
            if param_name.lower() == wanted:
                return param_value
        return None


@dataclass(frozen=True)
class ResponseMetadata:
    supports_range: bool = False
    filename: Optional[str] = None
    total_bytes: Optional[int] = None
    content_type: Optional[str] = None
    charset: Optional[str] = None


def _split_unquoted(text: str, separator: str) -> List[str]:
    parts: List[str] = []
    buf: List[str] = []
    in_quotes = False
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif in_quotes and ch == "\\":
            escaped = True
        elif ch == '"':
            in_quotes = not in_quotes
        elif ch == separator and not in_quotes:
            parts.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf))
    return parts


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _QUOTED_PAIR_RE.sub(r"\1", value[1:-1])
    return value


def _parse_pair(token: str) -> Tuple[str, Optional[str]]:
    name, sep, value = token.partition("=")
    return name.strip(), (_unquote(value) if sep else None)


def parse_header_elements(value: Optional[str]) -> List[HeaderElement]:
    """
    Split a structured header value into its elements.

    ``attachment; filename="a.pdf"`` yields one element named ``attachment``
    with a ``filename`` parameter. Separators inside quoted strings are ignored.
    """
    if not value:
        return []
    elements: List[HeaderElement] = []
    for raw_element in _split_unquoted(value, ","):
        if not raw_element.strip():
            continue
        tokens = _split_unquoted(raw_element, ";")
        name, element_value = _parse_pair(tokens[0])
        params = tuple(pair for pair in map(_parse_pair, tokens[1:]) if pair[0])
        elements.append(HeaderElement(name, element_value, params))
    return elements


def _as_headers(source: Any) -> Optional[httpx.Headers]:
    if source is None:
        return None
    if isinstance(source, httpx.Headers):
        return source
    headers = getattr(source, "headers", None)
    if headers is not None:
        return headers if isinstance(headers, httpx.Headers) else httpx.Headers(headers, encoding="utf-8")
    # Plain str values may hold non-ASCII text
    return httpx.Headers(source, encoding="utf-8")


def first_header(source: Any, name: str) -> Optional[str]:
    headers = _as_headers(source)
    if headers is None:
        return None
    values = headers.get_list(name)
    return values[0] if values else None


def _find_param(elements: Iterable[HeaderElement], name: str) -> Optional[str]:
    for element in elements:
        value = element.get_param(name)
        if value is not None:
            return value
    return None


def is_support_range(source: Any) -> bool:
    accept_ranges = first_header(source, "Accept-Ranges")
    if accept_ranges is not None:
        return accept_ranges == "bytes"
    content_range = first_header(source, "Content-Range")
    if content_range is not None:
        return content_range.startswith("bytes")
    return False


def _decode_ext_value(value: str) -> DecodeResult:
    # RFC 5987: charset'language'percent-encoded-value
    charset, sep, rest = value.partition("'")
    _language, sep2, encoded = rest.partition("'")
    if not (sep and sep2):
        return DecodeResult(None, "malformed extended parameter value")
    codec = lookup_charset(charset or "utf-8")
    if codec is None:
        return DecodeResult(None, f"unsupported charset {charset!r}")
    return percent_decode(encoded, codec, plus_as_space=False)


def filename_from_response(source: Any) -> Optional[str]:
    """
    Extract the server-suggested filename from ``Content-Disposition``.

    The plain ``filename`` parameter is charset-repaired (some servers send
    UTF-8 bytes that get read as Latin-1) and then URL-decoded as UTF-8, since
    some servers percent-encode non-ASCII names. ``filename*`` is used only
    when no plain ``filename`` is present.

    Returns:
        The filename, or None if there is no header or no filename parameter.

    Raises:
        DecodingError: the value holds malformed percent escapes.
    """
    header = first_header(source, "Content-Disposition")
    if header is None:
        return None
    elements = parse_header_elements(header)
    raw = _find_param(elements, "filename")
    if raw is not None:
        repaired = repair_charset(raw, "utf-8")
        if repaired.repaired:
            logger.debug(f"Repaired filename charset from {repaired.source_charset}: {raw!r} -> {repaired.value!r}")
        decoded = percent_decode(repaired.value, "utf-8")
    else:
        raw = _find_param(elements, "filename*")
        if raw is None:
            return None
        decoded = _decode_ext_value(raw)
    if not decoded.ok:
        raise DecodingError(raw, decoded.error or "decoding failed")
    return decoded.value


def charset_from_request(source: Any) -> Optional[str]:
    """Return the canonical name of the ``Content-Type`` charset, if it is a supported encoding."""
    header = first_header(source, "Content-Type")
    if header is None:
        return None
    name = _find_param(parse_header_elements(header), "charset")
    if not name:
        return None
    return lookup_charset(name)


def parse_total_from_content_range(value: Optional[str]) -> Optional[int]:
    """Complete length from ``bytes 0-99/200`` or ``bytes */200``; None when unknown or malformed."""
    match = _CONTENT_RANGE_RE.match(value or "")
    if match is None or match.group("total") == "*":
        return None
    return int(match.group("total"))


def inspect_response(source: Any) -> ResponseMetadata:
    """Summarize what a downloader needs to know from a response's headers."""
    total_bytes: Optional[int] = None
    content_length = first_header(source, "Content-Length")
    if content_length is not None:
        try:
            total_bytes = int(content_length)
        except ValueError:
            logger.warning(f"Ignoring invalid Content-Length: {content_length!r}")
    if total_bytes is None:
        total_bytes = parse_total_from_content_range(first_header(source, "Content-Range"))

    content_type_elements = parse_header_elements(first_header(source, "Content-Type"))
    content_type = content_type_elements[0].name.lower() if content_type_elements else None

    try:
        filename = filename_from_response(source)
    except DecodingError as e:
        logger.warning(f"Ignoring undecodable Content-Disposition filename: {e}")
        filename = None

    return ResponseMetadata(
        supports_range=is_support_range(source),
        filename=filename,
        total_bytes=total_bytes,
        content_type=content_type,
        charset=charset_from_request(source),
    )
