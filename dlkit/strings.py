from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import unquote, unquote_plus
import codecs
import logging
import re

from .errors import UnsupportedEncodingError

logger = logging.getLogger(__name__)

STRING_BUFFER_LENGTH = 100

# Charsets a mis-decoded header value is most likely to have been read with.
_REPAIR_SOURCE_CHARSETS: Tuple[str, ...] = ("iso-8859-1", "gb2312", "gbk")

_MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class RepairResult:
    value: str
    source_charset: Optional[str] = None
    repaired: bool = False


@dataclass(frozen=True)
class DecodeResult:
    value: Optional[str]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _resolve_text_encoding(name: Optional[str]) -> str:
    if not name:
        raise UnsupportedEncodingError(name)
    try:
        info = codecs.lookup(name)
        # Rejects bytes-to-bytes codecs such as base64 or zlib.
        "".encode(info.name)
    except LookupError:
        raise UnsupportedEncodingError(name) from None
    return info.name


def lookup_charset(name: Optional[str]) -> Optional[str]:
    """Return the canonical codec name for ``name``, or None if it is not a usable text encoding."""
    try:
        return _resolve_text_encoding(name)
    except UnsupportedEncodingError:
        logger.debug(f"Unsupported charset: {name!r}")
        return None


def size_of_string(text: Optional[str], encoding: str, errors: str = "replace") -> int:
    """
    Count the bytes ``text`` occupies when encoded with ``encoding``.

    Short strings are encoded directly. Longer strings are fed to an incremental
    encoder in slices of ``STRING_BUFFER_LENGTH`` characters so no single large
    buffer is materialized; the incremental encoder keeps BOMs and stateful
    shift sequences identical to a one-shot encode.

    Raises:
        UnsupportedEncodingError: ``encoding`` is not a known text encoding.
    """
    if not text:
        return 0
    codec_name = _resolve_text_encoding(encoding)
    length = len(text)
    if length < STRING_BUFFER_LENGTH:
        return len(text.encode(codec_name, errors))

    encoder = codecs.getincrementalencoder(codec_name)(errors)
    size = 0
    for start in range(0, length, STRING_BUFFER_LENGTH):
        size += len(encoder.encode(text[start:start + STRING_BUFFER_LENGTH]))
    size += len(encoder.encode("", final=True))
    return size


def repair_charset(text: str, target: str = "utf-8") -> RepairResult:
    """
    Undo a wrong-charset decode of ``text``.

    The first candidate charset that can represent ``text`` is assumed to be the
    one it was mistakenly decoded with; its bytes are then decoded as ``target``.
    If those bytes are not valid ``target`` the original text is kept.
    """
    target_name = lookup_charset(target)
    if target_name is None:
        return RepairResult(text)
    for charset in _REPAIR_SOURCE_CHARSETS:
        try:
            raw = text.encode(charset)
        except UnicodeEncodeError:
            continue
        try:
            candidate = raw.decode(target_name)
        except UnicodeDecodeError:
            return RepairResult(text, source_charset=charset)
        return RepairResult(candidate, source_charset=charset, repaired=candidate != text)
    return RepairResult(text)


def percent_decode(value: Optional[str], charset: str = "utf-8", plus_as_space: bool = True) -> DecodeResult:
    """
    URL-decode ``value``; malformed escapes yield a failed result instead of raising.

    Well-formed escapes that are not valid ``charset`` bytes decode to U+FFFD.
    """
    if value is None:
        return DecodeResult(None, "value is None")
    match = _MALFORMED_ESCAPE_RE.search(value)
    if match:
        return DecodeResult(None, f"malformed escape sequence at index {match.start()}")
    try:
        decode = unquote_plus if plus_as_space else unquote
        return DecodeResult(decode(value, encoding=charset, errors="replace"))
    except LookupError:
        return DecodeResult(None, f"unsupported charset {charset!r}")
