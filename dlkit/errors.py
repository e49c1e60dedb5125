"""Typed errors raised for caller-contract violations and undecodable input."""
from __future__ import annotations

from typing import Optional


class DownloadKitError(Exception):
    """Base class for every error raised by dlkit."""


class UnsupportedEncodingError(DownloadKitError, LookupError):
    def __init__(self, encoding: Optional[str]) -> None:
        super().__init__(f"Unsupported encoding: {encoding!r}")
        self.encoding = encoding


class DecodingError(DownloadKitError, ValueError):
    def __init__(self, value: Optional[str], reason: str) -> None:
        super().__init__(f"Cannot decode {value!r}: {reason}")
        self.value = value
        self.reason = reason


class MissingExtensionError(DownloadKitError, ValueError):
    def __init__(self, filename: str) -> None:
        super().__init__(f"Filename has no extension to sequence before: {filename!r}")
        self.filename = filename
