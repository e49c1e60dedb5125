from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import re

from .errors import MissingExtensionError

_SEQUENCE_MARKER_RE = re.compile(r"\((\d+)\)")
_INVALID_CHARS = re.compile(r"[\\/:*?\"<>|\x00-\x1f]+")


def rename_increment_filename(filename: str) -> str:
    """
    Return the next name in the ``name(1).ext``, ``name(2).ext`` ... sequence.

    Every ``(n)`` marker already present is rewritten to ``(n+1)``, where ``n``
    comes from the first marker. A name without a marker gets ``(1)``
    inserted before its last extension.

    Raises:
        MissingExtensionError: no marker and no ``.`` in ``filename``.
    """
    match = _SEQUENCE_MARKER_RE.search(filename)
    if match:
        return _SEQUENCE_MARKER_RE.sub(f"({int(match.group(1)) + 1})", filename)
    dot = filename.rfind(".")
    if dot < 0:
        raise MissingExtensionError(filename)
    return f"{filename[:dot]}(1){filename[dot:]}"


def sanitize_filename(name: str, default: str = "download") -> str:
    name = _INVALID_CHARS.sub(" ", name.strip())
    name = re.sub(r"\s+", " ", name)
    return name.strip() or default


def next_available_path(path: Path, exists: Optional[Callable[[Path], bool]] = None) -> Path:
    """Keep sequencing ``path``'s name until ``exists`` reports a free slot."""
    exists = exists or Path.exists
    candidate = Path(path)
    while exists(candidate):
        candidate = candidate.with_name(rename_increment_filename(candidate.name))
    return candidate
