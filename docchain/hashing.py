"""SHA-256 content hashing for registered documents.

Every digest is rendered as a 64-character lowercase hexadecimal string.
"""

from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any, BinaryIO

from docchain.errors import ValidationError

HASH_LENGTH = 64
DEFAULT_CHUNK_SIZE = 64 * 1024

_HASH_RE = re.compile(r"[0-9a-fA-F]{64}")


def hash_bytes(data: bytes) -> str:
    """Compute SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def hash_text(text: str) -> str:
    """Compute SHA-256 hex digest of the UTF-8 encoding of *text*."""
    return hash_bytes(text.encode("utf-8"))


def hash_file(source: str | Path | BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Compute SHA-256 hex digest of a file without loading it whole.

    *source* may be a path or a binary file object. File objects are read
    from their current position and are not closed.
    """
    digest = hashlib.sha256()
    if isinstance(source, (str, Path)):
        with open(source, "rb") as f:
            for block in iter(lambda: f.read(chunk_size), b""):
                digest.update(block)
    else:
        for block in iter(lambda: source.read(chunk_size), b""):
            digest.update(block)
    return digest.hexdigest()


def is_well_formed_hash(value: Any) -> bool:
    """Return True iff *value* is exactly 64 hex characters (any case)."""
    return isinstance(value, str) and _HASH_RE.fullmatch(value) is not None


def normalize_hash(value: Any) -> str:
    """Strip and lowercase a hash, raising ValidationError if malformed."""
    candidate = value.strip() if isinstance(value, str) else value
    if not is_well_formed_hash(candidate):
        raise ValidationError("Invalid hash format: expected 64 hexadecimal characters")
    return candidate.lower()


def truncate_hash(value: str, length: int = 16) -> str:
    """Shorten a hash for display, e.g. ``3f2a9c...``."""
    if len(value) <= length:
        return value
    return f"{value[:length]}..."


def compute_checksum(data: dict[str, Any]) -> str:
    """Compute SHA-256 hex digest of a JSON-serialized dict.

    Keys are sorted for deterministic output regardless of insertion
    order.
    """
    serialized = json.dumps(data, sort_keys=True, default=str)
    return hash_text(serialized)
