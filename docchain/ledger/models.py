"""Record types held by the document ledger."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

# Fields a caller may supply when registering a document.
DOCUMENT_INPUT_FIELDS = frozenset({
    "title",
    "filename",
    "document_hash",
    "ipfs_hash",
    "description",
    "is_public",
    "is_revoked",
    "issuer",
})

# Fields that may change after registration.
MUTABLE_DOCUMENT_FIELDS = frozenset({
    "title",
    "filename",
    "ipfs_hash",
    "description",
    "is_public",
    "is_revoked",
    "issuer",
})


@dataclass(frozen=True)
class Document:
    """A registered document, keyed by id and by content hash."""

    id: str
    title: str
    filename: str
    document_hash: str
    issuer: str
    created_at: datetime
    ipfs_hash: str | None = None
    description: str | None = None
    is_public: bool = False
    is_revoked: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "filename": self.filename,
            "document_hash": self.document_hash,
            "ipfs_hash": self.ipfs_hash,
            "description": self.description,
            "is_public": self.is_public,
            "is_revoked": self.is_revoked,
            "issuer": self.issuer,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class Verification:
    """One audit-log entry: somebody checked a hash at a point in time."""

    id: str
    document_hash: str
    verified_at: datetime
    verifier_address: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "document_hash": self.document_hash,
            "verified_at": self.verified_at.isoformat(),
            "verifier_address": self.verifier_address,
        }


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of checking a hash against the ledger.

    status values:
    - valid
    - revoked
    - not-found

    ``block_number`` and ``transaction_hash`` are synthetic placeholders.
    """

    exists: bool
    is_valid: bool
    status: str
    message: str
    document: Document | None = None
    verifications: list[Verification] = field(default_factory=list)
    issuer: str | None = None
    timestamp: datetime | None = None
    block_number: str | None = None
    transaction_hash: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "exists": self.exists,
            "is_valid": self.is_valid,
            "status": self.status,
            "message": self.message,
            "document": self.document.to_dict() if self.document else None,
            "verifications": [v.to_dict() for v in self.verifications],
            "issuer": self.issuer,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "block_number": self.block_number,
            "transaction_hash": self.transaction_hash,
        }


@dataclass(frozen=True)
class DocumentStats:
    total_documents: int = 0
    verified: int = 0
    revoked: int = 0
    this_month: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
