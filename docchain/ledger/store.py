"""In-memory record store for documents and verification events."""

from __future__ import annotations

import dataclasses
import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping

from docchain.errors import DuplicateHashError, ValidationError
from docchain.hashing import normalize_hash
from docchain.ledger.models import (
    DOCUMENT_INPUT_FIELDS,
    MUTABLE_DOCUMENT_FIELDS,
    Document,
    Verification,
)
from docchain.utils import utc_now

logger = logging.getLogger(__name__)


def _require_text(fields: Mapping[str, Any], name: str, allow_empty: bool = False) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or (not allow_empty and not value.strip()):
        raise ValidationError(f"'{name}' is required and must be non-empty text")
    return value


def _optional_text(fields: Mapping[str, Any], name: str) -> str | None:
    value = fields.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"'{name}' must be text")
    return value


def _bool(fields: Mapping[str, Any], name: str) -> bool:
    value = fields.get(name, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"'{name}' must be a boolean")
    return value


class RecordStore:
    """Thread-safe store for Document and Verification records.

    Documents are indexed by id and by content hash. Records are frozen
    dataclasses: an update builds a new record and swaps it in under the
    lock, so readers never observe a partial change. The hash uniqueness
    check and the insert happen under the same lock acquisition.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or utc_now
        self._documents: dict[str, Document] = {}
        self._by_hash: dict[str, str] = {}
        self._verifications: dict[str, Verification] = {}
        self._lock = threading.RLock()

    # -- Documents ------------------------------------------------------------

    def create_document(self, fields: Mapping[str, Any]) -> Document:
        """Register a new document and return the stored record.

        Raises DuplicateHashError if the hash is already registered and
        ValidationError for missing or malformed fields.
        """
        unknown = set(fields) - DOCUMENT_INPUT_FIELDS
        if unknown:
            raise ValidationError(f"Unknown document fields: {', '.join(sorted(unknown))}")

        document_hash = normalize_hash(fields.get("document_hash"))
        title = _require_text(fields, "title")
        filename = _require_text(fields, "filename", allow_empty=True)
        issuer = _require_text(fields, "issuer")
        ipfs_hash = _optional_text(fields, "ipfs_hash")
        description = _optional_text(fields, "description")
        is_public = _bool(fields, "is_public")
        is_revoked = _bool(fields, "is_revoked")

        with self._lock:
            document = Document(
                id=str(uuid.uuid4()),
                title=title,
                filename=filename,
                document_hash=document_hash,
                issuer=issuer,
                created_at=self._clock(),
                ipfs_hash=ipfs_hash,
                description=description,
                is_public=is_public,
                is_revoked=is_revoked,
            )
            self._insert(document)
        return document

    def import_document(self, document: Document) -> Document:
        """Insert an already-formed record, keeping its id and timestamp."""
        document = dataclasses.replace(
            document,
            document_hash=normalize_hash(document.document_hash),
        )
        with self._lock:
            if document.id in self._documents:
                raise ValidationError(f"Document id '{document.id}' already exists")
            self._insert(document)
        return document

    def _insert(self, document: Document) -> None:
        if document.document_hash in self._by_hash:
            raise DuplicateHashError(document.document_hash)
        self._documents[document.id] = document
        self._by_hash[document.document_hash] = document.id

    def get_document(self, document_id: str) -> Document | None:
        with self._lock:
            return self._documents.get(document_id)

    def get_document_by_hash(self, document_hash: str) -> Document | None:
        """Return the document registered under *document_hash*, or None.

        Lookup is case-insensitive; malformed hashes simply find nothing.
        """
        if not isinstance(document_hash, str):
            return None
        with self._lock:
            document_id = self._by_hash.get(document_hash.strip().lower())
            return self._documents.get(document_id) if document_id else None

    def get_all_documents(self) -> list[Document]:
        """All documents, most recently created first."""
        with self._lock:
            # Reversed insertion order so equal timestamps list newest insert first
            documents = list(reversed(self._documents.values()))
        return sorted(documents, key=lambda d: d.created_at, reverse=True)

    def update_document(self, document_id: str, **updates: Any) -> Document | None:
        """Merge *updates* into a document. Returns None if the id is unknown."""
        illegal = set(updates) - MUTABLE_DOCUMENT_FIELDS
        if illegal:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(illegal))}")

        with self._lock:
            document = self._documents.get(document_id)
            if document is None:
                return None
            if document.is_revoked and updates.get("is_revoked") is False:
                raise ValidationError("A revoked document cannot be reinstated")
            for name in ("title", "issuer"):
                if name in updates:
                    _require_text(updates, name)
            for name in ("is_public", "is_revoked"):
                if name in updates and not isinstance(updates[name], bool):
                    raise ValidationError(f"'{name}' must be a boolean")
            updated = dataclasses.replace(document, **updates)
            self._documents[document_id] = updated
        return updated

    def revoke_document(self, document_hash: str) -> bool:
        """Flag a document as revoked. Returns False if the hash is unknown."""
        with self._lock:
            document = self.get_document_by_hash(document_hash)
            if document is None:
                return False
            if not document.is_revoked:
                self.update_document(document.id, is_revoked=True)
                logger.info("Revoked document id=%s hash=%s", document.id, document.document_hash)
        return True

    def count_documents(self) -> int:
        with self._lock:
            return len(self._documents)

    # -- Verifications --------------------------------------------------------

    def create_verification(
        self,
        document_hash: str,
        verifier_address: str | None = None,
    ) -> Verification:
        """Append a verification event for *document_hash*."""
        with self._lock:
            verification = Verification(
                id=str(uuid.uuid4()),
                document_hash=document_hash.strip().lower(),
                verified_at=self._clock(),
                verifier_address=verifier_address,
            )
            self._verifications[verification.id] = verification
        return verification

    def get_verifications_by_hash(self, document_hash: str) -> list[Verification]:
        """All verification events for a hash, in insertion order."""
        key = document_hash.strip().lower()
        with self._lock:
            return [v for v in self._verifications.values() if v.document_hash == key]

    def count_verifications(self) -> int:
        with self._lock:
            return len(self._verifications)
