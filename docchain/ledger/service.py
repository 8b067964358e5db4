"""Verification service - registration, hash checks and statistics.

Composes the RecordStore with the synthetic ledger placeholders into the
operations exposed by the API and the CLI.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping

from docchain.hashing import normalize_hash
from docchain.ledger.models import Document, DocumentStats, VerificationResult
from docchain.ledger.placeholders import (
    synthetic_address,
    synthetic_block_number,
    synthetic_transaction_hash,
)
from docchain.ledger.store import RecordStore
from docchain.utils import same_calendar_month, utc_now

logger = logging.getLogger(__name__)

STATUS_VALID = "valid"
STATUS_REVOKED = "revoked"
STATUS_NOT_FOUND = "not-found"

_MESSAGES = {
    STATUS_VALID: "Document is authentic and has not been revoked.",
    STATUS_REVOKED: "Document was registered but has since been revoked.",
    STATUS_NOT_FOUND: "No document is registered under this hash.",
}


class VerificationService:
    """Entry point for registering, verifying and revoking documents.

    Every successful check against an existing document appends a
    Verification event to the store, building an audit trail of who
    checked what and when.
    """

    def __init__(self, store: RecordStore | None = None) -> None:
        self._store = store or RecordStore()

    @property
    def store(self) -> RecordStore:
        """Access the underlying RecordStore."""
        return self._store

    # -- Registration ---------------------------------------------------------

    def register_document(self, fields: Mapping[str, Any]) -> Document:
        """Register a document. Raises DuplicateHashError or ValidationError."""
        document = self._store.create_document(fields)
        logger.info(
            "Registered document id=%s hash=%s issuer=%s",
            document.id,
            document.document_hash,
            document.issuer,
        )
        return document

    def revoke_document(self, document_hash: str) -> bool:
        return self._store.revoke_document(normalize_hash(document_hash))

    # -- Verification ---------------------------------------------------------

    def verify_document(
        self,
        document_hash: str,
        verifier_address: str | None = None,
    ) -> VerificationResult:
        """Check *document_hash* against the ledger.

        An unknown hash is a normal result with ``exists=False`` and records
        nothing. A known hash records one Verification event and the result
        carries every event for that hash, the new one included.
        """
        document_hash = normalize_hash(document_hash)
        document = self._store.get_document_by_hash(document_hash)
        if document is None:
            logger.info("Verification miss hash=%s", document_hash)
            return VerificationResult(
                exists=False,
                is_valid=False,
                status=STATUS_NOT_FOUND,
                message=_MESSAGES[STATUS_NOT_FOUND],
            )

        self._store.create_verification(
            document_hash,
            verifier_address=verifier_address or synthetic_address(),
        )
        verifications = self._store.get_verifications_by_hash(document_hash)
        status = STATUS_REVOKED if document.is_revoked else STATUS_VALID
        logger.info(
            "Verified hash=%s status=%s checks=%d",
            document_hash,
            status,
            len(verifications),
        )
        return VerificationResult(
            exists=True,
            is_valid=not document.is_revoked,
            status=status,
            message=_MESSAGES[status],
            document=document,
            verifications=verifications,
            issuer=document.issuer,
            timestamp=document.created_at,
            block_number=synthetic_block_number(),
            transaction_hash=synthetic_transaction_hash(),
        )

    def verification_count(self, document_hash: str) -> int:
        return len(self._store.get_verifications_by_hash(document_hash))

    # -- Statistics -----------------------------------------------------------

    def get_stats(self, now: datetime | None = None) -> DocumentStats:
        """Counts derived from the full document set."""
        now = now or utc_now()
        documents = self._store.get_all_documents()
        revoked = sum(1 for d in documents if d.is_revoked)
        return DocumentStats(
            total_documents=len(documents),
            verified=len(documents) - revoked,
            revoked=revoked,
            this_month=sum(1 for d in documents if same_calendar_month(d.created_at, now)),
        )
