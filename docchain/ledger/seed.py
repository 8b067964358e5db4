"""Demonstration documents loaded into a fresh store.

Sample hashes are derived from a fixed descriptive text so every seeded
hash is a well-formed SHA-256 digest.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from docchain.errors import LedgerError
from docchain.hashing import hash_text
from docchain.ledger.models import Document
from docchain.ledger.store import RecordStore

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENTS: list[dict] = [
    {
        "id": "1",
        "title": "University Diploma",
        "filename": "diploma_2023.pdf",
        "content": "University Diploma - Computer Science, State University, 2023",
        "ipfs_hash": "QmX1B2C3D4E5F6789",
        "description": "Computer Science Degree from State University",
        "is_public": True,
        "is_revoked": False,
        "issuer": "0x1234567890abcdef1234567890abcdef12345678",
        "created_at": datetime(2023, 12, 15, 14, 30, tzinfo=timezone.utc),
    },
    {
        "id": "2",
        "title": "Professional Certificate",
        "filename": "certificate_web3.pdf",
        "content": "Professional Certificate - Blockchain Development Certification",
        "ipfs_hash": "QmY2C3D4E5F6789A",
        "description": "Blockchain Development Certification",
        "is_public": True,
        "is_revoked": False,
        "issuer": "0x2345678901bcdef2345678901bcdef2345678901",
        "created_at": datetime(2023, 12, 12, 10, 15, tzinfo=timezone.utc),
    },
    {
        "id": "3",
        "title": "Contract Agreement",
        "filename": "contract_old.pdf",
        "content": "Contract Agreement - Service Agreement (superseded)",
        "ipfs_hash": "QmZ3D4E5F6789AB",
        "description": "Service Agreement - Superseded",
        "is_public": False,
        "is_revoked": True,
        "issuer": "0x3456789012cdef3456789012cdef3456789012cd",
        "created_at": datetime(2023, 12, 10, 16, 45, tzinfo=timezone.utc),
    },
]


def sample_documents() -> list[Document]:
    """Build the demonstration Document records."""
    documents = []
    for sample in SAMPLE_DOCUMENTS:
        fields = {k: v for k, v in sample.items() if k != "content"}
        documents.append(Document(document_hash=hash_text(sample["content"]), **fields))
    return documents


def load_sample_documents(store: RecordStore) -> int:
    """Import the demonstration documents. Returns the number imported.

    Samples already present (same id or hash) are skipped.
    """
    loaded = 0
    for document in sample_documents():
        try:
            store.import_document(document)
        except LedgerError as exc:
            logger.warning("Skipping sample document %s: %s", document.id, exc)
            continue
        loaded += 1
    logger.info("Loaded %d sample documents", loaded)
    return loaded
