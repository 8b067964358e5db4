"""DocChain ledger - hash-indexed document registry.

Core components:
    RecordStore             - Thread-safe Document/Verification storage
    VerificationService     - Register, verify, revoke, statistics
    VerificationCertificate - JSON + Markdown certificates with checksum
    load_sample_documents   - Demonstration seed data
"""

from docchain.ledger.models import Document, DocumentStats, Verification, VerificationResult
from docchain.ledger.store import RecordStore
from docchain.ledger.service import VerificationService
from docchain.ledger.certificate import VerificationCertificate
from docchain.ledger.seed import load_sample_documents

__all__ = [
    "Document",
    "DocumentStats",
    "Verification",
    "VerificationResult",
    "RecordStore",
    "VerificationService",
    "VerificationCertificate",
    "load_sample_documents",
]
