"""Exceptions raised by the DocChain ledger.

API routes translate these into HTTP responses; nothing here is fatal to
the process.
"""


class LedgerError(Exception):
    """Base exception for DocChain"""


class ValidationError(LedgerError):
    """Malformed input: missing required field, malformed hash, illegal update"""


class DuplicateHashError(LedgerError):
    """A document with this hash is already registered"""

    def __init__(self, document_hash: str) -> None:
        super().__init__(f"Document with hash {document_hash} already exists")
        self.document_hash = document_hash
