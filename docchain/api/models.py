"""Pydantic request/response models for the DocChain API.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from docchain.hashing import is_well_formed_hash


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

class DocumentCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    filename: str = Field(..., max_length=500)
    document_hash: str
    ipfs_hash: str | None = None
    description: str | None = None
    is_public: bool = False
    is_revoked: bool = False
    issuer: str = Field(..., min_length=1, max_length=200)

    @field_validator("title", "issuer")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("document_hash")
    @classmethod
    def validate_document_hash(cls, v: str) -> str:
        if not is_well_formed_hash(v):
            raise ValueError("documentHash must be 64 hexadecimal characters.")
        return v.lower()


class DocumentResponse(CamelModel):
    id: str
    title: str
    filename: str
    document_hash: str
    ipfs_hash: str | None = None
    description: str | None = None
    is_public: bool = False
    is_revoked: bool = False
    issuer: str
    created_at: datetime


class CreateDocumentResponse(CamelModel):
    success: bool = True
    document: DocumentResponse


class RevokeResponse(CamelModel):
    success: bool = True
    message: str = ""


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

class VerifyRequest(CamelModel):
    hash: str = Field(..., max_length=200)
    verifier_address: str | None = Field(default=None, max_length=200)


class VerificationResponse(CamelModel):
    id: str
    document_hash: str
    verified_at: datetime
    verifier_address: str | None = None


class VerificationResultResponse(CamelModel):
    exists: bool
    is_valid: bool
    status: str
    message: str = ""
    document: DocumentResponse | None = None
    verifications: list[VerificationResponse] = []
    issuer: str | None = None
    timestamp: datetime | None = None
    block_number: str | None = None  # synthetic placeholder
    transaction_hash: str | None = None  # synthetic placeholder


# ---------------------------------------------------------------------------
# Hashing / certificates
# ---------------------------------------------------------------------------

class HashResponse(CamelModel):
    hash: str
    filename: str = ""
    size: int = 0
    registered: bool = False


class CertificateMarkdownResponse(CamelModel):
    document_hash: str
    markdown: str


# ---------------------------------------------------------------------------
# Stats / Health
# ---------------------------------------------------------------------------

class StatsResponse(CamelModel):
    total_documents: int = 0
    verified: int = 0
    revoked: int = 0
    this_month: int = 0


class HealthResponse(CamelModel):
    status: str = "healthy"
    documents: int = 0
    verifications: int = 0
