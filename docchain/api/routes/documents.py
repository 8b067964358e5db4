"""Document endpoints - list, fetch, register, revoke, certificates."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from docchain.api.deps import get_certificates, get_service
from docchain.api.middleware import rate_limit_default, validate_hash
from docchain.api.models import (
    CertificateMarkdownResponse,
    CreateDocumentResponse,
    DocumentCreate,
    DocumentResponse,
    RevokeResponse,
)
from docchain.errors import DuplicateHashError, ValidationError
from docchain.ledger import VerificationCertificate, VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["documents"], dependencies=[Depends(rate_limit_default)])


@router.get("/documents", response_model=list[DocumentResponse])
def list_documents(service: VerificationService = Depends(get_service)):
    """All registered documents, newest first."""
    return [DocumentResponse.model_validate(d.to_dict()) for d in service.store.get_all_documents()]


@router.get("/documents/{document_id}", response_model=DocumentResponse)
def get_document(document_id: str, service: VerificationService = Depends(get_service)):
    document = service.store.get_document(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return DocumentResponse.model_validate(document.to_dict())


@router.post("/documents", response_model=CreateDocumentResponse, status_code=201)
def create_document(payload: DocumentCreate, service: VerificationService = Depends(get_service)):
    """Register a document hash with its metadata.

    Returns 400 when a document with the same hash already exists.
    """
    try:
        document = service.register_document(payload.model_dump())
    except DuplicateHashError:
        raise HTTPException(status_code=400, detail="Document with this hash already exists")
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return CreateDocumentResponse(success=True, document=DocumentResponse.model_validate(document.to_dict()))


@router.patch("/documents/{document_hash}/revoke", response_model=RevokeResponse)
def revoke_document(document_hash: str, service: VerificationService = Depends(get_service)):
    document_hash = validate_hash(document_hash)
    if not service.revoke_document(document_hash):
        raise HTTPException(status_code=404, detail="Document not found")
    return RevokeResponse(success=True, message="Document revoked successfully")


@router.get("/documents/{document_hash}/certificate")
def get_certificate(
    document_hash: str,
    certificates: VerificationCertificate = Depends(get_certificates),
) -> dict[str, Any]:
    """Return a JSON verification certificate for a registered hash."""
    certificate = certificates.generate(validate_hash(document_hash))
    if certificate is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return certificate


@router.get("/documents/{document_hash}/certificate/markdown", response_model=CertificateMarkdownResponse)
def get_certificate_markdown(
    document_hash: str,
    certificates: VerificationCertificate = Depends(get_certificates),
):
    """Return a Markdown-formatted verification certificate."""
    document_hash = validate_hash(document_hash)
    markdown = certificates.generate_markdown(document_hash)
    if markdown is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return CertificateMarkdownResponse(document_hash=document_hash, markdown=markdown)
