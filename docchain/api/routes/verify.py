"""Verification endpoints - check a hash against the ledger."""

from fastapi import APIRouter, Depends

from docchain.api.deps import get_service
from docchain.api.middleware import rate_limit_default, validate_hash
from docchain.api.models import VerificationResultResponse, VerifyRequest
from docchain.ledger import VerificationService

router = APIRouter(prefix="/api", tags=["verify"], dependencies=[Depends(rate_limit_default)])


@router.get("/verify/{document_hash}", response_model=VerificationResultResponse)
def verify_by_path(document_hash: str, service: VerificationService = Depends(get_service)):
    """Verify a hash given in the path.

    An unknown hash is not an error: the result has ``exists=false``.
    """
    result = service.verify_document(validate_hash(document_hash))
    return VerificationResultResponse.model_validate(result.to_dict())


@router.post("/verify", response_model=VerificationResultResponse)
def verify_by_body(payload: VerifyRequest, service: VerificationService = Depends(get_service)):
    """Verify a hash given in the request body, optionally naming the verifier."""
    result = service.verify_document(
        validate_hash(payload.hash),
        verifier_address=payload.verifier_address,
    )
    return VerificationResultResponse.model_validate(result.to_dict())
