"""Health check endpoint."""

from fastapi import APIRouter, Depends

from docchain.api.deps import get_service
from docchain.api.models import HealthResponse
from docchain.ledger import VerificationService

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(service: VerificationService = Depends(get_service)):
    """Report store sizes. Not rate limited."""
    return HealthResponse(
        status="healthy",
        documents=service.store.count_documents(),
        verifications=service.store.count_verifications(),
    )
