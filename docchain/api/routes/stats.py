"""Statistics endpoint."""

from fastapi import APIRouter, Depends

from docchain.api.deps import get_service
from docchain.api.middleware import rate_limit_default
from docchain.api.models import StatsResponse
from docchain.ledger import VerificationService

router = APIRouter(prefix="/api", tags=["stats"], dependencies=[Depends(rate_limit_default)])


@router.get("/stats", response_model=StatsResponse)
def get_stats(service: VerificationService = Depends(get_service)):
    """Total, verified, revoked and this-month document counts."""
    return StatsResponse.model_validate(service.get_stats().to_dict())
