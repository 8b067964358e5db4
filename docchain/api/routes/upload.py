"""File hashing endpoint - compute the content hash of an uploaded file."""

import logging
import os

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from docchain.api.deps import get_service
from docchain.api.middleware import rate_limit_default
from docchain.api.models import HashResponse
from docchain.config import get_config
from docchain.hashing import hash_file
from docchain.ledger import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["hash"], dependencies=[Depends(rate_limit_default)])


@router.post("/hash", response_model=HashResponse)
def hash_upload(
    file: UploadFile = File(...),
    service: VerificationService = Depends(get_service),
):
    """Hash an uploaded file and report whether the hash is registered.

    The file content is not stored. Does not record a verification event.
    The size limit is checked after the body has been spooled, so it only
    bounds the hashing work; capping request size is left to the proxy.
    """
    max_bytes = get_config().max_upload_bytes
    size = file.file.seek(0, os.SEEK_END)
    file.file.seek(0)
    if size > max_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {max_bytes} byte limit.")

    digest = hash_file(file.file)
    logger.info("Hashed upload filename=%s size=%d hash=%s", file.filename, size, digest)
    return HashResponse(
        hash=digest,
        filename=file.filename or "",
        size=size,
        registered=service.store.get_document_by_hash(digest) is not None,
    )
