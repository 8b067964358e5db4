"""HTTP client for a running DocChain API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

logger = logging.getLogger(__name__)

_DEFAULT_API = "http://localhost:8000"


class LiveAPIClient:
    """Connects to the DocChain FastAPI backend.

    Methods return decoded JSON bodies and raise ``requests.HTTPError`` for
    error statuses, except ``get_document`` and ``revoke`` which map 404 to
    ``None`` / ``False``.
    """

    def __init__(self, base_url: str = _DEFAULT_API, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    def list_documents(self) -> list[dict]:
        resp = requests.get(self._url("/documents"), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_document(self, document_id: str) -> dict | None:
        resp = requests.get(self._url(f"/documents/{document_id}"), timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def register_document(self, **fields: Any) -> dict:
        """Register a document. Keyword names use the wire (camelCase) form."""
        resp = requests.post(self._url("/documents"), json=fields, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()["document"]

    def verify(self, document_hash: str, verifier_address: str | None = None) -> dict:
        payload: dict = {"hash": document_hash}
        if verifier_address:
            payload["verifierAddress"] = verifier_address
        resp = requests.post(self._url("/verify"), json=payload, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def revoke(self, document_hash: str) -> bool:
        resp = requests.patch(self._url(f"/documents/{document_hash}/revoke"), timeout=self.timeout)
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return True

    def get_stats(self) -> dict:
        resp = requests.get(self._url("/stats"), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_health(self) -> dict:
        try:
            resp = requests.get(self._url("/health"), timeout=5)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException:
            logger.warning("Health check against %s failed", self.base_url)
            return {"status": "offline"}

    def hash_remote(self, path: str | Path) -> dict:
        """Upload a file to the hash endpoint."""
        path = Path(path)
        with open(path, "rb") as f:
            resp = requests.post(
                self._url("/hash"),
                files={"file": (path.name, f)},
                timeout=max(self.timeout, 60),
            )
        resp.raise_for_status()
        return resp.json()
