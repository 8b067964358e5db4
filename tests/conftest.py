"""Shared test fixtures for DocChain test suite."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Ensure test environment variables are set before any config import
os.environ.setdefault("DOCCHAIN_RATE_LIMIT_PER_MINUTE", "0")
os.environ.setdefault("DOCCHAIN_SEED_SAMPLE_DATA", "false")
os.environ.setdefault("DOCCHAIN_PUBLIC_BASE_URL", "https://docchain.test")

from fastapi.testclient import TestClient

from docchain.ledger import RecordStore, VerificationService

HASH_A = "aa" * 32
HASH_B = "bb" * 32
# SHA-256("abc")
ABC_HASH = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    return RecordStore(clock=clock)


@pytest.fixture
def service(store):
    return VerificationService(store)


@pytest.fixture
def document_fields():
    """Minimal valid registration fields (snake_case)."""
    return {
        "title": "University Diploma",
        "filename": "diploma.pdf",
        "document_hash": HASH_A,
        "issuer": "0x1234567890abcdef1234567890abcdef12345678",
    }


@pytest.fixture
def document_payload():
    """Valid registration body as sent over HTTP (camelCase)."""
    return {
        "title": "University Diploma",
        "filename": "diploma.pdf",
        "documentHash": HASH_A,
        "ipfsHash": "QmX1B2C3D4E5F6789",
        "description": "Computer Science Degree",
        "isPublic": True,
        "issuer": "0x1234567890abcdef1234567890abcdef12345678",
    }


@pytest.fixture
def app(service):
    """Fresh app around the test's own service."""
    import docchain.config
    docchain.config._config = None

    from docchain.api.main import create_app
    return create_app(service)


@pytest.fixture
def client(app):
    """Test client for the DocChain API."""
    return TestClient(app)
