"""Tests for rate limiting, hash validation and request logging."""

import logging
import os
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from docchain.api.middleware import (
    _check_rate_limit,
    _hash_ip,
    _rate_buckets,
    validate_hash,
)


@pytest.fixture(autouse=True)
def _clear_buckets():
    _rate_buckets.clear()
    yield
    _rate_buckets.clear()


class TestValidateHash:
    def test_accepts_and_lowercases(self):
        assert validate_hash("AB" * 32) == "ab" * 32

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "z" * 64, "a" * 63, f" {'ab' * 32} ", "ab" * 32 + "\n"],
    )
    def test_rejects(self, value):
        with pytest.raises(HTTPException) as exc_info:
            validate_hash(value)
        assert exc_info.value.status_code == 400


class TestRateLimit:
    def test_allows_under_limit(self):
        for _ in range(5):
            _check_rate_limit("test:a", max_requests=5)

    def test_blocks_over_limit(self):
        for _ in range(3):
            _check_rate_limit("test:b", max_requests=3)
        with pytest.raises(HTTPException) as exc_info:
            _check_rate_limit("test:b", max_requests=3)
        assert exc_info.value.status_code == 429

    def test_keys_are_independent(self):
        _check_rate_limit("test:c", max_requests=1)
        _check_rate_limit("test:d", max_requests=1)

    def test_window_expiry(self):
        with patch("docchain.api.middleware.time.monotonic", return_value=1000.0):
            _check_rate_limit("test:e", max_requests=1)
        with patch("docchain.api.middleware.time.monotonic", return_value=1061.0):
            _check_rate_limit("test:e", max_requests=1)

    def test_expired_keys_are_evicted(self):
        with patch("docchain.api.middleware.time.monotonic", return_value=1000.0):
            for i in range(1000):
                _check_rate_limit(f"client:{i}", max_requests=5)
        assert len(_rate_buckets) == 1000

        with patch("docchain.api.middleware.time.monotonic", return_value=1061.0):
            _check_rate_limit("client:new", max_requests=5)
        assert list(_rate_buckets) == ["client:new"]

    def test_active_keys_survive_pruning(self):
        with patch("docchain.api.middleware.time.monotonic", return_value=1000.0):
            _check_rate_limit("test:old", max_requests=5)
        with patch("docchain.api.middleware.time.monotonic", return_value=1030.0):
            _check_rate_limit("test:recent", max_requests=5)
        with patch("docchain.api.middleware.time.monotonic", return_value=1065.0):
            _check_rate_limit("test:other", max_requests=5)
        assert set(_rate_buckets) == {"test:recent", "test:other"}

    def test_endpoint_returns_429(self, service):
        import docchain.config
        os.environ["DOCCHAIN_RATE_LIMIT_PER_MINUTE"] = "2"
        docchain.config._config = None
        try:
            from docchain.api.main import create_app
            client = TestClient(create_app(service))
            assert client.get("/api/stats").status_code == 200
            assert client.get("/api/stats").status_code == 200
            assert client.get("/api/stats").status_code == 429
            # Health is not rate limited
            assert client.get("/api/health").status_code == 200
        finally:
            os.environ["DOCCHAIN_RATE_LIMIT_PER_MINUTE"] = "0"
            docchain.config._config = None


class TestRequestLogging:
    def test_hash_ip(self):
        assert _hash_ip(None) == "unknown"
        assert len(_hash_ip("127.0.0.1")) == 12
        assert _hash_ip("127.0.0.1") != "127.0.0.1"

    def test_request_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="docchain.api.middleware"):
            client.get("/api/health")
        assert any("path=/api/health" in r.getMessage() and "status=200" in r.getMessage()
                   for r in caplog.records)
