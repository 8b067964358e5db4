"""Tests for the DocChain CLI."""

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests
from click.testing import CliRunner

from docchain.cli import main

ABC_HASH = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def abc_file(tmp_path):
    path = tmp_path / "abc.txt"
    path.write_bytes(b"abc")
    return path


@pytest.fixture
def mock_client():
    with patch("docchain.cli.LiveAPIClient") as cls:
        yield cls.return_value


def _verification(is_valid=True):
    return {
        "exists": True,
        "isValid": is_valid,
        "status": "valid" if is_valid else "revoked",
        "document": {"title": "Diploma", "filename": "abc.txt"},
        "verifications": [{"id": "v1"}],
        "issuer": "0xissuer",
        "timestamp": "2024-05-15T12:00:00Z",
    }


class TestLocalCommands:
    def test_hash(self, runner, abc_file):
        result = runner.invoke(main, ["hash", str(abc_file)])
        assert result.exit_code == 0
        assert ABC_HASH in result.output

    def test_hash_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["hash", str(tmp_path / "missing")])
        assert result.exit_code != 0


class TestApiCommands:
    def test_register(self, runner, abc_file, mock_client):
        mock_client.register_document.return_value = {"id": "doc-1"}
        result = runner.invoke(main, ["register", str(abc_file), "-t", "Diploma", "-i", "0xissuer"])
        assert result.exit_code == 0
        assert "doc-1" in result.output
        kwargs = mock_client.register_document.call_args.kwargs
        assert kwargs["documentHash"] == ABC_HASH
        assert kwargs["filename"] == "abc.txt"
        assert kwargs["isPublic"] is False

    def test_register_duplicate(self, runner, abc_file, mock_client):
        response = MagicMock()
        response.json.return_value = {"detail": "Document with this hash already exists"}
        mock_client.register_document.side_effect = requests.HTTPError(response=response)
        result = runner.invoke(main, ["register", str(abc_file), "-t", "Diploma", "-i", "0xissuer"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_verify_file(self, runner, abc_file, mock_client):
        mock_client.verify.return_value = _verification()
        result = runner.invoke(main, ["verify", str(abc_file)])
        assert result.exit_code == 0
        assert "Valid" in result.output
        mock_client.verify.assert_called_once_with(ABC_HASH, verifier_address=None)

    def test_verify_hash_revoked(self, runner, mock_client):
        mock_client.verify.return_value = _verification(is_valid=False)
        result = runner.invoke(main, ["verify", ABC_HASH.upper()])
        assert result.exit_code == 0
        assert "Revoked" in result.output
        mock_client.verify.assert_called_once_with(ABC_HASH, verifier_address=None)

    def test_verify_not_registered(self, runner, mock_client):
        mock_client.verify.return_value = {"exists": False, "isValid": False}
        result = runner.invoke(main, ["verify", ABC_HASH])
        assert result.exit_code == 0
        assert "Not registered" in result.output

    def test_verify_output_json(self, runner, mock_client, tmp_path):
        mock_client.verify.return_value = _verification()
        out = tmp_path / "out" / "result.json"
        result = runner.invoke(main, ["verify", ABC_HASH, "-o", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text())["isValid"] is True

    def test_verify_bad_argument(self, runner, mock_client):
        result = runner.invoke(main, ["verify", "not-a-hash"])
        assert result.exit_code == 2
        mock_client.verify.assert_not_called()

    def test_verify_hash_with_trailing_newline_rejected(self, runner, mock_client):
        result = runner.invoke(main, ["verify", ABC_HASH + "\n"])
        assert result.exit_code == 2
        mock_client.verify.assert_not_called()

    def test_api_failure_is_logged(self, runner, mock_client, caplog):
        mock_client.verify.side_effect = requests.ConnectionError("refused")
        with caplog.at_level(logging.ERROR, logger="docchain.cli"):
            runner.invoke(main, ["verify", ABC_HASH])
        assert any("API call failed: refused" in r.getMessage() for r in caplog.records)

    def test_verify_connection_error(self, runner, mock_client):
        mock_client.verify.side_effect = requests.ConnectionError("refused")
        result = runner.invoke(main, ["verify", ABC_HASH])
        assert result.exit_code == 1
        assert "refused" in result.output

    def test_revoke(self, runner, mock_client):
        mock_client.revoke.return_value = True
        result = runner.invoke(main, ["revoke", ABC_HASH])
        assert result.exit_code == 0
        assert "revoked" in result.output

    def test_revoke_unknown(self, runner, mock_client):
        mock_client.revoke.return_value = False
        result = runner.invoke(main, ["revoke", ABC_HASH])
        assert result.exit_code == 1

    def test_stats(self, runner, mock_client):
        mock_client.get_stats.return_value = {"totalDocuments": 3, "verified": 2, "revoked": 1, "thisMonth": 0}
        result = runner.invoke(main, ["stats"])
        assert result.exit_code == 0
        assert "Total documents" in result.output

    def test_documents(self, runner, mock_client):
        mock_client.list_documents.return_value = [
            {"title": "Diploma", "documentHash": ABC_HASH, "isRevoked": False, "createdAt": "2024-05-15"},
        ]
        result = runner.invoke(main, ["documents"])
        assert result.exit_code == 0
        assert "Diploma" in result.output

    def test_api_url_option(self, runner):
        with patch("docchain.cli.LiveAPIClient") as cls:
            cls.return_value.get_stats.return_value = {"totalDocuments": 0, "verified": 0, "revoked": 0, "thisMonth": 0}
            runner.invoke(main, ["--api-url", "http://remote:9000", "stats"])
        cls.assert_called_once_with(base_url="http://remote:9000")
