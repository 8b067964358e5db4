"""Verification certificate generation - JSON and Markdown output."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlencode

from docchain.hashing import compute_checksum, normalize_hash
from docchain.ledger.service import STATUS_REVOKED, STATUS_VALID, VerificationService


class VerificationCertificate:
    """Generate printable certificates for registered documents.

    A certificate includes:
    - Document metadata and current status
    - Number of recorded verification events
    - The public verification URL (the payload a QR code would carry)
    - SHA-256 checksum for integrity verification

    Generating a certificate reads the ledger only; it does not record a
    verification event.
    """

    def __init__(self, service: VerificationService, base_url: str) -> None:
        self._service = service
        self._base_url = base_url.rstrip("/")

    def verify_url(self, document_hash: str) -> str:
        return f"{self._base_url}/verify?{urlencode({'hash': document_hash})}"

    def generate(self, document_hash: str) -> dict[str, Any] | None:
        """Generate a JSON certificate, or None if the hash is unknown."""
        document_hash = normalize_hash(document_hash)
        document = self._service.store.get_document_by_hash(document_hash)
        if document is None:
            return None

        certificate_data: dict[str, Any] = {
            "document": document.to_dict(),
            "document_hash": document.document_hash,
            "status": STATUS_REVOKED if document.is_revoked else STATUS_VALID,
            "is_valid": not document.is_revoked,
            "verification_count": self._service.verification_count(document_hash),
            "verify_url": self.verify_url(document_hash),
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }

        # Add checksum
        certificate_data["checksum"] = compute_checksum(certificate_data)

        return certificate_data

    def generate_markdown(self, document_hash: str) -> str | None:
        """Generate a Markdown-formatted certificate."""
        cert = self.generate(document_hash)
        if cert is None:
            return None

        document = cert["document"]
        lines = [
            "# Document Verification Certificate",
            "",
            f"**Title:** {document['title']}",
            f"**File:** {document['filename']}",
            f"**Status:** {cert['status'].upper()}",
            f"**Issuer:** {document['issuer']}",
            f"**Registered:** {document['created_at']}",
            f"**Generated:** {cert['generated_at']}",
            "",
            "## Content Hash",
            "",
            f"`{cert['document_hash']}`",
            "",
        ]

        if document.get("description"):
            lines.append("## Description")
            lines.append("")
            lines.append(document["description"])
            lines.append("")

        if document.get("ipfs_hash"):
            lines.append(f"- IPFS: `{document['ipfs_hash']}`")
        lines.append(f"- Verifications recorded: {cert['verification_count']}")
        lines.append(f"- Verify online: [{cert['verify_url']}]({cert['verify_url']})")
        lines.append("")
        lines.append(f"**Checksum:** `{cert['checksum']}`")
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def verify(certificate: dict[str, Any]) -> bool:
        """Verify the integrity of a certificate.

        Recomputes the checksum excluding the stored checksum field
        and compares it to the stored value.
        """
        stored_checksum = certificate.get("checksum")
        if not stored_checksum:
            return False

        data_without_checksum = {
            k: v for k, v in certificate.items() if k != "checksum"
        }
        return compute_checksum(data_without_checksum) == stored_checksum
