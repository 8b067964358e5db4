"""Request-scoped access to the ledger objects owned by the application."""

from fastapi import Request

from docchain.ledger import VerificationCertificate, VerificationService


def get_service(request: Request) -> VerificationService:
    return request.app.state.service


def get_certificates(request: Request) -> VerificationCertificate:
    return request.app.state.certificates
