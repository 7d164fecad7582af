from idv.services.auth_service import AuthService
from idv.services.audit_service import AuditService
from idv.services.client_service import ClientService
from idv.services.product_service import ProductService
from idv.services.reporting_service import ReportingService
from idv.services.verification_service import (
    VerificationOrchestrator, SingleSourceVerifier, list_available_test_ids,
)

__all__ = [
    "AuthService", "AuditService", "ClientService", "ProductService", "ReportingService",
    "VerificationOrchestrator", "SingleSourceVerifier", "list_available_test_ids",
]
