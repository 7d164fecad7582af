from idv.models.user import User
from idv.models.source_record import SourceRecord
from idv.models.client import RegisteredClient, ClientProduct
from idv.models.product import Product
from idv.models.verification import VerificationAttempt
from idv.models.audit import AuditLog

__all__ = [
    "User", "SourceRecord", "RegisteredClient", "ClientProduct",
    "Product", "VerificationAttempt", "AuditLog",
]
