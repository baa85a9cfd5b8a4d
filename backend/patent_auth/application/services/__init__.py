from .app_data_store import AppDataStore, AppDataTransaction
from .ledger_service import LedgerService, payable_cost
from .auth_service import AuthService
from .admin_service import AdminService
from .certificate_renderer import CertificateRenderer
from .certificate_delivery_service import CertificateDeliveryService, DeliveredCertificate

__all__ = [
    "AppDataStore",
    "AppDataTransaction",
    "LedgerService",
    "payable_cost",
    "AuthService",
    "AdminService",
    "CertificateRenderer",
    "CertificateDeliveryService",
    "DeliveredCertificate",
]
