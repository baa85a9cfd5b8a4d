from .user import User, UserRole
from .project import Project
from .patent_config import PatentConfig
from .certificate import Certificate
from .certificate_document import CertificateDocument
from .payment import PaymentOutcome, PaymentStatus
from .app_data import AppData

__all__ = [
    "User",
    "UserRole",
    "Project",
    "PatentConfig",
    "Certificate",
    "CertificateDocument",
    "PaymentOutcome",
    "PaymentStatus",
    "AppData",
]
