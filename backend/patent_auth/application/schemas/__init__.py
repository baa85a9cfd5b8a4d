from .user import UserCreate, UserUpdate, UserResponse
from .auth import LoginRequest, TokenResponse, PasswordChange
from .project import ProjectCreate, ProjectUpdate, ProjectResponse
from .patent_config import PatentConfigUpdate, PatentConfigResponse
from .certificate import CertificateApply, CertificateResponse, PaymentOutcomeResponse

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "LoginRequest",
    "TokenResponse",
    "PasswordChange",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "PatentConfigUpdate",
    "PatentConfigResponse",
    "CertificateApply",
    "CertificateResponse",
    "PaymentOutcomeResponse",
]
