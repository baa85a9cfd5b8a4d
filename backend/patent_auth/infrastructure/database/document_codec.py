"""JSON document codec for the AppData aggregate.

The stored document keeps the camelCase field names used by earlier
deployments, so previously persisted data loads unchanged:

    {"currentUser": null, "users": [...], "projects": [...],
     "certificates": [...], "config": {...}}
"""

import json
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from patent_auth.domain.entities import (
    AppData,
    Certificate,
    PatentConfig,
    Project,
    User,
    UserRole,
)


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserDocument(_Document):
    id: str
    username: str
    password: str
    company_name: str
    credits: int
    role: UserRole

    def to_entity(self) -> User:
        return User(
            id=self.id,
            username=self.username,
            password=self.password,
            company_name=self.company_name,
            credits=self.credits,
            role=self.role,
        )

    @classmethod
    def from_entity(cls, user: User) -> "UserDocument":
        return cls(
            id=user.id,
            username=user.username,
            password=user.password,
            company_name=user.company_name,
            credits=user.credits,
            role=user.role,
        )


class ProjectDocument(_Document):
    id: str
    name: str
    cost: int


class PatentConfigDocument(_Document):
    patent_name: str
    patent_no: str
    background_url: str = ""


class CertificateDocumentRecord(_Document):
    id: str
    user_id: str
    project_id: str
    project_name: str
    patent_name: str
    patent_no: str
    applicant_name: str
    issue_date: datetime
    is_paid: bool = False
    cost: int | None = None
    charged_credits: int | None = None

    @field_serializer("issue_date")
    def _serialize_issue_date(self, value: datetime) -> str:
        # Same shape as JavaScript's Date.toISOString(): 2024-01-15T08:30:00.123Z
        utc = value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"

    def to_entity(self) -> Certificate:
        issue_date = self.issue_date
        if issue_date.tzinfo is None:
            issue_date = issue_date.replace(tzinfo=timezone.utc)
        return Certificate(
            id=self.id,
            user_id=self.user_id,
            project_id=self.project_id,
            project_name=self.project_name,
            patent_name=self.patent_name,
            patent_no=self.patent_no,
            applicant_name=self.applicant_name,
            issue_date=issue_date,
            is_paid=self.is_paid,
            cost=self.cost,
            charged_credits=self.charged_credits,
        )


class AppDataDocument(_Document):
    current_user: UserDocument | None = None
    users: list[UserDocument] = Field(default_factory=list)
    projects: list[ProjectDocument] = Field(default_factory=list)
    certificates: list[CertificateDocumentRecord] = Field(default_factory=list)
    config: PatentConfigDocument

    def to_entity(self) -> AppData:
        return AppData(
            users=tuple(u.to_entity() for u in self.users),
            projects=tuple(Project(id=p.id, name=p.name, cost=p.cost) for p in self.projects),
            certificates=tuple(c.to_entity() for c in self.certificates),
            config=PatentConfig(
                patent_name=self.config.patent_name,
                patent_no=self.config.patent_no,
                background_url=self.config.background_url,
            ),
            current_user=self.current_user.to_entity() if self.current_user else None,
        )

    @classmethod
    def from_entity(cls, data: AppData) -> "AppDataDocument":
        # currentUser is always written from its users[] entry
        current = data.find_user(data.current_user.id) if data.current_user else None
        return cls(
            current_user=UserDocument.from_entity(current) if current else None,
            users=[UserDocument.from_entity(u) for u in data.users],
            projects=[ProjectDocument(id=p.id, name=p.name, cost=p.cost) for p in data.projects],
            certificates=[
                CertificateDocumentRecord(
                    id=c.id,
                    user_id=c.user_id,
                    project_id=c.project_id,
                    project_name=c.project_name,
                    patent_name=c.patent_name,
                    patent_no=c.patent_no,
                    applicant_name=c.applicant_name,
                    issue_date=c.issue_date,
                    is_paid=c.is_paid,
                    cost=c.cost,
                    charged_credits=c.charged_credits,
                )
                for c in data.certificates
            ],
            config=PatentConfigDocument(
                patent_name=data.config.patent_name,
                patent_no=data.config.patent_no,
                background_url=data.config.background_url,
            ),
        )


class DocumentDecodeError(ValueError):
    """The payload is not valid JSON or does not match the document shape."""


def encode_app_data(data: AppData) -> str:
    """Serialize the aggregate to its JSON document."""
    document = AppDataDocument.from_entity(data)
    return json.dumps(
        document.model_dump(mode="json", by_alias=True, exclude_none=True),
        ensure_ascii=False,
    )


def decode_app_data(payload: str) -> AppData:
    """Parse a JSON document into the aggregate.

    Raises:
        DocumentDecodeError: malformed JSON or unexpected shape.
    """
    try:
        return AppDataDocument.model_validate_json(payload).to_entity()
    except PydanticValidationError as exc:
        raise DocumentDecodeError(str(exc)) from exc
