"""Domain entity for issued patent-usage certificates."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


@dataclass(frozen=True)
class Certificate:
    """A certificate issued to a user for one project.

    All descriptive fields are a snapshot taken at issuance and never
    change afterwards. The only transition is ``is_paid`` going from
    False to True, which also records ``charged_credits``.
    """

    id: str
    user_id: str
    project_id: str
    project_name: str
    patent_name: str
    patent_no: str
    applicant_name: str
    issue_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_paid: bool = False
    cost: int | None = None
    charged_credits: int | None = None

    def mark_paid(self, charged: int) -> "Certificate":
        """Return the paid version of this certificate."""
        if self.is_paid:
            raise ValueError(f"Certificate {self.id} is already paid")
        return replace(self, is_paid=True, charged_credits=charged)
