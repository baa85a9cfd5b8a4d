"""Ledger service — certificate issuance and pay-on-download settlement.

Lifecycle of a certificate: ``unpaid → paid``. Applying records the
certificate without touching credits; the owner is charged only when the
certificate is first delivered, and exactly once no matter how often the
download is retried.
"""

import logging
import warnings
from collections.abc import Callable
from datetime import datetime, timezone

from patent_auth.application.services.app_data_store import AppDataStore
from patent_auth.domain.certificate_id import new_certificate_id
from patent_auth.domain.entities import (
    AppData,
    Certificate,
    PaymentOutcome,
    PaymentStatus,
    Project,
    User,
    UserRole,
)
from patent_auth.domain.exceptions import (
    AffordabilityError,
    DuplicateEntityError,
    EntityNotFoundError,
    IntegrityWarning,
    RoleMismatchError,
)
from patent_auth.infrastructure.logging.colored_logger import LedgerLogger, LedgerStage

logger = logging.getLogger(__name__)
llog = LedgerLogger("LedgerService")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def payable_cost(data: AppData, certificate: Certificate) -> int:
    """Credits due when ``certificate`` is settled against ``data``.

    A certificate whose project was deleted is free. Otherwise the cost
    snapshotted at issuance applies; certificates issued before costs were
    snapshotted fall back to the project's current cost.
    """
    project = data.find_project(certificate.project_id)
    if project is None:
        return 0
    if certificate.cost is not None:
        return certificate.cost
    return project.cost


class LedgerService:
    """Issues certificates and settles them against user credit balances."""

    def __init__(
        self,
        store: AppDataStore,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[datetime], str] = new_certificate_id,
        max_id_attempts: int = 5,
    ):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._max_id_attempts = max(1, max_id_attempts)

    # ── Queries ──────────────────────────────────────────────────────

    async def list_projects(self) -> list[Project]:
        data = await self._store.read()
        return list(data.projects)

    async def list_certificates(self, user_id: str) -> list[Certificate]:
        """Certificates owned by ``user_id``, newest first."""
        data = await self._store.read()
        return sorted(data.certificates_for(user_id), key=lambda c: c.issue_date, reverse=True)

    async def list_all_certificates(self) -> list[Certificate]:
        data = await self._store.read()
        return sorted(data.certificates, key=lambda c: c.issue_date, reverse=True)

    async def get_certificate(self, certificate_id: str, actor: User) -> Certificate:
        """Fetch a certificate visible to ``actor`` (its owner or an admin)."""
        data = await self._store.read()
        matches = data.find_certificates(certificate_id)
        if not matches or not (actor.is_admin or matches[0].user_id == actor.id):
            raise EntityNotFoundError("Certificate", certificate_id)
        return matches[0]

    async def quote(self, certificate_id: str) -> tuple[Certificate, User, int]:
        """Return the certificate, its owner and the credits currently due."""
        data = await self._store.read()
        matches = data.find_certificates(certificate_id)
        if not matches:
            raise EntityNotFoundError("Certificate", certificate_id)
        certificate = matches[0]
        owner = data.find_user(certificate.user_id)
        if owner is None:
            raise EntityNotFoundError("User", certificate.user_id)
        return certificate, owner, payable_cost(data, certificate)

    # ── Apply ────────────────────────────────────────────────────────

    async def apply(self, actor_id: str, project_id: str) -> Certificate:
        """Issue an unpaid certificate for ``project_id`` to ``actor_id``.

        The actor's balance is re-read from the live aggregate and must
        cover the project cost, but nothing is debited here.

        Raises:
            EntityNotFoundError: unknown actor or project.
            RoleMismatchError: the actor is not an enterprise user.
            AffordabilityError: balance below the project cost.
            DuplicateEntityError: no free certificate number could be generated.
        """
        async with self._store.transaction() as tx:
            data = tx.data
            actor = data.find_user(actor_id)
            if actor is None:
                raise EntityNotFoundError("User", actor_id)
            if actor.role is not UserRole.USER:
                raise RoleMismatchError(UserRole.USER.value, actor.role.value)

            project = data.find_project(project_id)
            if project is None:
                raise EntityNotFoundError("Project", project_id)

            llog.step_start(LedgerStage.APPLY, f"{actor.username} → {project.name}",
                            cost=project.cost, balance=actor.credits)
            if not actor.can_afford(project.cost):
                llog.step_rejected(LedgerStage.APPLY, "Insufficient credits",
                                   required=project.cost, available=actor.credits)
                raise AffordabilityError(required=project.cost, available=actor.credits)

            now = self._clock()
            certificate = Certificate(
                id=self._allocate_id(data, now),
                user_id=actor.id,
                project_id=project.id,
                project_name=project.name,
                patent_name=data.config.patent_name,
                patent_no=data.config.patent_no,
                applicant_name=actor.company_name,
                issue_date=now,
                is_paid=False,
                cost=project.cost,
            )
            tx.commit(data.add_certificate(certificate))

        llog.step_complete(LedgerStage.APPLY, f"Issued certificate {certificate.id}",
                           paid=False)
        return certificate

    def _allocate_id(self, data: AppData, now: datetime) -> str:
        candidate = ""
        for attempt in range(1, self._max_id_attempts + 1):
            candidate = self._id_factory(now)
            if not data.has_certificate_id(candidate):
                return candidate
            logger.warning("Certificate number %s already taken (attempt %d)", candidate, attempt)
        raise DuplicateEntityError("Certificate", "id", candidate)

    # ── Pay on download ──────────────────────────────────────────────

    async def pay_on_download(self, certificate_id: str) -> PaymentOutcome:
        """Settle a certificate. Safe to call any number of times.

        The first successful call debits the owner and marks the
        certificate paid in a single commit; later calls report
        ALREADY_PAID and change nothing. Refusals (NOT_FOUND,
        INSUFFICIENT_FUNDS) never mutate the aggregate.
        """
        async with self._store.transaction() as tx:
            data = tx.data
            matches = data.find_certificates(certificate_id)
            if not matches:
                llog.step_rejected(LedgerStage.PAYMENT, f"Unknown certificate {certificate_id}")
                return PaymentOutcome(status=PaymentStatus.NOT_FOUND)

            duplicates = len(matches) > 1
            if duplicates:
                self._report_duplicates(certificate_id, len(matches))
            certificate = matches[0]

            if certificate.is_paid:
                owner = data.find_user(certificate.user_id)
                return PaymentOutcome(
                    status=PaymentStatus.ALREADY_PAID,
                    certificate=certificate,
                    balance=owner.credits if owner else None,
                    required=certificate.charged_credits,
                    duplicate_ids=duplicates,
                )

            cost = payable_cost(data, certificate)
            owner = data.find_user(certificate.user_id)
            if owner is None:
                llog.step_rejected(LedgerStage.PAYMENT, f"Owner {certificate.user_id} missing",
                                   certificate=certificate_id)
                return PaymentOutcome(
                    status=PaymentStatus.NOT_FOUND,
                    certificate=certificate,
                    required=cost,
                    duplicate_ids=duplicates,
                )

            if not owner.can_afford(cost):
                llog.step_rejected(LedgerStage.PAYMENT, "Insufficient credits",
                                   certificate=certificate_id, required=cost,
                                   available=owner.credits)
                return PaymentOutcome(
                    status=PaymentStatus.INSUFFICIENT_FUNDS,
                    certificate=certificate,
                    balance=owner.credits,
                    required=cost,
                    duplicate_ids=duplicates,
                )

            debited = owner.debit(cost)
            paid = certificate.mark_paid(cost)
            tx.commit(data.replace_user(debited).replace_certificate(paid))

        llog.step_complete(LedgerStage.PAYMENT, f"Certificate {certificate_id} paid",
                           charged=cost, balance=debited.credits)
        return PaymentOutcome(
            status=PaymentStatus.PAID_NOW,
            certificate=paid,
            charged=cost,
            balance=debited.credits,
            required=cost,
            duplicate_ids=duplicates,
        )

    @staticmethod
    def _report_duplicates(certificate_id: str, count: int) -> None:
        message = (
            f"{count} certificates share id {certificate_id}; "
            "settling the first match"
        )
        llog.step_error(LedgerStage.INTEGRITY, message)
        warnings.warn(message, IntegrityWarning, stacklevel=3)
