"""Certificate aggregate root."""

from dataclasses import dataclass, field
from datetime import datetime

from academy.domain.common.aggregate_root import AggregateRoot
from academy.domain.common.clock import utc_now
from academy.domain.common.exceptions import ValidationError
from academy.domain.common.value_objects.ids import CertificateId, ProgramId, UserId
from academy.domain.progress.events import CertificateIssued


@dataclass
class Certificate(AggregateRoot[CertificateId]):
    """
    Certificate aggregate root.

    Terminal artifact issued at most once per (user, program), and only
    after the pair's completion reached completed. Certificates are immutable.
    """

    id: CertificateId
    user_id: UserId
    program_id: ProgramId
    url: str
    issued_at: datetime = field(default_factory=utc_now)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValidationError("Certificate url cannot be empty", field="url", value=self.url)

    def record_issued(self) -> None:
        """Record the issuance event. Called once the certificate has its database id."""
        self._record_event(
            CertificateIssued(
                certificate_id=self.id,
                user_id=self.user_id,
                program_id=self.program_id,
                url=self.url,
            )
        )

    @classmethod
    def create(cls, user_id: UserId, program_id: ProgramId, url: str) -> "Certificate":
        now = utc_now()
        return cls(
            id=CertificateId.generate(),
            user_id=user_id,
            program_id=program_id,
            url=url.strip() if url else url,
            issued_at=now,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CertificateId,
        user_id: UserId,
        program_id: ProgramId,
        url: str,
        issued_at: datetime,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Certificate":
        return cls(
            id=id,
            user_id=user_id,
            program_id=program_id,
            url=url,
            issued_at=issued_at,
            created_at=created_at,
            updated_at=updated_at,
        )
