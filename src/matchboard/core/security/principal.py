"""The authenticated caller, as seen by the authorization policy."""

from dataclasses import dataclass
from uuid import UUID

from src.matchboard.models.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """Identity context for one request.

    A DEVELOPER is linked to an organization, a PROFESSIONAL to a
    professional profile. ADMIN needs neither.
    """

    user_id: UUID
    role: UserRole
    organization_id: UUID | None = None
    professional_id: UUID | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
