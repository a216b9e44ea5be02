"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, new_id, utc_now
from tests.factories.identity import (
    OrganizationFactory,
    PortfolioItemFactory,
    ProfessionalProfileFactory,
    QualificationFactory,
    UserFactory,
)
from tests.factories.project import (
    BidFactory,
    ProjectFactory,
    ProjectProfessionalFactory,
    TaskFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "new_id",
    "utc_now",
    # Identity
    "OrganizationFactory",
    "UserFactory",
    "ProfessionalProfileFactory",
    "QualificationFactory",
    "PortfolioItemFactory",
    # Projects
    "ProjectFactory",
    "TaskFactory",
    "BidFactory",
    "ProjectProfessionalFactory",
]
