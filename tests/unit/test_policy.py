"""Tests for the authorization policy."""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st
from structlog.testing import capture_logs

from src.matchboard.core.exceptions import ForbiddenError
from src.matchboard.core.security import Principal
from src.matchboard.models import Project, UserRole
from src.matchboard.services.policy import (
    OPEN_OPERATIONS,
    OWNER_OPERATIONS,
    Decision,
    DenyReason,
    Operation,
    authorize,
    decide,
    is_allowed,
)

pytestmark = pytest.mark.unit

ORG_A = uuid4()
ORG_B = uuid4()


def developer(organization_id=ORG_A) -> Principal:
    return Principal(user_id=uuid4(), role=UserRole.DEVELOPER, organization_id=organization_id)


def professional(professional_id=None) -> Principal:
    return Principal(
        user_id=uuid4(),
        role=UserRole.PROFESSIONAL,
        professional_id=professional_id if professional_id is not None else uuid4(),
    )


def admin() -> Principal:
    return Principal(user_id=uuid4(), role=UserRole.ADMIN)


def project(organization_id=ORG_A) -> Project:
    return Project(organization_id=organization_id, title="Scheme")


class TestCreateProject:
    def test_developer_with_organization_allowed(self):
        assert decide(developer(), Operation.CREATE_PROJECT) == Decision.allow()

    def test_developer_without_organization_denied(self):
        decision = decide(developer(organization_id=None), Operation.CREATE_PROJECT)
        assert decision == Decision.deny(DenyReason.MISSING_LINKAGE)

    @pytest.mark.parametrize("principal", [professional(), admin()])
    def test_other_roles_denied(self, principal):
        decision = decide(principal, Operation.CREATE_PROJECT)
        assert decision.reason == DenyReason.ROLE_MISMATCH


class TestSubmitBid:
    def test_professional_with_profile_allowed(self):
        assert is_allowed(professional(), Operation.SUBMIT_BID)

    def test_professional_without_profile_denied(self):
        principal = Principal(user_id=uuid4(), role=UserRole.PROFESSIONAL)
        decision = decide(principal, Operation.SUBMIT_BID)
        assert decision.reason == DenyReason.MISSING_LINKAGE

    @pytest.mark.parametrize("principal", [developer(), admin()])
    def test_non_professionals_denied(self, principal):
        assert decide(principal, Operation.SUBMIT_BID).reason == DenyReason.ROLE_MISMATCH


@pytest.mark.parametrize("operation", sorted(OWNER_OPERATIONS, key=lambda op: op.value))
class TestOwnerOperations:
    def test_owning_developer_allowed(self, operation):
        assert is_allowed(developer(ORG_A), operation, project(ORG_A))

    def test_other_organization_denied(self, operation):
        decision = decide(developer(ORG_B), operation, project(ORG_A))
        assert decision.reason == DenyReason.OWNERSHIP_MISMATCH

    def test_admin_allowed_on_any_project(self, operation):
        assert is_allowed(admin(), operation, project(ORG_B))

    def test_admin_allowed_without_resource(self, operation):
        assert is_allowed(admin(), operation, None)

    def test_professional_denied_even_when_nominated(self, operation):
        assert decide(professional(), operation, project()).reason == DenyReason.ROLE_MISMATCH

    def test_developer_without_organization_denied(self, operation):
        decision = decide(developer(organization_id=None), operation, project())
        assert decision.reason == DenyReason.MISSING_LINKAGE

    def test_missing_resource_denied(self, operation):
        decision = decide(developer(), operation, None)
        assert decision.reason == DenyReason.MISSING_RESOURCE


@pytest.mark.parametrize("operation", sorted(OPEN_OPERATIONS, key=lambda op: op.value))
@pytest.mark.parametrize("principal", [developer(ORG_B), professional(), admin()])
def test_open_operations_allow_any_principal(operation, principal):
    assert is_allowed(principal, operation, project(ORG_A))


def test_every_operation_has_a_rule():
    for operation in Operation:
        decide(admin(), operation, project())


def test_unknown_operation_raises():
    with pytest.raises(ValueError):
        decide(admin(), "launch_rocket")  # type: ignore[arg-type]


class TestAuthorize:
    def test_allowed_returns_none(self):
        assert authorize(developer(), Operation.CREATE_PROJECT) is None

    def test_denied_raises_generic_forbidden(self):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize(developer(ORG_B), Operation.NOMINATE_PROFESSIONAL, project(ORG_A))

        assert exc_info.value.detail == "Forbidden"
        assert "ownership" not in exc_info.value.detail

    def test_denied_logs_reason(self):
        with capture_logs() as logs, pytest.raises(ForbiddenError):
            authorize(professional(), Operation.UPDATE_PROJECT_STAGE, project())

        denied = [entry for entry in logs if entry["event"] == "authorization_denied"]
        assert len(denied) == 1
        assert denied[0]["reason"] == "role_mismatch"
        assert denied[0]["operation"] == "update_project_stage"


# --- Properties ---

roles = st.sampled_from(list(UserRole))
org_ids = st.one_of(st.none(), st.sampled_from([ORG_A, ORG_B]))


@st.composite
def principals(draw) -> Principal:
    return Principal(
        user_id=uuid4(),
        role=draw(roles),
        organization_id=draw(org_ids),
        professional_id=draw(st.one_of(st.none(), st.just(uuid4()))),
    )


@given(principal=principals(), owner=st.sampled_from([ORG_A, ORG_B]))
def test_roster_visible_only_to_owner_or_admin(principal, owner):
    allowed = is_allowed(principal, Operation.VIEW_NOMINATION_ROSTER, project(owner))

    expected = principal.role == UserRole.ADMIN or (
        principal.role == UserRole.DEVELOPER and principal.organization_id == owner
    )
    assert allowed == expected


@given(principal=principals(), operation=st.sampled_from(list(Operation)))
def test_admin_allowed_everything_except_role_bound_operations(principal, operation):
    decision = decide(principal, operation, project())

    if principal.role == UserRole.ADMIN and operation not in (
        Operation.CREATE_PROJECT,
        Operation.SUBMIT_BID,
    ):
        assert decision.allowed
    if not decision.allowed:
        assert decision.reason is not None
