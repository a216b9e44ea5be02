"""Authentication dependency - turns a bearer token into a Principal."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header

from src.matchboard.api.dependencies.repositories import ProfileRepo, UserRepo
from src.matchboard.core.config import get_settings
from src.matchboard.core.exceptions import UnauthenticatedError
from src.matchboard.core.logging import bind_principal_context
from src.matchboard.core.security import ACCESS_TOKEN_TYPE, Principal, decode_token
from src.matchboard.models import UserRole


async def get_current_principal(
    user_repo: UserRepo,
    profile_repo: ProfileRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """Validate the access token and build the caller's Principal.

    Role and linkage come from the user row, not from token claims, so a
    role change or a deactivation takes effect on the next request.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthenticatedError("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise UnauthenticatedError("Invalid or expired token")

    if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise UnauthenticatedError("Invalid token type")

    subject = payload.get("sub")
    if not subject:
        raise UnauthenticatedError("Invalid token payload")

    try:
        user_id = UUID(str(subject))
    except ValueError as e:
        raise UnauthenticatedError("Invalid user_id in token") from e

    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise UnauthenticatedError("User not found or inactive")

    role = UserRole(user.role)
    professional_id = None
    if role == UserRole.PROFESSIONAL:
        profile = await profile_repo.get_by_user_id(user.id)
        professional_id = profile.id if profile else None

    principal = Principal(
        user_id=user.id,
        role=role,
        organization_id=user.organization_id if role == UserRole.DEVELOPER else None,
        professional_id=professional_id,
    )
    bind_principal_context(
        user.id,
        role.value,
        principal.organization_id,
        user.email,
        log_email=get_settings().log_user_emails,
    )
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
