"""Test utilities package."""

from tests.utils.cleanup import (
    cleanup_organization_cascade,
    cleanup_professional_cascade,
    cleanup_project_cascade,
)

__all__ = [
    "cleanup_organization_cascade",
    "cleanup_professional_cascade",
    "cleanup_project_cascade",
]
