"""Security utilities - token verification and the request principal."""

from src.matchboard.core.security.principal import Principal
from src.matchboard.core.security.tokens import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "Principal",
    "create_access_token",
    "decode_token",
]
