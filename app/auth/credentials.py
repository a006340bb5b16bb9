"""
Credential verification.

A credential travels either in an ``Authorization: Bearer <token>`` header
or in the ``token`` cookie; the header wins when both are present. A
verified credential is resolved to an :class:`Identity` through the user
repository, which never loads the password hash.
"""

from typing import Protocol
from uuid import UUID

from app.auth.identity import Identity
from app.errors.auth import (
    AccountDeactivatedError,
    InvalidCredentialError,
    MissingCredentialError,
)
from app.managers.token_manager import decode_access_token
from app.monitoring import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


class IdentityLookup(Protocol):
    async def get_identity(self, user_id: UUID) -> Identity | None: ...


def extract_credential(authorization: str | None, cookie: str | None) -> str:
    """
    Pick the raw credential from the header or the cookie.

    Raises:
        MissingCredentialError: If neither source carries one.
    """
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization.removeprefix(BEARER_PREFIX).strip()
        if token:
            return token

    if cookie:
        return cookie

    raise MissingCredentialError


def verify_credential(token: str) -> UUID:
    """
    Check signature, expiry and claims, returning the embedded identity id.

    Raises:
        InvalidCredentialError: On any verification failure.
    """
    token_data = decode_access_token(token)
    if token_data is None:
        raise InvalidCredentialError
    return token_data.user_id


async def resolve_identity(users: IdentityLookup, user_id: UUID) -> Identity:
    """
    Resolve a verified identity id against the store.

    Raises:
        InvalidCredentialError: If no user matches.
        AccountDeactivatedError: If the user is deactivated.
    """
    identity = await users.get_identity(user_id)
    if identity is None:
        logger.info("Credential references unknown user", user_id=str(user_id))
        raise InvalidCredentialError
    if not identity.is_active:
        logger.info("Deactivated user presented a credential", user_id=str(user_id))
        raise AccountDeactivatedError
    return identity
