"""Authentication and authorization module."""

from app.auth.credentials import extract_credential, resolve_identity, verify_credential
from app.auth.identity import Identity
from app.auth.policy import (
    Action,
    Allow,
    Decision,
    Deny,
    DenyReason,
    Resource,
    ResourceKind,
    decide,
    enforce,
    has_admin_role,
)

__all__ = [
    "Action",
    "Allow",
    "Decision",
    "Deny",
    "DenyReason",
    "Identity",
    "Resource",
    "ResourceKind",
    "decide",
    "enforce",
    "extract_credential",
    "has_admin_role",
    "resolve_identity",
    "verify_credential",
]
