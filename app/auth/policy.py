"""
Authorization policy.

`decide` is a pure function of the identity, the requested action and the
target resource. Anything that needs the store (existence, ownership, the
number of posts referencing a category) is looked up by the caller first
and passed in through :class:`Resource`.

Rules:
    - category create/update/delete: admins only;
    - category delete: additionally refused while posts reference it;
    - post update/delete: the author or an admin;
    - post create and comment create: any authenticated identity.
"""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from app.auth.identity import Identity
from app.errors.auth import InsufficientRoleError, NotOwnerError
from app.errors.base import BaseAppError
from app.errors.database import DependencyError
from app.models.user import Role


class Action(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ResourceKind(StrEnum):
    CATEGORY = "category"
    POST = "post"
    COMMENT = "comment"


class DenyReason(StrEnum):
    INSUFFICIENT_ROLE = "InsufficientRole"
    NOT_OWNER = "NotOwner"
    HAS_DEPENDENTS = "HasDependents"


@dataclass(frozen=True, slots=True)
class Resource:
    """
    Target of an action.

    Attributes:
        kind: Resource type.
        owner_id: Author of the resource, for ownership rules.
        dependents: Number of records referencing the resource; None when
            not looked up yet.
    """

    kind: ResourceKind
    owner_id: UUID | None = None
    dependents: int | None = None


@dataclass(frozen=True, slots=True)
class Allow:
    pass


@dataclass(frozen=True, slots=True)
class Deny:
    reason: DenyReason


type Decision = Allow | Deny

ALLOW = Allow()


def has_admin_role(identity: Identity) -> bool:
    match identity.role:
        case Role.ADMIN:
            return True
        case Role.MEMBER:
            return False
        case _:
            # Roles outside the enumeration carry no privileges
            return False


def _decide_category(identity: Identity, action: Action, resource: Resource) -> Decision:
    if not has_admin_role(identity):
        return Deny(DenyReason.INSUFFICIENT_ROLE)
    if action is Action.DELETE and resource.dependents:
        return Deny(DenyReason.HAS_DEPENDENTS)
    return ALLOW


def _decide_post(identity: Identity, action: Action, resource: Resource) -> Decision:
    match action:
        case Action.CREATE:
            return ALLOW
        case Action.UPDATE | Action.DELETE:
            if resource.owner_id == identity.id or has_admin_role(identity):
                return ALLOW
            return Deny(DenyReason.NOT_OWNER)


def _decide_comment(identity: Identity, action: Action, resource: Resource) -> Decision:
    if action is Action.CREATE:
        return ALLOW
    msg = f"Comments are append-only; {action} is not supported"
    raise ValueError(msg)


def decide(identity: Identity, action: Action, resource: Resource) -> Decision:
    """
    Decide whether `identity` may perform `action` on `resource`.

    Examples:
        >>> decide(member, Action.DELETE, Resource(ResourceKind.CATEGORY))
        Deny(reason=<DenyReason.INSUFFICIENT_ROLE: 'InsufficientRole'>)
    """
    match resource.kind:
        case ResourceKind.CATEGORY:
            return _decide_category(identity, action, resource)
        case ResourceKind.POST:
            return _decide_post(identity, action, resource)
        case ResourceKind.COMMENT:
            return _decide_comment(identity, action, resource)


def denial_error(reason: DenyReason, action: Action) -> BaseAppError:
    """Typed error a denial surfaces as."""
    match reason:
        case DenyReason.INSUFFICIENT_ROLE:
            return InsufficientRoleError()
        case DenyReason.NOT_OWNER:
            return NotOwnerError(action.value)
        case DenyReason.HAS_DEPENDENTS:
            return DependencyError()


def enforce(decision: Decision, action: Action) -> None:
    """Raise the typed error for a denial; do nothing on allow."""
    if isinstance(decision, Deny):
        raise denial_error(decision.reason, action)
