"""
Note Access Rules.

Role-based access control for notes. The whole rule table lives here so
it can be tested without a database or HTTP stack:

    Role    Owns note   Result
    admin   any         allowed
    member  yes         allowed
    member  no          forbidden

Restore and permanent delete are admin-only regardless of ownership.

Usage:
    from rolenotes.backend.core.permissions import Actor, ensure_note_access

    ensure_note_access(actor, note.user_id, action="update")
"""

from dataclasses import dataclass

from rolenotes.backend.core.exceptions import AuthorizationError
from rolenotes.backend.models.user import UserRole


@dataclass(frozen=True)
class Actor:
    """The authenticated identity a service call acts on behalf of."""

    id: str
    role: str
    name: str | None = None
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return is_admin(self)


def is_admin(actor: Actor) -> bool:
    """Whether the actor holds the admin role."""
    return actor.role == UserRole.ADMIN


def can_access_note(actor: Actor, owner_id: str) -> bool:
    """Whether the actor may read, update or soft-delete a note owned by owner_id."""
    return is_admin(actor) or actor.id == owner_id


def ensure_note_access(actor: Actor, owner_id: str, action: str = "access") -> None:
    """
    Raise unless the actor may act on a note owned by owner_id.

    Raises:
        AuthorizationError: If the actor is neither admin nor the owner
    """
    if not can_access_note(actor, owner_id):
        raise AuthorizationError(f"You don't have permission to {action} this note")


def ensure_admin(actor: Actor, action: str = "perform this operation") -> None:
    """
    Raise unless the actor is an admin.

    Raises:
        AuthorizationError: If the actor is not an admin
    """
    if not is_admin(actor):
        raise AuthorizationError(f"Only admins can {action}")
