"""Role-based authorization predicates.

These functions hold no state and never touch the database: callers load whatever
the decision needs (admin count, booking count) and pass it in.
"""

from typing import Any, Optional

from app.models.user import UserRole


def _role_of(actor: Any) -> Optional[UserRole]:
    role = getattr(actor, "role", None)
    if isinstance(role, str):
        try:
            return UserRole(role)
        except ValueError:
            return None
    return role


def is_admin(actor: Any) -> bool:
    return actor is not None and _role_of(actor) == UserRole.ADMIN


def can_cancel_booking(actor: Any, booking: Any) -> bool:
    """Owners may cancel their own bookings; admins may cancel any."""
    if actor is None:
        return False
    if is_admin(actor):
        return True
    return booking.user_id is not None and booking.user_id == actor.id


def can_view_user_bookings(actor: Any, user_id: int) -> bool:
    return actor is not None and (is_admin(actor) or actor.id == user_id)


def role_change_denial(actor: Any, target: Any, new_role: UserRole, admin_count: int) -> Optional[str]:
    """Return why actor may not give target new_role, or None if allowed."""
    if not is_admin(actor):
        return "Only admins can change user roles"

    demoting_admin = new_role == UserRole.USER and _role_of(target) == UserRole.ADMIN
    if demoting_admin and actor.id == target.id:
        return "You cannot remove your own admin role"
    if demoting_admin and admin_count <= 1:
        return "Cannot demote the last remaining admin"
    return None


def can_change_role(actor: Any, target: Any, new_role: UserRole, admin_count: int) -> bool:
    return role_change_denial(actor, target, new_role, admin_count) is None


def can_delete_event(booking_count: int) -> bool:
    """Events with bookings are kept; bookings must be cancelled first."""
    return booking_count == 0
