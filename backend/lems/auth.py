"""
Session lookup and role gate.

Callers identify themselves with the X-Auth-Token header. Route handlers
depend on get_current_user, or on require_roles(...) when only some
functional roles may see the resource.
"""

from typing import Callable, Iterable, Optional

from fastapi import Depends, Header, HTTPException
from sqlmodel import Session, select

from lems.database import get_session
from lems.models.user import ROLE_TYPES, User

AUTH_HEADER = "X-Auth-Token"


def find_user(session: Session, auth_token: Optional[str]) -> Optional[User]:
    if not auth_token:
        return None
    return session.exec(select(User).where(User.auth_token == auth_token)).first()


def get_current_user(
    x_auth_token: Optional[str] = Header(default=None, alias=AUTH_HEADER),
    session: Session = Depends(get_session),
) -> User:
    user = find_user(session, x_auth_token)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_roles(*allowed_roles: str) -> Callable[..., User]:
    """Dependency factory: the current user must hold one of allowed_roles (admins always pass)."""
    allowed = set(allowed_roles or ROLE_TYPES)
    unknown = allowed - set(ROLE_TYPES)
    if unknown:
        raise ValueError(f"Unknown roles: {sorted(unknown)}")

    def _dependency(user: User = Depends(get_current_user)) -> User:
        if user.is_admin or user.role in allowed:
            return user
        raise HTTPException(status_code=403, detail="Role not allowed")

    return _dependency


def ensure_event_access(user: User, event_id: int) -> None:
    """Non-admin users only see the event they are assigned to."""
    if user.is_admin:
        return
    if user.event_id != event_id:
        raise HTTPException(status_code=403, detail="User does not belong to this event")


def has_role(user: User, roles: Iterable[str]) -> bool:
    return user.is_admin or user.role in set(roles)
