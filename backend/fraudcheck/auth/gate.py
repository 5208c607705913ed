"""Role and identity checks run before privileged operations."""
import logging
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fraudcheck import config
from fraudcheck.exceptions import ForbiddenError
from fraudcheck.models.enums import UserRole
from .models import TokenData, normalize_email
from .service import verify_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

PRIVILEGED_ROLES = {UserRole.teacher.value, UserRole.admin.value}


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    role: Optional[str] = Header(None),
    email: Optional[str] = Header(None),
) -> Optional[TokenData]:
    """Resolve the caller's claims.

    A bearer token always wins and must verify. Without one, the plain
    ``role``/``email`` headers are used when TRUST_ROLE_HEADER is enabled.
    """
    if credentials is not None:
        return verify_access_token(credentials.credentials)
    if config.TRUST_ROLE_HEADER and role:
        return TokenData(email=normalize_email(email) if email else "", role=role)
    return None


def require_caller(caller: Optional[TokenData] = Depends(get_caller)) -> TokenData:
    if caller is None:
        raise ForbiddenError("Access denied")
    return caller


def require_role(expected: UserRole):
    """
    Dependency factory that ensures the caller has the given role.
    Example: require_role(UserRole.teacher)
    """

    def role_checker(caller: Optional[TokenData] = Depends(get_caller)) -> TokenData:
        if caller is None or caller.role != expected.value:
            logger.warning(f"Denied {expected.value}-only operation to role {caller.role if caller else None}")
            raise ForbiddenError("Access denied")
        return caller

    return role_checker


def ensure_owner_or_staff(caller: TokenData, owner_email: str) -> None:
    """Allow teachers, admins and the owner of a record; refuse everyone else."""
    if caller.role in PRIVILEGED_ROLES:
        return
    if caller.email and caller.email == normalize_email(owner_email):
        return
    raise ForbiddenError("Access denied")
