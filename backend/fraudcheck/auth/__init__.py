"""Authentication package for the application."""
from .models import Account, AccountCreate, TokenData
from .service import AccountService, create_access_token, verify_access_token
from .gate import get_caller, require_caller, require_role, ensure_owner_or_staff
from .router import router as auth_router

__all__ = [
    'Account',
    'AccountCreate',
    'TokenData',
    'AccountService',
    'create_access_token',
    'verify_access_token',
    'get_caller',
    'require_caller',
    'require_role',
    'ensure_owner_or_staff',
    'auth_router'
]
