"""Account service: registration, login, password change and recovery."""
import logging
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from fraudcheck import config
from fraudcheck.exceptions import (
    ConflictError, NotFoundError, UnauthorizedError, ValidationError,
)
from fraudcheck.mail import Mailer
from fraudcheck.models.enums import UserRole
from .models import Account, AccountCreate, TokenData, normalize_email, password_policy_violation

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Password Reset"


class AccountNotFoundError(NotFoundError):
    """Account lookups report a plain 400, like every other login failure."""
    default_status = status.HTTP_400_BAD_REQUEST


class CredentialMismatchError(UnauthorizedError):
    default_status = status.HTTP_400_BAD_REQUEST


class DuplicateAccountError(ConflictError):
    default_status = status.HTTP_400_BAD_REQUEST


def create_access_token(email: str, role: UserRole, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token carrying the caller's email and role."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": email,
        "role": role.value,
        "exp": datetime.now(UTC) + expires_delta,
        "type": "access",
    }
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def verify_access_token(token: str) -> TokenData:
    """Verify and decode an access token."""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise UnauthorizedError("Could not validate credentials")
    email = payload.get("sub")
    role = payload.get("role")
    if email is None or role is None or payload.get("type") != "access":
        raise UnauthorizedError("Could not validate credentials")
    return TokenData(email=email, role=role)


class AccountService:
    def __init__(self, db: Session):
        self.db = db

    def get_account(self, email: str) -> Account:
        account = self.db.query(Account).filter(Account.email == normalize_email(email)).first()
        if account is None:
            raise AccountNotFoundError("User not found")
        return account

    def register(self, data: AccountCreate) -> Account:
        """Register a new account."""
        email = normalize_email(data.email)
        if self.db.query(Account).filter(Account.email == email).first():
            raise DuplicateAccountError("User already exists")

        violation = password_policy_violation(data.password)
        if violation:
            raise ValidationError(violation)

        account = Account(email=email, role=data.role)
        account.set_password(data.password)
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        logger.info(f"Registered {account.role.value} account {account.email}")
        return account

    def login(self, email: str, password: str, role: UserRole) -> Account:
        """Check credentials and the requested role; return the account."""
        account = self.get_account(email)
        if not account.verify_password(password):
            logger.info(f"Rejected login for {account.email}: invalid credentials")
            raise CredentialMismatchError("Invalid credentials")
        if account.role != role:
            logger.info(f"Rejected login for {account.email}: role {role.value} requested")
            raise CredentialMismatchError("Invalid role")
        logger.info(f"Login succeeded for {account.email}")
        return account

    def change_password(self, email: str, old_password: str, new_password: str, confirm_password: str) -> Account:
        """Replace the password; the temporary password stops working."""
        account = self.get_account(email)
        if new_password != confirm_password:
            raise ValidationError("New passwords do not match")
        if not account.verify_password(old_password):
            raise CredentialMismatchError("Invalid old password")
        violation = password_policy_violation(new_password)
        if violation:
            raise ValidationError(violation)

        account.set_password(new_password)
        self.db.commit()
        logger.info(f"Password changed for {account.email}")
        return account

    async def forgot_password(self, email: str, mailer: Mailer) -> Account:
        """Mail a temporary password and store it once delivery succeeded.

        A delivery failure propagates and leaves the account untouched.
        """
        account = self.get_account(email)
        temp_password = Account.generate_temp_password()

        await mailer.send(
            to_email=account.email,
            subject=RESET_SUBJECT,
            text_content=(
                f"Your temporary password is: {temp_password}. "
                "Please use this to login and change your password."
            ),
        )

        account.set_temp_password(temp_password)
        self.db.commit()
        logger.info(f"Temporary password issued for {account.email}")
        return account
