"""Account model and authentication request/response schemas."""
import secrets
import string
from datetime import datetime, UTC
from typing import Optional

import bcrypt
from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy import Column, DateTime, Enum as SQLEnum, Integer, String

from fraudcheck.database import Base
from fraudcheck.models.enums import UserRole
from fraudcheck.schemas import CamelModel

PASSWORD_MIN_LENGTH = 8
# bcrypt only accepts up to 72 bytes of input
PASSWORD_MAX_BYTES = 72
PASSWORD_SYMBOLS = "!@#$%^&*"
TEMP_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    """Trim and lowercase an email so lookups are case-insensitive."""
    return email.strip().lower()


def password_policy_violation(password: str) -> Optional[str]:
    """Return the first password rule ``password`` breaks, or None."""
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
    if len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
        return f"Password must be at most {PASSWORD_MAX_BYTES} bytes long"
    if not any(char.isupper() for char in password):
        return "Password must contain at least one uppercase letter"
    if not any(char.isdigit() for char in password):
        return "Password must contain at least one number"
    if not any(char in PASSWORD_SYMBOLS for char in password):
        return f"Password must contain at least one special character ({PASSWORD_SYMBOLS})"
    return None


def _hash(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def _matches(password: str, hashed: Optional[str]) -> bool:
    if not hashed or len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
        return False
    return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))


class Account(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    hashed_temp_password = Column(String(255), nullable=True)
    role = Column(SQLEnum(UserRole), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    def __repr__(self):
        return f"<Account(id={self.id}, email='{self.email}', role={self.role})>"

    def set_password(self, password: str) -> None:
        """Hash and set the account password, dropping any temporary password."""
        self.hashed_password = _hash(password)
        self.hashed_temp_password = None

    def set_temp_password(self, password: str) -> None:
        """Hash and set the temporary password, replacing any earlier one."""
        self.hashed_temp_password = _hash(password)

    def verify_password(self, password: str) -> bool:
        """Check the stored password first, then the temporary one."""
        return _matches(password, self.hashed_password) or _matches(password, self.hashed_temp_password)

    @property
    def has_temp_password(self) -> bool:
        return self.hashed_temp_password is not None

    @staticmethod
    def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
        """Generate a random alphanumeric temporary password."""
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(length))


# Pydantic models for request/response schemas
class AccountCreate(BaseModel):
    email: EmailStr
    password: str
    role: UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole


class LoginResponse(BaseModel):
    email: str
    role: UserRole
    access_token: str
    token_type: str = "bearer"


class ForgotPasswordRequest(BaseModel):
    email: str

    @field_validator('email')
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Email is required')
        return v


class ChangePasswordRequest(CamelModel):
    email: EmailStr
    old_password: str
    new_password: str
    confirm_password: str


class TokenData(BaseModel):
    email: str
    role: str


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable outcome")
