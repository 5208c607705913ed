"""Account endpoints: register, login, password change and recovery."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fraudcheck.database import get_db
from fraudcheck.mail import Mailer, get_mailer
from .models import (
    AccountCreate, ChangePasswordRequest, ForgotPasswordRequest,
    LoginRequest, LoginResponse, MessageResponse,
)
from .service import AccountService, create_access_token

router = APIRouter(tags=["Accounts"])


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Dependency to get an instance of AccountService."""
    return AccountService(db)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: AccountCreate,
    service: AccountService = Depends(get_account_service)
):
    """Register a new account."""
    service.register(data)
    return {"message": "Registration successful"}


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    service: AccountService = Depends(get_account_service)
):
    """Check credentials and role, and issue an access token carrying the role."""
    account = service.login(data.email, data.password, data.role)
    return LoginResponse(
        email=account.email,
        role=account.role,
        access_token=create_access_token(account.email, account.role),
    )


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: ForgotPasswordRequest,
    service: AccountService = Depends(get_account_service),
    mailer: Mailer = Depends(get_mailer),
):
    """Email a temporary password to the account holder."""
    await service.forgot_password(data.email, mailer)
    return {"message": "Temporary password sent to your email"}


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    service: AccountService = Depends(get_account_service)
):
    """Change an account's password using the current or temporary password."""
    service.change_password(
        data.email, data.old_password, data.new_password, data.confirm_password
    )
    return {"message": "Password changed successfully"}
