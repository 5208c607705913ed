"""Runtime configuration read from the environment."""

import os

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./fraudcheck.db")
SQL_DEBUG = os.getenv("SQL_DEBUG", "false").lower() == "true"

# File uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

# Access tokens
SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret-key")  # In production, always set SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Accept the self-asserted "role"/"email" headers when no bearer token is sent
TRUST_ROLE_HEADER = os.getenv("TRUST_ROLE_HEADER", "true").lower() == "true"

# Mail transport
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "30"))


def mail_accounts() -> list[tuple[str, str]]:
    """Sender accounts as (user, password) pairs.

    ``MAIL_ACCOUNTS`` holds ``user:password`` entries separated by commas;
    ``EMAIL_USER``/``EMAIL_PASS`` are used when it is unset.
    """
    accounts = []
    raw = os.getenv("MAIL_ACCOUNTS", "")
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry or ":" not in entry:
            continue
        user, password = entry.split(":", 1)
        accounts.append((user.strip(), password.strip()))
    if not accounts and os.getenv("EMAIL_USER") and os.getenv("EMAIL_PASS"):
        accounts.append((os.getenv("EMAIL_USER"), os.getenv("EMAIL_PASS")))
    return accounts


# HTTP
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
PORT = int(os.getenv("PORT", "5000"))
