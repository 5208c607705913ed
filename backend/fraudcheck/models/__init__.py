"""SQLAlchemy models for the submission service."""

from .enums import UserRole, SubmissionStatus
from .submission import Submission
from .notification import Notification

__all__ = [
    "UserRole",
    "SubmissionStatus",
    "Submission",
    "Notification",
]
