"""Shared enums for models and auth."""
import enum

class UserRole(enum.Enum):
    student = "student"
    teacher = "teacher"
    admin = "admin"


class SubmissionStatus(enum.Enum):
    """Review state of a submission."""
    submitted = "submitted"
    flagged = "flagged"
    graded = "graded"
