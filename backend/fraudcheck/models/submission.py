"""Submission model."""

from datetime import datetime, UTC
import uuid

from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, Float, Text

from ..database import Base
from .enums import SubmissionStatus


class Submission(Base):
    """An uploaded assignment, either a stored file or inline text.

    The owner is referenced by email only; there is no foreign key to the
    account table.
    """
    __tablename__ = "assignments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), index=True, nullable=False)
    subject = Column(String(255), index=True, nullable=False)
    filename = Column(String(255), nullable=True)
    stored_name = Column(String(255), unique=True, index=True, nullable=True)
    text = Column(Text, nullable=True)
    upload_time = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False, index=True)
    status = Column(SQLEnum(SubmissionStatus), default=SubmissionStatus.submitted, nullable=False)
    fraud_score = Column(Float, default=0, nullable=False)
    feedback = Column(Text, default="", nullable=False)
    version = Column(Integer, nullable=False)

    # Every UPDATE checks and bumps the version, so concurrent writers fail
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Submission(id={self.id}, email='{self.email}', status={self.status})>"

    @property
    def is_text(self) -> bool:
        return self.stored_name is None

    @property
    def is_flagged(self) -> bool:
        return self.status == SubmissionStatus.flagged

    @property
    def display_name(self) -> str:
        """Name used when telling the owner about this submission."""
        if self.filename:
            return self.filename
        return f"{self.subject} (text submission)"
