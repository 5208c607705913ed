"""Notification model."""

from datetime import datetime, UTC
import uuid

from sqlalchemy import Column, String, DateTime, Text

from ..database import Base


class Notification(Base):
    """A one-way message addressed to a user's email."""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), index=True, nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False, index=True)

    def __repr__(self):
        return f"<Notification(id={self.id}, email='{self.email}')>"
