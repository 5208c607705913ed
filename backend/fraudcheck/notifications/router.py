"""Notification endpoints."""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from fraudcheck.auth.models import normalize_email
from fraudcheck.database import get_db
from fraudcheck.models import Notification

router = APIRouter(tags=["Notifications"])


class NotificationResponse(BaseModel):
    id: str
    email: str
    message: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


def list_notifications_for(db: Session, email: str) -> List[Notification]:
    """Notifications addressed to ``email``, newest first."""
    return (
        db.query(Notification)
        .filter(Notification.email == normalize_email(email))
        .order_by(Notification.timestamp.desc())
        .all()
    )


@router.get("/notifications", response_model=List[NotificationResponse])
async def list_notifications(
    email: str = Query(...),
    db: Session = Depends(get_db),
):
    """Get notifications for a user (all roles)."""
    return list_notifications_for(db, email)
