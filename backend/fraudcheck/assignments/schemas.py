"""Request and response schemas for assignment endpoints."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from fraudcheck.models.enums import SubmissionStatus
from fraudcheck.schemas import CamelModel


class SubmissionResponse(CamelModel):
    id: str
    email: str
    subject: str
    filename: Optional[str] = None
    stored_name: Optional[str] = None
    text: Optional[str] = None
    upload_time: datetime
    status: SubmissionStatus
    fraud_score: float
    feedback: str
    version: int


class TextSubmissionCreate(BaseModel):
    email: EmailStr
    subject: str
    text: str = ""


class FlagRequest(CamelModel):
    fraud_score: float = Field(..., ge=0, le=100)
    feedback: str = ""
    version: Optional[int] = Field(None, description="Expected record version; omit to skip the check")


class SubmissionEnvelope(BaseModel):
    message: str
    assignment: SubmissionResponse
