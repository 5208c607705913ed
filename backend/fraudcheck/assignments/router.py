"""Assignment endpoints: upload, listing, review and download."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import FileResponse
from pydantic import EmailStr
from sqlalchemy.orm import Session

from fraudcheck.auth.gate import require_caller, require_role
from fraudcheck.auth.models import MessageResponse, TokenData
from fraudcheck.database import get_db
from fraudcheck.models.enums import UserRole
from fraudcheck.storage import FileStore, get_file_store
from .schemas import FlagRequest, SubmissionEnvelope, SubmissionResponse, TextSubmissionCreate
from .service import AssignmentService

router = APIRouter(tags=["Assignments"])


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    """Dependency to get an instance of AssignmentService."""
    return AssignmentService(db)


@router.post("/upload", response_model=SubmissionEnvelope)
async def upload_assignment(
    email: EmailStr = Form(...),
    subject: str = Form(...),
    file: Optional[UploadFile] = File(None),
    service: AssignmentService = Depends(get_assignment_service),
    store: FileStore = Depends(get_file_store),
):
    """Upload an assignment file (students and teachers)."""
    try:
        submission = service.upload(
            email,
            subject,
            file.file if file is not None else None,
            file.filename if file is not None else None,
            store,
        )
    finally:
        if file is not None:
            await file.close()
    return SubmissionEnvelope(
        message="Assignment uploaded successfully",
        assignment=SubmissionResponse.model_validate(submission),
    )


@router.post("/upload-text", response_model=SubmissionEnvelope)
async def upload_text_assignment(
    data: TextSubmissionCreate,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Post an assignment as inline text."""
    submission = service.upload_text(data.email, data.subject, data.text)
    return SubmissionEnvelope(
        message="Text assignment posted successfully",
        assignment=SubmissionResponse.model_validate(submission),
    )


@router.get("/download/{filename}")
async def download_assignment(
    filename: str,
    caller: TokenData = Depends(require_caller),
    service: AssignmentService = Depends(get_assignment_service),
    store: FileStore = Depends(get_file_store),
):
    """Stream a stored file under its original name."""
    path, submission = service.resolve_download(filename, caller, store)
    return FileResponse(path, filename=submission.filename)


@router.get("/assignments", response_model=List[SubmissionResponse])
async def list_assignments(
    email: str = Query(...),
    subject: Optional[str] = Query(None),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assignments submitted by one user, newest first."""
    return service.list_for_student(email, subject)


@router.get("/all-assignments", response_model=List[SubmissionResponse])
async def list_all_assignments(
    subject: Optional[str] = Query(None),
    caller: TokenData = Depends(require_role(UserRole.teacher)),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Every assignment, newest first (teachers only)."""
    return service.list_all(subject)


@router.post("/flag-assignment/{submission_id}", response_model=SubmissionEnvelope)
async def flag_assignment(
    submission_id: str,
    data: FlagRequest,
    caller: TokenData = Depends(require_role(UserRole.teacher)),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Flag an assignment with a fraud score and feedback (teachers only)."""
    submission = service.flag(submission_id, data.fraud_score, data.feedback, data.version)
    return SubmissionEnvelope(
        message="Assignment flagged",
        assignment=SubmissionResponse.model_validate(submission),
    )


@router.delete("/assignments/{submission_id}", response_model=MessageResponse)
async def delete_assignment(
    submission_id: str,
    caller: TokenData = Depends(require_caller),
    service: AssignmentService = Depends(get_assignment_service),
    store: FileStore = Depends(get_file_store),
):
    """Delete an assignment (its owner, teachers and admins)."""
    service.delete(submission_id, caller, store)
    return {"message": "Assignment deleted successfully"}
