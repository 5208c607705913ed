"""Submission store and review workflow."""
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from fraudcheck.auth.gate import ensure_owner_or_staff
from fraudcheck.auth.models import TokenData, normalize_email
from fraudcheck.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from fraudcheck.models import Notification, Submission, SubmissionStatus
from fraudcheck.storage import FileStore

logger = logging.getLogger(__name__)


def flag_message(submission: Submission) -> str:
    return f'Your assignment "{submission.display_name}" has been flagged. Feedback: {submission.feedback}'


class AssignmentService:
    def __init__(self, db: Session):
        self.db = db

    def get(self, submission_id: str) -> Submission:
        submission = self.db.get(Submission, submission_id)
        if submission is None:
            raise NotFoundError("Assignment not found")
        return submission

    def _add(self, submission: Submission) -> Submission:
        self.db.add(submission)
        self.db.commit()
        self.db.refresh(submission)
        return submission

    @staticmethod
    def _require_subject(subject: Optional[str]) -> str:
        if subject is None or not subject.strip():
            raise ValidationError("Subject is required")
        return subject.strip()

    def upload(self, email: str, subject: str, file: Optional[BinaryIO], filename: Optional[str], store: FileStore) -> Submission:
        """Store an uploaded file and record it as a new submission."""
        if file is None or not filename:
            raise ValidationError("No file uploaded")
        subject = self._require_subject(subject)

        stored_name = store.save(file, filename)
        submission = Submission(
            email=normalize_email(email),
            subject=subject,
            filename=filename,
            stored_name=stored_name,
        )
        try:
            self._add(submission)
        except SQLAlchemyError:
            self.db.rollback()
            store.delete(stored_name)
            raise
        logger.info(f"Stored upload {filename} for {submission.email} as {stored_name}")
        return submission

    def upload_text(self, email: str, subject: str, text: Optional[str]) -> Submission:
        """Record an inline text submission."""
        if text is None or not text.strip():
            raise ValidationError("Text is required")
        submission = Submission(
            email=normalize_email(email),
            subject=self._require_subject(subject),
            text=text,
        )
        self._add(submission)
        logger.info(f"Stored text submission {submission.id} for {submission.email}")
        return submission

    def _listing(self, subject: Optional[str]):
        query = self.db.query(Submission)
        if subject:
            query = query.filter(Submission.subject == subject.strip())
        return query

    def list_for_student(self, email: str, subject: Optional[str] = None) -> List[Submission]:
        """Submissions owned by ``email``, newest first."""
        return (
            self._listing(subject)
            .filter(Submission.email == normalize_email(email))
            .order_by(Submission.upload_time.desc())
            .all()
        )

    def list_all(self, subject: Optional[str] = None) -> List[Submission]:
        """Every submission, newest first."""
        return self._listing(subject).order_by(Submission.upload_time.desc()).all()

    def flag(self, submission_id: str, fraud_score: float, feedback: str, expected_version: Optional[int] = None) -> Submission:
        """Mark a submission as flagged and notify its owner.

        The update and the notification are committed together. The update is
        flushed first so the notification is built from the stored state.
        """
        submission = self.get(submission_id)
        if expected_version is not None and submission.version != expected_version:
            raise ConflictError("Assignment was modified by another request")

        submission.status = SubmissionStatus.flagged
        submission.fraud_score = fraud_score
        submission.feedback = feedback
        try:
            self.db.flush()
            self.db.add(Notification(email=submission.email, message=flag_message(submission)))
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise ConflictError("Assignment was modified by another request")
        self.db.refresh(submission)

        logger.info(f"Flagged assignment {submission.id} for {submission.email} (score {fraud_score})")
        return submission

    def delete(self, submission_id: str, caller: TokenData, store: FileStore) -> None:
        """Delete a submission and its stored file."""
        submission = self.get(submission_id)
        ensure_owner_or_staff(caller, submission.email)
        stored_name = submission.stored_name
        try:
            self.db.delete(submission)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete assignment {submission_id}: {e}")
            raise InternalError("Error deleting assignment")
        store.delete(stored_name)
        logger.info(f"Deleted assignment {submission_id}")

    def resolve_download(self, stored_name: str, caller: TokenData, store: FileStore) -> tuple[Path, Submission]:
        """Find the file behind ``stored_name`` if the caller may read it."""
        submission = self.db.query(Submission).filter(Submission.stored_name == stored_name).first()
        if submission is None:
            raise NotFoundError("File not found")
        ensure_owner_or_staff(caller, submission.email)
        return store.resolve(stored_name), submission
