"""Test cases for SQLAlchemy models."""

import pytest
from sqlalchemy.exc import IntegrityError

from fraudcheck.auth.models import Account
from fraudcheck.models import Notification, Submission, SubmissionStatus, UserRole


class TestAccountModel:
    """Test cases for Account model."""

    def test_create_account(self, db_session):
        account = Account(email="teacher@test.com", role=UserRole.teacher)
        account.set_password("Teach123!")
        db_session.add(account)
        db_session.commit()

        assert account.id is not None
        assert account.role == UserRole.teacher
        assert account.created_at is not None
        assert account.hashed_temp_password is None

    def test_account_unique_email(self, db_session):
        first = Account(email="duplicate@test.com", role=UserRole.student)
        first.set_password("Abc123!@")
        second = Account(email="duplicate@test.com", role=UserRole.teacher)
        second.set_password("Abc123!@")

        db_session.add(first)
        db_session.commit()
        db_session.add(second)
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_set_password_clears_temp_password(self):
        account = Account(email="s@test.com", role=UserRole.student)
        account.set_password("Abc123!@")
        account.set_temp_password("tmp12345")
        assert account.has_temp_password
        assert account.verify_password("tmp12345")

        account.set_password("Newpass1!")
        assert not account.has_temp_password
        assert not account.verify_password("tmp12345")
        assert account.verify_password("Newpass1!")


class TestSubmissionModel:
    """Test cases for Submission model."""

    def test_defaults(self, db_session):
        submission = Submission(email="s@test.com", subject="math", text="x = 1")
        db_session.add(submission)
        db_session.commit()

        assert submission.id is not None
        assert submission.status == SubmissionStatus.submitted
        assert submission.fraud_score == 0
        assert submission.feedback == ""
        assert submission.upload_time is not None
        assert submission.version == 1
        assert submission.is_text

    def test_version_increments_on_update(self, db_session):
        submission = Submission(email="s@test.com", subject="math", filename="a.pdf", stored_name="abc.pdf")
        db_session.add(submission)
        db_session.commit()

        submission.feedback = "looks fine"
        db_session.commit()
        assert submission.version == 2

    def test_display_name(self):
        assert Submission(subject="math", filename="hw.pdf").display_name == "hw.pdf"
        assert Submission(subject="math", text="1").display_name == "math (text submission)"

    def test_repr(self):
        submission = Submission(id="abc", email="s@test.com", subject="math")
        assert "abc" in repr(submission)
        assert "s@test.com" in repr(submission)


class TestNotificationModel:

    def test_create_notification(self, db_session):
        notification = Notification(email="s@test.com", message="hello")
        db_session.add(notification)
        db_session.commit()

        assert notification.id is not None
        assert notification.timestamp is not None
