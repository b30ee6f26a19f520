"""
Unit tests for company and event review, users and notifications.
"""

import pytest

from app.domain.events.verification_events import (
    CompanyRejected,
    CompanyVerified,
    EventRejected,
    EventVerified,
)
from app.domain.models import (
    BusinessRuleViolation,
    Company,
    Event,
    Notification,
    User,
    UserRole,
    ValidationError,
    VerificationStatus,
)


class TestCompanyVerification:
    """Test cases for Company review decisions."""

    def test_new_company_is_pending(self):
        company = Company(tenant_id="tenant-1", name="Acme Corp")

        assert company.verification_status == VerificationStatus.PENDING
        assert not company.verification_status.is_decided

    def test_blank_name_fails(self):
        with pytest.raises(ValidationError, match="name is required"):
            Company(tenant_id="tenant-1", name="  ")

    def test_verify_records_event(self):
        company = Company(tenant_id="tenant-1", name="Acme Corp")

        company.verify("manager-1", "MANAGER", "Looks good")

        assert company.verification_status == VerificationStatus.VERIFIED
        events = company.pull_events()
        assert len(events) == 1
        event = events[0]
        assert isinstance(event, CompanyVerified)
        assert event.entity_type == "Company"
        assert event.decision == "VERIFIED"
        assert event.entity_id == company.id
        assert event.reviewer_notes == "Looks good"
        assert event.timestamp == event.occurred_at
        assert event.to_dict()["data"]["decision"] == "VERIFIED"

    def test_reject_records_event(self):
        company = Company(tenant_id="tenant-1", name="Acme Corp")

        company.reject("manager-1", "MANAGER")

        assert company.verification_status == VerificationStatus.REJECTED
        assert isinstance(company.pull_events()[0], CompanyRejected)

    def test_second_decision_fails(self):
        company = Company(tenant_id="tenant-1", name="Acme Corp")
        company.reject("manager-1", "MANAGER")

        with pytest.raises(BusinessRuleViolation, match="already rejected"):
            company.verify("manager-2", "ADMIN")


class TestEventVerification:
    """Test cases for Event review decisions."""

    def test_verify_and_reject(self):
        verified = Event(tenant_id="tenant-1", organizer_id="org-1", title="PyCon")
        rejected = Event(tenant_id="tenant-1", organizer_id="org-1", title="DjangoCon")

        verified.verify("admin-1", "ADMIN")
        rejected.reject("admin-1", "ADMIN", "Dates overlap")

        assert isinstance(verified.pull_events()[0], EventVerified)
        event = rejected.pull_events()[0]
        assert isinstance(event, EventRejected)
        assert event.entity_type == "Event"
        assert event.reviewer_notes == "Dates overlap"

    def test_already_verified_fails(self):
        event = Event(tenant_id="tenant-1", organizer_id="org-1", title="PyCon")
        event.verify("admin-1", "ADMIN")

        with pytest.raises(BusinessRuleViolation, match="already verified"):
            event.reject("admin-1", "ADMIN")


class TestUser:
    """Test cases for User domain model."""

    def test_promote_plain_user(self):
        user = User(tenant_id="tenant-1", email="jane@acme.com")

        assert user.promote_to_sponsor() is True
        assert user.role == UserRole.SPONSOR

    def test_promote_leaves_other_roles(self):
        user = User(tenant_id="tenant-1", email="boss@acme.com", role=UserRole.MANAGER)

        assert user.promote_to_sponsor() is False
        assert user.role == UserRole.MANAGER
        assert user.can_review

    def test_invalid_email_fails(self):
        with pytest.raises(ValidationError):
            User(tenant_id="tenant-1", email="not-an-email")


class TestNotification:
    """Test cases for Notification domain model."""

    def test_mark_read_once(self):
        notification = Notification(tenant_id="tenant-1", user_id="u-1", title="Hi", message="Hello")

        assert notification.mark_read() is True
        assert notification.read is True
        assert notification.mark_read() is False

    def test_recipient_required(self):
        with pytest.raises(ValidationError, match="recipient"):
            Notification(tenant_id="tenant-1", user_id="", title="Hi", message="Hello")
