"""
HTTP tests for the API routers, over an in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient

from app.domain.events.base import EventDispatcher
from app.domain.models import Company, Event, Notification, Organizer, User, UserRole
from app.infrastructure.auth import get_jwt_handler
from app.infrastructure.auth.jwt_handler import JWTHandler
from app.infrastructure.cache.list_cache import ListCache
from app.infrastructure.db.database import get_db
from app.infrastructure.db.models import SponsorshipModel
from app.infrastructure.events.event_setup import initialize_event_system
from app.infrastructure.mappers.event_mapper import OrganizerMapper
from app.infrastructure.queue.backend import InMemoryJobQueue
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyEventRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyUserRepository,
)
from app.infrastructure.web.dependencies import get_cache, get_dispatcher
from app.main import create_application
from conftest import BASE_TIME, TENANT_ID, at


API = "/api/v1"
jwt_handler = JWTHandler(secret="router-test-secret", algorithm="HS256")


def auth(role: str, user_id: str = "user-1", tenant_id: str = TENANT_ID) -> dict:
    token = jwt_handler.create_token(user_id, tenant_id, role)
    return {"Authorization": f"Bearer {token}"}


class TestRouters:
    """Test cases for the HTTP surface."""

    @pytest.fixture(autouse=True)
    def setup(self, db_session):
        self.session = db_session
        self.queue = InMemoryJobQueue()
        self.dispatcher = initialize_event_system(self.queue, EventDispatcher())

        app = create_application()
        app.state.job_queue = self.queue
        app.dependency_overrides[get_db] = lambda: db_session
        app.dependency_overrides[get_dispatcher] = lambda: self.dispatcher
        app.dependency_overrides[get_cache] = lambda: ListCache()
        app.dependency_overrides[get_jwt_handler] = lambda: jwt_handler
        self.client = TestClient(app)

        self.company = SQLAlchemyCompanyRepository(db_session).save(
            Company(tenant_id=TENANT_ID, name="Acme Corp", created_at=BASE_TIME)
        )
        organizer = Organizer(tenant_id=TENANT_ID, name="Tech Events Inc")
        db_session.add(OrganizerMapper().domain_to_model(organizer))
        db_session.commit()
        self.event = SQLAlchemyEventRepository(db_session).save(
            Event(tenant_id=TENANT_ID, organizer_id=organizer.id, title="PyCon")
        )
        db_session.add(SponsorshipModel(
            id="sponsorship-1", tenant_id=TENANT_ID, company_id=self.company.id, event_id=self.event.id,
            created_at=at(60),
        ))
        db_session.commit()

    def test_health(self):
        response = self.client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_token(self):
        response = self.client.get(f"{API}/manager/companies/{self.company.id}/lifecycle")

        assert response.status_code in (401, 403)

    def test_invalid_token(self):
        response = self.client.get(
            f"{API}/manager/companies/{self.company.id}/lifecycle",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    def test_company_lifecycle(self):
        response = self.client.get(
            f"{API}/manager/companies/{self.company.id}/lifecycle", headers=auth("MANAGER")
        )

        assert response.status_code == 200
        body = response.json()
        assert body["company"]["name"] == "Acme Corp"
        assert body["progress"] == {"total_steps": 3, "completed_steps": 2, "percentage": 67}
        assert [entry["type"] for entry in body["timeline"]] == ["COMPANY_CREATED", "SPONSORSHIP_CREATED"]

    def test_event_lifecycle_under_admin(self):
        response = self.client.get(f"{API}/admin/events/{self.event.id}/lifecycle", headers=auth("ADMIN"))

        assert response.status_code == 200
        assert response.json()["event"]["title"] == "PyCon"

    def test_unknown_company_maps_to_404(self):
        response = self.client.get(f"{API}/manager/companies/nope/lifecycle", headers=auth("MANAGER"))

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "ENTITY_NOT_FOUND"

    def test_role_guards(self):
        sponsor = self.client.get(f"{API}/manager/companies/{self.company.id}/lifecycle", headers=auth("SPONSOR"))
        manager_on_admin = self.client.get(
            f"{API}/admin/companies/{self.company.id}/lifecycle", headers=auth("MANAGER")
        )

        assert sponsor.status_code == 403
        assert manager_on_admin.status_code == 403

    def test_verify_company_enqueues_jobs(self):
        response = self.client.post(
            f"{API}/manager/companies/{self.company.id}/verify",
            json={"decision": "VERIFIED", "notes": "All good"},
            headers=auth("MANAGER"),
        )

        assert response.status_code == 200
        assert response.json()["verification_status"] == "VERIFIED"

        jobs = self.client.get(f"{API}/admin/jobs/email", headers=auth("ADMIN"))
        assert jobs.status_code == 200
        assert jobs.json()["counts"]["waiting"] == 1
        assert jobs.json()["failed"] == []

    def test_second_decision_maps_to_400(self):
        url = f"{API}/manager/companies/{self.company.id}/verify"
        self.client.post(url, json={"decision": "VERIFIED"}, headers=auth("MANAGER"))

        response = self.client.post(url, json={"decision": "REJECTED"}, headers=auth("MANAGER"))

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "BUSINESS_RULE_VIOLATION"

    def test_invalid_decision_is_rejected(self):
        response = self.client.post(
            f"{API}/manager/events/{self.event.id}/verify",
            json={"decision": "MAYBE"},
            headers=auth("MANAGER"),
        )

        assert response.status_code == 422

    def test_unknown_queue(self):
        response = self.client.get(f"{API}/admin/jobs/sms", headers=auth("ADMIN"))

        assert response.status_code == 404

    def test_proposal_flow(self):
        created = self.client.post(
            f"{API}/proposals",
            json={"sponsorship_id": "sponsorship-1", "status": "SUBMITTED", "proposed_amount": 1500},
            headers=auth("SPONSOR", user_id="sponsor-1"),
        )
        assert created.status_code == 201
        proposal_id = created.json()["id"]

        forbidden = self.client.patch(
            f"{API}/proposals/{proposal_id}/status",
            json={"status": "UNDER_REVIEW"},
            headers=auth("SPONSOR", user_id="sponsor-1"),
        )
        assert forbidden.status_code == 403

        reviewed = self.client.patch(
            f"{API}/proposals/{proposal_id}/status",
            json={"status": "UNDER_REVIEW"},
            headers=auth("ORGANIZER", user_id="organizer-1"),
        )
        assert reviewed.status_code == 200
        assert reviewed.json()["status"] == "UNDER_REVIEW"

        listed = self.client.get(
            f"{API}/proposals", params={"sponsorship_id": "sponsorship-1"}, headers=auth("SPONSOR")
        )
        assert listed.status_code == 200
        assert [item["status"] for item in listed.json()["items"]] == ["UNDER_REVIEW"]

    def test_notifications(self):
        user = SQLAlchemyUserRepository(self.session).save(
            User(tenant_id=TENANT_ID, email="jane@acme.com", role=UserRole.SPONSOR, company_id=self.company.id)
        )
        notification = SQLAlchemyNotificationRepository(self.session).create(Notification(
            tenant_id=TENANT_ID, user_id=user.id, title="Company Verified", message="m"
        ))
        headers = auth("SPONSOR", user_id=user.id)

        assert self.client.get(f"{API}/notifications/unread-count", headers=headers).json() == {"count": 1}
        assert self.client.get(f"{API}/notifications", headers=headers).json()["total"] == 1

        read = self.client.patch(f"{API}/notifications/{notification.id}/read", headers=headers)
        assert read.status_code == 200
        assert read.json()["read"] is True

        other = self.client.patch(f"{API}/notifications/{notification.id}/read", headers=auth("SPONSOR"))
        assert other.status_code == 404

        assert self.client.patch(f"{API}/notifications/read-all", headers=headers).json() == {"updated": 0}

    def test_email_logs_for_managers_only(self):
        assert self.client.get(f"{API}/manager/email-logs", headers=auth("SPONSOR")).status_code == 403

        response = self.client.get(f"{API}/manager/email-logs", headers=auth("MANAGER"))
        assert response.status_code == 200
        assert response.json()["total"] == 0
