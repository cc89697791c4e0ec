"""
Shared fixtures: in-memory database with a small catalog, stub collaborators,
a wired VaccinationService and an API client.
"""

from datetime import date
from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vaccination.config import BookingProperties, Settings, get_settings
from vaccination.database import enable_sqlite_fk, get_db
from vaccination.dependencies import get_notifier, get_report_renderer
from vaccination.main import app
from vaccination.repositories import (
    SqlBranchRepository,
    SqlCustomerRepository,
    SqlPaymentMethodRepository,
    SqlScheduleRepository,
    SqlTimeSlotRepository,
    SqlVaccineRepository,
)
from vaccination.seed import create_schema, seed_reference_data
from vaccination.services.reports import ScheduleReportModel
from vaccination.services.vaccination import ScheduleRequest, VaccinationService


CATALOG = {
    "vaccines": [
        {"code": "V1", "name": "Influenza"},
        {"code": "V2", "name": "Hepatitis B"},
        {"code": "V3", "name": "Measles"},
    ],
    "branches": [
        {"code": "B1", "name": "Central Clinic", "vaccines": ["V1", "V2"]},
        {"code": "B2", "name": "North Clinic", "vaccines": ["V3"]},
    ],
    "time_slots": [
        {"id": 1, "start_time": "09:00", "end_time": "09:30"},
        {"id": 2, "start_time": "09:30", "end_time": "10:00"},
        {"id": 3, "start_time": "10:00", "end_time": "10:30"},
    ],
    "payment_methods": [
        {"id": 1, "name": "Cash"},
        {"id": 2, "name": "Credit card"},
    ],
}

BOOKING_DATE = date(2024, 6, 1)


class RecordingNotifier:
    """Notifier stub that keeps every message, or fails on demand."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: List[Tuple[str, str, str]] = []

    def send(self, recipient: str, subject: str, body: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, subject, body))


class StubRenderer:
    """Renderer stub returning fixed bytes."""

    def __init__(self, payload: bytes = b"%PDF-1.4 stub"):
        self.payload = payload
        self.calls: List[Tuple[str, ScheduleReportModel]] = []

    def render(self, template_id: str, model: ScheduleReportModel) -> bytes:
        self.calls.append((template_id, model))
        return self.payload


def make_request(**overrides) -> ScheduleRequest:
    fields = dict(
        branch_code="B1",
        vaccine_code="V1",
        payment_method_id=1,
        time_slot_id=1,
        schedule_date=BOOKING_DATE,
        customer_name="Alice",
        customer_national_number="111",
        email="a@x.com",
    )
    fields.update(overrides)
    return ScheduleRequest(**fields)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_fk)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_reference_data(session, CATALOG)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def properties() -> BookingProperties:
    return BookingProperties(
        schedule_report_template="schedule_report.txt",
        email_subject="Your appointment",
        email_content="Schedule code: {schedule_code}",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def renderer() -> StubRenderer:
    return StubRenderer()


def build_service(db, notifier, renderer, properties, schedules=None) -> VaccinationService:
    return VaccinationService(
        branches=SqlBranchRepository(db),
        vaccines=SqlVaccineRepository(db),
        time_slots=SqlTimeSlotRepository(db),
        payment_methods=SqlPaymentMethodRepository(db),
        customers=SqlCustomerRepository(db),
        schedules=schedules or SqlScheduleRepository(db),
        notifier=notifier,
        report_renderer=renderer,
        properties=properties,
    )


@pytest.fixture
def service(db, notifier, renderer, properties) -> VaccinationService:
    return build_service(db, notifier, renderer, properties)


@pytest.fixture
def client(db, session_factory, notifier, renderer):
    """API client bound to the seeded in-memory database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    settings = Settings(
        _env_file=None,
        email_subject="Your appointment",
        email_content="Schedule code: {schedule_code}",
    )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_report_renderer] = lambda: renderer

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
