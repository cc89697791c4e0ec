"""
FastAPI dependencies wiring the booking service to a request session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .database import get_db
from .repositories import (
    SqlBranchRepository,
    SqlCustomerRepository,
    SqlPaymentMethodRepository,
    SqlScheduleRepository,
    SqlTimeSlotRepository,
    SqlVaccineRepository,
)
from .services.notifications import EmailNotifier, Notifier
from .services.reports import PdfReportRenderer, ReportRenderer
from .services.vaccination import VaccinationService


def get_notifier(settings: Settings = Depends(get_settings)) -> Notifier:
    return EmailNotifier.from_settings(settings)


def get_report_renderer() -> ReportRenderer:
    return PdfReportRenderer()


def get_vaccination_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifier: Notifier = Depends(get_notifier),
    report_renderer: ReportRenderer = Depends(get_report_renderer),
) -> VaccinationService:
    return VaccinationService(
        branches=SqlBranchRepository(db),
        vaccines=SqlVaccineRepository(db),
        time_slots=SqlTimeSlotRepository(db),
        payment_methods=SqlPaymentMethodRepository(db),
        customers=SqlCustomerRepository(db),
        schedules=SqlScheduleRepository(db),
        notifier=notifier,
        report_renderer=report_renderer,
        properties=settings.booking_properties(),
    )
