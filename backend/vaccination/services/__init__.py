# backend/vaccination/services/__init__.py
"""
Booking services.

The VaccinationService holds the booking rules; notifications and reports are
the collaborators it delegates to.
"""

from .availability import exclude_booked_slots
from .notifications import EmailNotifier, Notifier
from .reports import PdfReportRenderer, ReportRenderer, ScheduleReportModel
from .vaccination import ScheduleReport, ScheduleRequest, VaccinationService

__all__ = [
    "exclude_booked_slots",
    "EmailNotifier",
    "Notifier",
    "PdfReportRenderer",
    "ReportRenderer",
    "ScheduleReportModel",
    "ScheduleReport",
    "ScheduleRequest",
    "VaccinationService",
]
