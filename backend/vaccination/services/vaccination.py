# backend/vaccination/services/vaccination.py
"""
Vaccination booking service.

Catalog lookups, slot availability, booking validation and creation,
status flags and the schedule report. Storage, mail delivery and document
rendering are injected collaborators.
"""

import base64
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..config import BookingProperties
from ..errors import ErrorCode, PreconditionError, ScheduleConflictError
from ..models import (
    Branches,
    Customers,
    PaymentMethods,
    TimeSlots,
    VaccinationSchedules,
    Vaccines,
)
from ..repositories import (
    BranchRepository,
    CustomerRepository,
    PaymentMethodRepository,
    ScheduleRepository,
    TimeSlotRepository,
    VaccineRepository,
)
from .availability import exclude_booked_slots
from .notifications import Notifier
from .reports import ReportRenderer, ScheduleReportModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleRequest:
    branch_code: str
    vaccine_code: str
    payment_method_id: int
    time_slot_id: int
    schedule_date: date
    customer_name: str
    customer_national_number: str
    email: str


@dataclass(frozen=True)
class ScheduleReport:
    """Rendered report, base64 encoded."""
    report: str


def generate_schedule_code() -> str:
    return str(uuid.uuid4())


class VaccinationService:

    def __init__(
        self,
        *,
        branches: BranchRepository,
        vaccines: VaccineRepository,
        time_slots: TimeSlotRepository,
        payment_methods: PaymentMethodRepository,
        customers: CustomerRepository,
        schedules: ScheduleRepository,
        notifier: Notifier,
        report_renderer: ReportRenderer,
        properties: BookingProperties,
    ) -> None:
        self._branches = branches
        self._vaccines = vaccines
        self._time_slots = time_slots
        self._payment_methods = payment_methods
        self._customers = customers
        self._schedules = schedules
        self._notifier = notifier
        self._report_renderer = report_renderer
        self._properties = properties

    # ──────────────────────────────────────────────────────────────────────
    # Catalog
    # ──────────────────────────────────────────────────────────────────────

    def list_branches(self) -> List[Branches]:
        return self._branches.find_all()

    def list_vaccines_for_branch(self, branch_code: str) -> List[Vaccines]:
        branch = self._branches.find_by_code(branch_code)
        if branch is None:
            raise PreconditionError(
                ErrorCode.INTERNAL_SERVER_ERROR,
                f"Branch {branch_code} not found",
            )
        return list(branch.vaccines)

    def list_payment_methods(self) -> List[PaymentMethods]:
        return self._payment_methods.find_all()

    def list_time_slots(self) -> List[TimeSlots]:
        return self._time_slots.find_all()

    # ──────────────────────────────────────────────────────────────────────
    # Availability
    # ──────────────────────────────────────────────────────────────────────

    def available_time_slots(self, branch_code: str, target_date: date) -> List[TimeSlots]:
        """All time slots minus those already booked at the branch on that date."""
        time_slots = self._time_slots.find_all()
        schedules = self._schedules.find_by_branch_and_date(branch_code, target_date)
        return exclude_booked_slots(time_slots, schedules)

    # ──────────────────────────────────────────────────────────────────────
    # Booking
    # ──────────────────────────────────────────────────────────────────────

    def schedule_vaccination(self, request: ScheduleRequest) -> VaccinationSchedules:
        """
        Validate and record a booking, then email the confirmation.

        Validation order: branch, vaccine, payment method, time slot, slot
        availability. The confirmation is sent after the booking is committed;
        a delivery failure propagates but the booking stays.

        Raises:
            PreconditionError: On the first failed check
        """
        branch = self._branches.find_by_code(request.branch_code)
        if branch is None:
            raise PreconditionError(ErrorCode.INVALID_BRANCH_CODE)

        vaccine = self._vaccines.find_by_code(request.vaccine_code)
        if vaccine is None:
            raise PreconditionError(ErrorCode.INVALID_VACCINE_CODE)

        payment_method = self._payment_methods.find_by_id(request.payment_method_id)
        if payment_method is None:
            raise PreconditionError(ErrorCode.INVALID_PAYMENT_METHOD)

        time_slot = self._time_slots.find_by_id(request.time_slot_id)
        if time_slot is None:
            raise PreconditionError(ErrorCode.INVALID_TIMESLOT_ID)

        if not self._is_time_slot_available(time_slot, request.schedule_date, branch):
            raise PreconditionError(ErrorCode.TIMESLOT_UNAVAILABLE)

        customer = self._customers.save(Customers(
            name=request.customer_name,
            national_number=request.customer_national_number,
            email=request.email,
        ))

        schedule = VaccinationSchedules.create(
            code=generate_schedule_code(),
            schedule_date=request.schedule_date,
            time_slot=time_slot,
            branch=branch,
            vaccine=vaccine,
            customer=customer,
            payment_method=payment_method,
        )

        try:
            schedule = self._schedules.save(schedule)
        except ScheduleConflictError as e:
            raise PreconditionError(ErrorCode.TIMESLOT_UNAVAILABLE, str(e)) from e

        logger.info(
            f"Schedule created: {schedule.code} "
            f"branch={branch.code} date={schedule.schedule_date} slot={time_slot.id}"
        )

        self._send_confirmation(schedule)

        return schedule

    def _is_time_slot_available(self, time_slot: TimeSlots, schedule_date: date, branch: Branches) -> bool:
        return self._schedules.find_booked(time_slot.id, schedule_date, branch.code) is None

    def _send_confirmation(self, schedule: VaccinationSchedules) -> None:
        self._notifier.send(
            schedule.customer.email,
            self._properties.email_subject,
            self._properties.format_email_body(schedule.code),
        )

    # ──────────────────────────────────────────────────────────────────────
    # Status
    # ──────────────────────────────────────────────────────────────────────

    def get_schedule(self, schedule_code: str) -> VaccinationSchedules:
        schedule = self._schedules.find_by_code(schedule_code)
        if schedule is None:
            raise PreconditionError(ErrorCode.INVALID_SCHEDULE)
        return schedule

    def confirm_schedule(self, schedule_code: str) -> VaccinationSchedules:
        """Set the confirmed flag."""
        schedule = self.get_schedule(schedule_code)
        schedule.confirmed = True
        schedule = self._schedules.update(schedule)
        logger.info(f"Schedule confirmed: {schedule_code}")
        return schedule

    def mark_applied(self, schedule_code: str) -> VaccinationSchedules:
        """Set the applied flag."""
        schedule = self.get_schedule(schedule_code)
        schedule.applied = True
        schedule = self._schedules.update(schedule)
        logger.info(f"Schedule marked as applied: {schedule_code}")
        return schedule

    # ──────────────────────────────────────────────────────────────────────
    # Report
    # ──────────────────────────────────────────────────────────────────────

    def build_schedule_report(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        branch_code: Optional[str] = None,
        applied: Optional[bool] = None,
        confirmed: Optional[bool] = None,
    ) -> ScheduleReport:
        schedules = self._schedules.find_by_filter(
            from_date=from_date,
            to_date=to_date,
            branch_code=branch_code,
            applied=applied,
            confirmed=confirmed,
        )

        model = ScheduleReportModel(
            from_date=from_date.isoformat() if from_date else "",
            to_date=to_date.isoformat() if to_date else "",
            schedules=schedules,
        )

        report_bytes = self._report_renderer.render(self._properties.schedule_report_template, model)
        return ScheduleReport(report=base64.b64encode(report_bytes).decode("ascii"))
