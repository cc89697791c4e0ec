"""
Storage ports and their SQLAlchemy implementations.

The booking service only talks to the Protocol classes below, so any storage
offering find-by-key, find-all, find-by-filter and save can be plugged in.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import ScheduleConflictError
from .models import (
    Branches,
    Customers,
    PaymentMethods,
    TimeSlots,
    VaccinationSchedules,
    Vaccines,
)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Ports
# ──────────────────────────────────────────────────────────────────────────────

class BranchRepository(Protocol):
    def find_all(self) -> List[Branches]: ...

    def find_by_code(self, code: str) -> Optional[Branches]: ...


class VaccineRepository(Protocol):
    def find_by_code(self, code: str) -> Optional[Vaccines]: ...


class TimeSlotRepository(Protocol):
    def find_all(self) -> List[TimeSlots]: ...

    def find_by_id(self, time_slot_id: int) -> Optional[TimeSlots]: ...


class PaymentMethodRepository(Protocol):
    def find_all(self) -> List[PaymentMethods]: ...

    def find_by_id(self, payment_method_id: int) -> Optional[PaymentMethods]: ...


class CustomerRepository(Protocol):
    def save(self, customer: Customers) -> Customers:
        """Stage a new customer; it becomes durable with the next schedule save."""


class ScheduleRepository(Protocol):
    def find_by_code(self, code: str) -> Optional[VaccinationSchedules]: ...

    def find_by_branch_and_date(self, branch_code: str, schedule_date: date) -> List[VaccinationSchedules]: ...

    def find_booked(
        self,
        time_slot_id: int,
        schedule_date: date,
        branch_code: str,
    ) -> Optional[VaccinationSchedules]: ...

    def find_by_filter(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        branch_code: Optional[str] = None,
        applied: Optional[bool] = None,
        confirmed: Optional[bool] = None,
    ) -> List[VaccinationSchedules]: ...

    def save(self, schedule: VaccinationSchedules) -> VaccinationSchedules:
        """
        Persist a new schedule and everything staged with it.

        Raises:
            ScheduleConflictError: If the (branch, date, time slot) is already taken
        """

    def update(self, schedule: VaccinationSchedules) -> VaccinationSchedules:
        """Persist changes to an existing schedule."""


# ──────────────────────────────────────────────────────────────────────────────
# SQLAlchemy implementations
# ──────────────────────────────────────────────────────────────────────────────

class SqlBranchRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Branches]:
        return self.db.query(Branches).order_by(Branches.code).all()

    def find_by_code(self, code: str) -> Optional[Branches]:
        return self.db.get(Branches, code)


class SqlVaccineRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_code(self, code: str) -> Optional[Vaccines]:
        return self.db.get(Vaccines, code)


class SqlTimeSlotRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[TimeSlots]:
        return (
            self.db.query(TimeSlots)
            .order_by(TimeSlots.start_time, TimeSlots.id)
            .all()
        )

    def find_by_id(self, time_slot_id: int) -> Optional[TimeSlots]:
        return self.db.get(TimeSlots, time_slot_id)


class SqlPaymentMethodRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[PaymentMethods]:
        return self.db.query(PaymentMethods).order_by(PaymentMethods.id).all()

    def find_by_id(self, payment_method_id: int) -> Optional[PaymentMethods]:
        return self.db.get(PaymentMethods, payment_method_id)


class SqlCustomerRepository:
    def __init__(self, db: Session):
        self.db = db

    def save(self, customer: Customers) -> Customers:
        self.db.add(customer)
        self.db.flush()
        return customer


class SqlScheduleRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_code(self, code: str) -> Optional[VaccinationSchedules]:
        return (
            self.db.query(VaccinationSchedules)
            .filter(VaccinationSchedules.code == code)
            .first()
        )

    def find_by_branch_and_date(self, branch_code: str, schedule_date: date) -> List[VaccinationSchedules]:
        return (
            self.db.query(VaccinationSchedules)
            .filter(VaccinationSchedules.branch_code == branch_code)
            .filter(VaccinationSchedules.schedule_date == schedule_date)
            .all()
        )

    def find_booked(
        self,
        time_slot_id: int,
        schedule_date: date,
        branch_code: str,
    ) -> Optional[VaccinationSchedules]:
        return (
            self.db.query(VaccinationSchedules)
            .filter(VaccinationSchedules.time_slot_id == time_slot_id)
            .filter(VaccinationSchedules.schedule_date == schedule_date)
            .filter(VaccinationSchedules.branch_code == branch_code)
            .first()
        )

    def find_by_filter(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        branch_code: Optional[str] = None,
        applied: Optional[bool] = None,
        confirmed: Optional[bool] = None,
    ) -> List[VaccinationSchedules]:
        query = (
            self.db.query(VaccinationSchedules)
            .join(TimeSlots, VaccinationSchedules.time_slot_id == TimeSlots.id)
        )

        if from_date is not None:
            query = query.filter(VaccinationSchedules.schedule_date >= from_date)
        if to_date is not None:
            query = query.filter(VaccinationSchedules.schedule_date <= to_date)
        if branch_code is not None:
            query = query.filter(VaccinationSchedules.branch_code == branch_code)
        if applied is not None:
            query = query.filter(VaccinationSchedules.applied == applied)
        if confirmed is not None:
            query = query.filter(VaccinationSchedules.confirmed == confirmed)

        return (
            query
            .order_by(VaccinationSchedules.schedule_date, TimeSlots.start_time, VaccinationSchedules.id)
            .all()
        )

    def save(self, schedule: VaccinationSchedules) -> VaccinationSchedules:
        slot_key = (
            f"time slot {schedule.time_slot.id} at branch {schedule.branch.code} "
            f"on {schedule.schedule_date}"
        )
        self.db.add(schedule)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Schedule insert rejected by storage for {slot_key}: {e.orig}")
            raise ScheduleConflictError(f"{slot_key} is already booked") from e

        self.db.refresh(schedule)
        return schedule

    def update(self, schedule: VaccinationSchedules) -> VaccinationSchedules:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(schedule)
        return schedule
