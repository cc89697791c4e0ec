# backend/vaccination/services/availability.py
"""
Free time slots for a branch on a given day.

Time slots are branch-agnostic reference data; only schedules are bound to a
branch and a date. Availability is the full slot listing minus every slot
already referenced by a schedule of that branch/date.
"""

from typing import Iterable, List

from ..models import TimeSlots, VaccinationSchedules


def exclude_booked_slots(
    time_slots: Iterable[TimeSlots],
    schedules: Iterable[VaccinationSchedules],
) -> List[TimeSlots]:
    """
    Return the slots not referenced by any of the given schedules.

    Keeps the order of ``time_slots``.
    """
    booked = {schedule.time_slot_id for schedule in schedules}
    return [slot for slot in time_slots if slot.id not in booked]
