from .entities import (
    Base,
    Branches,
    Customers,
    PaymentMethods,
    TimeSlots,
    VaccinationSchedules,
    Vaccines,
    t_branch_vaccines,
)

__all__ = [
    "Base",
    "Branches",
    "Customers",
    "PaymentMethods",
    "TimeSlots",
    "VaccinationSchedules",
    "Vaccines",
    "t_branch_vaccines",
]
