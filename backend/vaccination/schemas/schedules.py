# backend/vaccination/schemas/schedules.py

from datetime import date
from pydantic import BaseModel, Field

from .catalog import BranchRead, PaymentMethodRead, TimeSlotRead, VaccineRead


class ScheduleCreate(BaseModel):
    branch_code: str = Field(min_length=1)
    vaccine_code: str = Field(min_length=1)
    payment_method_id: int
    time_slot_id: int
    schedule_date: date

    customer_name: str = Field(min_length=1)
    customer_national_number: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")


class CustomerRead(BaseModel):
    id: int
    name: str
    national_number: str
    email: str

    model_config = {"from_attributes": True}


class ScheduleRead(BaseModel):
    code: str
    schedule_date: date

    time_slot: TimeSlotRead
    branch: BranchRead
    vaccine: VaccineRead
    customer: CustomerRead
    payment_method: PaymentMethodRead

    confirmed: bool
    applied: bool

    model_config = {"from_attributes": True}


class ScheduleReportRead(BaseModel):
    report: str = Field(description="Base64 encoded PDF document")

    model_config = {"from_attributes": True}


class ErrorRead(BaseModel):
    code: str
    detail: str
