# backend/vaccination/schemas/catalog.py

from typing import Optional
from pydantic import BaseModel


class VaccineRead(BaseModel):
    code: str
    name: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class BranchRead(BaseModel):
    code: str
    name: str

    model_config = {"from_attributes": True}


class TimeSlotRead(BaseModel):
    id: int
    start_time: str  # "HH:MM"
    end_time: str    # "HH:MM"

    model_config = {"from_attributes": True}


class PaymentMethodRead(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}
