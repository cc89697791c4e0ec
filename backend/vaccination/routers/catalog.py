# backend/vaccination/routers/catalog.py
# Reference data: read-only

from fastapi import APIRouter, Depends

from ..dependencies import get_vaccination_service
from ..schemas.catalog import PaymentMethodRead, TimeSlotRead
from ..services.vaccination import VaccinationService

router = APIRouter(tags=["catalog"])


@router.get("/payment-methods/", response_model=list[PaymentMethodRead])
def list_payment_methods(service: VaccinationService = Depends(get_vaccination_service)):
    return service.list_payment_methods()


@router.get("/time-slots/", response_model=list[TimeSlotRead])
def list_time_slots(service: VaccinationService = Depends(get_vaccination_service)):
    return service.list_time_slots()
