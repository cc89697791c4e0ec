# backend/vaccination/routers/branches.py
# Reference data: read-only

from datetime import date

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_vaccination_service
from ..schemas.catalog import BranchRead, TimeSlotRead, VaccineRead
from ..services.vaccination import VaccinationService

router = APIRouter(prefix="/branches", tags=["branches"])


@router.get("/", response_model=list[BranchRead])
def list_branches(service: VaccinationService = Depends(get_vaccination_service)):
    return service.list_branches()


@router.get("/{branch_code}/vaccines", response_model=list[VaccineRead])
def list_branch_vaccines(
    branch_code: str,
    service: VaccinationService = Depends(get_vaccination_service),
):
    return service.list_vaccines_for_branch(branch_code)


@router.get("/{branch_code}/time-slots", response_model=list[TimeSlotRead])
def list_available_time_slots(
    branch_code: str,
    target_date: date = Query(..., alias="date"),
    service: VaccinationService = Depends(get_vaccination_service),
):
    """Time slots still free at the branch on the given date."""
    return service.available_time_slots(branch_code, target_date)
