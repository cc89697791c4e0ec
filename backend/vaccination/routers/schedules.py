# backend/vaccination/routers/schedules.py
# No DELETE: schedules are only created and flagged

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status

from ..dependencies import get_vaccination_service
from ..schemas.schedules import (
    ErrorRead,
    ScheduleCreate,
    ScheduleRead,
    ScheduleReportRead,
)
from ..services.vaccination import ScheduleRequest, VaccinationService

router = APIRouter(prefix="/schedules", tags=["schedules"])

PRECONDITION_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorRead},
    status.HTTP_404_NOT_FOUND: {"model": ErrorRead},
    status.HTTP_409_CONFLICT: {"model": ErrorRead},
}


@router.post(
    "/",
    response_model=ScheduleRead,
    status_code=status.HTTP_201_CREATED,
    responses=PRECONDITION_RESPONSES,
)
def create_schedule(
    data: ScheduleCreate,
    service: VaccinationService = Depends(get_vaccination_service),
):
    return service.schedule_vaccination(ScheduleRequest(**data.model_dump()))


# Declared before /{code} so "report" is not taken as a schedule code
@router.get("/report", response_model=ScheduleReportRead)
def get_schedule_report(
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    branch_code: Optional[str] = None,
    applied: Optional[bool] = None,
    confirmed: Optional[bool] = None,
    service: VaccinationService = Depends(get_vaccination_service),
):
    return service.build_schedule_report(
        from_date=from_date,
        to_date=to_date,
        branch_code=branch_code,
        applied=applied,
        confirmed=confirmed,
    )


@router.get("/{code}", response_model=ScheduleRead, responses=PRECONDITION_RESPONSES)
def get_schedule(code: str, service: VaccinationService = Depends(get_vaccination_service)):
    return service.get_schedule(code)


@router.put("/{code}/confirm", response_model=ScheduleRead, responses=PRECONDITION_RESPONSES)
def confirm_schedule(code: str, service: VaccinationService = Depends(get_vaccination_service)):
    return service.confirm_schedule(code)


@router.put("/{code}/applied", response_model=ScheduleRead, responses=PRECONDITION_RESPONSES)
def mark_schedule_applied(code: str, service: VaccinationService = Depends(get_vaccination_service)):
    return service.mark_applied(code)
