"""Working-day window and bank holiday management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_current_user, get_tracker, require_controller_user
from app.api.errors import domain_errors
from app.schemas import BankHolidayListSchema, BankHolidayRequest, WorkingDaySchema
from app.services.tracker import SignOffTracker
from pnl_signoff.calendar import format_working_day
from pnl_signoff.models import RoleUser

router = APIRouter()


@router.get("/working-days", response_model=list[WorkingDaySchema])
async def working_days(
    count: int | None = Query(default=None, ge=1, le=60),
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> list[WorkingDaySchema]:
    return [WorkingDaySchema(date=day, label=format_working_day(day)) for day in tracker.working_days(count)]


@router.get("/bank-holidays", response_model=BankHolidayListSchema)
async def list_bank_holidays(
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BankHolidayListSchema:
    return BankHolidayListSchema(holidays=tracker.holidays.newest_first())


@router.post("/bank-holidays", response_model=BankHolidayListSchema, status_code=status.HTTP_201_CREATED)
async def add_bank_holiday(
    payload: BankHolidayRequest,
    current_user: RoleUser = Depends(require_controller_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BankHolidayListSchema:
    with domain_errors():
        holidays = tracker.add_holiday(current_user, payload.date)
    return BankHolidayListSchema(holidays=holidays)


@router.delete("/bank-holidays/{holiday}", response_model=BankHolidayListSchema)
async def remove_bank_holiday(
    holiday: str,
    current_user: RoleUser = Depends(require_controller_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> BankHolidayListSchema:
    with domain_errors():
        holidays = tracker.remove_holiday(current_user, holiday)
    return BankHolidayListSchema(holidays=holidays)


__all__ = ["router"]
