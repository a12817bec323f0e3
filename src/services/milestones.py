"""Milestone deadline deriver - contract deadlines from anchor dates."""

import re
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict

from src.models.deal import DealRecord, PropertyScheduleRecord, WAIVED_LABEL
from src.models.milestone import Milestone, MilestoneType
from src.utils.dates import add_days, format_long

DEFAULT_LOAN_APPLICATION_DAYS = 7
DEFAULT_LOAN_COMMITMENT_DAYS = 21

TITLE_COMMITMENT_DAYS_BEFORE_CLOSING = 15
APPRAISAL_DAYS_BEFORE_CLOSING = 14
CLEAR_TO_CLOSE_DAYS_BEFORE_CLOSING = 4
HUD_SETTLEMENT_DAYS_BEFORE_CLOSING = 2

UTILITIES_CALL_DAYS_BEFORE_CLOSING = 10
CHANGE_OF_ADDRESS_DAYS_BEFORE_CLOSING = 10
UTILITIES_SHUTOFF_DAYS_AFTER_CLOSING = 1

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_timeframe_days(text: Optional[str], default: int) -> int:
    """Leading integer of a timeframe field such as ``"21"`` or ``"21 days"``."""
    if not text:
        return default
    match = _LEADING_INT.match(text)
    if not match:
        return default
    days = int(match.group(1))
    return days if days > 0 else default


def _after(anchor: Optional[date], days: Optional[int]) -> Optional[date]:
    if anchor is None or days is None:
        return None
    return _shift(anchor, days)


def _before(anchor: Optional[date], days: int) -> Optional[date]:
    if anchor is None:
        return None
    return _shift(anchor, -days)


def _shift(anchor: date, days: int) -> Optional[date]:
    try:
        return add_days(anchor, days)
    except OverflowError:
        # A mistyped day count past the calendar's range has no real deadline
        return None


def milestone_schedule(schedule: PropertyScheduleRecord) -> list[Milestone]:
    """All eight milestones in fixed order, with ``due_date=None`` where not applicable."""
    in_contract = schedule.in_contract
    closing = schedule.closing_date
    inspection = schedule.inspection_period

    due_dates = {
        MilestoneType.DEPOSIT_RECEIVED: _after(in_contract, schedule.deposit_terms.days),
        MilestoneType.HOME_INSPECTION_SCHEDULED: (
            None if inspection.waived else _after(in_contract, inspection.days)
        ),
        MilestoneType.LOAN_APPLICATION: _after(
            in_contract, parse_timeframe_days(schedule.loan_app_time_frame, DEFAULT_LOAN_APPLICATION_DAYS)
        ),
        MilestoneType.TITLE_COMMITMENT_RECEIVED: _before(closing, TITLE_COMMITMENT_DAYS_BEFORE_CLOSING),
        MilestoneType.APPRAISAL_ORDERED: _before(closing, APPRAISAL_DAYS_BEFORE_CLOSING),
        MilestoneType.LOAN_APPROVED: _after(
            in_contract, parse_timeframe_days(schedule.loan_commitment, DEFAULT_LOAN_COMMITMENT_DAYS)
        ),
        MilestoneType.CLEAR_TO_CLOSE: _before(closing, CLEAR_TO_CLOSE_DAYS_BEFORE_CLOSING),
        MilestoneType.HUD_SETTLEMENT_STATEMENT: _before(closing, HUD_SETTLEMENT_DAYS_BEFORE_CLOSING),
    }

    return [
        Milestone(type=milestone_type, label=milestone_type.label, due_date=due_dates[milestone_type])
        for milestone_type in MilestoneType
    ]


def derive_milestones(schedule: PropertyScheduleRecord) -> list[Milestone]:
    """Applicable milestones for a property, in fixed milestone order."""
    return [milestone for milestone in milestone_schedule(schedule) if milestone.applicable]


class ContingencyDeadline(BaseModel):
    """End of a contingency period, or the waived state."""
    model_config = ConfigDict(frozen=True)

    waived: bool = False
    due_date: Optional[date] = None

    def display(self) -> str:
        if self.waived:
            return WAIVED_LABEL
        return format_long(self.due_date)


class ContingencyDeadlines(BaseModel):
    model_config = ConfigDict(frozen=True)

    inspection: ContingencyDeadline
    remedy: ContingencyDeadline


def contingency_deadlines(deal: DealRecord) -> ContingencyDeadlines:
    """Inspection and remedy-request deadlines; the remedy period runs after inspection ends."""
    inspection = deal.inspection_period
    remedy = deal.remedy_period

    if inspection.waived:
        inspection_deadline = ContingencyDeadline(waived=True)
    else:
        inspection_deadline = ContingencyDeadline(due_date=_after(deal.in_contract, inspection.days))

    if remedy.waived:
        remedy_deadline = ContingencyDeadline(waived=True)
    else:
        remedy_deadline = ContingencyDeadline(
            due_date=_after(deal.in_contract, inspection.days + remedy.days)
        )

    return ContingencyDeadlines(inspection=inspection_deadline, remedy=remedy_deadline)


def move_out_reminders(closing_date: Optional[date]) -> dict[str, Optional[date]]:
    """Seller move-out reminder dates keyed by reminder name."""
    return {
        "utilities_call": _before(closing_date, UTILITIES_CALL_DAYS_BEFORE_CLOSING),
        "change_of_address": _before(closing_date, CHANGE_OF_ADDRESS_DAYS_BEFORE_CLOSING),
        "utilities_shutoff": _after(closing_date, UTILITIES_SHUTOFF_DAYS_AFTER_CLOSING),
    }
