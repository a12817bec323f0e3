"""Contract notices service - load deals, derive milestones, classify, and track completion."""

from datetime import date
from typing import Callable, Optional

from src.models.closing_costs import CostBreakdown
from src.models.fee_schedule import FeeSchedule
from src.models.milestone import MilestoneType
from src.models.notice import DeadlineSweep, NoticeStatus, NoticeSummary, OverdueProperty
from src.services.closing_costs import compute_closing_costs
from src.services.fee_schedule import get_fee_schedule
from src.services.milestones import derive_milestones
from src.services.notice_classifier import classify_notices
from src.services.supabase_client import (
    get_deal_record,
    get_property_schedule,
    list_contract_properties,
    list_notice_statuses,
    upsert_notice_status,
)
from src.utils.errors import NoticeError, NotFoundError
from src.utils.logging import get_structured_logger, log_timing, mask_record_id, timed

logger = get_structured_logger(__name__)

TodayProvider = Callable[[], date]


def _today(today_provider: Optional[TodayProvider]) -> date:
    return (today_provider or date.today)()


async def get_contract_notices(today_provider: Optional[TodayProvider] = None) -> NoticeSummary:
    """Overdue and upcoming notices across every property under contract."""
    with log_timing("get_contract_notices", logger=logger):
        schedules = await list_contract_properties()
        if not schedules:
            return NoticeSummary()

        statuses = await list_notice_statuses([s.id for s in schedules if s.id])
        milestones_by_property = {
            schedule.id: (schedule, derive_milestones(schedule))
            for schedule in schedules
            if schedule.id
        }
        summary = classify_notices(milestones_by_property, statuses, _today(today_provider))

    logger.info(
        "Contract notices computed",
        properties=len(milestones_by_property),
        overdue=len(summary.overdue),
        upcoming=len(summary.upcoming),
    )
    return summary


async def check_notice_deadlines(today_provider: Optional[TodayProvider] = None) -> DeadlineSweep:
    """Collect overdue notices per property and report them grouped by listing agent.

    Meant to run on a schedule. Properties without an overdue notice are left
    out of ``overdue_items``; each property lists its overdue milestone labels
    in due-date order.
    """
    with log_timing("check_notice_deadlines", logger=logger):
        schedules = [s for s in await list_contract_properties() if s.id]
        if not schedules:
            return DeadlineSweep()

        statuses = await list_notice_statuses([s.id for s in schedules])
        summary = classify_notices(
            {schedule.id: (schedule, derive_milestones(schedule)) for schedule in schedules},
            statuses,
            _today(today_provider),
        )

    labels_by_property: dict[str, list[str]] = {}
    for item in summary.overdue:
        labels_by_property.setdefault(item.property_id, []).append(item.label)

    overdue_items = [
        OverdueProperty(
            agent_id=schedule.agent_id,
            property_id=schedule.id,
            property_name=schedule.name,
            property_address=schedule.street_address,
            overdue_notices=labels_by_property[schedule.id],
        )
        for schedule in schedules
        if schedule.id in labels_by_property
    ]
    sweep = DeadlineSweep(
        properties_checked=len(schedules),
        overdue_count=len(overdue_items),
        overdue_items=overdue_items,
    )

    for agent_id, items in sweep.by_agent.items():
        logger.warning(
            "Overdue contract notices for agent",
            agent_id=mask_record_id(agent_id),
            properties=[mask_record_id(item.property_id) for item in items],
            notices=sum(len(item.overdue_notices) for item in items),
        )
    logger.info(
        "Notice deadline check complete",
        properties_checked=sweep.properties_checked,
        overdue_count=sweep.overdue_count,
    )
    return sweep


@timed("get_property_notices", logger=logger)
async def get_property_notices(property_id: str, today_provider: Optional[TodayProvider] = None) -> NoticeSummary:
    """Overdue and upcoming notices for a single property."""
    schedule = await get_property_schedule(property_id)
    if schedule is None:
        raise NotFoundError(f"Property not found: {property_id}")

    statuses = await list_notice_statuses([property_id])
    return classify_notices(
        {property_id: (schedule, derive_milestones(schedule))},
        statuses,
        _today(today_provider),
    )


async def mark_notice_complete(property_id: str, notice_type: str, completed: bool = True) -> NoticeStatus:
    """Set the completion flag for one milestone of one property."""
    try:
        milestone_type = MilestoneType(notice_type)
    except ValueError:
        raise NoticeError(f"Unknown notice type: {notice_type}")

    status = await upsert_notice_status(property_id, milestone_type.value, completed)
    logger.info(
        "Notice status updated",
        property_id=mask_record_id(property_id),
        notice_type=milestone_type.value,
        completed=completed,
    )
    return status


@timed("estimate_closing_costs", logger=logger)
async def estimate_closing_costs(property_id: str, fee_schedule: Optional[FeeSchedule] = None) -> CostBreakdown:
    """Recompute the closing cost breakdown for a stored deal."""
    deal = await get_deal_record(property_id)
    if deal is None:
        raise NotFoundError(f"Property not found: {property_id}")
    return compute_closing_costs(deal, fee_schedule or get_fee_schedule())
