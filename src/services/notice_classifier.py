"""Notice classifier - turn derived milestones into actionable contract notices."""

from datetime import date, datetime
from typing import Iterable, Mapping

from src.models.deal import PropertyScheduleRecord
from src.models.milestone import Milestone
from src.models.notice import NoticeItem, NoticeStatus, NoticeSummary
from src.utils.dates import add_days
from src.utils.logging import get_structured_logger, mask_record_id

logger = get_structured_logger(__name__)

# Incomplete milestones further out than this are not surfaced yet
NOTICE_HORIZON_DAYS = 3

StatusKey = tuple[str, str]


def build_status_map(statuses: Iterable[NoticeStatus]) -> dict[StatusKey, bool]:
    """Index completion flags by ``(property_id, notice_type)``."""
    status_map: dict[StatusKey, bool] = {}
    for status in statuses:
        if status.key in status_map:
            # The store guarantees uniqueness; a repeat means that contract broke
            logger.warning(
                "Duplicate notice status for key",
                property_id=mask_record_id(status.property_id),
                notice_type=status.notice_type,
            )
        status_map[status.key] = status.completed
    return status_map


def classify_notices(
    milestones_by_property: Mapping[str, tuple[PropertyScheduleRecord, list[Milestone]]],
    statuses: Iterable[NoticeStatus],
    today: date,
) -> NoticeSummary:
    """
    Split incomplete milestones due within the notice horizon into overdue and upcoming.

    A milestone is overdue when its due date is before ``today``; one due today
    or up to ``NOTICE_HORIZON_DAYS`` ahead is upcoming. Anything later is left
    out entirely.
    """
    if isinstance(today, datetime):
        today = today.date()
    status_map = build_status_map(statuses)
    horizon = add_days(today, NOTICE_HORIZON_DAYS)

    items: list[NoticeItem] = []
    for property_id, (schedule, milestones) in milestones_by_property.items():
        for milestone in milestones:
            if milestone.due_date is None:
                continue
            if status_map.get((property_id, milestone.type.value), False):
                continue
            if milestone.due_date > horizon:
                continue
            items.append(NoticeItem(
                property_id=property_id,
                property_name=schedule.name,
                property_address=schedule.street_address,
                notice_type=milestone.type.value,
                label=milestone.label,
                due_date=milestone.due_date,
                completed=False,
                overdue=milestone.due_date < today,
                days_until=(milestone.due_date - today).days,
            ))

    items.sort(key=lambda item: item.due_date)
    summary = NoticeSummary(
        overdue=[item for item in items if item.overdue],
        upcoming=[item for item in items if not item.overdue],
    )

    logger.debug(
        "Classified contract notices",
        properties=len(milestones_by_property),
        overdue=len(summary.overdue),
        upcoming=len(summary.upcoming),
        today=today.isoformat(),
    )
    return summary
