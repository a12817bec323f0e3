"""Tests for notice and milestone models."""

import pytest
from datetime import date
from src.models.milestone import Milestone, MilestoneType
from src.models.notice import DeadlineSweep, NoticeItem, NoticeStatus, NoticeSummary, OverdueProperty


def _item(days_until: int, overdue: bool) -> NoticeItem:
    return NoticeItem(
        property_id="prop-1",
        notice_type="clear-to-close",
        label="Clear to Close",
        due_date=date(2025, 1, 20),
        overdue=overdue,
        days_until=days_until,
    )


@pytest.mark.unit
def test_milestone_type_labels():
    """Test that every milestone type has a label."""
    assert len(MilestoneType) == 8
    assert MilestoneType.HUD_SETTLEMENT_STATEMENT.label == "HUD Settlement Statement"
    assert MilestoneType("loan-approved") is MilestoneType.LOAN_APPROVED


@pytest.mark.unit
def test_milestone_applicable():
    """Test not-applicable milestones have no due date."""
    missing = Milestone(type=MilestoneType.APPRAISAL_ORDERED, label="Appraisal Ordered")
    present = Milestone(type=MilestoneType.APPRAISAL_ORDERED, label="Appraisal Ordered", due_date=date(2025, 1, 27))

    assert missing.applicable is False
    assert present.applicable is True


@pytest.mark.unit
def test_notice_status_key():
    """Test the composite key of a notice status."""
    status = NoticeStatus(property_id=7, notice_type="deposit-received", completed=True)

    assert status.key == ("7", "deposit-received")


@pytest.mark.unit
def test_notice_status_defaults_incomplete():
    """Test that a new status is not completed."""
    status = NoticeStatus(property_id="prop-1", notice_type="deposit-received")

    assert status.completed is False
    assert status.completed_at is None


@pytest.mark.unit
@pytest.mark.parametrize("days_until,overdue,badge", [
    (-3, True, "3d overdue"),
    (0, False, "Today"),
    (2, False, "2d"),
])
def test_notice_item_badge(days_until, overdue, badge):
    """Test the badge text shown next to a notice."""
    assert _item(days_until, overdue).badge == badge


@pytest.mark.unit
def test_notice_summary_empty():
    """Test an empty summary means nothing needs attention."""
    summary = NoticeSummary()

    assert summary.is_empty is True
    assert summary.count == 0


@pytest.mark.unit
def test_notice_summary_count():
    """Test counting across both lists."""
    summary = NoticeSummary(overdue=[_item(-1, True)], upcoming=[_item(1, False), _item(2, False)])

    assert summary.count == 3
    assert summary.is_empty is False


@pytest.mark.unit
def test_deadline_sweep_by_agent():
    """Test grouping overdue properties by listing agent in report order."""
    sweep = DeadlineSweep(
        properties_checked=4,
        overdue_count=3,
        overdue_items=[
            OverdueProperty(agent_id="agent-2", property_id="prop-2", overdue_notices=["Loan Application"]),
            OverdueProperty(agent_id="agent-1", property_id="prop-1", overdue_notices=["Deposit Received"]),
            OverdueProperty(agent_id="agent-2", property_id="prop-4", overdue_notices=["Clear to Close"]),
        ],
    )

    grouped = sweep.by_agent

    assert list(grouped) == ["agent-2", "agent-1"]
    assert [item.property_id for item in grouped["agent-2"]] == ["prop-2", "prop-4"]


@pytest.mark.unit
def test_deadline_sweep_empty():
    sweep = DeadlineSweep()

    assert sweep.overdue_count == 0
    assert sweep.by_agent == {}
