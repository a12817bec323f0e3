"""Contract milestone models."""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MilestoneType(str, Enum):
    """Contract milestones tracked for every property in contract."""
    DEPOSIT_RECEIVED = "deposit-received"
    HOME_INSPECTION_SCHEDULED = "home-inspection-scheduled"
    LOAN_APPLICATION = "loan-application"
    TITLE_COMMITMENT_RECEIVED = "title-commitment-received"
    APPRAISAL_ORDERED = "appraisal-ordered"
    LOAN_APPROVED = "loan-approved"
    CLEAR_TO_CLOSE = "clear-to-close"
    HUD_SETTLEMENT_STATEMENT = "hud-settlement-statement"

    @property
    def label(self) -> str:
        return MILESTONE_LABELS[self]


MILESTONE_LABELS = {
    MilestoneType.DEPOSIT_RECEIVED: "Deposit Received",
    MilestoneType.HOME_INSPECTION_SCHEDULED: "Home Inspection Scheduled",
    MilestoneType.LOAN_APPLICATION: "Loan Application",
    MilestoneType.TITLE_COMMITMENT_RECEIVED: "Title Commitment Received",
    MilestoneType.APPRAISAL_ORDERED: "Appraisal Ordered",
    MilestoneType.LOAN_APPROVED: "Loan Approved",
    MilestoneType.CLEAR_TO_CLOSE: "Clear to Close",
    MilestoneType.HUD_SETTLEMENT_STATEMENT: "HUD Settlement Statement",
}


class Milestone(BaseModel):
    """A derived contract deadline. ``due_date`` is None when not applicable."""
    model_config = ConfigDict(frozen=True)

    type: MilestoneType = Field(..., description="Milestone type")
    label: str = Field(..., description="Human-readable label")
    due_date: Optional[date] = Field(None, description="Due date, None when the anchor date is missing")

    @property
    def applicable(self) -> bool:
        return self.due_date is not None
