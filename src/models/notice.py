"""Contract notice models - persisted completion flags and classified notices."""

from datetime import date
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoticeStatus(BaseModel):
    """Completion flag for one milestone of one property.

    Stored in ``property_notice_status`` with a unique
    ``(property_id, notice_type)`` constraint.
    """
    property_id: str = Field(..., description="Property ID (FK)")
    notice_type: str = Field(..., description="Milestone type value")
    completed: bool = Field(default=False, description="Marked done by the agent")
    completed_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("property_id", mode="before")
    @classmethod
    def _id_to_text(cls, value: Any) -> str:
        return str(value)

    @property
    def key(self) -> tuple[str, str]:
        return (self.property_id, self.notice_type)


class NoticeItem(BaseModel):
    """A milestone joined with its status and classified against today."""
    model_config = ConfigDict(frozen=True)

    property_id: str
    property_name: str = ""
    property_address: str = ""
    notice_type: str
    label: str
    due_date: date
    completed: bool = False
    overdue: bool = False
    days_until: int = Field(..., description="Days from today to the due date, negative when overdue")

    @property
    def badge(self) -> str:
        if self.overdue:
            return f"{abs(self.days_until)}d overdue"
        if self.days_until == 0:
            return "Today"
        return f"{self.days_until}d"


class NoticeSummary(BaseModel):
    """Actionable contract notices, each list sorted by due date."""
    overdue: list[NoticeItem] = Field(default_factory=list)
    upcoming: list[NoticeItem] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.overdue) + len(self.upcoming)

    @property
    def is_empty(self) -> bool:
        return self.count == 0


class OverdueProperty(BaseModel):
    """One property's overdue milestone labels, addressed to its listing agent."""
    agent_id: Optional[str] = None
    property_id: str
    property_name: str = ""
    property_address: str = ""
    overdue_notices: list[str] = Field(default_factory=list)


class DeadlineSweep(BaseModel):
    """Result of a scheduled overdue-deadline check across contract properties."""
    properties_checked: int = 0
    overdue_count: int = Field(0, description="Properties with at least one overdue notice")
    overdue_items: list[OverdueProperty] = Field(default_factory=list)

    @property
    def by_agent(self) -> dict[Optional[str], list[OverdueProperty]]:
        grouped: dict[Optional[str], list[OverdueProperty]] = {}
        for item in self.overdue_items:
            grouped.setdefault(item.agent_id, []).append(item)
        return grouped
