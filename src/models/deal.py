"""Deal record models - contract terms for one property sale."""

import re
from datetime import date
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.utils.dates import parse_calendar_date
from src.utils.numbers import TRUTHY_TEXT, coerce_flag, coerce_int, coerce_non_negative, coerce_number

DEPOSIT_DAYS_PATTERN = re.compile(r"(\d+)\s*days?", re.IGNORECASE)

DEPOSIT_ACCEPTANCE_LABEL = "Within 3 Days of Acceptance"
DEPOSIT_REMEDY_LABEL = "Within 3 Days of Remedy Expiration"
DEPOSIT_OTHER_LABEL = "Other"

WAIVED_LABEL = "Waived"


class ContingencyPeriod(BaseModel):
    """A contingency length: either waived, or a positive number of days.

    A raw day count of zero means the buyer waived the contingency, not that
    it is due the same day, so the two cases are kept apart here.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["waived", "days"] = "waived"
    days: int = 0

    @model_validator(mode="after")
    def _check_days(self) -> "ContingencyPeriod":
        if self.kind == "days" and self.days <= 0:
            raise ValueError("a days contingency period must be positive")
        if self.kind == "waived" and self.days != 0:
            raise ValueError("a waived contingency period has no days")
        return self

    @classmethod
    def from_days(cls, days: Any) -> "ContingencyPeriod":
        count = coerce_int(days)
        if count <= 0:
            return cls(kind="waived")
        return cls(kind="days", days=count)

    @property
    def waived(self) -> bool:
        return self.kind == "waived"

    def label(self) -> str:
        if self.waived:
            return WAIVED_LABEL
        return f"{self.days} days"


class DepositTerms(BaseModel):
    """Deposit-collection policy normalized from free text."""
    model_config = ConfigDict(frozen=True)

    raw: Optional[str] = None
    days: Optional[int] = Field(None, description="Days after acceptance, None when unrecognized")
    anchor: Literal["acceptance", "remedy_expiration", "other"] = "other"

    @classmethod
    def parse(cls, text: Optional[str]) -> "DepositTerms":
        if not text or not str(text).strip():
            return cls()
        raw = str(text).strip()
        lower = raw.lower()

        if "acceptance" in lower:
            anchor = "acceptance"
        elif "remedy" in lower or "expiration" in lower or "expire" in lower:
            anchor = "remedy_expiration"
        else:
            anchor = "other"

        match = DEPOSIT_DAYS_PATTERN.search(raw)
        days = int(match.group(1)) if match else None
        return cls(raw=raw, days=days, anchor=anchor)

    @property
    def canonical_label(self) -> Optional[str]:
        if self.raw is None:
            return None
        if self.anchor == "acceptance":
            return DEPOSIT_ACCEPTANCE_LABEL
        if self.anchor == "remedy_expiration":
            return DEPOSIT_REMEDY_LABEL
        return DEPOSIT_OTHER_LABEL


def _coerce_date(value: Any) -> Optional[date]:
    return parse_calendar_date(value)


def _coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class PropertyScheduleRecord(BaseModel):
    """The subset of a deal needed to derive contract milestones."""
    id: Optional[str] = Field(None, description="Property ID")
    agent_id: Optional[str] = Field(None, description="Listing agent ID")
    name: str = Field(default="", description="Display name (usually the seller)")
    street_address: str = Field(default="", description="Street address")
    in_contract: Optional[date] = Field(None, description="Contract execution date")
    closing_date: Optional[date] = Field(None, description="Closing date")
    inspection_days: int = Field(default=0, description="Inspection period in days, 0 when waived")
    loan_app_time_frame: Optional[str] = Field(None, description="Loan application timeframe (days, as text)")
    loan_commitment: Optional[str] = Field(None, description="Loan commitment timeframe (days, as text)")
    deposit_collection: Optional[str] = Field(None, description="Deposit collection policy text")

    @field_validator("id", "agent_id", mode="before")
    @classmethod
    def _id_to_text(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("name", "street_address", mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("in_contract", "closing_date", mode="before")
    @classmethod
    def _naive_date(cls, value: Any) -> Optional[date]:
        return _coerce_date(value)

    @field_validator("inspection_days", mode="before")
    @classmethod
    def _days(cls, value: Any) -> int:
        return max(coerce_int(value), 0)

    @field_validator("loan_app_time_frame", "loan_commitment", "deposit_collection", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return _coerce_text(value)

    @property
    def inspection_period(self) -> ContingencyPeriod:
        return ContingencyPeriod.from_days(self.inspection_days)

    @property
    def deposit_terms(self) -> DepositTerms:
        return DepositTerms.parse(self.deposit_collection)


class DealRecord(PropertyScheduleRecord):
    """Raw contract terms for one property sale.

    Every numeric field defaults to zero and silently absorbs junk input, so
    a half-filled form still produces a complete estimate.
    """
    city: str = ""
    state: str = ""
    zip: str = ""

    # Financial details
    offer_price: float = Field(default=0.0, description="Offer / selling price")
    first_mortgage: float = Field(default=0.0, description="First mortgage payoff")
    second_mortgage: float = Field(default=0.0, description="Second mortgage payoff")
    listing_agent_commission: float = Field(default=0.0, description="Listing-side commission rate (percent)")
    buyer_agent_commission: float = Field(default=0.0, description="Buyer-side commission rate (percent)")
    closing_cost: float = Field(default=0.0, description="Closing cost credit to the buyer")

    # Additional costs
    deposit: float = Field(default=0.0, description="Earnest-money deposit")
    home_warranty: float = Field(default=0.0, description="Home warranty cost")
    home_warranty_company: Optional[str] = None
    admin_fee: float = Field(default=0.0, description="Brokerage admin fee")

    # Dates
    possession: Optional[str] = Field(None, description="Possession date or description")
    final_walk_through: Optional[str] = Field(None, description="Final walk-through terms")

    remedy_period_days: int = Field(default=0, description="Remedy period in days, 0 when waived")

    # Tax information
    annual_taxes: float = Field(default=0.0, description="Annual property tax amount")
    first_half_paid: bool = False
    second_half_paid: bool = False
    days_first_half_taxes: Optional[float] = Field(None, description="Day-count override for first-half taxes")
    days_second_half_taxes: Optional[float] = Field(None, description="Day-count override for second-half taxes")

    @field_validator("city", "state", "zip", mode="before")
    @classmethod
    def _blank_address(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator(
        "offer_price", "first_mortgage", "second_mortgage", "closing_cost",
        "deposit", "home_warranty", "admin_fee", "annual_taxes",
        "listing_agent_commission", "buyer_agent_commission",
        mode="before",
    )
    @classmethod
    def _money(cls, value: Any) -> float:
        return coerce_non_negative(value)

    @field_validator("remedy_period_days", mode="before")
    @classmethod
    def _remedy_days(cls, value: Any) -> int:
        return max(coerce_int(value), 0)

    @field_validator("first_half_paid", "second_half_paid", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value, truthy=TRUTHY_TEXT + ("paid",))

    @field_validator("days_first_half_taxes", "days_second_half_taxes", mode="before")
    @classmethod
    def _day_override(cls, value: Any) -> Optional[float]:
        days = coerce_number(value)
        # Zero or blank means no override
        return days if days > 0 else None

    @field_validator("home_warranty_company", "possession", "final_walk_through", mode="before")
    @classmethod
    def _extra_text(cls, value: Any) -> Optional[str]:
        return _coerce_text(value)

    @property
    def remedy_period(self) -> ContingencyPeriod:
        return ContingencyPeriod.from_days(self.remedy_period_days)

    def schedule(self) -> PropertyScheduleRecord:
        """Project the deal onto the fields milestone derivation needs."""
        return PropertyScheduleRecord(
            id=self.id,
            agent_id=self.agent_id,
            name=self.name,
            street_address=self.street_address,
            in_contract=self.in_contract,
            closing_date=self.closing_date,
            inspection_days=self.inspection_days,
            loan_app_time_frame=self.loan_app_time_frame,
            loan_commitment=self.loan_commitment,
            deposit_collection=self.deposit_collection,
        )
