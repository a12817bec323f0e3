"""Seller closing cost breakdown model."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CostBreakdown(BaseModel):
    """Every line of a seller's estimated net sheet.

    ``taxes_first_half`` and ``taxes_second_half`` disclose outstanding
    half-year bills. ``taxes_due_for_year`` is the year-to-date proration owed
    at closing and is the only tax figure deducted from ``estimated_net``.
    """
    model_config = ConfigDict(frozen=True)

    selling_price: float = 0.0
    first_mortgage: float = 0.0
    second_mortgage: float = 0.0
    buyer_closing_cost: float = 0.0

    annual_taxes: float = 0.0
    taxes_first_half: float = 0.0
    taxes_second_half: float = 0.0
    tax_days_due_this_year: int = Field(default=0, description="Ordinal day of closing within its year")
    taxes_due_for_year: float = 0.0

    listing_agent_commission: float = 0.0
    buyer_agent_commission: float = 0.0
    county_conveyance_fee: float = 0.0
    home_warranty: float = 0.0
    home_warranty_company: Optional[str] = None

    title_examination: float = 0.0
    title_settlement: float = 0.0
    closing_fee: float = 0.0
    deed_preparation: float = 0.0
    overnight_fee: float = 0.0
    recording_fee: float = 0.0
    survey_coverage: float = 0.0
    title_insurance: float = 0.0

    admin_fee: float = 0.0
    estimated_net: float = 0.0

    @property
    def title_fees_total(self) -> float:
        return round(
            self.title_examination
            + self.title_settlement
            + self.closing_fee
            + self.deed_preparation
            + self.overnight_fee
            + self.recording_fee
            + self.survey_coverage
            + self.title_insurance,
            2,
        )

    @property
    def total_deductions(self) -> float:
        return round(self.selling_price - self.estimated_net, 2)

    def line_items(self) -> list[tuple[str, float]]:
        """Ordered ``(label, amount)`` rows for the net sheet."""
        return [
            ("Selling Price", self.selling_price),
            ("1st Mortgage", self.first_mortgage),
            ("2nd Mortgage", self.second_mortgage),
            ("Buyer Closing Cost", self.buyer_closing_cost),
            ("Taxes 1st Half", self.taxes_first_half),
            ("Taxes 2nd Half", self.taxes_second_half),
            ("Taxes Due For Year", self.taxes_due_for_year),
            ("Listing Agent Commission", self.listing_agent_commission),
            ("Buyer Agent Commission", self.buyer_agent_commission),
            ("County Conveyance Fee", self.county_conveyance_fee),
            ("Home Warranty", self.home_warranty),
            ("Title Examination", self.title_examination),
            ("Title Settlement", self.title_settlement),
            ("Closing Fee", self.closing_fee),
            ("Deed Preparation", self.deed_preparation),
            ("Overnight Fee", self.overnight_fee),
            ("Recording Fee", self.recording_fee),
            ("Survey Coverage", self.survey_coverage),
            ("Title Insurance", self.title_insurance),
            ("Admin Fee", self.admin_fee),
            ("Estimated Net", self.estimated_net),
        ]
