"""Closing cost calculator - seller net sheet from contract terms."""

from datetime import date
from typing import Optional

from src.models.closing_costs import CostBreakdown
from src.models.deal import DealRecord
from src.models.fee_schedule import FeeSchedule
from src.utils.dates import day_of_year
from src.utils.logging import get_structured_logger, mask_record_id
from src.utils.numbers import round_money

logger = get_structured_logger(__name__)

DAYS_PER_YEAR = 365
HALF_YEAR_DAYS = DAYS_PER_YEAR / 2


def commission_amount(price: float, rate_pct: float) -> float:
    return round_money(price * rate_pct / 100)


def tax_days_due(closing_date: Optional[date]) -> int:
    """Days of the closing year the seller owes taxes for (Jan 1 through closing)."""
    if closing_date is None:
        return 0
    return day_of_year(closing_date)


def unpaid_half_taxes(annual_taxes: float, paid: bool, day_override: Optional[float]) -> float:
    """Outstanding amount for one half-year tax bill."""
    if paid:
        return 0.0
    days = day_override if day_override else HALF_YEAR_DAYS
    return round_money(annual_taxes / DAYS_PER_YEAR * days)


def taxes_due_through_closing(annual_taxes: float, closing_date: Optional[date]) -> float:
    return round_money(annual_taxes / DAYS_PER_YEAR * tax_days_due(closing_date))


def compute_closing_costs(deal: DealRecord, fee_schedule: Optional[FeeSchedule] = None) -> CostBreakdown:
    """
    Compute the full closing cost breakdown and estimated net for a deal.

    Never raises on deal content: missing or malformed amounts are already
    zero on the record, so a partially filled form yields small or zero lines.
    """
    if fee_schedule is None:
        fee_schedule = FeeSchedule()

    price = deal.offer_price
    listing_commission = commission_amount(price, deal.listing_agent_commission)
    buyer_commission = commission_amount(price, deal.buyer_agent_commission)
    conveyance_fee = fee_schedule.conveyance.apply(price)
    title_items = fee_schedule.title_line_items(price)

    taxes_first_half = unpaid_half_taxes(deal.annual_taxes, deal.first_half_paid, deal.days_first_half_taxes)
    taxes_second_half = unpaid_half_taxes(deal.annual_taxes, deal.second_half_paid, deal.days_second_half_taxes)
    days_due = tax_days_due(deal.closing_date)
    taxes_due = taxes_due_through_closing(deal.annual_taxes, deal.closing_date)

    # Half-year lines are disclosure only; the year-to-date proration is what closing deducts
    deductions = (
        deal.first_mortgage
        + deal.second_mortgage
        + deal.closing_cost
        + listing_commission
        + buyer_commission
        + conveyance_fee
        + deal.home_warranty
        + sum(title_items.values())
        + deal.admin_fee
        + taxes_due
    )
    estimated_net = round_money(price - deductions)

    logger.debug(
        "Computed closing costs",
        property_id=mask_record_id(deal.id),
        fee_schedule=fee_schedule.name,
        estimated_net=estimated_net,
    )

    return CostBreakdown(
        selling_price=price,
        first_mortgage=deal.first_mortgage,
        second_mortgage=deal.second_mortgage,
        buyer_closing_cost=deal.closing_cost,
        annual_taxes=deal.annual_taxes,
        taxes_first_half=taxes_first_half,
        taxes_second_half=taxes_second_half,
        tax_days_due_this_year=days_due,
        taxes_due_for_year=taxes_due,
        listing_agent_commission=listing_commission,
        buyer_agent_commission=buyer_commission,
        county_conveyance_fee=conveyance_fee,
        home_warranty=deal.home_warranty,
        home_warranty_company=deal.home_warranty_company,
        admin_fee=deal.admin_fee,
        estimated_net=estimated_net,
        **title_items,
    )
