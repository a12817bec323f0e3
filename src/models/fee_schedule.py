"""Fee schedule models - jurisdiction-specific conveyance and title fees."""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.utils.numbers import round_money


class FeeTier(BaseModel):
    """One marginal band of a tiered fee."""
    model_config = ConfigDict(frozen=True)

    up_to: Optional[float] = Field(None, gt=0, description="Upper price bound of the band, None for open-ended")
    rate_per_thousand: float = Field(..., ge=0, description="Rate per $1000 of price within the band")


class FeeRule(BaseModel):
    """A single fee computed from the selling price."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["flat", "percent", "per_thousand", "tiered"] = "flat"
    amount: float = Field(default=0.0, ge=0, description="Flat amount")
    rate: float = Field(default=0.0, ge=0, description="Percent of price, or rate per $1000")
    tiers: list[FeeTier] = Field(default_factory=list, description="Marginal bands for tiered fees")

    @model_validator(mode="after")
    def _check_tiers(self) -> "FeeRule":
        if self.kind != "tiered":
            return self
        if not self.tiers:
            raise ValueError("tiered fee needs at least one tier")
        bounds = [tier.up_to for tier in self.tiers]
        if any(bound is None for bound in bounds[:-1]):
            raise ValueError("only the last tier may be open-ended")
        closed = [bound for bound in bounds if bound is not None]
        if closed != sorted(closed) or len(set(closed)) != len(closed):
            raise ValueError("tier bounds must be strictly increasing")
        return self

    def apply(self, price: float) -> float:
        """Fee for ``price``, rounded to the cent."""
        price = max(price, 0.0)
        if self.kind == "flat":
            fee = self.amount
        elif self.kind == "percent":
            fee = price * self.rate / 100
        elif self.kind == "per_thousand":
            fee = price * self.rate / 1000
        else:
            fee = 0.0
            floor = 0.0
            for tier in self.tiers:
                ceiling = price if tier.up_to is None else min(price, tier.up_to)
                if ceiling > floor:
                    fee += (ceiling - floor) * tier.rate_per_thousand / 1000
                if tier.up_to is None or price <= tier.up_to:
                    break
                floor = tier.up_to
        return round_money(fee)

    @classmethod
    def flat(cls, amount: float) -> "FeeRule":
        return cls(kind="flat", amount=amount)

    @classmethod
    def percent(cls, rate: float) -> "FeeRule":
        return cls(kind="percent", rate=rate)


DEFAULT_TITLE_INSURANCE_TIERS = [
    FeeTier(up_to=150000, rate_per_thousand=6.75),
    FeeTier(up_to=250000, rate_per_thousand=5.25),
    FeeTier(up_to=500000, rate_per_thousand=4.25),
    FeeTier(up_to=None, rate_per_thousand=3.75),
]


class FeeSchedule(BaseModel):
    """Conveyance fee and title/settlement line items for one locality."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="default", description="Schedule name, e.g. the county it applies to")
    conveyance: FeeRule = Field(default_factory=lambda: FeeRule.percent(0.4))
    title_examination: FeeRule = Field(default_factory=lambda: FeeRule.flat(300))
    title_settlement: FeeRule = Field(default_factory=lambda: FeeRule.flat(300))
    closing_fee: FeeRule = Field(default_factory=lambda: FeeRule.flat(125))
    deed_preparation: FeeRule = Field(default_factory=lambda: FeeRule.flat(95))
    overnight_fee: FeeRule = Field(default_factory=lambda: FeeRule.flat(50))
    recording_fee: FeeRule = Field(default_factory=lambda: FeeRule.flat(125))
    survey_coverage: FeeRule = Field(default_factory=lambda: FeeRule.flat(100))
    title_insurance: FeeRule = Field(
        default_factory=lambda: FeeRule(kind="tiered", tiers=DEFAULT_TITLE_INSURANCE_TIERS)
    )

    def title_line_items(self, price: float) -> dict[str, float]:
        """Title and settlement fees keyed by breakdown field name."""
        return {
            "title_examination": self.title_examination.apply(price),
            "title_settlement": self.title_settlement.apply(price),
            "closing_fee": self.closing_fee.apply(price),
            "deed_preparation": self.deed_preparation.apply(price),
            "overnight_fee": self.overnight_fee.apply(price),
            "recording_fee": self.recording_fee.apply(price),
            "survey_coverage": self.survey_coverage.apply(price),
            "title_insurance": self.title_insurance.apply(price),
        }
