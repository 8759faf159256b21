from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# whole units; non-finite values from runaway growth pass through as floats
Whole = Union[int, float]


# -----------------------------
# Inputs
# -----------------------------


class ContributionMode(str, Enum):
    MANUAL = "manual"
    AUTO = "auto"


class ManualContributions(BaseModel):
    """Explicit contribution per year; index 0 is year 1."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["manual"] = "manual"
    contributionsByYear: Tuple[float, ...] = ()

    def contribution_for_year(self, year: int) -> float:
        # entries past the horizon are never asked for; missing ones count as 0
        if 1 <= year <= len(self.contributionsByYear):
            return float(self.contributionsByYear[year - 1])
        return 0.0


class AutoContributions(BaseModel):
    """contribution = firstYearContribution * (1 + growth)^(year - 1)"""

    model_config = ConfigDict(frozen=True)

    mode: Literal["auto"] = "auto"
    firstYearContribution: float = Field(default=0.0, ge=0)
    contributionGrowthPercent: float = 0.0

    def contribution_for_year(self, year: int) -> float:
        # growth below -100% would flip the sign every other year; floor at zero
        factor = max(0.0, 1.0 + self.contributionGrowthPercent / 100.0)
        return self.firstYearContribution * _power(factor, year - 1)


ContributionSchedule = Annotated[
    Union[ManualContributions, AutoContributions],
    Field(discriminator="mode"),
]


class ProjectionInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    horizonYears: int = Field(ge=0)
    annualRatePercent: float
    startingCapital: float = Field(default=0.0, ge=0)
    contributions: ContributionSchedule = Field(default_factory=ManualContributions)

    @property
    def contributionMode(self) -> ContributionMode:
        return ContributionMode(self.contributions.mode)


# -----------------------------
# Outputs
# -----------------------------


class YearState(BaseModel):
    """
    Internal: one year of the fold exactly as accumulated, before any
    display rounding.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    totalCapital: float
    totalInvested: float
    earned: float
    yearlyContribution: float
    yearlyDividends: float
    isFreedomYear: bool


class YearlyRecord(BaseModel):
    """One display row; monetary values are whole units."""

    model_config = ConfigDict(frozen=True)

    year: int
    totalCapital: Whole
    totalInvested: Whole
    earned: Whole
    yearlyContribution: Whole
    yearlyDividends: Whole
    isFreedomYear: bool


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: Tuple[YearlyRecord, ...]
    freedomYear: Optional[int] = None
    finalInvested: float
    finalEarned: float
    finalTotalCapital: float


# -----------------------------
# Engine
# -----------------------------


def _power(base: float, exponent: int) -> float:
    # float ** raises on overflow where the browser yields Infinity
    try:
        return base ** exponent
    except OverflowError:
        return math.inf


def round_half_up(value: float) -> Whole:
    """
    Round to the nearest whole unit, .5 going up (browser Math.round).

    inf and nan come back unchanged, as Math.round returns them.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def growth_factor(annual_rate_percent: float) -> float:
    """
    Annual factor from monthly compounding: (1 + r/12)^12.

    Applied once per year to both the carried capital and the new
    contribution, so a contribution earns a full year of growth in the
    year it is made.
    """
    monthly_rate = annual_rate_percent / 100.0 / 12.0
    return _power(1.0 + monthly_rate, 12)


def simulate_years(inp: ProjectionInput) -> List[YearState]:
    """
    Run the yearly recurrence and return the unrounded state of every year.

    Order of operations (per year):
      1) Resolve this year's contribution from the schedule variant.
      2) Grow carried capital AND the contribution by the annual factor.
      3) Add the contribution to the invested principal.
      4) Project the yield on ending capital; the first year where it covers
         a positive contribution becomes the freedom year (sticky).
    """
    factor = growth_factor(inp.annualRatePercent)

    capital = float(inp.startingCapital)
    invested = float(inp.startingCapital)
    freedom_year: Optional[int] = None

    rows: List[YearState] = []
    for year in range(1, inp.horizonYears + 1):
        contrib = inp.contributions.contribution_for_year(year)

        capital = capital * factor + contrib * factor
        invested += contrib
        dividends = capital * inp.annualRatePercent / 100.0

        if freedom_year is None and contrib > 0 and dividends >= contrib:
            freedom_year = year

        rows.append(
            YearState(
                year=year,
                totalCapital=capital,
                totalInvested=invested,
                earned=capital - invested,
                yearlyContribution=contrib,
                yearlyDividends=dividends,
                isFreedomYear=year == freedom_year,
            )
        )

    return rows


def _to_record(state: YearState) -> YearlyRecord:
    return YearlyRecord(
        year=state.year,
        totalCapital=round_half_up(state.totalCapital),
        totalInvested=round_half_up(state.totalInvested),
        earned=round_half_up(state.earned),
        yearlyContribution=round_half_up(state.yearlyContribution),
        yearlyDividends=round_half_up(state.yearlyDividends),
        isFreedomYear=state.isFreedomYear,
    )


def project(inp: ProjectionInput) -> ProjectionResult:
    """
    Project capital year by year and summarise the run.

    Rounding happens only here, on the way out; the accumulators in
    simulate_years never see a rounded value.
    """
    states = simulate_years(inp)

    freedom_year = next((s.year for s in states if s.isFreedomYear), None)

    if states:
        last = states[-1]
        final_invested, final_earned, final_total = last.totalInvested, last.earned, last.totalCapital
    else:
        final_invested = final_total = float(inp.startingCapital)
        final_earned = 0.0

    logger.debug(
        "projected %d years (%s mode, rate %s%%): total=%.2f freedom_year=%s",
        inp.horizonYears,
        inp.contributionMode.value,
        inp.annualRatePercent,
        final_total,
        freedom_year,
    )

    return ProjectionResult(
        records=tuple(_to_record(s) for s in states),
        freedomYear=freedom_year,
        finalInvested=final_invested,
        finalEarned=final_earned,
        finalTotalCapital=final_total,
    )


__all__ = [
    "Whole",
    "ContributionMode",
    "ManualContributions",
    "AutoContributions",
    "ContributionSchedule",
    "ProjectionInput",
    "YearState",
    "YearlyRecord",
    "ProjectionResult",
    "round_half_up",
    "growth_factor",
    "simulate_years",
    "project",
]
