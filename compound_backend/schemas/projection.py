"""Data contracts for the projection and share endpoints."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from compound_backend.core.analysis import FreedomAnalysis
from compound_backend.core.formatting import Currency, CurrencyCode
from compound_backend.core.projection import (
    AutoContributions,
    ManualContributions,
    ProjectionInput,
    YearlyRecord,
)
from compound_backend.core.sanitize import (
    MAX_HORIZON_YEARS,
    MIN_HORIZON_YEARS,
    clean_number,
    clean_spaced_number,
    extend_contributions,
)

# money fields arrive straight from text inputs. Contribution cells drop
# every non-digit; the other amount fields drop only whitespace, so a
# negative entry is rejected instead of losing its sign.
CellAmount = Annotated[float, BeforeValidator(clean_number), Field(ge=0, le=1e12)]
Amount = Annotated[float, BeforeValidator(clean_spaced_number), Field(ge=0, le=1e12, allow_inf_nan=False)]
Percent = Annotated[float, Field(ge=-100, le=100, allow_inf_nan=False)]


class ManualSchedule(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: Literal["manual"] = "manual"
    contributionsByYear: List[CellAmount] = Field(default_factory=list, max_length=MAX_HORIZON_YEARS)


class AutoSchedule(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: Literal["auto"] = "auto"
    firstYearContribution: Amount = 0.0
    contributionGrowthPercent: Percent = 0.0


class ProjectionRequest(BaseModel):
    """Form state sent by the calculator page."""

    model_config = ConfigDict(extra="forbid")

    horizonYears: int = Field(ge=MIN_HORIZON_YEARS, le=MAX_HORIZON_YEARS)
    annualRatePercent: Percent
    startingCapital: Amount = 0.0
    contributions: Annotated[
        Union[ManualSchedule, AutoSchedule],
        Field(discriminator="mode"),
    ] = Field(default_factory=ManualSchedule)
    currency: Optional[CurrencyCode] = None

    def to_projection_input(self) -> ProjectionInput:
        """Build the engine input; a short manual list is padded to the horizon."""
        if isinstance(self.contributions, AutoSchedule):
            schedule: Union[ManualContributions, AutoContributions] = AutoContributions(
                firstYearContribution=self.contributions.firstYearContribution,
                contributionGrowthPercent=self.contributions.contributionGrowthPercent,
            )
        else:
            schedule = ManualContributions(
                contributionsByYear=tuple(
                    extend_contributions(self.contributions.contributionsByYear, self.horizonYears)
                ),
            )

        return ProjectionInput(
            horizonYears=self.horizonYears,
            annualRatePercent=self.annualRatePercent,
            startingCapital=self.startingCapital,
            contributions=schedule,
        )


class ProjectionResponse(BaseModel):
    records: List[YearlyRecord]
    freedomYear: Optional[int] = None
    finalInvested: float
    finalEarned: float
    finalTotalCapital: float
    analysis: FreedomAnalysis
    currency: Currency
    title: str


class ShareRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    projection: ProjectionRequest
    url: Optional[str] = None  # falls back to SHARE_URL


class CurrencyListResponse(BaseModel):
    default: CurrencyCode
    currencies: List[Currency]
