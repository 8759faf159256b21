"""Freedom-point analysis derived from a finished projection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from compound_backend.core.projection import ProjectionResult, Whole, round_half_up


class FreedomAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    reached: bool
    annualDividends: Whole
    monthlyDividends: Whole


def freedom_analysis(result: ProjectionResult) -> FreedomAnalysis:
    """
    Summarise the passive income at the freedom year, or at the end of the
    horizon when no freedom year was reached.
    """
    target = None
    if result.freedomYear is not None:
        target = next((r for r in result.records if r.year == result.freedomYear), None)
    if target is None and result.records:
        target = result.records[-1]

    if target is None:
        return FreedomAnalysis(year=0, reached=False, annualDividends=0, monthlyDividends=0)

    return FreedomAnalysis(
        year=target.year,
        reached=result.freedomYear is not None,
        annualDividends=target.yearlyDividends,
        monthlyDividends=round_half_up(target.yearlyDividends / 12),
    )
