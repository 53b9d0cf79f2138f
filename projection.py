from __future__ import annotations

import math
from typing import List, Optional

from models import RISK_PROFILES, PortfolioProfile

PROJECTION_YEARS = 10
DEFAULT_RETURN_PCT = 5.0


def _round_half_up(value: float):
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def expected_return_pct(portfolio: Optional[PortfolioProfile]) -> float:
    """
    Annual return (percent) used for projections.

    Uses the LOWER bound of the tier's expected range, not the midpoint, and
    5% when no portfolio profile exists yet.
    """
    if portfolio is None:
        return DEFAULT_RETURN_PCT
    return RISK_PROFILES[portfolio.risk_profile].expected_return[0]


def future_value(capital: float, annual_rate_percent: float) -> float:
    return capital * math.pow(1 + annual_rate_percent / 100.0, PROJECTION_YEARS)


def project_growth(initial_capital: float, annual_rate_percent: float) -> List[dict]:
    """
    Year-by-year compound growth for years 0..10 (always 11 points).

    Each point keeps the unrounded running ``capital``; ``value`` is the
    nearest whole amount for display and never feeds back into the growth.
    """
    rate = annual_rate_percent / 100.0
    points = []
    capital = initial_capital

    for year in range(PROJECTION_YEARS + 1):
        points.append({
            "year": year,
            "label": f"Year {year}",
            "capital": capital,
            "value": _round_half_up(capital),
        })
        capital *= 1 + rate

    return points


def allocation_for(risk_profile: str) -> List[dict]:
    """Fixed/variable income split of a risk tier, as pie-chart rows."""
    definition = RISK_PROFILES[risk_profile]
    return [
        {"name": "Fixed Income", "value": definition.fixed_income},
        {"name": "Variable Income", "value": definition.variable_income},
    ]
