"""
metrics.py
----------
Dashboard figures for the current month plus the financial-health ratios.

Everything here is a pure function of the snapshot passed in: the list of
transactions, the health profile, the portfolio profile and the reference
date ("today").  Nothing is cached between calls.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable, Optional

from models import DerivedMetrics, HealthProfile, PortfolioProfile, Transaction
from projection import expected_return_pct, future_value
from transforms import to_frame

logger = logging.getLogger(__name__)

# Health card thresholds
SAVINGS_RATIO_TARGET = 10.0
DEBT_RATIO_LIMIT = 36.0
EMERGENCY_FUND_TARGET_MONTHS = 3.0

_ONE_DECIMAL = Decimal("0.1")
_WIDE = Context(prec=400)


def format_ratio(value: float) -> str:
    """One decimal, half-up on the exact binary value (``60`` -> ``"60.0"``)."""
    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("Infinity" if value > 0 else "-Infinity")
    return str(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP, context=_WIDE))


def compute_metrics(
    transactions: Iterable[Transaction],
    health: Optional[HealthProfile] = None,
    portfolio: Optional[PortfolioProfile] = None,
    today: Optional[dt.date] = None,
) -> DerivedMetrics:
    """
    Derive the dashboard metrics from one snapshot.

    Income, expense and the savings ratio cover the calendar month of
    ``today``.  The debt-to-income ratio annualizes this month's income
    (x12) as a stand-in for yearly income.  The average monthly expense
    spreads all-time expenses over every month that has any transaction.
    Missing profiles count as zeros; no input combination raises.
    """
    today = today or dt.date.today()
    df = to_frame(transactions)

    current = df[(df["year"] == today.year) & (df["month"] == today.month)]
    total_income = float(current.loc[current["type"] == "Income", "amount"].sum())
    total_expense = float(current.loc[current["type"] == "Expense", "amount"].sum())
    net_flow = total_income - total_expense

    savings_ratio = (net_flow / total_income) * 100 if total_income > 0 else 0.0

    debt = health.total_debt if health else 0.0
    debt_to_income = (debt / (total_income * 12)) * 100 if debt and total_income > 0 else 0.0

    if df.empty:
        average_monthly_expense = 0.0
    else:
        all_expense = float(df.loc[df["type"] == "Expense", "amount"].sum())
        months_seen = len(df[["year", "month"]].drop_duplicates()) or 1
        average_monthly_expense = all_expense / months_seen

    emergency_fund = health.emergency_fund if health else 0.0
    fund_months = emergency_fund / average_monthly_expense if average_monthly_expense > 0 else 0.0

    capital = health.investment_capital if health else 0.0
    projected = future_value(capital, expected_return_pct(portfolio))

    logger.debug(
        "Metrics for %d-%02d over %d transactions: income=%s expense=%s",
        today.year, today.month, len(df), total_income, total_expense,
    )

    return DerivedMetrics(
        total_income=total_income,
        total_expense=total_expense,
        net_flow=net_flow,
        savings_ratio=format_ratio(max(0.0, savings_ratio)),
        debt_to_income_ratio=format_ratio(debt_to_income),
        emergency_fund_months=format_ratio(fund_months),
        future_value=projected,
        average_monthly_expense=average_monthly_expense,
    )


def assess_health(metrics: DerivedMetrics) -> dict:
    """Traffic-light status for the three health cards."""
    savings = float(metrics.savings_ratio)
    debt = float(metrics.debt_to_income_ratio)
    fund = float(metrics.emergency_fund_months)

    return {
        "savings_ratio": "healthy" if savings > SAVINGS_RATIO_TARGET else "warning",
        "debt_to_income_ratio": "healthy" if debt < DEBT_RATIO_LIMIT else "critical",
        "emergency_fund_months": "healthy" if fund >= EMERGENCY_FUND_TARGET_MONTHS else "critical",
    }
