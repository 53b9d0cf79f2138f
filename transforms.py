# transforms.py: reshape the transaction list for the dashboard charts and table

from __future__ import annotations

from typing import Iterable, List, Optional

import pandas as pd

from config import LABEL_LOCALE
from models import Transaction

MONTH_WINDOW = 6
COLUMNS = ["id", "type", "amount", "category", "description", "date"]


def to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """
    Flatten Transaction records into a DataFrame with integer year/month keys.
    Soft-deleted records are left out.
    """
    df = pd.DataFrame(
        [t.model_dump(include=set(COLUMNS)) for t in transactions if not t.deleted],
        columns=COLUMNS,
    )
    df["date"] = pd.to_datetime(df["date"])
    df["amount"] = df["amount"].astype(float)
    df["description"] = df["description"].fillna("")
    df["year"] = df["date"].dt.year
    df["month"] = df["date"].dt.month
    return df


def month_label(year: int, month: int, locale: Optional[str] = None) -> str:
    """Abbreviated month name plus year, e.g. ``Oct 2026``."""
    name = pd.Timestamp(year=year, month=month, day=1).month_name(locale=locale)
    return f"{name[:3]} {year}"


def group_by_category(transactions: Iterable[Transaction]) -> List[dict]:
    """
    Expense totals per category, largest first.

    Ties keep the order in which the categories first appear.  ``share`` is
    the fraction of all expenses, which is what the donut chart shows.
    """
    df = to_frame(transactions)
    expenses = df[df["type"] == "Expense"]
    if expenses.empty:
        return []

    by_cat = (
        expenses.groupby("category", sort=False)["amount"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    grand_total = by_cat.sum()

    return [
        {
            "category": category,
            "total_amount": float(total),
            "share": float(total / grand_total) if grand_total > 0 else 0.0,
        }
        for category, total in by_cat.items()
    ]


def group_by_month(
    transactions: Iterable[Transaction],
    limit: int = MONTH_WINDOW,
    locale: Optional[str] = LABEL_LOCALE,
) -> List[dict]:
    """
    Income vs. expense per calendar month, oldest first, last ``limit`` months.

    Buckets are keyed and sorted on the integer (year, month) pair; the label
    is only for display.
    """
    df = to_frame(transactions)
    if df.empty:
        return []

    monthly = (
        df.pivot_table(index=["year", "month"], columns="type", values="amount", aggfunc="sum", fill_value=0.0)
        .reindex(columns=["Income", "Expense"], fill_value=0.0)
        .sort_index()
        .tail(limit)
    )

    return [
        {
            "year": int(year),
            "month": int(month),
            "label": month_label(int(year), int(month), locale=locale),
            "income": float(row["Income"]),
            "expense": float(row["Expense"]),
        }
        for (year, month), row in monthly.iterrows()
    ]


def filter_transactions(
    transactions: Iterable[Transaction],
    type_filter: str = "All",
    search: str = "",
) -> List[Transaction]:
    """
    Rows for the transactions table: optional type filter, case-insensitive
    search over description and category, newest first.
    """
    needle = search.strip().lower()
    rows = [
        t for t in transactions
        if not t.deleted
        and (type_filter == "All" or t.type == type_filter)
        and (
            not needle
            or needle in (t.description or "").lower()
            or needle in t.category.lower()
        )
    ]
    return sorted(rows, key=lambda t: t.date, reverse=True)
