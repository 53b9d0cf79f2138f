"""Record validation and the backend document adapter."""
from __future__ import annotations

import datetime as dt
import logging

import pytest
from pydantic import ValidationError

from models import CATEGORIES, RISK_PROFILES, HealthProfile, PortfolioProfile, RiskProfileDefinition, Transaction
from snapshot import load_health, load_portfolio, merge_health, parse_transaction, parse_transactions


def _doc(**overrides) -> dict:
    doc = {
        "id": "abc",
        "type": "Expense",
        "amount": 42.5,
        "category": "Food",
        "description": "Lunch",
        "date": "2026-10-05",
        "createdAt": "2026-10-05T12:30:00Z",
    }
    doc.update(overrides)
    return doc


# ---------------------------------------------------------------------------
# Record validation
# ---------------------------------------------------------------------------

def test_transaction_from_document() -> None:
    txn = parse_transaction(_doc())

    assert txn.date == dt.date(2026, 10, 5)
    assert txn.amount == 42.5
    assert txn.created_at.hour == 12
    assert txn.deleted is False


@pytest.mark.parametrize("amount", [0, -5, "abc"])
def test_transaction_rejects_non_positive_amount(amount) -> None:
    with pytest.raises(ValidationError):
        Transaction(type="Expense", amount=amount, category="Food", date=dt.date(2026, 1, 1))


def test_transaction_category_must_match_type() -> None:
    with pytest.raises(ValidationError, match="not valid for Income"):
        Transaction(type="Income", amount=10, category="Food", date=dt.date(2026, 1, 1))


def test_transaction_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        Transaction(type="Transfer", amount=10, category="Other", date=dt.date(2026, 1, 1))


def test_category_tables() -> None:
    assert "Food" in CATEGORIES["Expense"]
    assert "Salary" in CATEGORIES["Income"]
    assert len(CATEGORIES["Expense"]) == 10
    assert len(CATEGORIES["Income"]) == 5


def test_risk_profile_table() -> None:
    assert list(RISK_PROFILES) == ["Conservative", "Moderate", "Aggressive"]
    assert RISK_PROFILES["Moderate"].expected_return_label == "8% - 12%"


def test_risk_profile_split_must_sum_to_100() -> None:
    with pytest.raises(ValidationError):
        RiskProfileDefinition(description="x", fixed_income=60, variable_income=60, expected_return=(1, 2))


# ---------------------------------------------------------------------------
# parse_transactions
# ---------------------------------------------------------------------------

def test_parse_transactions_drops_soft_deleted() -> None:
    docs = [_doc(id="a"), _doc(id="b", deleted=True), _doc(id="c", type="Income", category="Salary")]

    assert [t.id for t in parse_transactions(docs)] == ["a", "c"]


def test_parse_transactions_skips_invalid_and_logs(caplog) -> None:
    docs = [_doc(id="good"), _doc(id="bad", category="Salary"), _doc(id="worse", amount=-1)]

    with caplog.at_level(logging.WARNING, logger="snapshot"):
        txns = parse_transactions(docs)

    assert [t.id for t in txns] == ["good"]
    assert "Skipping transaction bad" in caplog.text
    assert "Skipping transaction worse" in caplog.text


def test_parse_transactions_without_description() -> None:
    doc = _doc()
    del doc["description"]

    (txn,) = parse_transactions([doc])
    assert txn.description is None


# ---------------------------------------------------------------------------
# Health profile
# ---------------------------------------------------------------------------

def test_load_health_defaults_to_zero() -> None:
    health = load_health(None, user_id="u1")

    assert health == HealthProfile(investment_capital=0, total_debt=0, emergency_fund=0, user_id="u1")


def test_load_health_merges_partial_document() -> None:
    health = load_health({"totalDebt": 1500})

    assert health.total_debt == 1500
    assert health.emergency_fund == 0
    assert health.investment_capital == 0


@pytest.mark.parametrize("raw", ["", None, "abc", float("nan")])
def test_blank_health_inputs_count_as_zero(raw) -> None:
    assert HealthProfile(emergency_fund=raw).emergency_fund == 0


@pytest.mark.parametrize("raw", ["inf", "-inf", float("inf"), "Infinity"])
def test_infinite_health_inputs_count_as_zero(raw) -> None:
    health = HealthProfile(emergencyFund=raw, totalDebt=raw, investmentCapital=raw)

    assert health.emergency_fund == 0
    assert health.total_debt == 0
    assert health.investment_capital == 0


@pytest.mark.parametrize("amount", [float("inf"), "inf", float("nan")])
def test_transaction_rejects_non_finite_amount(amount) -> None:
    with pytest.raises(ValidationError):
        Transaction(type="Expense", amount=amount, category="Food", date=dt.date(2026, 1, 1))


def test_load_health_invalid_falls_back(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="snapshot"):
        health = load_health({"totalDebt": -10}, user_id="u1")

    assert health == HealthProfile(user_id="u1")
    assert "Invalid health profile" in caplog.text


def test_merge_health_keeps_untouched_fields() -> None:
    current = HealthProfile(investment_capital=10_000, total_debt=2_000, emergency_fund=3_000, user_id="u1")

    updated = merge_health(current, {"emergencyFund": "4500"})

    assert updated.emergency_fund == 4_500
    assert updated.investment_capital == 10_000
    assert updated.total_debt == 2_000
    assert updated.user_id == "u1"


def test_merge_health_accepts_field_names() -> None:
    updated = merge_health(HealthProfile(), {"total_debt": 800})

    assert updated.total_debt == 800


# ---------------------------------------------------------------------------
# Portfolio profile
# ---------------------------------------------------------------------------

def test_load_portfolio_defaults_to_moderate() -> None:
    assert load_portfolio(None).risk_profile == "Moderate"
    assert load_portfolio({}).risk_profile == "Moderate"


def test_load_portfolio_from_document() -> None:
    portfolio = load_portfolio({"riskProfile": "Aggressive", "updatedAt": "2026-10-01T08:00:00Z"})

    assert portfolio.risk_profile == "Aggressive"
    assert portfolio.updated_at.year == 2026


def test_load_portfolio_unknown_tier_falls_back() -> None:
    assert load_portfolio({"riskProfile": "YOLO"}) == PortfolioProfile()
