import datetime as dt
import math
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TransactionType = Literal["Income", "Expense"]
RiskProfileName = Literal["Conservative", "Moderate", "Aggressive"]

# --- Static tables ---

CATEGORIES: Dict[str, List[str]] = {
    "Expense": [
        "Housing", "Transportation", "Food", "Entertainment", "Debt",
        "Education", "Health", "Savings", "Investment", "Other",
    ],
    "Income": [
        "Salary", "Freelance", "Investments", "Gift", "Other Income",
    ],
}

DEFAULT_RISK_PROFILE = "Moderate"


class Transaction(BaseModel):
    """A single income or expense entry as logged by the user."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    type: TransactionType
    amount: float = Field(gt=0, allow_inf_nan=False)
    category: str
    description: Optional[str] = None
    date: dt.date
    created_at: Optional[dt.datetime] = Field(None, alias="createdAt")
    deleted: bool = False  # soft-delete flag

    @model_validator(mode="after")
    def _category_matches_type(self):
        if self.category not in CATEGORIES[self.type]:
            raise ValueError(f"category {self.category!r} is not valid for {self.type} transactions")
        return self


class HealthProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    investment_capital: float = Field(0.0, ge=0, alias="investmentCapital")
    total_debt: float = Field(0.0, ge=0, alias="totalDebt")
    emergency_fund: float = Field(0.0, ge=0, alias="emergencyFund")
    user_id: Optional[str] = Field(None, alias="userId")

    @field_validator("investment_capital", "total_debt", "emergency_fund", mode="before")
    @classmethod
    def _blank_as_zero(cls, value):
        # Form inputs arrive as free text; anything that is not a finite number counts as 0
        if value is None or value == "":
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        return number if math.isfinite(number) else 0.0


class PortfolioProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    risk_profile: RiskProfileName = Field(DEFAULT_RISK_PROFILE, alias="riskProfile")
    updated_at: Optional[dt.datetime] = Field(None, alias="updatedAt")


class RiskProfileDefinition(BaseModel):
    """Allocation split and expected annual return range for one risk tier."""

    model_config = ConfigDict(frozen=True)

    description: str
    fixed_income: int
    variable_income: int
    expected_return: Tuple[float, float]  # percent, closed interval

    @model_validator(mode="after")
    def _check_split(self):
        if self.fixed_income + self.variable_income != 100:
            raise ValueError("allocation split must sum to 100")
        low, high = self.expected_return
        if low > high:
            raise ValueError("expected return interval is reversed")
        return self

    @property
    def expected_return_label(self) -> str:
        low, high = self.expected_return
        return f"{low:g}% - {high:g}%"


RISK_PROFILES: Dict[str, RiskProfileDefinition] = {
    "Conservative": RiskProfileDefinition(
        description="Prioritizes capital preservation with low risk.",
        fixed_income=70,
        variable_income=30,
        expected_return=(5.0, 8.0),
    ),
    "Moderate": RiskProfileDefinition(
        description="Seeks a balance between growth and risk.",
        fixed_income=50,
        variable_income=50,
        expected_return=(8.0, 12.0),
    ),
    "Aggressive": RiskProfileDefinition(
        description="Seeks high growth while accepting greater volatility.",
        fixed_income=30,
        variable_income=70,
        expected_return=(12.0, 18.0),
    ),
}


class DerivedMetrics(BaseModel):
    """Dashboard figures derived from a snapshot. Ratios are pre-formatted to one decimal."""

    model_config = ConfigDict(frozen=True)

    total_income: float
    total_expense: float
    net_flow: float
    savings_ratio: str
    debt_to_income_ratio: str
    emergency_fund_months: str
    future_value: float
    average_monthly_expense: float
