"""
Summary Models

Read-only results of the derived view computations, shaped for the
dashboard.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class CategoryTotal(BaseModel):
    """Summed expenses for one category."""

    name: str
    value: Decimal
    share: Decimal = Field(
        ...,
        ge=0,
        le=1,
        description="Fraction of total expenses (0-1)"
    )

    @property
    def percent(self) -> int:
        """Share as a whole percentage, as shown on the chart labels."""
        return int((self.share * 100).quantize(Decimal("1")))


class FinancialSummary(BaseModel):
    """Everything the dashboard shows above the transaction list."""

    transaction_count: int = Field(ge=0)
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    breakdown: list[CategoryTotal] = Field(default_factory=list)

    @property
    def has_expenses(self) -> bool:
        return bool(self.breakdown)

    @property
    def expenses_by_category(self) -> dict[str, Decimal]:
        return {item.name: item.value for item in self.breakdown}
