# snowball/schemas.py
from pydantic import AliasChoices, BaseModel, Field
from typing import List, Dict, Any

class Debt(BaseModel):
    """
    A single debt as the user enters it.

    Field names follow the calculator; the stored profile record uses the
    camelCase keys (interestRate, monthlyPayment, currentBalance), which are
    accepted on input and produced again by to_metadata().
     - interest_rate: annual rate in percent (26 means 26%/yr)
     - amount: minimum required monthly payment
     - balance: outstanding principal; 0 means already paid off
    """
    name: str = Field(min_length=1)
    interest_rate: float = Field(default=0.0, ge=0.0, allow_inf_nan=False,
                                 validation_alias=AliasChoices("interest_rate", "interestRate"))
    amount: float = Field(default=0.0, ge=0.0, allow_inf_nan=False,
                          validation_alias=AliasChoices("amount", "monthlyPayment", "min_payment"))
    balance: float = Field(default=0.0, ge=0.0, allow_inf_nan=False,
                           validation_alias=AliasChoices("balance", "currentBalance"))

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "interestRate": self.interest_rate,
            "monthlyPayment": self.amount,
            "currentBalance": self.balance,
        }

class MonthLedgerEntry(BaseModel):
    payment: float = 0.0
    remaining_balance: float = 0.0
    principal_paid: float = 0.0
    interest_paid: float = 0.0
    rollover: float = 0.0  # left over after this debt cleared, passed on within the same month
    used_snowball: bool = False
    info: str = ""

class DebtWithSchedule(Debt):
    months: List[MonthLedgerEntry] = Field(default_factory=list)

    def payoff_month(self) -> int:
        """1-indexed month the balance first hits zero; 0 if it started paid off, -1 if never."""
        if self.balance <= 0:
            return 0
        for idx, m in enumerate(self.months):
            if m.remaining_balance <= 0:
                return idx + 1
        return -1

class SnowballCalculationResult(BaseModel):
    debts: List[DebtWithSchedule] = Field(default_factory=list)
    total_debt: float = 0.0
    total_minimum_payments: float = 0.0
    freed_payments: float = 0.0  # minimums of debts that start at a zero balance
    debt_free_months: int = 0
    total_interest: float = 0.0
    converged: bool = True
    debt_balance_data: List[float] = Field(default_factory=list)
    freed_minimums_data: List[float] = Field(default_factory=list)

class UserProfile(BaseModel):
    # shape of the per-user metadata record: {"monthlyContribution": ..., "bills": [...]}
    monthly_contribution: float = Field(default=0.0, ge=0.0, allow_inf_nan=False,
                                        validation_alias=AliasChoices("monthly_contribution", "monthlyContribution"))
    bills: List[Debt] = Field(default_factory=list)

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "monthlyContribution": self.monthly_contribution,
            "bills": [b.to_metadata() for b in self.bills],
        }
