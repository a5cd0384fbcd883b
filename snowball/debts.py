# snowball/debts.py
import math
from typing import Iterable, List
from .schemas import Debt

def snowball_order(debts: Iterable[Debt]) -> List[Debt]:
    """Ascending balance; ties keep their current order."""
    return sorted(debts, key=lambda d: d.balance)

def mark_paid_off(debts: List[Debt], index: int) -> List[Debt]:
    if index < 0 or index >= len(debts):
        raise IndexError(f"No debt at position {index}.")
    updated = [d.model_copy() for d in debts]
    updated[index] = updated[index].model_copy(update={"balance": 0.0})
    return snowball_order(updated)

def sanitize(debts: Iterable[dict]) -> List[Debt]:
    """Build Debt records from raw form rows, clamping negative or blank numbers to 0.

    Infinite and NaN values are passed through so the schema rejects them.
    """
    cleaned = []
    for raw in debts:
        row = dict(raw)
        for key in ("interest_rate", "interestRate", "amount", "monthlyPayment",
                    "min_payment", "balance", "currentBalance"):
            if key not in row:
                continue
            try:
                value = float(row[key])
            except OverflowError:
                value = math.inf
            except (TypeError, ValueError):
                row[key] = 0.0
                continue
            row[key] = max(0.0, value) if math.isfinite(value) else value
        cleaned.append(Debt(**row))
    return cleaned

def new_debt() -> Debt:
    return Debt(name="New Debt", interest_rate=10, amount=50, balance=500)

def sample_debts() -> List[Debt]:
    # seeded for a user with nothing saved yet
    return [
        Debt(name="Store Card", interest_rate=15, amount=45, balance=1200),
        Debt(name="Medical Bill", interest_rate=0, amount=150, balance=3500),
        Debt(name="Credit Card", interest_rate=26, amount=250, balance=20000),
        Debt(name="Personal Loan", interest_rate=8, amount=500, balance=10000),
        Debt(name="Car Loan", interest_rate=6, amount=650, balance=30000),
    ]
