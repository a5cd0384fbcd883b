# snowball/engine.py
import logging
from typing import Iterable, List, Optional

from .schemas import Debt, DebtWithSchedule, MonthLedgerEntry, SnowballCalculationResult
from .utils import money

logger = logging.getLogger(__name__)

MAX_MONTHS = 1000

# balances under half a cent count as cleared
PAID_EPSILON = 0.005

PAID_OFF_INFO = "This debt is already paid off."
ALL_PAID_INFO = "All debts are paid off."


def _monthly_interest(balance: float, interest_rate: float) -> float:
    return balance * (interest_rate / 100.0) / 12.0

def _first_unpaid(balances: List[float]) -> Optional[int]:
    for idx, bal in enumerate(balances):
        if bal > 0:
            return idx
    return None

def _dollars(x: float) -> str:
    return f"${x:.2f}"

def _payment_info(minimum: float, freed: float, incoming_rollover: float,
                  extra: Optional[float], rollover_out: float) -> str:
    parts = [f"Min payment: {_dollars(minimum)}"]
    if freed > 0:
        parts.append(f"Freed minimums: {_dollars(freed)}")
    if incoming_rollover > 0:
        parts.append(f"Rollover: {_dollars(incoming_rollover)}")
    if extra is not None:
        parts.append(f"Monthly Extra Payment: {_dollars(extra)}")
    info = "Pay = " + " + ".join(parts)
    if rollover_out > 0:
        info += f". Rollover {_dollars(rollover_out)} applied to next debt in this month."
    return info


def simulate(debts: Iterable[Debt], monthly_extra: float,
             max_months: int = MAX_MONTHS) -> SnowballCalculationResult:
    """
    Run the snowball month by month over debts in the order given.

    Each month the first debt with a positive balance receives its own minimum
    plus every freed minimum plus monthly_extra. Whatever a debt does not need
    once cleared rolls to the next debt in the same month only. A debt's
    minimum joins the freed pool from the month after it reaches zero (or from
    month 0 when it starts at zero).

    Stops when every balance is zero or after max_months; in the latter case
    the result has converged=False.
    """
    debts = list(debts)
    if not debts:
        return SnowballCalculationResult()

    schedules = [
        DebtWithSchedule(name=d.name, interest_rate=d.interest_rate, amount=d.amount, balance=d.balance)
        for d in debts
    ]
    balances = [d.balance for d in debts]
    # month each debt first reached zero; None while still owed
    payoff_month: List[Optional[int]] = [0 if b <= 0 else None for b in balances]
    freed_minimums = sum(d.amount for d in debts if d.balance <= 0)
    starting_freed = freed_minimums

    balance_data = [sum(balances)]
    total_interest = 0.0
    month = 0

    if _first_unpaid(balances) is None:
        for sched in schedules:
            sched.months.append(MonthLedgerEntry(rollover=sched.amount, info=ALL_PAID_INFO))

    while month < max_months and _first_unpaid(balances) is not None:
        recipient = _first_unpaid(balances)
        available = 0.0
        # freed pool is fixed for the whole month; payoffs this month count from next month
        freed_this_month = freed_minimums

        for j, sched in enumerate(schedules):
            if balances[j] <= 0:
                sched.months.append(MonthLedgerEntry(rollover=sched.amount, info=PAID_OFF_INFO))
                continue

            is_recipient = j == recipient
            if is_recipient:
                incoming = 0.0
                available = sched.amount + freed_this_month + monthly_extra
            else:
                incoming = available
                available = sched.amount + incoming

            interest = _monthly_interest(balances[j], sched.interest_rate)
            payment = min(available, balances[j] + interest)
            interest_paid = min(interest, payment)
            principal_paid = payment - interest_paid
            new_balance = balances[j] - principal_paid
            if payment >= balances[j] + interest or new_balance < PAID_EPSILON:
                principal_paid = balances[j]
                new_balance = 0.0
            rollover = available - payment if payment < available else 0.0

            sched.months.append(MonthLedgerEntry(
                payment=payment,
                remaining_balance=new_balance,
                principal_paid=principal_paid,
                interest_paid=interest_paid,
                rollover=rollover,
                used_snowball=is_recipient,
                info=_payment_info(
                    sched.amount,
                    freed_this_month if is_recipient else 0.0,
                    incoming,
                    monthly_extra if is_recipient else None,
                    rollover,
                ),
            ))
            total_interest += interest_paid

            balances[j] = new_balance
            if new_balance <= 0 and payoff_month[j] is None:
                payoff_month[j] = month + 1
                freed_minimums += sched.amount

            available = rollover

        month += 1
        balance_data.append(sum(balances))

    converged = _first_unpaid(balances) is None
    if converged:
        logger.debug("Snowball plan for %d debts finishes in %d months", len(debts), month)
    else:
        logger.warning(
            "Snowball plan did not converge within %d months; %s still owed",
            max_months, money(sum(balances)),
        )

    freed_data = [
        sum(d.amount for d, paid in zip(debts, payoff_month) if paid is not None and paid <= m)
        for m in range(month + 1)
    ]

    return SnowballCalculationResult(
        debts=schedules,
        total_debt=sum(d.balance for d in debts),
        total_minimum_payments=sum(d.amount for d in debts),
        freed_payments=starting_freed,
        debt_free_months=month,
        total_interest=total_interest,
        converged=converged,
        debt_balance_data=balance_data,
        freed_minimums_data=freed_data,
    )


def calculate_snowball(debts: Iterable[Debt], monthly_extra: float) -> List[DebtWithSchedule]:
    """Per-debt ledgers only."""
    return simulate(debts, monthly_extra).debts
