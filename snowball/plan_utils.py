# snowball/plan_utils.py
from typing import Any, Dict, List
import pandas as pd
from .schemas import DebtWithSchedule, SnowballCalculationResult
from .utils import compact_money

SCHEDULE_COLUMNS = ["month", "debt", "payment", "principal", "interest",
                    "remaining_balance", "rollover", "used_snowball", "info"]

def schedule_to_dataframe(result: SnowballCalculationResult) -> pd.DataFrame:
    rows = []
    for d in result.debts:
        for idx, m in enumerate(d.months):
            rows.append({
                "month": idx + 1,
                "debt": d.name,
                "payment": m.payment,
                "principal": m.principal_paid,
                "interest": m.interest_paid,
                "remaining_balance": m.remaining_balance,
                "rollover": m.rollover,
                "used_snowball": m.used_snowball,
                "info": m.info,
            })
    if not rows:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    return pd.DataFrame(rows).sort_values(["month"], kind="stable").reset_index(drop=True)

def balance_chart_points(result: SnowballCalculationResult) -> List[Dict[str, Any]]:
    # label is the y-axis text; blank at zero
    return [{"month": m, "totalBalance": round(v, 2), "label": compact_money(v) if v > 0 else ""}
            for m, v in enumerate(result.debt_balance_data)]

def freed_minimums_chart_points(result: SnowballCalculationResult) -> List[Dict[str, Any]]:
    return [{"month": m, "freedMinimums": round(v, 2)} for m, v in enumerate(result.freed_minimums_data)]

def per_debt_payoff_series(schedule: DebtWithSchedule) -> List[Dict[str, Any]]:
    """
    Chart rows for one debt: month 0 is the current balance, then every month
    still owing, then the first month at zero. Debts that start at zero have
    nothing to chart.
    """
    if schedule.balance <= 0:
        return []
    points = [{
        "month": 0, "monthLabel": "Current",
        "remainingBalance": round(schedule.balance, 2),
        "payment": 0.0, "principalPaid": 0.0, "interestPaid": 0.0, "rollover": 0.0, "info": "",
    }]
    for idx, m in enumerate(schedule.months):
        points.append({
            "month": idx + 1, "monthLabel": f"Month {idx + 1}",
            "remainingBalance": round(m.remaining_balance, 2),
            "payment": round(m.payment, 2),
            "principalPaid": round(m.principal_paid, 2),
            "interestPaid": round(m.interest_paid, 2),
            "rollover": round(m.rollover, 2),
            "info": m.info,
        })
        if m.remaining_balance <= 0:
            break
    return points

def max_months(schedules: List[DebtWithSchedule]) -> int:
    if not schedules:
        return 0
    return max(len(d.months) for d in schedules)
