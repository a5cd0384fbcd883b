import time
import logging
from typing import List, Dict, Any, Optional, Tuple
from fastapi import FastAPI, HTTPException, Header
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from snowball.config import get_settings
from snowball.debts import new_debt, sample_debts, sanitize, snowball_order
from snowball.engine import simulate
from snowball.logging_config import configure_logging
from snowball.plan_utils import (
    balance_chart_points,
    freed_minimums_chart_points,
    max_months,
    per_debt_payoff_series,
    schedule_to_dataframe,
)
from snowball.schemas import Debt, UserProfile, SnowballCalculationResult
from snowball.store import InMemoryProfileStore, ProfileStore, load_profile, save_profile
from snowball.utils import money

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("snowball.app")

# ======================================
# App + CORS
# ======================================
app = FastAPI(
    title="Debt Snowball Calculator",
    description="Month-by-month debt snowball payoff planning",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# stands in for the identity provider's user metadata; replace via app.state.store
app.state.store = InMemoryProfileStore()


# ======================================
# Models
# ======================================
class CalculateRequest(BaseModel):
    debts: List[Dict[str, Any]]
    monthly_extra: float = Field(default=0.0, allow_inf_nan=False)
    sort: bool = True

class MetadataRequest(BaseModel):
    metadata: Optional[Dict[str, Any]] = None


# ======================================
# Helpers
# ======================================
def parse_debts(rows: List[Dict[str, Any]]) -> Tuple[List[Debt], Optional[str]]:
    try:
        return sanitize(rows), None
    except ValidationError as e:
        return [], f"Invalid debts: {e.errors()[0].get('msg', 'invalid value')}"

def run_request(request: CalculateRequest) -> SnowballCalculationResult:
    if request.monthly_extra < 0:
        raise HTTPException(status_code=400, detail="Monthly extra payment cannot be negative")
    debts, error = parse_debts(request.debts)
    if error:
        raise HTTPException(status_code=400, detail=error)
    if request.sort:
        debts = snowball_order(debts)
    return simulate(debts, request.monthly_extra, settings.max_months)

def get_store() -> ProfileStore:
    return app.state.store

def result_payload(result: SnowballCalculationResult) -> Dict[str, Any]:
    payload = result.model_dump()
    payload["max_months"] = max_months(result.debts)
    payload["charts"] = {
        "debt_balance": balance_chart_points(result),
        "freed_minimums": freed_minimums_chart_points(result),
        "per_debt": [per_debt_payoff_series(d) for d in result.debts],
    }
    years = result.debt_free_months / 12
    payload["formatted"] = {
        "total_debt": money(result.total_debt),
        "total_minimum_payments": money(result.total_minimum_payments),
        "freed_payments": money(result.freed_payments),
        "total_interest": money(result.total_interest),
        "debt_free": (
            f"{result.debt_free_months} months ({years:.1f} years)"
            if result.converged
            else f"Not paid off within {result.debt_free_months} months"
        ),
    }
    return payload


# ======================================
# Routes
# ======================================
@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "message": "Debt Snowball Calculator API is running!", "timestamp": time.time()}

@app.post("/api/snowball/calculate")
async def calculate(request: CalculateRequest):
    result = run_request(request)
    return {"success": True, **result_payload(result)}

@app.post("/api/snowball/schedule.csv")
async def schedule_csv(request: CalculateRequest):
    df = schedule_to_dataframe(run_request(request))
    return Response(
        content=df.to_csv(index=False),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=snowball-schedule.csv"},
    )

@app.get("/api/defaults/debts")
async def default_debts():
    return {
        "debts": [d.to_metadata() for d in sample_debts()],
        "new_debt": new_debt().to_metadata(),
        "monthly_contribution": settings.default_contribution,
    }

@app.get("/api/user/metadata")
async def get_user_metadata(x_user_id: Optional[str] = Header(default=None)):
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    profile = load_profile(get_store(), x_user_id, settings.default_contribution)
    return {"metadata": profile.to_metadata()}

@app.post("/api/update-user-metadata")
async def update_user_metadata(request: MetadataRequest, x_user_id: Optional[str] = Header(default=None)):
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if not request.metadata:
        raise HTTPException(status_code=400, detail="Missing metadata")
    try:
        profile = UserProfile(**request.metadata)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid metadata: {e.errors()[0].get('msg', 'invalid value')}")
    try:
        save_profile(get_store(), x_user_id, profile)
    except Exception:
        logger.exception("Error updating user metadata for %s", x_user_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return {"success": True}

@app.get("/api/user/plan")
async def user_plan(x_user_id: Optional[str] = Header(default=None)):
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    profile = load_profile(get_store(), x_user_id, settings.default_contribution)
    debts = snowball_order(profile.bills)
    result = simulate(debts, profile.monthly_contribution, settings.max_months)
    return {"success": True, "monthly_contribution": profile.monthly_contribution, **result_payload(result)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True)
