# snowball/config.py
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()

def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)

class Settings:
    """Service settings read from the environment (and .env when present)."""

    def __init__(self) -> None:
        self.max_months = int(_env_float("SNOWBALL_MAX_MONTHS", 1000))
        self.default_contribution = _env_float("SNOWBALL_DEFAULT_CONTRIBUTION", 100.0)
        self.log_level = os.getenv("SNOWBALL_LOG_LEVEL", "INFO").upper()
        self.cors_origins: List[str] = [
            o.strip() for o in os.getenv("SNOWBALL_CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        if self.max_months <= 0:
            raise ValueError("SNOWBALL_MAX_MONTHS must be positive.")
        if self.default_contribution < 0:
            raise ValueError("SNOWBALL_DEFAULT_CONTRIBUTION cannot be negative.")

def get_settings() -> Settings:
    return Settings()
