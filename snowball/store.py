# snowball/store.py
import copy
import logging
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from .debts import sample_debts, snowball_order
from .schemas import UserProfile

logger = logging.getLogger(__name__)

class ProfileStore(Protocol):
    """Opaque per-user metadata record held by the identity provider."""

    def get(self, user_id: str) -> Optional[Dict[str, Any]]: ...

    def set(self, user_id: str, metadata: Dict[str, Any]) -> None: ...

class InMemoryProfileStore:
    def __init__(self) -> None:
        self._records: Dict[str, Dict[str, Any]] = {}

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        record = self._records.get(user_id)
        return copy.deepcopy(record) if record is not None else None

    def set(self, user_id: str, metadata: Dict[str, Any]) -> None:
        self._records[user_id] = copy.deepcopy(metadata)

def _valid_contribution(value: Any) -> bool:
    try:
        return int(float(value)) >= 0
    except (TypeError, ValueError, OverflowError):
        return False

def load_profile(store: ProfileStore, user_id: str, default_contribution: float = 100.0) -> UserProfile:
    """Saved profile, or the sample debts when nothing usable is stored."""
    metadata = store.get(user_id) or {}
    if _valid_contribution(metadata.get("monthlyContribution")) and isinstance(metadata.get("bills"), list):
        try:
            return UserProfile(**metadata)
        except ValidationError:
            logger.warning("Stored profile for %s is invalid; using sample debts", user_id)
    return UserProfile(monthly_contribution=default_contribution, bills=sample_debts())

def save_profile(store: ProfileStore, user_id: str, profile: UserProfile) -> UserProfile:
    ordered = profile.model_copy(update={"bills": snowball_order(profile.bills)})
    store.set(user_id, ordered.to_metadata())
    logger.info("Saved %d debts for %s", len(ordered.bills), user_id)
    return ordered
