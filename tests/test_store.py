# tests/test_store.py
from snowball.schemas import Debt, UserProfile
from snowball.store import InMemoryProfileStore, load_profile, save_profile

def test_missing_profile_seeds_sample_debts():
    profile = load_profile(InMemoryProfileStore(), "user_1", 100)
    assert profile.monthly_contribution == 100
    assert len(profile.bills) == 5

def test_invalid_contribution_falls_back_to_samples():
    store = InMemoryProfileStore()
    store.set("user_1", {"monthlyContribution": "abc", "bills": [{"name": "x", "currentBalance": 5}]})
    assert len(load_profile(store, "user_1").bills) == 5

def test_save_sorts_and_persists_raw_debts():
    store = InMemoryProfileStore()
    profile = UserProfile(monthly_contribution=250, bills=[
        Debt(name="Big", balance=900, amount=30, interest_rate=5),
        Debt(name="Small", balance=100, amount=10, interest_rate=0),
    ])
    save_profile(store, "user_1", profile)
    stored = store.get("user_1")
    assert stored["monthlyContribution"] == 250
    assert [b["name"] for b in stored["bills"]] == ["Small", "Big"]
    assert "months" not in stored["bills"][0]
    loaded = load_profile(store, "user_1")
    assert [b.name for b in loaded.bills] == ["Small", "Big"]

def test_store_returns_copies():
    store = InMemoryProfileStore()
    store.set("u", {"bills": []})
    store.get("u")["bills"].append("x")
    assert store.get("u") == {"bills": []}

def test_saved_empty_list_is_respected():
    store = InMemoryProfileStore()
    store.set("user_1", {"monthlyContribution": 0, "bills": []})
    profile = load_profile(store, "user_1")
    assert profile.bills == []
    assert profile.monthly_contribution == 0

def test_non_finite_contribution_falls_back_to_samples():
    store = InMemoryProfileStore()
    store.set("user_1", {"monthlyContribution": float("inf"), "bills": []})
    assert len(load_profile(store, "user_1").bills) == 5
    store.set("user_1", {"monthlyContribution": "1e400", "bills": []})
    assert len(load_profile(store, "user_1").bills) == 5
