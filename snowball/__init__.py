"""Debt snowball payoff calculator."""
