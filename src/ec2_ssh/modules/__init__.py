"""Inventory, ranking, prompting and session modules."""
