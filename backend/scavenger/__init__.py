"""Scavenger: participant registry and ownership-transfer ledger for recycling supply chains.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
