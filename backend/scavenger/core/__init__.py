"""Core Layer: domain types, records, errors and pure guard logic. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions here are pure and deterministic
"""
