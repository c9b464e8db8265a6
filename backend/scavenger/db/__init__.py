"""Database Infrastructure: SQLAlchemy declarative base and session factory.

Invariants:
    - All sessions are async (AsyncSession)
"""
