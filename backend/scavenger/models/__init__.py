"""ORM Models: SQLAlchemy declarative models for persisted ledger state.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - The ledger persists through one generic key/value table; records are
      encoded by core/records.py, not mapped column-by-column
    - All models imported here so Base.metadata is complete before create_all
"""

from scavenger.models.kv_entry import KvEntry  # noqa: F401
