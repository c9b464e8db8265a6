"""KvEntry ORM: one row per key of the ledger's key/value store.

Invariants:
    - (namespace, key) is the composite primary key; one value per key
    - value is an opaque serialized payload, never interpreted by SQL
    - updated_at tracks the last write for operators; the ledger never reads it

Design Decisions:
    - Single table for every key space: the core only needs get/set/has
"""

from datetime import datetime, timezone

from sqlalchemy import String, LargeBinary, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from scavenger.db.base import Base


class KvEntry(Base):
    """A single stored key/value pair."""
    __tablename__ = "kv_entries"

    namespace: Mapped[str] = mapped_column(String(32), primary_key=True)
    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
