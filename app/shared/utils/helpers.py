# 📄 File: app/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small shared tools: handing out unique ids for new records and reading the
# current time in a single, timezone-aware way.

# 🧪 Purpose (Technical Summary):
# Id generator contract with a UUID4 implementation, UTC clock helper and
# camelCase conversion used by event payload aliases.

# 🔗 Dependencies:
# - uuid, datetime, abc

# 🔄 Connected Modules / Calls From:
# Used by: command handlers (new aggregate ids), domain models (timestamps),
# app.shared.events.base (payload aliases)

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from uuid import uuid4


class IdGenerator(ABC):
    """Contract for producing identifiers of new aggregates."""

    @abstractmethod
    def generate(self) -> str:
        pass


class UuidGenerator(IdGenerator):
    """Random UUID4 identifiers."""

    def generate(self) -> str:
        return str(uuid4())


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes (SQLite drops tzinfo) and convert aware ones.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
