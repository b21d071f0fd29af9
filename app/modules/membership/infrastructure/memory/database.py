# 📄 File: app/modules/membership/infrastructure/memory/database.py
# 🧭 Purpose (Layman Explanation):
# A pretend database kept in the computer's memory, used for tests and quick local runs.
# It still behaves like a real one: changes made inside a transaction are all kept or
# all thrown away.
# 🧪 Purpose (Technical Summary):
# Per-instance in-memory store. Tables are dicts of records keyed by id; a transaction
# works on a deep copy of every table (held in a ContextVar) and swaps it in on commit.
# An asyncio.Lock serializes transactions and writes made outside one.
# 🔗 Dependencies:
# asyncio, contextvars, copy, pydantic models, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# memory repositories, InMemoryUnitOfWork, test fixtures

import asyncio
import copy
from contextlib import asynccontextmanager
from contextvars import ContextVar, Token
from typing import AsyncIterator, Dict, Optional

from pydantic import BaseModel

from app.shared.core.exceptions import TransactionError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

Table = Dict[str, BaseModel]
Tables = Dict[str, Table]

TABLES = (
    "users",
    "families",
    "clubs",
    "club_requests",
    "enrollment_requests",
    "club_memberships",
    "transactions",
    "trainings",
    "tournaments",
)


class InMemoryDatabase:
    """
    Transactional in-memory store.

    Each instance is isolated; build one per test or per application.

    Every transaction deep-copies the whole store while holding the lock, so a
    use-case costs O(size of the store) and transactions never overlap. Fine for
    tests and local runs; use the SQLAlchemy backend for real traffic.
    """

    def __init__(self):
        self._tables: Tables = {name: {} for name in TABLES}
        self._lock = asyncio.Lock()
        self._working: ContextVar[Optional[Tables]] = ContextVar(
            f"memory_db_working_{id(self)}", default=None
        )
        self._manual_token: Optional[Token] = None

    @property
    def in_transaction(self) -> bool:
        return self._working.get() is not None

    def table(self, name: str) -> Table:
        """Rows visible in the current context: the working copy inside a transaction."""
        working = self._working.get()
        return (working if working is not None else self._tables)[name]

    async def put(self, name: str, record_id: str, record: BaseModel) -> None:
        stored = record.model_copy(deep=True)
        working = self._working.get()
        if working is not None:
            working[name][record_id] = stored
            return
        async with self._lock:
            self._tables[name][record_id] = stored

    async def remove(self, name: str, record_id: str) -> bool:
        working = self._working.get()
        if working is not None:
            return working[name].pop(record_id, None) is not None
        async with self._lock:
            return self._tables[name].pop(record_id, None) is not None

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Run the block against a private copy of every table.

        The copy replaces the committed tables only if the block exits
        normally.

        Raises:
            TransactionError: If a transaction is already active in this context
        """
        if self.in_transaction:
            raise TransactionError("A transaction is already active in this context")

        async with self._lock:
            working = copy.deepcopy(self._tables)
            token = self._working.set(working)
            try:
                yield
            finally:
                self._working.reset(token)
            # only reached when the block did not raise
            self._tables = working

    # =========================================================================
    # MANUAL CONTROL
    # =========================================================================

    async def begin(self) -> None:
        if self.in_transaction:
            raise TransactionError("A transaction is already active in this context")
        await self._lock.acquire()
        self._manual_token = self._working.set(copy.deepcopy(self._tables))

    async def commit(self) -> None:
        working = self._end_manual()
        self._tables = working

    async def rollback(self) -> None:
        self._end_manual()

    def _end_manual(self) -> Tables:
        working = self._working.get()
        if working is None or self._manual_token is None:
            raise TransactionError("No active transaction")
        self._working.reset(self._manual_token)
        self._manual_token = None
        self._lock.release()
        return working

    def clear(self) -> None:
        self._tables = {name: {} for name in TABLES}
