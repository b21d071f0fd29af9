# 📄 File: app/modules/membership/domain/repositories/transaction_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how payment records are stored and found by the gateway's reference.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Transaction aggregate.
# 🔗 Dependencies:
# Domain models (Transaction), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, process_payment_update handler

from abc import ABC, abstractmethod
from typing import Optional

from ..models.transaction import Transaction


class TransactionRepository(ABC):

    @abstractmethod
    async def find(self, transaction_id: str) -> Optional[Transaction]:
        pass

    @abstractmethod
    async def find_by_gateway_transaction_id(self, gateway_transaction_id: str) -> Optional[Transaction]:
        pass

    @abstractmethod
    async def save(self, transaction: Transaction) -> Transaction:
        pass
