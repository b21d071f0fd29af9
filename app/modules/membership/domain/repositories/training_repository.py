# 📄 File: app/modules/membership/domain/repositories/training_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how training videos are stored, listed and removed.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Training aggregate.
# 🔗 Dependencies:
# Domain models (Training), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, training handlers

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.training import Training


class TrainingRepository(ABC):

    @abstractmethod
    async def find(self, training_id: str) -> Optional[Training]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Training]:
        """All trainings, newest first."""
        pass

    @abstractmethod
    async def save(self, training: Training) -> Training:
        pass

    @abstractmethod
    async def delete(self, training_id: str) -> bool:
        """
        Delete a training.

        Returns:
            True if a row was removed, False if it did not exist
        """
        pass
