"""
Infrastructure layer package for the NCFCA Membership API.
Provides the async database connection manager.
"""

from .database.connection import Base, DatabaseConnectionManager

__all__ = [
    "Base",
    "DatabaseConnectionManager",
]
