"""
Module: builder.loading

Purpose:
    Storage adapters for question pools and rosters.
"""

from .repository import (
    DirectoryRepository,
    InMemoryRepository,
    PoolRepository,
    RepositoryError,
)

__all__ = [
    "PoolRepository",
    "InMemoryRepository",
    "DirectoryRepository",
    "RepositoryError",
]
