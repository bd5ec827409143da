"""
Persistence adapters for workspaces and run progress.
"""

from phaseguard.infrastructure.persistence.filesystem import FilesystemPersistenceStore
from phaseguard.infrastructure.persistence.memory import InMemoryPersistenceStore

__all__ = [
    "InMemoryPersistenceStore",
    "FilesystemPersistenceStore",
]
