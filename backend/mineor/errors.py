# Overview: Error taxonomy shared by the record services.

from __future__ import annotations


class MineOrError(Exception):
    """Base class for every error raised by the record services."""


class NotFoundError(MineOrError, LookupError):
    """The requested record id does not exist."""

    def __init__(self, entity: str, record_id):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class ValidationError(MineOrError, ValueError):
    """Input rejected before it reaches the store; callers should block submission."""


class StorageError(MineOrError):
    """The embedded database refused the write (quota, corruption, lock)."""
