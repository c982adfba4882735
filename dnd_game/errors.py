"""Exceptions raised by the storage layer."""

from __future__ import annotations


class DatabaseError(Exception):
    """Base class for storage-layer failures."""


class ConfigurationError(DatabaseError):
    """Unknown environment name or unusable connection settings."""


class DatabaseNotInitializedError(DatabaseError):
    def __init__(self) -> None:
        super().__init__("Database not initialized. Call init_database() first.")


class MigrationError(DatabaseError):
    """A catalog revision failed to apply or revert; the run was halted."""

    def __init__(self, revision: str | None, direction: str, message: str | None = None) -> None:
        self.revision = revision
        self.direction = direction
        if message is None:
            where = f"revision {revision}" if revision else "an unknown revision"
            message = f"{direction} failed at {where}"
        super().__init__(message)


class DestructiveRollbackError(MigrationError):
    """A downgrade would delete rows and the operator has not confirmed it."""

    def __init__(self, revision: str, rows: int) -> None:
        self.rows = rows
        super().__init__(
            revision,
            "downgrade",
            f"Downgrading past revision {revision} deletes {rows} row(s); "
            "re-run with explicit confirmation to proceed",
        )
