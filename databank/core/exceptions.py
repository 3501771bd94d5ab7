# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Error taxonomy raised by the repositories and mapped by the controllers."""
from typing import Optional


class DataBankError(Exception):
    """Base class for every error the data layer signals to its callers."""


class NotFoundError(DataBankError, KeyError):
    """No current record exists for the requested physician id."""

    def __init__(self, physician_id: int):
        self.physician_id = physician_id
        super().__init__(f"Physician {physician_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class ConflictError(DataBankError, ValueError):
    """The caller's version is stale: another writer updated the record first."""

    def __init__(self, physician_id: int, expected_version: int,
                 actual_version: Optional[int] = None):
        self.physician_id = physician_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Physician {physician_id} is out of date "
            f"(given version {expected_version}, stored version {actual_version})"
        )


class PersistenceError(DataBankError):
    """The backing store rejected or failed the operation."""
