# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

EDITABLE_FIELDS: tuple[str, ...] = (
    "last_name", "first_name", "email", "phone", "specialty",
)


class Physician(BaseModel):
    """One physician record.

    ``id``, ``created``, ``updated`` and ``version`` are owned by the
    repository: they are unset on a record that has not been created yet.
    """
    id: Optional[int] = None
    last_name: str
    first_name: str
    email: str
    phone: str
    specialty: str
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    version: Optional[int] = None

    def editable_values(self) -> dict:
        return {field: getattr(self, field) for field in EDITABLE_FIELDS}
