# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: specialty vocabulary.
Supplies the controlled list of names a physician's specialty is drawn from.
"""
from typing import Iterable, List

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from databank.core.exceptions import PersistenceError
from databank.core.logging import get_logger

logger = get_logger(__name__)


class SpecialtyRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def read_all_specialties(self) -> List[str]:
        logger.debug("reading all specialties")
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text("SELECT name FROM specialty ORDER BY name")).fetchall()
        except SQLAlchemyError as exc:
            logger.error("Failed to read specialties: %s", exc)
            raise PersistenceError(f"Could not read specialties: {exc}") from exc
        return [r[0] for r in rows]

    def seed(self, names: Iterable[str]) -> int:
        """Insert the names not already present; returns how many were added."""
        added = 0
        try:
            with self._engine.begin() as conn:
                existing = {r[0] for r in conn.execute(text("SELECT name FROM specialty")).fetchall()}
                for name in names:
                    if name in existing:
                        continue
                    conn.execute(text("INSERT INTO specialty (name) VALUES (:name)"), {"name": name})
                    existing.add(name)
                    added += 1
        except SQLAlchemyError as exc:
            logger.error("Failed to seed specialties: %s", exc)
            raise PersistenceError(f"Could not seed specialties: {exc}") from exc
        return added
