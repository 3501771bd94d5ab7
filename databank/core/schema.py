# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Table definitions and schema bootstrap for the databank store."""
from typing import Iterable

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from databank.core.logging import get_logger
from databank.repositories.specialty_repository import SpecialtyRepository

logger = get_logger(__name__)

metadata = MetaData()

physician = Table(
    "physician",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("last_name", String(50), nullable=False),
    Column("first_name", String(50), nullable=False),
    Column("email", String(100), nullable=False),
    Column("phone", String(25), nullable=False),
    Column("specialty", String(100), nullable=False),
    Column("created", DateTime, nullable=False),
    Column("updated", DateTime, nullable=False),
    Column("version", Integer, nullable=False, default=1),
    # ids are never handed out twice, even after a delete
    sqlite_autoincrement=True,
)

specialty = Table(
    "specialty",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
    sqlite_autoincrement=True,
)


def create_schema(engine: Engine, specialties: Iterable[str] = ()) -> None:
    """Create missing tables and seed the specialty vocabulary."""
    metadata.create_all(engine, checkfirst=True)
    names = list(specialties)
    if names:
        added = SpecialtyRepository(engine).seed(names)
        if added:
            logger.info("Seeded %d specialties", added)
    logger.info("Schema ready on %s", engine.url.get_backend_name())
