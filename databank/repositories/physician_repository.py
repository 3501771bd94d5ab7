# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for physician records with optimistic concurrency."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import DateTime, Integer, String, bindparam, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from databank.core.exceptions import ConflictError, NotFoundError, PersistenceError
from databank.core.logging import get_logger
from databank.models.domain import Physician

logger = get_logger(__name__)

PHYSICIAN_COLS = (
    "id, last_name, first_name, email, phone, specialty, created, updated, version"
)

_RESULT_TYPES = {
    "id": Integer, "last_name": String, "first_name": String, "email": String,
    "phone": String, "specialty": String, "created": DateTime,
    "updated": DateTime, "version": Integer,
}

_SELECT_ALL = text(
    f"SELECT {PHYSICIAN_COLS} FROM physician ORDER BY id"
).columns(**_RESULT_TYPES)

_SELECT_BY_ID = text(
    f"SELECT {PHYSICIAN_COLS} FROM physician WHERE id = :id"
).columns(**_RESULT_TYPES)

_INSERT = text("""
    INSERT INTO physician
        (last_name, first_name, email, phone, specialty, created, updated, version)
    VALUES
        (:last_name, :first_name, :email, :phone, :specialty, :created, :updated, 1)
    RETURNING id
""").bindparams(
    bindparam("created", type_=DateTime),
    bindparam("updated", type_=DateTime),
)

# The version predicate makes the compare-and-swap a single statement; a zero
# row count means the caller's version (or the row itself) is gone.
_UPDATE_IF_CURRENT = text("""
    UPDATE physician
       SET last_name = :last_name, first_name = :first_name, email = :email,
           phone = :phone, specialty = :specialty, updated = :updated,
           version = version + 1
     WHERE id = :id AND version = :version
""").bindparams(bindparam("updated", type_=DateTime))

_DELETE_BY_ID = text("DELETE FROM physician WHERE id = :id")

_COUNT = text("SELECT COUNT(*) FROM physician")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    now = _utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def _row_to_physician(row) -> Physician:
    return Physician(
        id=row[0],
        last_name=row[1],
        first_name=row[2],
        email=row[3],
        phone=row[4],
        specialty=row[5],
        created=row[6],
        updated=row[7],
        version=row[8],
    )


class PhysicianRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, physician: Physician) -> Physician:
        """Insert a new record; the store assigns the id, we stamp version 1."""
        now = _utcnow()
        params = physician.editable_values()
        params.update(created=now, updated=now)
        try:
            with self._engine.begin() as conn:
                new_id = conn.execute(_INSERT, params).scalar_one()
        except SQLAlchemyError as exc:
            logger.error("Failed to create physician: %s", exc)
            raise PersistenceError(f"Could not create physician: {exc}") from exc

        logger.debug("Physician created id=%s", new_id)
        return physician.model_copy(update={
            "id": new_id, "created": now, "updated": now, "version": 1,
        })

    def update(self, physician_with_edits: Physician) -> Physician:
        """Full-field replace guarded by the caller's last-known version.

        Raises ``NotFoundError`` when the record has been deleted and
        ``ConflictError`` when another writer has bumped the version since
        the caller read it. The stored record is untouched in both cases.
        """
        physician_id = physician_with_edits.id
        expected = physician_with_edits.version
        try:
            with self._engine.begin() as conn:
                current = self._fetch(conn, physician_id)
                if current is None:
                    raise NotFoundError(physician_id)
                if current.version != expected:
                    raise ConflictError(physician_id, expected, current.version)

                params = physician_with_edits.editable_values()
                params.update(
                    id=physician_id,
                    version=expected,
                    updated=_next_timestamp(current.updated),
                )
                result = conn.execute(_UPDATE_IF_CURRENT, params)
                if result.rowcount == 0:
                    # lost the race between our read and our write
                    latest = self._fetch(conn, physician_id)
                    if latest is None:
                        raise NotFoundError(physician_id)
                    raise ConflictError(physician_id, expected, latest.version)

                updated = self._fetch(conn, physician_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to update physician id=%s: %s", physician_id, exc)
            raise PersistenceError(f"Could not update physician {physician_id}: {exc}") from exc

        logger.debug("Physician updated id=%s version=%s", physician_id, updated.version)
        return updated

    def delete_by_id(self, physician_id: int) -> None:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(_DELETE_BY_ID, {"id": physician_id})
        except SQLAlchemyError as exc:
            logger.error("Failed to delete physician id=%s: %s", physician_id, exc)
            raise PersistenceError(f"Could not delete physician {physician_id}: {exc}") from exc
        if result.rowcount == 0:
            raise NotFoundError(physician_id)
        logger.debug("Physician deleted id=%s", physician_id)

    # ── Read ───────────────────────────────────────────────────────────

    def read_by_id(self, physician_id: int) -> Optional[Physician]:
        try:
            with self._engine.connect() as conn:
                return self._fetch(conn, physician_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to read physician id=%s: %s", physician_id, exc)
            raise PersistenceError(f"Could not read physician {physician_id}: {exc}") from exc

    def read_all(self) -> List[Physician]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(_SELECT_ALL).fetchall()
        except SQLAlchemyError as exc:
            logger.error("Failed to read physicians: %s", exc)
            raise PersistenceError(f"Could not read physicians: {exc}") from exc
        return [_row_to_physician(r) for r in rows]

    def count(self) -> int:
        try:
            with self._engine.connect() as conn:
                return conn.execute(_COUNT).scalar() or 0
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not count physicians: {exc}") from exc

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self):
        self._engine.dispose()

    # ── Private ────────────────────────────────────────────────────────

    @staticmethod
    def _fetch(conn: Connection, physician_id: int) -> Optional[Physician]:
        row = conn.execute(_SELECT_BY_ID, {"id": physician_id}).fetchone()
        return _row_to_physician(row) if row else None
