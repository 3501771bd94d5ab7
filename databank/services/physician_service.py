# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic around the physician repository."""
from typing import List, Optional

from databank.core.exceptions import ConflictError, NotFoundError
from databank.core.logging import get_logger
from databank.metrics import (
    PHYSICIANS_CREATED, PHYSICIANS_DELETED, PHYSICIANS_TOTAL,
    PHYSICIANS_UPDATED, UPDATE_REJECTIONS,
)
from databank.models.domain import Physician
from databank.repositories.physician_repository import PhysicianRepository
from databank.repositories.specialty_repository import SpecialtyRepository

logger = get_logger(__name__)


class PhysicianService:
    def __init__(self, physician_repo: PhysicianRepository,
                 specialty_repo: SpecialtyRepository,
                 strict_specialties: bool = False):
        self._repo = physician_repo
        self._specialties = specialty_repo
        self._strict = strict_specialties

    def seed_gauges(self):
        PHYSICIANS_TOTAL.set(self._repo.count())
        logger.info("Prometheus gauges loaded from DB")

    # ── Physicians ─────────────────────────────────────────────────────

    def create_physician(self, last_name: str, first_name: str, email: str,
                         phone: str, specialty: str) -> Physician:
        self._check_specialty(specialty)
        created = self._repo.create(Physician(
            last_name=last_name, first_name=first_name, email=email,
            phone=phone, specialty=specialty,
        ))
        PHYSICIANS_CREATED.inc()
        PHYSICIANS_TOTAL.inc()
        logger.info("Physician created id=%s specialty=%s", created.id, specialty)
        return created

    def list_physicians(self) -> List[Physician]:
        physicians = self._repo.read_all()
        logger.debug("Fetched %d physicians", len(physicians))
        return physicians

    def get_physician(self, physician_id: int) -> Optional[Physician]:
        return self._repo.read_by_id(physician_id)

    def update_physician(self, physician_id: int, version: int, last_name: str,
                         first_name: str, email: str, phone: str,
                         specialty: str) -> Physician:
        """Apply a full-field edit; ``NotFoundError`` and ``ConflictError`` propagate.

        Retrying is left to the caller, who has to re-read the record and
        re-apply their edits against the new version.
        """
        if not self._specialty_allowed(specialty):
            # a vanished record outranks a bad specialty
            if self._repo.read_by_id(physician_id) is None:
                UPDATE_REJECTIONS.labels(reason="missing").inc()
                raise NotFoundError(physician_id)
            raise ValueError(f"Unknown specialty '{specialty}'")
        edits = Physician(
            id=physician_id, version=version, last_name=last_name,
            first_name=first_name, email=email, phone=phone, specialty=specialty,
        )
        try:
            updated = self._repo.update(edits)
        except NotFoundError:
            UPDATE_REJECTIONS.labels(reason="missing").inc()
            logger.warning("Update rejected, physician id=%s no longer exists", physician_id)
            raise
        except ConflictError as exc:
            UPDATE_REJECTIONS.labels(reason="out_of_date").inc()
            logger.warning("Update rejected, physician id=%s out of date (given=%s stored=%s)",
                           physician_id, version, exc.actual_version)
            raise
        PHYSICIANS_UPDATED.inc()
        logger.info("Physician updated id=%s version=%s", physician_id, updated.version)
        return updated

    def delete_physician(self, physician_id: int) -> bool:
        """Remove a record; a record that is already gone is not an error."""
        try:
            self._repo.delete_by_id(physician_id)
        except NotFoundError:
            logger.info("Delete skipped, physician id=%s does not exist", physician_id)
            return False
        PHYSICIANS_DELETED.inc()
        PHYSICIANS_TOTAL.dec()
        logger.info("Physician deleted id=%s", physician_id)
        return True

    # ── Specialties ────────────────────────────────────────────────────

    def list_specialties(self) -> List[str]:
        return self._specialties.read_all_specialties()

    def _specialty_allowed(self, specialty: str) -> bool:
        if not self._strict:
            return True
        return specialty in self._specialties.read_all_specialties()

    def _check_specialty(self, specialty: str):
        if not self._specialty_allowed(specialty):
            raise ValueError(f"Unknown specialty '{specialty}'")
