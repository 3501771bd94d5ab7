# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""FastAPI dependency injection wiring."""
from databank.core.config import settings
from databank.core.database import engine
from databank.repositories.physician_repository import PhysicianRepository
from databank.repositories.specialty_repository import SpecialtyRepository
from databank.services.physician_service import PhysicianService

_physician_repo = PhysicianRepository(engine)
_specialty_repo = SpecialtyRepository(engine)
_service = PhysicianService(
    _physician_repo, _specialty_repo, strict_specialties=settings.STRICT_SPECIALTIES,
)


def get_physician_repo() -> PhysicianRepository:
    return _physician_repo


def get_physician_service() -> PhysicianService:
    return _service
