# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the physician and specialty repositories."""
from databank.repositories.physician_repository import PhysicianRepository
from databank.repositories.specialty_repository import SpecialtyRepository

__all__ = ["PhysicianRepository", "SpecialtyRepository"]
