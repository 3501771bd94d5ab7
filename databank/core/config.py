# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Centralised settings — read from env vars once."""
import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "physician-databank")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./databank.db")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT: int = int(os.getenv("PORT", "8080"))
    POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))
    POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))
    STATEMENT_TIMEOUT_MS: int = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))
    AUTO_CREATE_SCHEMA: bool = _flag("AUTO_CREATE_SCHEMA", "true")
    STRICT_SPECIALTIES: bool = _flag("STRICT_SPECIALTIES", "false")
    DEFAULT_SPECIALTIES: list = [
        s.strip() for s in os.getenv(
            "DEFAULT_SPECIALTIES",
            "Anesthesiology,Cardiology,Dermatology,Emergency Medicine,Family Medicine,"
            "Neurology,Obstetrics and Gynecology,Oncology,Ophthalmology,Pediatrics,"
            "Psychiatry,Radiology,Surgery,Urology",
        ).split(",") if s.strip()
    ]


settings = Settings()
