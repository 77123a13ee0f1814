# backend/config.py
from __future__ import annotations
from pathlib import Path
import os
from dotenv import load_dotenv

# Load exactly backend/.env (do NOT call load_dotenv() without a path)
ENV_FILE = Path(__file__).with_name(".env")
load_dotenv(ENV_FILE, override=False)

# Every outbound call (geocoding, directions, emission API) is bounded by this.
MAX_HTTP_TIMEOUT_S = 10.0


def get_data_dir() -> Path:
    # Fallback to backend/data when DATA_DIR is not set
    return Path(os.getenv("DATA_DIR", str(Path(__file__).with_name("data")))).resolve()


def _default_database_url() -> str:
    return f"sqlite+aiosqlite:///{get_data_dir() / 'greenroute.db'}"


def _timeout() -> float:
    raw = float(os.getenv("HTTP_TIMEOUT_S", str(MAX_HTTP_TIMEOUT_S)))
    return min(max(raw, 0.1), MAX_HTTP_TIMEOUT_S)


class Settings:
    MAPBOX_TOKEN: str = (
        os.getenv("MAPBOX_TOKEN") or os.getenv("MAPBOX_ACCESS_TOKEN") or ""
    )
    MAPBOX_BASE: str = os.getenv("MAPBOX_BASE", "https://api.mapbox.com")
    GEOCODE_COUNTRY: str = os.getenv("GEOCODE_COUNTRY", "IN")
    # Empty string disables the remote tier; estimates then come from the local table.
    EMISSION_API_URL: str = os.getenv(
        "EMISSION_API_URL", "https://emissionapi.onrender.com"
    )
    HTTP_TIMEOUT_S: float = _timeout()

    DATABASE_URL: str = os.getenv("DATABASE_URL") or _default_database_url()
    DB_ECHO: bool = os.getenv("DB_ECHO", "0") == "1"

    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", str(7 * 24 * 60)))

    CORS_ALLOW_ORIGINS: list[str] = os.getenv(
        "CORS_ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings
