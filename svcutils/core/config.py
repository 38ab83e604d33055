import logging
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Config:
    """Toolkit configuration loaded from environment variables.

    Values are read once at import; tests patch the class attributes directly.
    """

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "svcutils")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "")
    SLOW_REQUEST_SECONDS: float = float(os.getenv("SLOW_REQUEST_SECONDS", "1.0"))

    CORS_ALLOWED_ORIGINS_ENV: str = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")

    @classmethod
    def allowed_origins(cls, extra_origins: List[str] | None = None) -> List[str]:
        merged = [o.strip() for o in cls.CORS_ALLOWED_ORIGINS_ENV.split(",") if o.strip()]
        if extra_origins:
            merged.extend(extra_origins)
        # Deduplicate while preserving order
        seen = set()
        result: List[str] = []
        for origin in merged:
            if origin not in seen:
                seen.add(origin)
                result.append(origin)
        return result

    @classmethod
    def log_level(cls) -> str:
        if cls.LOG_LEVEL:
            return cls.LOG_LEVEL.upper()
        return "DEBUG" if cls.ENVIRONMENT == "development" else "WARNING"

    @classmethod
    def validate(cls) -> None:
        if not isinstance(logging.getLevelName(cls.log_level()), int):
            raise ValueError(f"LOG_LEVEL {cls.LOG_LEVEL!r} is not a valid logging level")
        if cls.SLOW_REQUEST_SECONDS <= 0:
            raise ValueError("SLOW_REQUEST_SECONDS must be positive")
