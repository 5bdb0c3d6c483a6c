"""
Application configuration read from the environment (and an optional .env file).
"""

import os
from typing import Final, List

from dotenv import load_dotenv

load_dotenv()


class Config:
    DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite:///expense_tracker.db")
    LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO")
    API_HOST: Final[str] = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: Final[int] = int(os.getenv("API_PORT", "8080"))
    CORS_ORIGINS: Final[str] = os.getenv("CORS_ORIGINS", "*")

    @classmethod
    def cors_origins(cls) -> List[str]:
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]
