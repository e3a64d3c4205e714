"""
Runtime configuration read from the environment.

A local `.env` file is loaded first so developers can keep secrets out of
their shell profile. Every value has a development default; production
deployments are expected to supply at least DATABASE_URL and JWT_SECRET.
"""

import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_JWT_SECRET = "change-me-in-production"


def _normalize_database_url(url: str) -> str:
    # Heroku-style URLs use the legacy scheme SQLAlchemy no longer accepts
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


DATABASE_URL = _normalize_database_url(
    os.getenv("DATABASE_URL", "sqlite:///./testdesk.db")
)

# Token signing
JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
TOKEN_EXPIRE_MINUTES = int(os.getenv("TOKEN_EXPIRE_MINUTES", "480"))

# Server
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

SERVICE_NAME = "testdesk-backend"
VERSION = "1.0.0"
