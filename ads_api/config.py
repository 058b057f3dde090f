from __future__ import annotations

import os
from typing import List, Optional


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _parse_list(value: Optional[str], default: List[str]) -> List[str]:
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


# Database
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./marketplace_ads.db")
APPLY_DB_MIGRATIONS_ON_STARTUP: bool = _parse_bool(
    os.getenv("APPLY_DB_MIGRATIONS_ON_STARTUP", "false"), default=False
)

# JWT
JWT_SECRET: str = os.getenv("JWT_SECRET", "test-secret-key")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
JWT_ISSUER: str = os.getenv("JWT_ISSUER", "marketplace-ads")
ACCESS_TOKEN_EXPIRES_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRES_MINUTES", "15"))

# Argon2id password hashing
ARGON2_TIME_COST: int = int(os.getenv("ARGON2_TIME_COST", "2"))
ARGON2_MEMORY_COST: int = int(os.getenv("ARGON2_MEMORY_COST", "102400"))
ARGON2_PARALLELISM: int = int(os.getenv("ARGON2_PARALLELISM", "8"))

# Stripe wallet top-ups
STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "")
STRIPE_WEBHOOK_SECRET: str = os.getenv("STRIPE_WEBHOOK_SECRET", "")
FRONTEND_BASE_URL: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")

# Marketplace
DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "TRY")
HEALTH_CHECK_TENANT_ID: str = os.getenv("HEALTH_CHECK_TENANT_ID", "default-tenant")

# HTTP / logging
CORS_ORIGINS: List[str] = _parse_list(
    os.getenv("CORS_ORIGINS"), ["http://localhost:5173", "http://127.0.0.1:5173"]
)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
