import os
from dotenv import load_dotenv

load_dotenv()

# Detect environment (default to production)
ENV = os.getenv("APP_ENV", "production").lower()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./taskboard.db")

# Only development may fall back to the built-in signing key
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    if ENV != "development":
        raise RuntimeError("JWT_SECRET must be set when APP_ENV is not 'development'")
    JWT_SECRET = "dev-secret-change-me-before-deploying"
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "1440"))

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]

# Dev frontend
DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
