import os
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from dotenv import load_dotenv

# Load environment variables from backend/.env
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

DEFAULT_DATABASE_URL = "sqlite:///./jobly.db"
DEFAULT_TEST_DATABASE_URL = "sqlite:///./jobly_test.db"


def jobly_env() -> str:
    return os.getenv("JOBLY_ENV", "development").strip().lower()


def secret_key() -> str:
    return os.getenv("SECRET_KEY", "secret-dev")


def token_ttl_minutes() -> int | None:
    raw = os.getenv("TOKEN_TTL_MINUTES", "").strip()
    if not raw:
        return None
    return int(raw)


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper()


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


def normalize_database_url(url: str) -> str:
    # Hosted Postgres URLs are often provided as postgresql:// or postgres://
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


def get_database_uri() -> str:
    if jobly_env() == "test":
        url = os.getenv("DATABASE_URL_TEST", "").strip() or DEFAULT_TEST_DATABASE_URL
    else:
        url = os.getenv("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL
    return normalize_database_url(url)


def database_url_for_log(url: str) -> str:
    if not url:
        return ""
    parsed = urlsplit(url)
    if parsed.password is None:
        return url
    netloc = parsed.netloc.replace(f":{parsed.password}@", ":***@")
    return urlunsplit((parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment))
