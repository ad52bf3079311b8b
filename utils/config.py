"""
Configuration for the writing evaluation service.
Values come from the environment (optionally a .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


# LanguageTool (grammar checker)
LANGUAGETOOL_URL = os.getenv("LANGUAGETOOL_URL", "")
DEFAULT_LANGUAGE = os.getenv("LANGUAGETOOL_DEFAULT_LANGUAGE", "en-US").strip() or "en-US"
GRAMMAR_CHECK_RETRIES = max(1, _env_int("GRAMMAR_CHECK_RETRIES", 3))
GRAMMAR_RETRY_BACKOFF = max(0.0, _env_float("GRAMMAR_RETRY_BACKOFF", 1.0))

# Input limits
MAX_TEXT_CHARS = _env_int("MAX_TEXT_CHARS", 20000)

# API
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]

# If empty in .env, default to localhost for development
if not ALLOWED_ORIGINS:
    ALLOWED_ORIGINS = [
        "http://localhost:8501",  # Local Streamlit
        "http://localhost:3000",  # Local dev
    ]

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").strip().lower() not in (
    "0",
    "false",
    "no",
)
EVALUATE_RATE_LIMIT = os.getenv("EVALUATE_RATE_LIMIT", "10/minute")
DEFAULT_RATE_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "30/minute")

# Streamlit front end
API_URL = os.getenv("API_URL", "http://localhost:8000").rstrip("/")
