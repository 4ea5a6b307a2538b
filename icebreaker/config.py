import json
import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load `<project>/.env` (if present) so local dev doesn't require re-exporting env vars.
# This runs before any of the settings below are read from the environment.
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_json(name: str, default: dict[str, object]) -> dict[str, object]:
    raw = os.getenv(name, "")
    if not raw.strip():
        return dict(default)
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError(f"{name} must be a JSON object")
    return parsed


DEFAULT_OPENAI_MODEL = "gpt-4o"
OPENAI_MODEL = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.75"))

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
GEMINI_MODEL = os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta/models"
)

LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# The scraping actor's identity and input contract have changed across scraper
# versions, so both are configuration rather than code.
APIFY_API_URL = os.getenv("APIFY_API_URL", "https://api.apify.com/v2")
APIFY_ACTOR_ID = os.getenv("APIFY_ACTOR_ID", "rocky/linkedin-profile-scraper")
APIFY_URL_INPUT_KEY = os.getenv("APIFY_URL_INPUT_KEY", "profileUrls")
APIFY_URL_AS_LIST = _env_flag("APIFY_URL_AS_LIST", "1")
APIFY_EXTRA_INPUT = _env_json("APIFY_EXTRA_INPUT", {"deepScrape": True})
APIFY_TIMEOUT_SECONDS = float(os.getenv("APIFY_TIMEOUT_SECONDS", "300"))

REQUEST_LOG_PATH = Path(
    os.getenv("REQUEST_LOG_PATH", str(PROJECT_ROOT / "logs" / "requests.ndjson"))
)
PROMPT_DEBUG = _env_flag("PROMPT_DEBUG")
