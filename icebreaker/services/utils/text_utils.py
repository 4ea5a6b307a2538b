import re
import unicodedata
from typing import Any


def normalize_key(text: str) -> str:
    if not text:
        return ""
    normalized = unicodedata.normalize("NFKD", text)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    normalized = re.sub(r"[^a-z0-9]+", " ", normalized.lower()).strip()
    return normalized


def clean_text(value: Any) -> str:
    """Coerce a scraped value to a single-spaced string ("" for None/containers)."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return " ".join(str(value).split())


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    if len(text) <= limit:
        return text
    return text[: max(0, limit - len(suffix))].rstrip() + suffix


def title_case_words(text: str) -> str:
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), " ".join(text.split()))


def word_count(text: str) -> int:
    return len(text.split())


def contains_phrase(text: str, phrase: str) -> bool:
    nt = normalize_key(text)
    np = normalize_key(phrase)
    if not np:
        return False
    return f" {np} " in f" {nt} "
