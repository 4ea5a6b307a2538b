import re
from typing import Any, Iterable
from urllib.parse import unquote

from ...models import LeadRecord
from ..utils.constants import (
    DEGENERATE_NAME_TOKENS,
    MAX_EDUCATION,
    MAX_EXPERIENCE,
    MAX_POSTS,
    MIN_NAME_LENGTH,
    NAME_PLACEHOLDER,
)
from ..utils.text_utils import clean_text, title_case_words
from .adapters import DEFAULT_ADAPTERS, LeadFields, ProfileAdapter

PROFILE_SLUG_RE = re.compile(r"/in/([^/?#]+)", re.IGNORECASE)

LIST_LIMITS = {
    "posts": MAX_POSTS,
    "experience": MAX_EXPERIENCE,
    "education": MAX_EDUCATION,
}


def is_usable_name(candidate: str) -> bool:
    if len(candidate) < MIN_NAME_LENGTH:
        return False
    tokens = candidate.lower().split()
    return not all(token in DEGENERATE_NAME_TOKENS for token in tokens)


def drop_degenerate_tokens(candidate: str) -> str:
    """Drop placeholder tokens: `undefined Smith` -> `Smith`."""
    return " ".join(tok for tok in candidate.split() if tok.lower() not in DEGENERATE_NAME_TOKENS)


def _is_opaque_id(token: str) -> bool:
    if token.isdigit():
        return True
    has_digit = any(ch.isdigit() for ch in token)
    has_alpha = any(ch.isalpha() for ch in token)
    return len(token) >= 5 and token.isalnum() and has_digit and has_alpha


def name_from_url(url: str) -> str:
    """Derive a display name from a `/in/<slug>` profile URL.

    `https://linkedin.com/in/anil-kumar-b123a9f/` -> "Anil Kumar". Returns ""
    when the URL carries no usable slug.
    """
    if not url:
        return ""
    match = PROFILE_SLUG_RE.search(unquote(url.strip()))
    if not match:
        return ""
    tokens = [tok for tok in match.group(1).split("-") if tok]
    while len(tokens) > 1 and _is_opaque_id(tokens[-1]):
        tokens.pop()
    return title_case_words(" ".join(tokens))


def first_name_of(full_name: str) -> str:
    tokens = full_name.split()
    return tokens[0] if tokens else NAME_PLACEHOLDER


def _name_candidates(extracted: list[tuple[str, LeadFields]]) -> Iterable[tuple[str, str]]:
    for adapter_name, fields in extracted:
        yield adapter_name, clean_text(fields.get("full_name"))
    for adapter_name, fields in extracted:
        joined = " ".join(
            part
            for part in (clean_text(fields.get("first_name")), clean_text(fields.get("last_name")))
            if part
        )
        yield adapter_name, joined


def resolve_full_name(extracted: list[tuple[str, LeadFields]], source_url: str) -> tuple[str, str]:
    for adapter_name, raw_candidate in _name_candidates(extracted):
        candidate = drop_degenerate_tokens(raw_candidate)
        if is_usable_name(candidate):
            return candidate, adapter_name

    from_url = drop_degenerate_tokens(name_from_url(source_url))
    if from_url and is_usable_name(from_url):
        return from_url, "url"
    return NAME_PLACEHOLDER, "placeholder"


def _first_field(extracted: list[tuple[str, LeadFields]], field: str) -> Any:
    for _, fields in extracted:
        value = fields.get(field)
        if field in LIST_LIMITS:
            if isinstance(value, list) and any(item is not None for item in value):
                return value
        elif clean_text(value):
            return value
    return None


def _take_list(value: Any, limit: int) -> list[Any]:
    if not isinstance(value, list):
        return []
    return [item for item in value if item is not None][:limit]


def normalize(
    raw_profile: dict[str, Any] | None,
    source_url: str,
    adapters: tuple[ProfileAdapter, ...] = DEFAULT_ADAPTERS,
) -> LeadRecord:
    raw = raw_profile if isinstance(raw_profile, dict) else {}
    extracted = [(adapter.name, adapter.extract(raw)) for adapter in adapters]

    full_name, name_source = resolve_full_name(extracted, source_url)

    return LeadRecord(
        full_name=full_name,
        first_name=first_name_of(full_name),
        headline=clean_text(_first_field(extracted, "headline")),
        about=clean_text(_first_field(extracted, "about")),
        posts=_take_list(_first_field(extracted, "posts"), LIST_LIMITS["posts"]),
        experience=_take_list(_first_field(extracted, "experience"), LIST_LIMITS["experience"]),
        education=_take_list(_first_field(extracted, "education"), LIST_LIMITS["education"]),
        source_url=source_url or "",
        name_source=name_source,
    )
