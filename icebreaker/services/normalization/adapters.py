from dataclasses import dataclass
from typing import Any, Protocol

LeadFields = dict[str, Any]

TEXT_FIELDS = ("full_name", "first_name", "last_name", "headline", "about")
LIST_FIELDS = ("posts", "experience", "education")


class ProfileAdapter(Protocol):
    name: str

    def extract(self, raw: dict[str, Any]) -> LeadFields:
        ...


def first_present(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the first value under `keys` that is present and non-null."""
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


@dataclass(frozen=True)
class AliasAdapter:
    """Maps one scraper schema onto lead fields through ordered alias lists."""

    name: str
    full_name: tuple[str, ...] = ()
    first_name: tuple[str, ...] = ()
    last_name: tuple[str, ...] = ()
    headline: tuple[str, ...] = ()
    about: tuple[str, ...] = ()
    posts: tuple[str, ...] = ()
    experience: tuple[str, ...] = ()
    education: tuple[str, ...] = ()

    def extract(self, raw: dict[str, Any]) -> LeadFields:
        fields: LeadFields = {}
        for field in TEXT_FIELDS + LIST_FIELDS:
            value = first_present(raw, getattr(self, field))
            if value is not None:
                fields[field] = value
        return fields


# `positions` outranks `experience` when a payload carries both.
GENERIC_ADAPTER = AliasAdapter(
    name="generic",
    full_name=("fullName", "name"),
    headline=("headline",),
    about=("summary", "about"),
    posts=("posts",),
    experience=("positions", "experience"),
    education=("education",),
)

# rocky/linkedin-profile-scraper sometimes puts the name in `title`.
ROCKY_ADAPTER = AliasAdapter(
    name="rocky",
    full_name=("title",),
    headline=("sub_title",),
    about=("summary",),
    posts=("activities",),
    experience=("positions",),
    education=("education",),
)

DEV_FUSION_ADAPTER = AliasAdapter(
    name="dev_fusion",
    first_name=("firstName", "first_name"),
    last_name=("lastName", "last_name"),
    headline=("occupation", "jobTitle"),
    about=("about",),
    posts=("updates", "recentPosts"),
    experience=("experiences",),
    education=("educations",),
)

DEFAULT_ADAPTERS: tuple[ProfileAdapter, ...] = (
    GENERIC_ADAPTER,
    ROCKY_ADAPTER,
    DEV_FUSION_ADAPTER,
)
