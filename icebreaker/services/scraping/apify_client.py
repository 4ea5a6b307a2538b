from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import httpx

from ...config import (
    APIFY_ACTOR_ID,
    APIFY_API_URL,
    APIFY_EXTRA_INPUT,
    APIFY_TIMEOUT_SECONDS,
    APIFY_URL_AS_LIST,
    APIFY_URL_INPUT_KEY,
)
from ...errors import ScrapeEmptyError, ScrapeError


def normalize_profile_url(url: str) -> str:
    """Trim, force https and drop query/fragment/trailing slash."""
    url = (url or "").strip()
    if not url:
        return url
    if "://" not in url:
        url = "https://" + url
    parts = urlsplit(url)
    scheme = "https" if parts.scheme in {"http", "https"} else parts.scheme
    path = parts.path.rstrip("/")
    return urlunsplit((scheme, parts.netloc, path, "", ""))


@dataclass(frozen=True)
class ActorInputSpec:
    """How the configured actor expects to receive the profile URL."""

    url_key: str = APIFY_URL_INPUT_KEY
    url_as_list: bool = APIFY_URL_AS_LIST
    extra: dict[str, Any] = field(default_factory=lambda: dict(APIFY_EXTRA_INPUT))

    def build(self, profile_url: str) -> dict[str, Any]:
        body = dict(self.extra)
        body[self.url_key] = [profile_url] if self.url_as_list else profile_url
        return body


@dataclass
class ApifyRunResult:
    status_code: int
    items: list[Any]


class ApifyProfileScraper:
    def __init__(
        self,
        api_url: str = APIFY_API_URL,
        actor_id: str = APIFY_ACTOR_ID,
        input_spec: ActorInputSpec | None = None,
        timeout_seconds: float = APIFY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.actor_id = actor_id
        self.input_spec = input_spec or ActorInputSpec()
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @property
    def run_sync_url(self) -> str:
        # Actor ids are "user/name" in the console but "user~name" in API paths.
        return f"{self.api_url}/acts/{self.actor_id.replace('/', '~')}/run-sync-get-dataset-items"

    async def run_actor(self, *, token: str, profile_url: str) -> ApifyRunResult:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self.transport
        ) as client:
            try:
                response = await client.post(
                    self.run_sync_url,
                    params={"token": token},
                    headers={"Content-Type": "application/json"},
                    json=self.input_spec.build(profile_url),
                )
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise ScrapeError(f"Scraper request failed: {exc}") from exc

        if response.status_code >= 400:
            raise ScrapeError(
                f"Scraper returned HTTP {response.status_code}: {response.text[:300]}"
            )
        try:
            items = response.json()
        except ValueError as exc:
            raise ScrapeError("Scraper returned a non-JSON body") from exc
        if isinstance(items, dict):
            items = items.get("items") or []
        if not isinstance(items, list):
            raise ScrapeError("Scraper returned an unexpected payload")
        return ApifyRunResult(status_code=response.status_code, items=items)

    async def fetch_profile(self, *, token: str, profile_url: str) -> dict[str, Any]:
        result = await self.run_actor(token=token, profile_url=normalize_profile_url(profile_url))
        if not result.items:
            raise ScrapeEmptyError()
        profile = result.items[0]
        if not isinstance(profile, dict) or not profile:
            raise ScrapeEmptyError()
        return profile
