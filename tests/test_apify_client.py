from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from icebreaker.errors import ScrapeEmptyError, ScrapeError
from icebreaker.services.scraping.apify_client import (
    ActorInputSpec,
    ApifyProfileScraper,
    normalize_profile_url,
)


def _scraper(handler, captured: list | None = None, **kwargs) -> ApifyProfileScraper:
    def _handle(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return handler(request)

    return ApifyProfileScraper(
        api_url="https://apify.test/v2",
        transport=httpx.MockTransport(_handle),
        **kwargs,
    )


@pytest.mark.parametrize(
    "url,expected",
    [
        ("  https://www.linkedin.com/in/jane-doe/  ", "https://www.linkedin.com/in/jane-doe"),
        ("http://linkedin.com/in/jane-doe?trk=abc#top", "https://linkedin.com/in/jane-doe"),
        ("www.linkedin.com/in/jane-doe", "https://www.linkedin.com/in/jane-doe"),
        ("", ""),
    ],
)
def test_normalize_profile_url(url, expected):
    assert normalize_profile_url(url) == expected


def test_actor_input_spec_variants():
    as_list = ActorInputSpec(url_key="profileUrls", url_as_list=True, extra={"deepScrape": True})
    assert as_list.build("u") == {"profileUrls": ["u"], "deepScrape": True}
    single = ActorInputSpec(url_key="url", url_as_list=False, extra={})
    assert single.build("u") == {"url": "u"}


def test_fetch_profile_returns_first_item():
    captured: list[httpx.Request] = []
    scraper = _scraper(
        lambda request: httpx.Response(200, json=[{"fullName": "Jane Doe"}, {"fullName": "Other"}]),
        captured,
        actor_id="rocky/linkedin-profile-scraper",
        input_spec=ActorInputSpec(url_key="profileUrls", url_as_list=True, extra={"deepScrape": True}),
    )

    profile = asyncio.run(
        scraper.fetch_profile(token="apify-token", profile_url="https://linkedin.com/in/jane-doe/")
    )

    assert profile == {"fullName": "Jane Doe"}
    request = captured[0]
    assert request.url.path == "/v2/acts/rocky~linkedin-profile-scraper/run-sync-get-dataset-items"
    assert request.url.params["token"] == "apify-token"
    assert json.loads(request.content) == {
        "profileUrls": ["https://linkedin.com/in/jane-doe"],
        "deepScrape": True,
    }


@pytest.mark.parametrize("payload", [[], [None], [{}], {"items": []}])
def test_empty_results_raise_scrape_empty(payload):
    scraper = _scraper(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(ScrapeEmptyError, match="private"):
        asyncio.run(scraper.fetch_profile(token="t", profile_url="https://linkedin.com/in/x"))


def test_http_error_raises_scrape_error():
    scraper = _scraper(lambda request: httpx.Response(402, text="Monthly usage hard limit exceeded"))
    with pytest.raises(ScrapeError, match="HTTP 402"):
        asyncio.run(scraper.fetch_profile(token="t", profile_url="https://linkedin.com/in/x"))


def test_transport_error_raises_scrape_error():
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    scraper = _scraper(_boom)
    with pytest.raises(ScrapeError, match="timed out"):
        asyncio.run(scraper.fetch_profile(token="t", profile_url="https://linkedin.com/in/x"))


def test_malformed_api_url_raises_scrape_error():
    scraper = ApifyProfileScraper(
        api_url="https://apify.test:notaport/v2",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
    )
    with pytest.raises(ScrapeError, match="Scraper request failed"):
        asyncio.run(scraper.fetch_profile(token="t", profile_url="https://linkedin.com/in/x"))
