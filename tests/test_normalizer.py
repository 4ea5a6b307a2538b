from __future__ import annotations

import pytest

from icebreaker.services.normalization.adapters import (
    DEV_FUSION_ADAPTER,
    GENERIC_ADAPTER,
    ROCKY_ADAPTER,
    first_present,
)
from icebreaker.services.normalization.normalizer import (
    first_name_of,
    is_usable_name,
    name_from_url,
    normalize,
)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.linkedin.com/in/anil-kumar-b123a9f", "Anil Kumar"),
        ("https://linkedin.com/in/john-smith-882x1/", "John Smith"),
        ("https://www.linkedin.com/in/jane-doe-42/", "Jane Doe"),
        ("https://www.linkedin.com/in/jane-doe/", "Jane Doe"),
        ("https://www.linkedin.com/in/maria-garcia?trk=public", "Maria Garcia"),
        ("https://www.linkedin.com/in/jos%C3%A9-p%C3%A9rez-1a2b3c4/", "José Pérez"),
        ("https://www.linkedin.com/company/acme/", ""),
        ("", ""),
    ],
)
def test_name_from_url(url, expected):
    assert name_from_url(url) == expected


def test_name_from_url_keeps_short_alnum_tokens():
    # "li3" is too short to be an opaque id.
    assert name_from_url("https://linkedin.com/in/wei-li3") == "Wei Li3"


@pytest.mark.parametrize(
    "candidate,usable",
    [
        ("Jane Doe", True),
        ("undefined undefined", False),
        ("null null", False),
        ("None None", False),
        ("J", False),
        ("", False),
    ],
)
def test_is_usable_name(candidate, usable):
    assert is_usable_name(candidate) is usable


def test_first_name_of():
    assert first_name_of("Jane Doe") == "Jane"
    assert first_name_of("") == "there"


def test_missing_name_falls_back_to_url_slug():
    lead = normalize({"headline": "CTO"}, "https://www.linkedin.com/in/anil-kumar-b123a9f")
    assert lead.full_name == "Anil Kumar"
    assert lead.first_name == "Anil"
    assert lead.name_source == "url"
    assert lead.headline == "CTO"


def test_null_profile_uses_url_name():
    lead = normalize(None, "https://linkedin.com/in/john-smith-882x1/")
    assert lead.full_name == "John Smith"
    assert lead.first_name == "John"
    assert lead.headline == ""
    assert lead.about == ""
    assert lead.posts == []
    assert lead.source_url == "https://linkedin.com/in/john-smith-882x1/"


def test_degenerate_name_falls_back_to_url():
    lead = normalize(
        {"fullName": "undefined undefined"},
        "https://linkedin.com/in/priya-shah-9f8e7d6",
    )
    assert lead.full_name == "Priya Shah"
    assert "undefined" not in lead.full_name


def test_half_missing_name_drops_placeholder_token():
    lead = normalize({"fullName": "undefined Smith"}, "https://linkedin.com/in/john-smith-882x1/")
    assert lead.full_name == "Smith"
    assert lead.first_name == "Smith"
    assert "undefined" not in lead.full_name.lower()


def test_split_name_with_missing_first_part():
    lead = normalize({"firstName": "null", "lastName": "Lovelace"}, "")
    assert lead.full_name == "Lovelace"
    assert lead.name_source == "dev_fusion"


def test_placeholder_when_nothing_resolves():
    lead = normalize({}, "not a profile url")
    assert lead.full_name == "there"
    assert lead.first_name == "there"
    assert lead.name_source == "placeholder"


def test_direct_name_wins_over_split_names():
    lead = normalize(
        {"fullName": "Jane Doe", "firstName": "Janet", "lastName": "Smith"},
        "https://linkedin.com/in/someone-else",
    )
    assert lead.full_name == "Jane Doe"
    assert lead.name_source == "generic"


def test_split_names_used_when_full_name_missing():
    lead = normalize(
        {"firstName": " Ada ", "lastName": "Lovelace"},
        "https://linkedin.com/in/x-123456",
    )
    assert lead.full_name == "Ada Lovelace"
    assert lead.name_source == "dev_fusion"


def test_rocky_schema_is_flattened():
    raw = {
        "title": "Sam Lee",
        "sub_title": "VP Sales at Globex",
        "summary": "Building   sales teams.",
        "activities": [{"text": "a"}, {"text": "b"}, {"text": "c"}, {"text": "d"}],
        "positions": [{"title": "VP Sales", "company": "Globex"}],
    }
    lead = normalize(raw, "https://linkedin.com/in/sam-lee")
    assert lead.full_name == "Sam Lee"
    assert lead.headline == "VP Sales at Globex"
    assert lead.about == "Building sales teams."
    assert [p["text"] for p in lead.posts] == ["a", "b", "c"]
    assert lead.experience == [{"title": "VP Sales", "company": "Globex"}]


def test_positions_outrank_experience():
    raw = {
        "fullName": "Sam Lee",
        "experience": [{"title": "Intern"}],
        "positions": [{"title": "VP Sales", "company": "Globex"}],
    }
    lead = normalize(raw, "")
    assert lead.experience == [{"title": "VP Sales", "company": "Globex"}]


def test_name_from_url_capitalizes_after_apostrophe():
    assert name_from_url("https://linkedin.com/in/sean-o%27brien") == "Sean O'Brien"


def test_null_and_non_list_sequences_default_to_empty():
    raw = {"name": "Kim Park", "posts": None, "experience": "n/a", "education": [None, {"school": "KAIST"}]}
    lead = normalize(raw, "")
    assert lead.posts == []
    assert lead.experience == []
    assert lead.education == [{"school": "KAIST"}]


def test_blank_generic_field_falls_through_to_next_adapter():
    raw = {"fullName": "Kim Park", "headline": "   ", "occupation": "Data Lead"}
    lead = normalize(raw, "")
    assert lead.headline == "Data Lead"


@pytest.mark.parametrize(
    "raw",
    [
        None,
        {},
        {"fullName": "null null"},
        {"name": "X"},
        {"firstName": "Émile", "lastName": "Zola"},
        {"title": "  Grace   Hopper  "},
    ],
)
def test_first_name_is_first_token_of_full_name(raw):
    lead = normalize(raw, "https://linkedin.com/in/some-body-12ab34")
    assert lead.first_name
    assert lead.full_name
    assert lead.first_name == lead.full_name.split()[0]


def test_alias_adapters_extract_in_alias_order():
    raw = {"summary": "from summary", "about": "from about"}
    assert GENERIC_ADAPTER.extract(raw)["about"] == "from summary"
    assert ROCKY_ADAPTER.extract({"positions": []})["experience"] == []
    assert DEV_FUSION_ADAPTER.extract({"jobTitle": "PM"}) == {"headline": "PM"}


def test_first_present_skips_null_and_blank():
    assert first_present({"a": None, "b": " ", "c": "ok"}, ("a", "b", "c")) == "ok"
    assert first_present({}, ("a",)) is None
