import json
from typing import Any

from ...models import LeadRecord
from ..utils.constants import (
    ABOUT_MAX_CHARS,
    BASE_BANLIST,
    JSON_OUTPUT_SHAPE,
    MODE_PURE_NETWORKING,
    MODE_SALES_BRIDGE,
    NETWORKING_WORD_LIMIT,
    OFFER_MIN_CHARS,
    SALES_WORD_LIMIT,
    SIGNAL_MENU,
)
from ..utils.text_utils import truncate

NO_OFFER_TEXT = "None. This is pure networking: do not pitch, sell or mention any product or service."


def has_offer(offer: str | None) -> bool:
    return len((offer or "").strip()) > OFFER_MIN_CHARS


def composition_mode(offer: str | None) -> str:
    return MODE_SALES_BRIDGE if has_offer(offer) else MODE_PURE_NETWORKING


def _compact_json(items: list[Any]) -> str:
    if not items:
        return "(none)"
    return json.dumps(items, ensure_ascii=False, default=str)


def summarize_lead(lead: LeadRecord) -> str:
    about = truncate(lead.about, ABOUT_MAX_CHARS) if lead.about else "(none)"
    return "\n".join(
        [
            f"Name: {lead.full_name}",
            f"Headline: {lead.headline or '(none)'}",
            f"About: {about}",
            "",
            "LATEST ACTIVITY:",
            _compact_json(lead.posts),
            "",
            "CAREER HISTORY (Positions):",
            _compact_json(lead.experience),
            "",
            "EDUCATION:",
            _compact_json(lead.education),
        ]
    )


def _strategy_lines(mode: str, first_name: str) -> list[str]:
    menu = [
        f"   {idx}. {label}: {hint}."
        for idx, (label, hint) in enumerate(SIGNAL_MENU, start=1)
    ]
    lines = [
        "STRATEGY:",
        "1. Scan for specificity: exact company names, awards, specific posts, growth metrics.",
        "2. Pick exactly ONE signal, the strongest available, checking in this order:",
        *menu,
        "   If nothing recent exists, use career history or the role. "
        "Never mention that they have not posted or been active.",
        f"3. Greeting: start with \"Hi {first_name},\".",
        "4. Icebreaker: one sentence that names the signal and validates it.",
    ]
    if mode == MODE_SALES_BRIDGE:
        lines += [
            "5. Bridge: one sentence connecting that specific signal to MY OFFER naturally.",
            "6. Close: one short, low-pressure question.",
            f"Keep the whole message under {SALES_WORD_LIMIT} words.",
        ]
    else:
        lines += [
            "5. Close: a purely relational close (e.g. wanting to follow their work or connect). "
            "No pitch, no product, no meeting request.",
            f"Keep the whole message under {NETWORKING_WORD_LIMIT} words.",
        ]
    return lines


def build_prompt(lead: LeadRecord, offer: str = "", custom_instructions: str = "") -> str:
    """Render the single instruction document sent to the generation backend."""
    mode = composition_mode(offer)
    offer_text = offer.strip() if mode == MODE_SALES_BRIDGE else NO_OFFER_TEXT
    custom = (custom_instructions or "").strip()

    goal = (
        "Write a short, specific connection request that bridges one signal to my offer."
        if mode == MODE_SALES_BRIDGE
        else "Write a short, specific networking note. Validate one signal and close without any pitch."
    )

    sections = [
        "You are an elite SDR doing deep research on a lead.",
        "",
        "LEAD DATA:",
        summarize_lead(lead),
        "",
        "MY OFFER / CONTEXT:",
        offer_text,
        "",
    ]
    if custom:
        sections += ["CUSTOM INSTRUCTIONS (may include external signals):", custom, ""]
    sections += [
        f"MODE: {mode}",
        f"GOAL: {goal}",
        "",
        *_strategy_lines(mode, lead.first_name),
        "",
        "FORBIDDEN (never use these or close variants):",
        *[f"- {phrase}" for phrase in BASE_BANLIST],
        "- generic well-wishing, buzzwords, or calling out the absence of activity",
        "- the word \"undefined\" or any placeholder in brackets",
        "",
        "OUTPUT: return ONLY a JSON object (no markdown, no prose) with this shape:",
        JSON_OUTPUT_SHAPE.replace("<FIRST_NAME>", lead.first_name),
        "\"icebreaker\" and \"message\" are required strings.",
    ]
    return "\n".join(sections)
