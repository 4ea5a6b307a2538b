import re

from .constants import MODE_PURE_NETWORKING, NETWORKING_WORD_LIMIT, SALES_WORD_LIMIT
from .text_utils import contains_phrase, word_count

# A leading salutation with no real addressee: "Hi,", "Hello there!", "Hey ".
SALUTATION_RE = re.compile(
    r"^\s*(hi|hey|hello|dear)\b(?:[\s,]+there\b)?\s*[,!:.]?\s*", re.IGNORECASE
)
UNDEFINED_RE = re.compile(r"\s*undefined", re.IGNORECASE)


def greets(message: str, first_name: str) -> bool:
    pattern = rf"^\s*(hi|hey|hello|dear)(\s+|\s*,\s*){re.escape(first_name)}\b"
    return re.match(pattern, message, re.IGNORECASE) is not None


def ensure_greeting(message: str, first_name: str) -> str:
    """Make the message open with a greeting addressing `first_name`."""
    if greets(message, first_name):
        return message.strip()
    body = SALUTATION_RE.sub("", message, count=1).strip()
    body = re.sub(rf"^{re.escape(first_name)}\s*[,!:]\s*", "", body, flags=re.IGNORECASE)
    greeting = f"Hi {first_name},"
    return f"{greeting} {body}" if body else greeting


def strip_undefined(text: str) -> str:
    cleaned = UNDEFINED_RE.sub("", text)
    cleaned = re.sub(r"\s+([,.!?])", r"\1", cleaned)
    return re.sub(r",(\s*,)+", ",", cleaned).strip()


def validate_message(
    message: str,
    first_name: str,
    mode: str,
    banlist: list[str],
    offer: str = "",
) -> list[str]:
    violations: list[str] = []
    if not message:
        return ["empty message"]

    if not greets(message, first_name):
        violations.append("missing greeting")
    if "undefined" in message.lower():
        violations.append("contains undefined")

    limit = NETWORKING_WORD_LIMIT if mode == MODE_PURE_NETWORKING else SALES_WORD_LIMIT
    if word_count(message) > limit:
        violations.append(f"words > {limit}")

    for phrase in banlist:
        if phrase and contains_phrase(message, phrase):
            violations.append("contains banned phrase")
            break

    if mode == MODE_PURE_NETWORKING and offer.strip() and contains_phrase(message, offer):
        violations.append("mentions offer")

    return violations
