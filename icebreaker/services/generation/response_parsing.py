import json
import re
from typing import Any

from ...errors import GenerationError
from ...models import OutreachDraft

FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def strip_code_fences(content: str) -> str:
    candidate = (content or "").strip()
    fence = FENCE_RE.search(candidate)
    if fence:
        return fence.group(1).strip()
    # An unterminated fence still counts as wrapping.
    return re.sub(r"^```(?:json)?|```$", "", candidate, flags=re.IGNORECASE).strip()


def parse_json_content(content: str) -> dict[str, Any] | None:
    if not content:
        return None
    candidate = strip_code_fences(content)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        start = candidate.find("{")
        end = candidate.rfind("}")
        if start == -1 or end <= start:
            return None
        try:
            parsed = json.loads(candidate[start : end + 1])
        except json.JSONDecodeError:
            return None
    return parsed if isinstance(parsed, dict) else None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_draft(content: str) -> OutreachDraft:
    raw = parse_json_content(content)
    if raw is None:
        raise GenerationError("Model did not return JSON", raw_text=content)

    icebreaker = str(raw.get("icebreaker") or "").strip()
    message = str(raw.get("message") or "").strip()
    if not icebreaker or not message:
        raise GenerationError("Model response is missing icebreaker or message", raw_text=content)

    return OutreachDraft(
        strategy=_optional_text(raw.get("strategy")),
        signal_used=_optional_text(raw.get("signal_used")),
        icebreaker=icebreaker,
        message=message,
    )
