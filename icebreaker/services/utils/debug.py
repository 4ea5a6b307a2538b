from typing import Any

from ...models import LeadRecord


def build_debug_log(
    request_id: str,
    provider: str,
    model_name: str,
    lead: LeadRecord,
    raw_keys: list[str],
    trace: dict[str, Any],
) -> dict[str, Any]:
    return {
        "request_id": request_id,
        "provider": provider,
        "model_name": model_name,
        "raw_keys": raw_keys,
        "lead": {
            "full_name": lead.full_name,
            "name_source": lead.name_source,
            "headline": lead.headline[:80],
            "posts": len(lead.posts),
            "experience": len(lead.experience),
            "education": len(lead.education),
        },
        "mode": trace.get("mode", ""),
        "prompt_preview": str(trace.get("prompt", ""))[:1200],
    }
