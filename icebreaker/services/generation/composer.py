from typing import Any

from ...errors import GenerationError
from ...models import LeadRecord, OutreachDraft
from ..utils.constants import BASE_BANLIST
from ..utils.validation import ensure_greeting, strip_undefined, validate_message
from .backends import TextGenerationBackend
from .prompting import build_prompt, composition_mode
from .response_parsing import parse_draft


def finalize_draft(draft: OutreachDraft, lead: LeadRecord) -> OutreachDraft:
    message = ensure_greeting(strip_undefined(draft.message), lead.first_name)
    # The greeting itself can carry a placeholder first name.
    message = strip_undefined(message)
    return draft.model_copy(
        update={
            "icebreaker": strip_undefined(draft.icebreaker),
            "message": message,
        }
    )


async def compose(
    lead: LeadRecord,
    offer: str,
    custom_instructions: str,
    backend: TextGenerationBackend,
    trace: dict[str, Any] | None = None,
) -> OutreachDraft:
    """Generate the icebreaker and message for one lead.

    `trace`, when given, is filled with the mode, prompt, raw model output and
    validation results so the caller can log them.
    """
    trace = trace if trace is not None else {}
    mode = composition_mode(offer)
    prompt = build_prompt(lead, offer, custom_instructions)
    trace["mode"] = mode
    trace["prompt"] = prompt

    try:
        content = await backend.generate(prompt, json_mode=True)
    except GenerationError:
        raise
    except Exception as exc:
        raise GenerationError(f"Generation backend failed: {exc}") from exc
    trace["model_output"] = content

    if not content or not content.strip():
        raise GenerationError("Empty response from model")

    draft = finalize_draft(parse_draft(content), lead)
    trace["violations"] = validate_message(
        draft.message, lead.first_name, mode, BASE_BANLIST, offer=offer
    )
    return draft
