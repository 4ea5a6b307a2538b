import json
import os
from pathlib import Path
from typing import Any, Callable

from ..config import PROMPT_DEBUG, REQUEST_LOG_PATH
from ..errors import LeadProcessingError, MissingCredentialsError
from ..logging_utils import RequestLog
from ..models import (
    BatchLeadRequest,
    BatchResult,
    LeadFailure,
    LeadResult,
    ProcessLeadRequest,
)
from .generation.backends import TextGenerationBackend, build_backend
from .generation.composer import compose
from .normalization.normalizer import normalize
from .scraping.apify_client import ApifyProfileScraper
from .utils.debug import build_debug_log

PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

BackendFactory = Callable[[str, str], TextGenerationBackend]


def resolve_credentials(payload: ProcessLeadRequest) -> tuple[str, str]:
    """Per-request keys win; the process environment is the fallback."""
    apify_key = payload.apify_key.strip() or os.getenv("APIFY_TOKEN", "")
    api_key = payload.api_key.strip() or os.getenv(PROVIDER_KEY_ENV.get(payload.provider, ""), "")
    if not apify_key:
        raise MissingCredentialsError("Apify API key is missing")
    if not api_key:
        raise MissingCredentialsError(f"{payload.provider} API key is missing")
    return apify_key, api_key


class LeadService:
    def __init__(
        self,
        scraper: ApifyProfileScraper | None = None,
        backend_factory: BackendFactory = build_backend,
        log_path: Path | None = None,
    ) -> None:
        self.scraper = scraper or ApifyProfileScraper()
        self.backend_factory = backend_factory
        self.log_path = log_path or REQUEST_LOG_PATH

    async def process(self, payload: ProcessLeadRequest) -> LeadResult:
        log = RequestLog(
            self.log_path,
            "process_lead",
            provider=payload.provider,
            profile_url=payload.profile_url,
            mode=None,
        )
        try:
            log.stage = "credentials"
            apify_key, api_key = resolve_credentials(payload)
            backend = self.backend_factory(payload.provider, api_key)
            log["model_name"] = getattr(backend, "model_name", "")

            log.stage = "scrape"
            raw_profile = await self.scraper.fetch_profile(
                token=apify_key, profile_url=payload.profile_url
            )
            raw_keys = sorted(raw_profile.keys())
            log["raw_keys"] = raw_keys

            log.stage = "normalize"
            lead = normalize(raw_profile, payload.profile_url)
            log["mapped"] = {
                "name": lead.full_name,
                "name_source": lead.name_source,
                "posts": len(lead.posts),
                "experience": len(lead.experience),
                "education": len(lead.education),
            }

            log.stage = "generate"
            trace: dict[str, Any] = {}
            try:
                draft = await compose(
                    lead, payload.my_offer, payload.custom_prompt, backend, trace=trace
                )
            finally:
                log["mode"] = trace.get("mode")
                log["prompt_preview"] = str(trace.get("prompt", ""))[:1200]
                log["model_output_preview"] = str(trace.get("model_output", ""))[:1200]
            log["validations"] = trace.get("violations", [])

            if PROMPT_DEBUG:
                debug = build_debug_log(
                    log.request_id,
                    payload.provider,
                    log.get("model_name", ""),
                    lead,
                    raw_keys,
                    trace,
                )
                print(json.dumps(debug, ensure_ascii=True, default=str))
        except Exception as exc:
            log.fail(exc)
            raise

        log.succeed()
        return LeadResult(
            name=lead.full_name,
            profile_url=payload.profile_url,
            strategy=draft.strategy,
            icebreaker=draft.icebreaker,
            message=draft.message,
        )

    async def process_batch(self, payload: BatchLeadRequest) -> BatchResult:
        """Process each URL in order; a failed lead becomes an error row."""
        results: list[LeadResult | LeadFailure] = []
        for lead_request in payload.lead_requests():
            try:
                results.append(await self.process(lead_request))
            except LeadProcessingError as exc:
                results.append(LeadFailure(profile_url=lead_request.profile_url, error=exc.message))
            except Exception as exc:
                results.append(
                    LeadFailure(
                        profile_url=lead_request.profile_url,
                        error=str(exc) or "Something went wrong",
                    )
                )
        return BatchResult(results=results)
