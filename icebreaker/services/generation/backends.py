from typing import Any, Protocol

import httpx

from ...config import (
    GEMINI_API_URL,
    GEMINI_MODEL,
    LLM_TIMEOUT_SECONDS,
    OPENAI_API_URL,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
)
from ...errors import GenerationError, UnsupportedProviderError

JSON_SYSTEM_MESSAGE = "You output valid JSON."


class TextGenerationBackend(Protocol):
    provider: str
    model_name: str

    async def generate(self, prompt_text: str, *, json_mode: bool = True) -> str:
        ...


async def _post_json(
    url: str,
    *,
    headers: dict[str, str],
    body: dict[str, Any],
    timeout_seconds: float,
    transport: httpx.AsyncBaseTransport | None,
    provider: str,
) -> dict[str, Any]:
    async with httpx.AsyncClient(timeout=timeout_seconds, transport=transport) as client:
        try:
            response = await client.post(url, headers=headers, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GenerationError(f"{provider} request failed: {exc}") from exc

    if response.status_code >= 400:
        raise GenerationError(
            f"{provider} returned HTTP {response.status_code}",
            raw_text=response.text[:2000],
        )
    try:
        data = response.json()
    except ValueError as exc:
        raise GenerationError(f"{provider} returned a non-JSON body", raw_text=response.text) from exc
    if not isinstance(data, dict):
        raise GenerationError(f"{provider} returned an unexpected payload", raw_text=response.text)
    return data


class OpenAIBackend:
    provider = "openai"

    def __init__(
        self,
        api_key: str,
        api_url: str = OPENAI_API_URL,
        model_name: str = OPENAI_MODEL,
        temperature: float = OPENAI_TEMPERATURE,
        timeout_seconds: float = LLM_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.model_name = model_name
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def generate(self, prompt_text: str, *, json_mode: bool = True) -> str:
        request_body: dict[str, Any] = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": JSON_SYSTEM_MESSAGE},
                {"role": "user", "content": prompt_text},
            ],
            "temperature": self.temperature,
        }
        if json_mode:
            request_body["response_format"] = {"type": "json_object"}

        data = await _post_json(
            self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            body=request_body,
            timeout_seconds=self.timeout_seconds,
            transport=self.transport,
            provider=self.provider,
        )
        content, refusal = extract_chat_text(data)
        if refusal:
            raise GenerationError(f"Model refused: {refusal}", raw_text=refusal)
        if not content:
            raise GenerationError("Empty response from model")
        return content


class GeminiBackend:
    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        api_url: str = GEMINI_API_URL,
        model_name: str = GEMINI_MODEL,
        timeout_seconds: float = LLM_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @property
    def generate_url(self) -> str:
        return f"{self.api_url}/{self.model_name}:generateContent"

    async def generate(self, prompt_text: str, *, json_mode: bool = True) -> str:
        request_body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt_text}]}],
        }
        if json_mode:
            request_body["generationConfig"] = {"responseMimeType": "application/json"}

        data = await _post_json(
            self.generate_url,
            headers={
                "x-goog-api-key": self.api_key,
                "Content-Type": "application/json",
            },
            body=request_body,
            timeout_seconds=self.timeout_seconds,
            transport=self.transport,
            provider=self.provider,
        )
        content, block_reason = extract_gemini_text(data)
        if block_reason:
            raise GenerationError(f"Prompt blocked: {block_reason}", raw_text=block_reason)
        if not content:
            raise GenerationError("Empty response from model")
        return content


def extract_chat_text(data: dict[str, Any]) -> tuple[str, str]:
    texts: list[str] = []
    refusals: list[str] = []
    for choice in data.get("choices") or []:
        message = choice.get("message") or {}
        if message.get("content"):
            texts.append(message["content"])
        if message.get("refusal"):
            refusals.append(message["refusal"])
    return "\n".join(texts).strip(), "\n".join(refusals).strip()


def extract_gemini_text(data: dict[str, Any]) -> tuple[str, str]:
    block_reason = (data.get("promptFeedback") or {}).get("blockReason", "")
    candidates = data.get("candidates") or []
    if not candidates:
        return "", block_reason
    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [part.get("text", "") for part in parts if part.get("text")]
    return "".join(texts).strip(), block_reason


BACKENDS: dict[str, type] = {
    OpenAIBackend.provider: OpenAIBackend,
    GeminiBackend.provider: GeminiBackend,
}


def build_backend(provider: str, api_key: str, **kwargs: Any) -> TextGenerationBackend:
    backend_cls = BACKENDS.get((provider or "").strip().lower())
    if backend_cls is None:
        raise UnsupportedProviderError(f"Unsupported provider: {provider!r}")
    return backend_cls(api_key=api_key, **kwargs)
