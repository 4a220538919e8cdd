"""HTTP client for an OpenAI-compatible chat-completions endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import Settings
from core.observability import get_tracer
from services.generation.exceptions import (
    GeneratorNotConfigured,
    GeneratorResponseError,
    GeneratorUnavailable,
)


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class ChatCompletionsClient:
    """Send one user prompt and return the first choice's message text.

    Transport failures and non-2xx answers raise `GeneratorUnavailable`; a
    2xx answer without ``choices[0].message`` raises `GeneratorResponseError`.
    A choice whose ``content`` is null comes back as ``""`` so the parser can
    classify it as empty output.
    """

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str | None,
        model: str,
        temperature: float = 0.8,
        max_tokens: int = 3000,
        top_p: float = 0.9,
        frequency_penalty: float = 0.3,
        presence_penalty: float = 0.3,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.top_p = top_p
        self.frequency_penalty = frequency_penalty
        self.presence_penalty = presence_penalty
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> ChatCompletionsClient:
        return cls(
            api_url=settings.GENERATOR_API_URL,
            api_key=settings.GEMINI_API_KEY,
            model=settings.GENERATOR_MODEL,
            temperature=settings.GENERATOR_TEMPERATURE,
            max_tokens=settings.GENERATOR_MAX_TOKENS,
            top_p=settings.GENERATOR_TOP_P,
            frequency_penalty=settings.GENERATOR_FREQUENCY_PENALTY,
            presence_penalty=settings.GENERATOR_PRESENCE_PENALTY,
            timeout=settings.GENERATOR_TIMEOUT_SECONDS,
            transport=transport,
        )

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
            "stream": False,
        }

    async def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise GeneratorNotConfigured()

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        with tracer.start_as_current_span("generator.chat_completion") as span:
            span.set_attribute("generator.model", self.model)
            span.set_attribute("prompt.length", len(prompt))
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self._transport
                ) as client:
                    response = await client.post(
                        self.api_url, headers=headers, json=self.build_payload(prompt)
                    )
                    response.raise_for_status()
                    body = response.json()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                span.set_attribute("http.status_code", status)
                logger.warning("Generator returned HTTP %s", status)
                raise GeneratorUnavailable(
                    f"Generator request failed with status {status}"
                ) from exc
            except httpx.HTTPError as exc:
                logger.warning("Generator request failed: %s", exc.__class__.__name__)
                raise GeneratorUnavailable(
                    f"Generator request failed: {exc.__class__.__name__}"
                ) from exc
            except ValueError as exc:
                raise GeneratorResponseError("Generator response was not JSON") from exc

            content = _first_choice_content(body)
            span.set_attribute("completion.length", len(content))
            return content


def _first_choice_content(body: Any) -> str:
    try:
        message = body["choices"][0]["message"]
    except (KeyError, IndexError, TypeError) as exc:
        raise GeneratorResponseError("Generator response has no choices") from exc

    if not isinstance(message, dict):
        raise GeneratorResponseError("Generator choice has no message")
    content = message.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise GeneratorResponseError("Generator message content is not text")
    return content
