"""
Gemini text generation client.
Sends a single prompt to the generateContent endpoint and reports either the
generated text or the upstream's error status and message.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import aiohttp

from core.exceptions import UpstreamResponseError

logger = logging.getLogger(__name__)

GENERATE_URL = "https://{host}/v1beta/models/{model}:generateContent?key={api_key}"
UPSTREAM_FALLBACK_ERROR = 'Failed to get response from Gemini API.'


@dataclass(frozen=True)
class UpstreamError:
    status: int
    message: str


@dataclass(frozen=True)
class GenerationResult:
    text: Optional[str] = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self):
        return self.error is None


class TextGenerationClient(Protocol):
    async def generate(self, prompt: str) -> GenerationResult:
        ...


def build_url(host, model, api_key):
    return GENERATE_URL.format(host=host, model=model, api_key=api_key)


def build_payload(prompt):
    """Single-turn request body for generateContent."""
    return {
        "contents": [{
            "role": "user",
            "parts": [{"text": prompt}]
        }]
    }


def extract_text(data):
    """Pull candidates[0].content.parts[0].text out of a success body."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamResponseError(
            f"Unexpected response from Gemini API: missing candidates[0].content.parts[0].text ({type(e).__name__}: {e})"
        ) from e


def extract_error_message(data):
    try:
        message = data["error"]["message"]
    except (KeyError, TypeError):
        return UPSTREAM_FALLBACK_ERROR
    return message or UPSTREAM_FALLBACK_ERROR


class GeminiClient:
    """TextGenerationClient backed by the Gemini REST API."""

    def __init__(self, api_key, model, host, session_factory=aiohttp.ClientSession):
        self.api_key = api_key
        self.model = model
        self.host = host
        self._session_factory = session_factory

    async def generate(self, prompt: str) -> GenerationResult:
        url = build_url(self.host, self.model, self.api_key)
        headers = {'Content-Type': 'application/json'}
        body = json.dumps(build_payload(prompt))

        # One session per invocation; nothing is pooled between requests
        async with self._session_factory() as session:
            async with session.post(url, data=body, headers=headers) as resp:
                if not 200 <= resp.status < 300:
                    try:
                        error_body = await resp.json(content_type=None)
                    except ValueError:
                        error_body = None
                    message = extract_error_message(error_body)
                    logger.error(f"Gemini API Error: status={resp.status} message={message}")
                    return GenerationResult(error=UpstreamError(status=resp.status, message=message))

                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    raise UpstreamResponseError(f"Gemini API returned invalid JSON: {e}") from e

        return GenerationResult(text=extract_text(data))
