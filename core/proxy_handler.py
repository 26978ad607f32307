"""
Core proxy logic - shared by the Flask app, the Netlify/Lambda entry point
and the terminal client.

An invocation is validated, forwarded to the text generation client and the
outcome is mapped onto a fixed status/body contract. Every failure ends up as
one of the outcome types below so each maps to exactly one response.
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

import aiohttp

from config import Settings
from core.exceptions import ProxyError
from core.gemini_client import GeminiClient, TextGenerationClient

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = 'Method Not Allowed'
PROMPT_REQUIRED = 'Prompt is required.'
API_KEY_MISSING = 'API key is not configured on the server.'

JSON_CONTENT_TYPE = 'application/json'
TEXT_CONTENT_TYPE = 'text/plain'


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    body: str
    content_type: str = JSON_CONTENT_TYPE

    def to_dict(self):
        """Netlify/Lambda proxy-integration response shape."""
        return {
            'statusCode': self.status_code,
            'headers': {'Content-Type': self.content_type},
            'body': self.body,
        }


# --- Outcomes ---

@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class ValidationFailure:
    status_code: int
    message: str


@dataclass(frozen=True)
class ConfigurationFailure:
    message: str


@dataclass(frozen=True)
class UpstreamFailure:
    status_code: int
    message: str


@dataclass(frozen=True)
class InternalFailure:
    message: str


Outcome = Union[Success, ValidationFailure, ConfigurationFailure, UpstreamFailure, InternalFailure]


def _json_response(status_code, payload):
    return ProxyResponse(status_code, json.dumps(payload))


def to_response(outcome: Outcome) -> ProxyResponse:
    """Map an outcome onto the downstream status/body contract."""
    if isinstance(outcome, Success):
        return _json_response(200, {'text': outcome.text})
    if isinstance(outcome, ValidationFailure):
        if outcome.status_code == 405:
            return ProxyResponse(405, outcome.message, TEXT_CONTENT_TYPE)
        return _json_response(outcome.status_code, {'error': outcome.message})
    if isinstance(outcome, ConfigurationFailure):
        return _json_response(500, {'error': outcome.message})
    if isinstance(outcome, UpstreamFailure):
        return _json_response(outcome.status_code, {'error': outcome.message})
    if isinstance(outcome, InternalFailure):
        return _json_response(500, {'error': outcome.message})
    raise TypeError(f"Unknown outcome: {outcome!r}")


def parse_prompt(body):
    """Return the prompt field of a JSON request body.

    Raises ValueError for a missing or malformed body. A JSON value that is
    not an object has no prompt.
    """
    if body is None:
        raise ValueError('Request body is empty.')
    payload = json.loads(body)
    if payload is None:
        raise ValueError('Request body must be a JSON object.')
    if not isinstance(payload, dict):
        return None
    return payload.get('prompt')


class ProxyHandler:
    """Validates an invocation and relays the prompt to the upstream API."""

    def __init__(self, settings: Settings, client_factory: Optional[Callable[[Settings], TextGenerationClient]] = None):
        self.settings = settings
        self._client_factory = client_factory or default_client_factory

    async def handle(self, method: str, body: Optional[str]) -> ProxyResponse:
        return to_response(await self.process(method, body))

    async def process(self, method: str, body: Optional[str]) -> Outcome:
        if (method or '').upper() != 'POST':
            return ValidationFailure(405, METHOD_NOT_ALLOWED)

        try:
            prompt = parse_prompt(body)
        except ValueError as e:
            # Malformed input stays on the 500 path, same as any internal error
            logger.error(f"Server-side error: could not parse request body: {e}")
            return InternalFailure(self._describe(e))
        except Exception as e:
            # e.g. RecursionError from a deeply nested body
            logger.exception(f"Unexpected server-side error parsing request body: {type(e).__name__}")
            return InternalFailure(self._describe(e))

        if not prompt:
            return ValidationFailure(400, PROMPT_REQUIRED)

        if not self.settings.api_key_configured:
            logger.error("GEMINI_API_KEY is not set; refusing to call upstream")
            return ConfigurationFailure(API_KEY_MISSING)

        client = self._client_factory(self.settings)
        try:
            result = await client.generate(prompt)
        except (aiohttp.ClientError, ProxyError) as e:
            logger.error(f"Server-side error: {self._describe(e)}")
            return InternalFailure(self._describe(e))
        except Exception as e:
            logger.exception(f"Unexpected server-side error: {type(e).__name__}")
            return InternalFailure(self._describe(e))

        if not result.ok:
            return UpstreamFailure(result.error.status, result.error.message)
        return Success(result.text)

    def _describe(self, error):
        message = str(error) or type(error).__name__
        # Never echo the credential back to the caller
        if self.settings.api_key:
            message = message.replace(self.settings.api_key, '***')
        return message


def default_client_factory(settings):
    return GeminiClient(settings.api_key, settings.model, settings.api_host)
