"""
Runtime configuration for the Gemini prompt proxy.
Values come from the environment; a local .env file is honoured for development.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = 'gemini-1.5-pro-latest'
DEFAULT_API_HOST = 'generativelanguage.googleapis.com'


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = field(default=None, repr=False)
    model: str = DEFAULT_MODEL
    api_host: str = DEFAULT_API_HOST
    log_level: str = 'INFO'

    @property
    def api_key_configured(self):
        return bool(self.api_key)


def detect_environment():
    """Name of the hosting platform we are running on."""
    if os.getenv('VERCEL') == '1':
        return 'vercel'
    if os.getenv('NETLIFY') == 'true':
        return 'netlify'
    if os.getenv('AWS_LAMBDA_FUNCTION_NAME') is not None:
        return 'lambda'
    return 'local'


def resolve_log_level(value):
    """Known logging level name, or INFO for anything unrecognised."""
    level = (value or 'INFO').strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return 'INFO'
    return level


def load_settings():
    # Vercel and Netlify inject variables from their dashboards; .env is for local runs
    load_dotenv()

    return Settings(
        api_key=os.getenv('GEMINI_API_KEY') or None,
        model=os.getenv('GEMINI_MODEL', DEFAULT_MODEL),
        api_host=os.getenv('GEMINI_API_HOST', DEFAULT_API_HOST),
        log_level=resolve_log_level(os.getenv('LOG_LEVEL')),
    )
