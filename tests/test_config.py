"""
Tests for environment-driven settings
"""
import pytest

import config
from config import Settings, detect_environment, load_settings, resolve_log_level


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    # Keep a developer's local .env out of these tests
    monkeypatch.setattr(config, 'load_dotenv', lambda: False)
    for name in ('GEMINI_API_KEY', 'GEMINI_MODEL', 'GEMINI_API_HOST', 'LOG_LEVEL',
                 'VERCEL', 'NETLIFY', 'AWS_LAMBDA_FUNCTION_NAME'):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.api_key is None
    assert not settings.api_key_configured
    assert settings.model == 'gemini-1.5-pro-latest'
    assert settings.api_host == 'generativelanguage.googleapis.com'
    assert settings.log_level == 'INFO'


def test_reads_environment(monkeypatch):
    monkeypatch.setenv('GEMINI_API_KEY', 'secret')
    monkeypatch.setenv('GEMINI_MODEL', 'gemini-2.0-flash')
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    settings = load_settings()

    assert settings.api_key_configured
    assert settings.model == 'gemini-2.0-flash'
    assert settings.log_level == 'DEBUG'


def test_empty_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv('GEMINI_API_KEY', '')
    assert load_settings().api_key is None


def test_repr_hides_key():
    assert 'secret' not in repr(Settings(api_key='secret'))


@pytest.mark.parametrize('env, expected', [
    ({'VERCEL': '1'}, 'vercel'),
    ({'NETLIFY': 'true'}, 'netlify'),
    ({'AWS_LAMBDA_FUNCTION_NAME': 'analyze'}, 'lambda'),
    ({}, 'local'),
])
def test_detect_environment(monkeypatch, env, expected):
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    assert detect_environment() == expected


@pytest.mark.parametrize('value, expected', [
    ('verbose', 'INFO'),
    ('', 'INFO'),
    ('warning', 'WARNING'),
    (' debug ', 'DEBUG'),
])
def test_unknown_log_level_falls_back_to_info(monkeypatch, value, expected):
    monkeypatch.setenv('LOG_LEVEL', value)
    assert load_settings().log_level == expected


def test_resolve_log_level_handles_missing_value():
    assert resolve_log_level(None) == 'INFO'
