"""
Unit Tests for the Claude client wrapper
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from stats_api.core.exceptions import AINotConfiguredError
from stats_api.utils import claude_client
from stats_api.utils.claude_client import ClaudeClient, get_claude_client, get_claude_client_factory


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(claude_client.settings, 'ANTHROPIC_API_KEY', 'sk-ant-test')


def _response(text: str):
    return SimpleNamespace(
        content=[SimpleNamespace(text=text)],
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
        stop_reason='end_turn',
        id='msg_1',
    )


def test_factory_does_not_build_a_client():
    assert get_claude_client_factory() is get_claude_client


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(claude_client.settings, 'ANTHROPIC_API_KEY', '')
    monkeypatch.setattr(claude_client, '_claude_client', None)

    with pytest.raises(AINotConfiguredError):
        get_claude_client()


@pytest.mark.asyncio
async def test_generate_returns_content_and_usage(configured):
    client = ClaudeClient()
    create = AsyncMock(return_value=_response('{"a": 1}'))
    client.async_client = SimpleNamespace(messages=SimpleNamespace(create=create))

    result = await client.generate('payload', system_prompt='system', temperature=0.2)

    assert result['content'] == '{"a": 1}'
    assert result['total_tokens'] == 15
    kwargs = create.call_args.kwargs
    assert kwargs['system'] == 'system'
    assert kwargs['temperature'] == 0.2
    assert kwargs['messages'] == [{'role': 'user', 'content': 'payload'}]


@pytest.mark.asyncio
async def test_generate_calls_model_once_on_error(configured):
    client = ClaudeClient()
    create = AsyncMock(side_effect=RuntimeError('overloaded'))
    client.async_client = SimpleNamespace(messages=SimpleNamespace(create=create))

    with pytest.raises(RuntimeError, match='overloaded'):
        await client.generate('payload')

    assert create.await_count == 1
