"""
Anthropic client for the Harmony gateway.

One `messages.create` call per cache miss. Failures propagate to the
caller, which reports them as a 500; there is no retry.
"""
from anthropic import AsyncAnthropic
from typing import Optional, Dict, List, Any, Callable
import httpx
from stats_api.core.config import settings
from stats_api.core.exceptions import AINotConfiguredError
from stats_api.core.logging_config import logger


class ClaudeClient:
    """Claude API client wrapper for single-shot JSON analysis requests"""

    def __init__(self):
        if not settings.is_ai_configured():
            raise AINotConfiguredError()

        client_kwargs = {
            "api_key": settings.ANTHROPIC_API_KEY,
            "timeout": httpx.Timeout(
                float(settings.CLAUDE_REQUEST_TIMEOUT),
                connect=float(settings.CLAUDE_CONNECT_TIMEOUT),
            ),
            "max_retries": 0,
        }
        if settings.ANTHROPIC_BASE_URL.strip():
            client_kwargs["base_url"] = settings.ANTHROPIC_BASE_URL.strip()

        self.async_client = AsyncAnthropic(**client_kwargs)
        self.model = settings.CLAUDE_MODEL

        logger.info(f"Claude client initialized: model={self.model}")

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = None,
        temperature: float = None,
        messages: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """
        Send one prompt and return the text content with usage metadata.

        API errors are logged and re-raised unchanged.
        """
        messages = list(messages or [])
        messages.append({"role": "user", "content": prompt})

        if max_tokens is None:
            max_tokens = settings.CLAUDE_MAX_TOKENS
        if temperature is None:
            temperature = settings.CLAUDE_HARMONY_TEMPERATURE

        try:
            response = await self.async_client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt or "",
                messages=messages
            )
        except Exception as e:
            logger.error(
                f"Claude API error: {type(e).__name__}: {e}",
                extra={"event_type": "claude_api_error", "error_type": type(e).__name__}
            )
            raise

        usage = response.usage
        result = {
            "content": response.content[0].text if response.content else "",
            "model": self.model,
            "input_tokens": usage.input_tokens,
            "output_tokens": usage.output_tokens,
            "total_tokens": usage.input_tokens + usage.output_tokens,
            "stop_reason": response.stop_reason,
            "id": response.id
        }
        logger.info(f"Claude API response: id={response.id}, tokens={result['total_tokens']}")
        return result


_claude_client: Optional[ClaudeClient] = None


def get_claude_client() -> ClaudeClient:
    """
    Shared client, created on first use.

    Raises AINotConfiguredError when no API key is set; the harmony gateway
    reports that as its 500 error.
    """
    global _claude_client
    if _claude_client is None:
        _claude_client = ClaudeClient()
    return _claude_client


def get_claude_client_factory() -> Callable[[], ClaudeClient]:
    """
    FastAPI dependency handing out the client constructor instead of a client.

    The harmony gateway only builds a client on a cache miss, so cached
    analyses keep working without an API key.
    """
    return get_claude_client
