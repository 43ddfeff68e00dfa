from openai import AsyncOpenAI, APIError, APIStatusError, APITimeoutError
from typing import Dict, List, Optional
from rentease_bot.config import settings
from rentease_bot.core.exceptions import CompletionUnavailable
import asyncio
import httpx
import logging

logger = logging.getLogger(__name__)

class CompletionClient:
    """
    Thin wrapper around the OpenRouter chat completions endpoint.
    One call per turn, no retries: a failure surfaces as CompletionUnavailable.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client=None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENROUTER_API_KEY
        self.model = model or settings.CHATBOT_MODEL
        self.timeout = timeout or settings.COMPLETION_TIMEOUT_SECONDS

        if client is not None:
            self.client = client
        elif self.api_key:
            logger.info(f"Using OpenRouter API with key: {self.api_key[:10]}...")
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=base_url or settings.OPENROUTER_BASE_URL,
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
                max_retries=0,
                default_headers={
                    "HTTP-Referer": settings.APP_REFERER,
                    "X-Title": settings.APP_TITLE,
                },
            )
        else:
            logger.error("OPENROUTER_API_KEY (or CHATBOT_API) is missing in environment variables!")
            self.client = None

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Sends the prepared message list and returns the raw reply text.
        Cancellation of the calling task is left to propagate untouched.
        """
        if self.client is None:
            raise CompletionUnavailable("missing_api_key")

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=settings.CHATBOT_TEMPERATURE,
                    max_tokens=settings.CHATBOT_MAX_TOKENS,
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, APITimeoutError):
            logger.warning(f"⏱️ Completion timed out after {self.timeout}s")
            raise CompletionUnavailable("timeout")
        except APIStatusError as e:
            logger.warning(f"OpenRouter API error: {e.status_code}")
            raise CompletionUnavailable(f"status_{e.status_code}")
        except (APIError, httpx.HTTPError) as e:
            logger.warning(f"OpenRouter connection error: {e}")
            raise CompletionUnavailable("network_error")

        choices = getattr(response, "choices", None)
        message = choices[0].message if choices else None
        content = getattr(message, "content", None)
        # The SDK does not validate payloads; providers may send content as a list of parts
        if not isinstance(content, str):
            logger.warning("Invalid response format from OpenRouter API")
            raise CompletionUnavailable("empty_response")

        return content
