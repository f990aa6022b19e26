"""
OpenAI Client - Chat completions through the official OpenAI SDK.

Uses the async client so that calls can be cancelled by the caller's
deadline (asyncio.wait_for).
"""
import time
from typing import Optional, List

import httpx
from openai import AsyncOpenAI, OpenAIError
from loguru import logger

from .base import LLMClient, LLMError, LLMResponse, Message


class OpenAIClient(LLMClient):
    """
    OpenAI chat-completions client.

    Supports gpt-4.1-mini and other chat models. Any OpenAI-compatible
    endpoint can be targeted through `base_url`.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1-mini",
        timeout: float = 30.0,
        base_url: Optional[str] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model name
            timeout: SDK-level request timeout in seconds
            base_url: Optional OpenAI-compatible endpoint
            verify_ssl: Whether to verify SSL certificates (disable for dev if needed)
        """
        super().__init__(api_key, model)
        self.timeout = timeout
        self.verify_ssl = verify_ssl

        http_client = None
        if not verify_ssl:
            http_client = httpx.AsyncClient(verify=False)
            logger.warning("SSL verification disabled for OpenAI client")

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: float = 0.0,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate response from conversation."""
        api_messages = []

        if system:
            api_messages.append({"role": "system", "content": system})

        for msg in messages:
            api_messages.append({"role": msg.role, "content": msg.content})

        logger.debug(f"OpenAI request: model={self.model}, messages={len(api_messages)}")

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        started = time.monotonic()
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=api_messages,
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise LLMError(str(e)) from e

        if not response.choices:
            raise LLMError("OpenAI returned no choices")

        choice = response.choices[0]
        usage = response.usage

        result = LLMResponse(
            content=choice.message.content or "",
            model=response.model,
            usage={
                "input_tokens": usage.prompt_tokens if usage else 0,
                "output_tokens": usage.completion_tokens if usage else 0,
            },
            stop_reason=choice.finish_reason,
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        self.log_call(result)
        return result

    async def aclose(self) -> None:
        await self._client.close()
