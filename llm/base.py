"""
LLM Client Base - Abstract base class for LLM providers.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Dict
from contextvars import ContextVar

from loguru import logger


# Context variables for passing metadata to logging
_current_task_type: ContextVar[Optional[str]] = ContextVar('task_type', default=None)
_current_run_id: ContextVar[Optional[str]] = ContextVar('run_id', default=None)


def set_llm_context(task_type: Optional[str] = None, run_id: Optional[str] = None):
    """Set context for LLM call logging."""
    if task_type is not None:
        _current_task_type.set(task_type)
    if run_id is not None:
        _current_run_id.set(run_id)


def get_llm_context() -> Dict[str, Optional[str]]:
    """Get current LLM logging context."""
    return {
        "task_type": _current_task_type.get(),
        "run_id": _current_run_id.get()
    }


class LLMError(Exception):
    """Raised when the LLM backend cannot produce a response (transport or API error)."""
    pass


@dataclass
class LLMResponse:
    """Standard response from LLM."""
    content: str
    model: str
    usage: Dict[str, int]  # input_tokens, output_tokens
    stop_reason: Optional[str] = None
    latency_ms: Optional[int] = None

    @property
    def total_tokens(self) -> int:
        return self.usage.get("input_tokens", 0) + self.usage.get("output_tokens", 0)


@dataclass
class Message:
    """Chat message."""
    role: str  # "user", "assistant", "system"
    content: str


class LLMClient(ABC):
    """
    Abstract base class for LLM clients.

    All LLM providers should implement this interface. Calls are async so
    that callers can bound them with their own deadlines.
    """

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    @abstractmethod
    async def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: float = 0.0,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Generate a response from a conversation.

        Args:
            messages: List of conversation messages
            system: Optional system prompt
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            json_mode: Ask the provider for a JSON object response

        Returns:
            LLMResponse with generated content

        Raises:
            LLMError: On transport or API failure
        """
        pass

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: float = 0.0,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate a response from a single prompt."""
        messages = [Message(role="user", content=prompt)]
        return await self.chat(
            messages,
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
            json_mode=json_mode,
        )

    async def aclose(self) -> None:
        """Release network resources held by the client."""
        pass

    def _check_valid_json(self, content: str) -> bool:
        """Check if response is valid JSON."""
        try:
            json.loads(content)
            return True
        except (ValueError, TypeError, RecursionError):
            return False

    def log_call(self, response: LLMResponse) -> None:
        """Log a completed call with the current task context."""
        context = get_llm_context()
        logger.debug(
            f"LLM call: model={response.model} task={context.get('task_type') or 'unknown'} "
            f"run={context.get('run_id') or '-'} tokens={response.total_tokens} "
            f"latency={response.latency_ms}ms valid_json={self._check_valid_json(response.content)}"
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model})"
