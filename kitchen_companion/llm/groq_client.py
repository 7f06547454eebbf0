from __future__ import annotations

import logging

from groq import Groq

from ..recommendations.outcomes import TransportFailure
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


class CompletionUnavailableError(RuntimeError):
    """The completion client is disabled or has no API key configured."""


class EmptyCompletionError(RuntimeError):
    """The endpoint answered but the reply carried no message content."""


class CompletionClient:
    """
    Sends one user-role prompt to an OpenAI-compatible chat-completion endpoint.

    ``complete`` returns the raw completion text, or a ``TransportFailure``
    describing why the round trip did not produce any text. It never raises.
    """

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self.config = config

    def complete(self, prompt: str) -> str | TransportFailure:
        config = self.config
        if not config.enabled or not config.api_key:
            logger.warning("Completion client is disabled or missing an API key")
            return TransportFailure(
                cause=CompletionUnavailableError("LLM completion is not configured")
            )

        try:
            client = Groq(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout,
                max_retries=0,
            )
            response = client.chat.completions.create(
                model=config.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:
            logger.warning("Chat completion call failed", exc_info=True)
            return TransportFailure(cause=exc)

        if not response.choices:
            return TransportFailure(cause=EmptyCompletionError("completion has no choices"))

        content = response.choices[0].message.content
        if not content:
            return TransportFailure(cause=EmptyCompletionError("completion message is empty"))

        return content
