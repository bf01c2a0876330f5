"""LLM client wrapper around litellm.

Provides a unified interface for calling any LLM model supported by litellm.
Provider API keys are read by litellm from its usual environment variables.
"""

import os

from litellm import completion

DEFAULT_MODEL = "claude-sonnet-4-20250514"
MODEL_ENV_VAR = "MCP_NEW_MODEL"


def resolve_model(model: str | None = None) -> str:
    """Explicit model, else ``$MCP_NEW_MODEL``, else the built-in default."""
    return model or os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None, max_tokens: int = 4096):
        self.model = resolve_model(model)
        self.max_tokens = max_tokens

    def call(self, system: str, user: str) -> str:
        """Send a system+user message to the LLM and return the response text."""
        response = completion(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        return response.choices[0].message.content or ""
