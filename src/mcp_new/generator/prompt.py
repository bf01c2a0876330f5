"""Prompt generator: turns a free-text API description into tools via an LLM."""

import json
import re
from pathlib import Path

from pydantic import ValidationError

from mcp_new.errors import GenerationError
from mcp_new.llm import LlmClient
from mcp_new.models import ToolConfig

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class ToolSynthesizer:
    """Asks the model for a JSON array of tools and validates it into ``ToolConfig``s."""

    def __init__(self, model: str | None = None, client: LlmClient | None = None):
        self.client = client or LlmClient(model=model)

    def generate(self, description: str) -> list[ToolConfig]:
        if not description.strip():
            raise GenerationError("Description cannot be empty")

        system = (PROMPTS_DIR / "tools.md").read_text(encoding="utf-8")
        response = self.client.call(system=system, user=description.strip())
        return self._to_tools(self._extract_json(response))

    def _extract_json(self, response: str) -> list:
        """Parse the tools array from a fenced block, the bare response, or the first ``[...]`` span."""
        candidates = []
        match = re.search(r"```(?:json)?\s*\n(.*?)```", response, re.DOTALL)
        if match:
            candidates.append(match.group(1))
        candidates.append(response)
        match = re.search(r"\[.*\]", response, re.DOTALL)
        if match:
            candidates.append(match.group(0))

        for candidate in candidates:
            try:
                data = json.loads(candidate.strip())
            except json.JSONDecodeError:
                continue
            if isinstance(data, list):
                return data
        raise GenerationError("Could not parse tools from the model response")

    def _to_tools(self, data: list) -> list[ToolConfig]:
        if not data:
            raise GenerationError("The model returned no tools")
        tools = []
        for index, item in enumerate(data, 1):
            try:
                tools.append(ToolConfig.model_validate(item))
            except ValidationError as e:
                raise GenerationError(f"Tool #{index} from the model response is invalid: {e}") from e
        return tools
