import json
from unittest.mock import MagicMock

import pytest

from mcp_new.errors import GenerationError
from mcp_new.generator.prompt import ToolSynthesizer

TOOLS = [
    {
        "name": "create_page",
        "description": "Creates a new page",
        "parameters": [
            {"name": "title", "type": "string", "description": "Page title", "required": True},
            {"name": "content", "type": "string", "description": "Body", "required": False},
        ],
    },
    {"name": "list_pages", "description": "List pages", "parameters": []},
]


def _synthesizer(response: str) -> tuple[ToolSynthesizer, MagicMock]:
    client = MagicMock()
    client.call.return_value = response
    return ToolSynthesizer(client=client), client


class TestToolSynthesizer:
    def test_bare_json(self):
        synth, client = _synthesizer(json.dumps(TOOLS))
        tools = synth.generate("A wiki API")
        assert [t.name for t in tools] == ["create_page", "list_pages"]
        assert tools[0].required_names == ["title"]
        assert client.call.call_args[1]["user"] == "A wiki API"
        assert "MCP" in client.call.call_args[1]["system"]

    def test_fenced_json(self):
        synth, _ = _synthesizer("Here you go:\n```json\n" + json.dumps(TOOLS) + "\n```\nEnjoy!")
        assert len(synth.generate("wiki")) == 2

    def test_json_embedded_in_prose(self):
        synth, _ = _synthesizer("Sure. " + json.dumps(TOOLS) + " Let me know.")
        assert len(synth.generate("wiki")) == 2

    def test_unparseable(self):
        synth, _ = _synthesizer("I cannot help with that.")
        with pytest.raises(GenerationError, match="Could not parse tools"):
            synth.generate("wiki")

    def test_empty_array(self):
        synth, _ = _synthesizer("[]")
        with pytest.raises(GenerationError, match="no tools"):
            synth.generate("wiki")

    def test_invalid_tool(self):
        synth, _ = _synthesizer(json.dumps([{"name": "CreatePage", "description": "x"}]))
        with pytest.raises(GenerationError, match="Tool #1"):
            synth.generate("wiki")

    def test_empty_description(self):
        synth, client = _synthesizer("[]")
        with pytest.raises(GenerationError, match="cannot be empty"):
            synth.generate("   ")
        client.call.assert_not_called()
