from unittest.mock import MagicMock, patch

from mcp_new.llm import DEFAULT_MODEL, LlmClient, resolve_model


def _response(content):
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = content
    return resp


class TestResolveModel:
    def test_default_model(self, monkeypatch):
        monkeypatch.delenv("MCP_NEW_MODEL", raising=False)
        assert LlmClient().model == DEFAULT_MODEL

    def test_env_overrides_default(self, monkeypatch):
        monkeypatch.setenv("MCP_NEW_MODEL", "gpt-4o-mini")
        assert resolve_model() == "gpt-4o-mini"

    def test_explicit_wins(self, monkeypatch):
        monkeypatch.setenv("MCP_NEW_MODEL", "gpt-4o-mini")
        assert LlmClient(model="gpt-4o").model == "gpt-4o"


class TestLlmClient:
    @patch("mcp_new.llm.completion")
    def test_call_returns_content(self, mock_completion):
        mock_completion.return_value = _response("test response")

        client = LlmClient(model="gpt-4o")
        assert client.call(system="You are helpful.", user="Hello") == "test response"
        mock_completion.assert_called_once()

    @patch("mcp_new.llm.completion")
    def test_call_passes_model_and_messages(self, mock_completion):
        mock_completion.return_value = _response("ok")

        LlmClient(model="claude-sonnet-4-20250514").call(system="sys", user="usr")

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "claude-sonnet-4-20250514"
        assert call_kwargs["max_tokens"] == 4096
        messages = call_kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "sys"}
        assert messages[1] == {"role": "user", "content": "usr"}

    @patch("mcp_new.llm.completion")
    def test_empty_content(self, mock_completion):
        mock_completion.return_value = _response(None)
        assert LlmClient(model="gpt-4o").call(system="s", user="u") == ""
