import click
import pytest
from click.testing import CliRunner

from mcp_new import wizard
from mcp_new.generator.languages import default_languages
from mcp_new.parser.base import ParsedEndpoint


class TestParseSelection:
    def test_all(self):
        assert wizard.parse_selection("all", 3) == [0, 1, 2]
        assert wizard.parse_selection(" ALL ", 2) == [0, 1]

    def test_numbers_and_ranges(self):
        assert wizard.parse_selection("1, 3,5-7", 8) == [0, 2, 4, 5, 6]

    def test_overlaps_deduplicated(self):
        assert wizard.parse_selection("2-3,3,2", 4) == [1, 2]

    def test_empty_selects_nothing(self):
        assert wizard.parse_selection("", 4) == []

    @pytest.mark.parametrize("text", ["0", "5", "2-9", "3-1", "x", "1-b"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            wizard.parse_selection(text, 4)


def _run(func, input_text):
    """Invoke a prompt function under CliRunner and return its result."""
    result = {}

    @click.command()
    def cmd():
        result["value"] = func()

    outcome = CliRunner().invoke(cmd, input=input_text)
    assert outcome.exception is None, outcome.output
    return result["value"], outcome.output


class TestPrompts:
    def test_select_endpoints(self):
        endpoints = [
            ParsedEndpoint(method="GET", path="/a", summary="First"),
            ParsedEndpoint(method="GET", path="/b"),
            ParsedEndpoint(method="POST", path="/c"),
        ]
        selected, output = _run(lambda: wizard.select_endpoints(endpoints), "1,3\n")
        assert [e.path for e in selected] == ["/a", "/c"]
        assert "1. GET /a - First" in output

    def test_select_endpoints_reprompts_on_bad_input(self):
        endpoints = [ParsedEndpoint(method="GET", path="/a")]
        selected, output = _run(lambda: wizard.select_endpoints(endpoints), "7\n\n")
        assert [e.path for e in selected] == ["/a"]
        assert "out of range" in output

    def test_project_name_validated(self):
        name, output = _run(lambda: wizard.project_name("mcp-server"), "Bad Name\nmy-server\n")
        assert name == "my-server"
        assert "lowercase letters, numbers, and hyphens" in output

    def test_rust_transport_not_prompted(self):
        transport, output = _run(lambda: wizard.transport(default_languages().get("rust")), "")
        assert transport == "stdio"
        assert output == ""

    def test_tool_with_parameters(self):
        answers = "\n".join([
            "get_user",  # name
            "Fetch a user",  # description
            "y",  # add parameter
            "id",
            "number",
            "The user id",
            "y",  # required
            "n",  # no more parameters
        ]) + "\n"
        tool, _ = _run(wizard.tool, answers)
        assert tool.name == "get_user"
        assert [(p.name, p.type, p.required) for p in tool.parameters] == [("id", "number", True)]

    def test_resources(self):
        answers = "y\nConfig\nconfig://app\nApp config\n\nn\n"
        resources, _ = _run(wizard.resources, answers)
        assert resources[0].uri == "config://app"
        assert resources[0].mime_type is None
