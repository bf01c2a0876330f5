"""Interactive prompts used by the wizard, ``init`` and ``add-tool``."""

import click

from mcp_new import console
from mcp_new.generator.languages import Language, LanguageRegistry
from mcp_new.models import PARAM_TYPES, ResourceConfig, ToolConfig, ToolParameter
from mcp_new.naming import check_project_name, check_tool_name
from mcp_new.parser.base import ParsedEndpoint


def _checked(check):
    """Adapt a ``name -> error | None`` checker into a click ``value_proc``."""

    def proc(value: str) -> str:
        value = value.strip()
        error = check(value)
        if error:
            raise click.UsageError(error)
        return value

    return proc


def _non_empty(label: str):
    return _checked(lambda value: None if value else f"{label} is required")


def project_name(default: str | None = None) -> str:
    return click.prompt("Project name", default=default, value_proc=_checked(check_project_name))


def project_description(default: str = "") -> str:
    return click.prompt("Project description", default=default, show_default=False)


def language(languages: LanguageRegistry) -> Language:
    for lang in languages:
        click.echo(f"  {lang.id:<12} {lang.display_name}")
    choice = click.prompt(
        "Language", type=click.Choice(languages.ids), default=languages.ids[0], show_choices=False
    )
    return languages.get(choice)


def transport(lang: Language) -> str:
    if len(lang.transports) == 1:
        return lang.transports[0]
    return click.prompt("Transport", type=click.Choice(list(lang.transports)), default=lang.transports[0])


def include_example_tool() -> bool:
    return click.confirm("Add example tool?", default=True)


def tool_parameter() -> ToolParameter:
    name = click.prompt("  Parameter name", value_proc=_non_empty("Parameter name"))
    type_ = click.prompt("  Parameter type", type=click.Choice(PARAM_TYPES), default="string")
    description = click.prompt("  Parameter description", default="", show_default=False)
    required = click.confirm("  Required parameter?", default=True)
    return ToolParameter(name=name, type=type_, description=description, required=required)


def tool(
    name: str | None = None,
    description: str | None = None,
    parameters: list[ToolParameter] | None = None,
) -> ToolConfig:
    """Prompt for any missing tool field; parameters are prompted only when none were given."""
    name = name or click.prompt("Tool name (snake_case)", value_proc=_checked(check_tool_name))
    description = description or click.prompt("Tool description", value_proc=_non_empty("Description"))
    if parameters:
        return ToolConfig(name=name, description=description, parameters=parameters)

    parameters = []
    while click.confirm("Add another parameter?" if parameters else "Add parameter?", default=not parameters):
        parameters.append(tool_parameter())
    return ToolConfig(name=name, description=description, parameters=parameters)


def tools() -> list[ToolConfig]:
    result = []
    if not click.confirm("Do you want to add custom tools?", default=False):
        return result
    while True:
        result.append(tool())
        if not click.confirm("Add another tool?", default=False):
            return result


def resources() -> list[ResourceConfig]:
    result = []
    if not click.confirm("Do you want to add resources?", default=False):
        return result
    while True:
        result.append(ResourceConfig(
            name=click.prompt("Resource name", value_proc=_non_empty("Name")),
            uri=click.prompt("Resource URI", value_proc=_non_empty("URI")),
            description=click.prompt("Resource description", default="", show_default=False),
            mime_type=click.prompt("MIME type (optional)", default="", show_default=False) or None,
        ))
        if not click.confirm("Add another resource?", default=False):
            return result


def parse_selection(text: str, count: int) -> list[int]:
    """Parse ``all`` or ``1,3,5-7`` into sorted zero-based indexes below ``count``.

    An empty answer selects nothing. Raises ValueError on malformed or
    out-of-range input.
    """
    text = text.strip().lower()
    if text == "all":
        return list(range(count))

    selected: set[int] = set()
    for part in filter(None, (p.strip() for p in text.split(","))):
        start, sep, end = part.partition("-")
        try:
            first = int(start)
            last = int(end) if sep else first
        except ValueError:
            raise ValueError(f"Invalid selection: {part!r}") from None
        if first > last or first < 1 or last > count:
            raise ValueError(f"Selection out of range 1-{count}: {part!r}")
        selected.update(range(first - 1, last))
    return sorted(selected)


def select_endpoints(endpoints: list[ParsedEndpoint]) -> list[ParsedEndpoint]:
    """Show a numbered endpoint list and let the user pick some or all of them."""
    console.title("Endpoints")
    for index, endpoint in enumerate(endpoints, 1):
        summary = f" - {endpoint.summary}" if endpoint.summary else ""
        click.echo(f"  {index:>3}. {endpoint.label}{summary}")
    click.echo()

    def proc(value: str) -> list[int]:
        try:
            return parse_selection(value, len(endpoints))
        except ValueError as e:
            raise click.UsageError(str(e)) from e

    indexes = click.prompt("Select endpoints (all, or e.g. 1,3,5-7)", default="all", value_proc=proc)
    return [endpoints[i] for i in indexes]
