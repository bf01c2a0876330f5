"""CLI entry point for mcp-new."""

import json
import re
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from mcp_new import __version__, console, wizard
from mcp_new.errors import EmptySelectionError, GenerationError, McpNewError
from mcp_new.generator.emitter import ToolEmitter
from mcp_new.generator.finalize import init_git, install_dependencies, is_empty_dir, write_project
from mcp_new.generator.languages import Language, LanguageRegistry, default_languages
from mcp_new.generator.project import render_project
from mcp_new.generator.prompt import ToolSynthesizer
from mcp_new.models import PARAM_TYPES, TRANSPORTS, ProjectConfig, ToolConfig, ToolParameter
from mcp_new.parser.detect import parse_spec_file
from mcp_new.parser.normalize import endpoints_to_tools
from mcp_new.presets import PresetRegistry, default_presets

DEFAULT_PROJECT_NAME = "mcp-server"
DEFAULT_LANGUAGE = "typescript"


@dataclass(frozen=True)
class App:
    """Registries shared by every command through ``ctx.obj``."""

    languages: LanguageRegistry
    presets: PresetRegistry


def _language_options(func):
    """Add the mutually exclusive ``-t/-p/-g/-r`` switches, all stored as ``language``."""
    for flag, long_flag, value in reversed([
        ("-t", "--typescript", "typescript"),
        ("-p", "--python", "python"),
        ("-g", "--go", "go"),
        ("-r", "--rust", "rust"),
    ]):
        func = click.option(flag, long_flag, "language", flag_value=value, help=f"Generate a {value} project.")(func)
    return func


def _validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        message = err["msg"].removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def _build(model_cls, **fields):
    """Instantiate a pydantic model, reporting validation failures as CLI errors."""
    try:
        return model_cls(**fields)
    except ValidationError as e:
        raise McpNewError(_validation_message(e)) from e


def _name_from_spec(spec_path: Path) -> str:
    stem = re.sub(r"[^a-z0-9]+", "-", spec_path.stem.lower()).strip("-")
    return f"{stem}-mcp" if stem else DEFAULT_PROJECT_NAME


def _name_from_directory(directory: Path) -> str:
    package_json = directory / "package.json"
    if package_json.exists():
        try:
            name = json.loads(package_json.read_text(encoding="utf-8")).get("name")
        except (json.JSONDecodeError, AttributeError):
            name = None
        if isinstance(name, str) and name:
            return name
    return re.sub(r"[^a-z0-9-]+", "-", directory.name.lower()).strip("-") or DEFAULT_PROJECT_NAME


def _choose_language(app: App, language: str | None, yes: bool) -> Language:
    if language:
        return app.languages.get(language)
    if yes:
        return app.languages.get(DEFAULT_LANGUAGE)
    return wizard.language(app.languages)


def _choose_transport(lang: Language, transport: str | None, yes: bool) -> str:
    if transport:
        return transport
    if yes:
        return lang.transports[0]
    return wizard.transport(lang)


def _show_tools(tools: list[ToolConfig]) -> None:
    console.info("Tools:")
    console.bullets([f"{t.name} - {t.description}" for t in tools])


def _spec_tools(spec_path: Path, yes: bool) -> list[ToolConfig]:
    console.info(f"Parsing {spec_path}...")
    endpoints = parse_spec_file(spec_path)
    if not endpoints:
        raise EmptySelectionError(f"No endpoints found in {spec_path}")
    console.info(f"Found {len(endpoints)} endpoints")

    selected = endpoints if yes else wizard.select_endpoints(endpoints)
    if not selected:
        raise EmptySelectionError("No endpoints selected")
    try:
        return endpoints_to_tools(selected)
    except ValidationError as e:
        raise McpNewError(_validation_message(e)) from e


def _prompt_tools(description: str | None, model: str | None, yes: bool) -> tuple[list[ToolConfig], str]:
    if description is None:
        if yes:
            raise McpNewError("--from-prompt with --yes needs --description")
        description = click.edit("\n# Describe your API above. Lines starting with '#' are ignored.\n")
        description = "\n".join(
            line for line in (description or "").splitlines() if not line.startswith("#")
        ).strip()
    if not description.strip():
        raise McpNewError("Description cannot be empty")

    console.info("Generating tools from your description...")
    tools = ToolSynthesizer(model=model).generate(description)
    _show_tools(tools)
    if not yes and not click.confirm("Proceed with these tools?", default=True):
        raise McpNewError("Generation cancelled by user")
    return tools, description


def _finish(config: ProjectConfig, lang: Language, project_dir: Path) -> None:
    if config.skip_install:
        console.info("Skipping dependency installation (--skip-install)")
    else:
        install_dependencies(project_dir, lang)
    if config.init_git:
        init_git(project_dir)


@click.group()
@click.version_option(__version__, prog_name="mcp-new")
@click.pass_context
def main(ctx):
    """Scaffold MCP servers in TypeScript, Python, Go or Rust."""
    if ctx.obj is None:
        ctx.obj = App(languages=default_languages(), presets=default_presets())


@main.command()
@click.argument("name", required=False)
@_language_options
@click.option("--transport", type=click.Choice(TRANSPORTS), default=None, help="Server transport.")
@click.option("--preset", "preset_id", default=None, help="Start from a built-in preset (see list-presets).")
@click.option("--from-openapi", "spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Generate tools from an OpenAPI, Swagger or Postman file.")
@click.option("--from-prompt", is_flag=True, help="Generate tools from a free-text description with an LLM.")
@click.option("--description", default=None, help="Project description (and the prompt for --from-prompt).")
@click.option("--skip-install", is_flag=True, help="Do not install dependencies.")
@click.option("--no-git", is_flag=True, help="Do not initialize a git repository.")
@click.option("-y", "--yes", is_flag=True, help="Accept defaults instead of prompting.")
@click.option("--model", default=None, help="LLM model to use for --from-prompt.")
@click.option("-o", "--output", type=click.Path(file_okay=False, path_type=Path), default=None, help="Output directory (default: ./NAME).")
@click.pass_obj
def create(
    app: App,
    name: str | None,
    language: str | None,
    transport: str | None,
    preset_id: str | None,
    spec_path: Path | None,
    from_prompt: bool,
    description: str | None,
    skip_install: bool,
    no_git: bool,
    yes: bool,
    model: str | None,
    output: Path | None,
):
    """Create a new MCP server project."""
    if sum([preset_id is not None, spec_path is not None, from_prompt]) > 1:
        raise click.UsageError("Use only one of --preset, --from-openapi and --from-prompt.")

    tools: list[ToolConfig] = []
    resources = []
    include_example = True
    default_name = DEFAULT_PROJECT_NAME
    default_description = ""

    if preset_id is not None:
        preset = app.presets.get(preset_id)
        tools, include_example = list(preset.tools), False
        default_description = preset.description
    elif spec_path is not None:
        tools, include_example = _spec_tools(spec_path, yes), False
        default_name = _name_from_spec(spec_path)
    elif from_prompt:
        tools, prompt_text = _prompt_tools(description, model, yes)
        include_example = False
        default_description = " ".join(prompt_text.split())[:100]

    if not name:
        name = default_name if yes else wizard.project_name(default_name)
    if description is None:
        description = default_description if yes or from_prompt else wizard.project_description(default_description)

    lang = _choose_language(app, language, yes)
    transport = _choose_transport(lang, transport, yes)

    if preset_id is None and spec_path is None and not from_prompt and not yes:
        include_example = wizard.include_example_tool()
        tools = wizard.tools()
        resources = wizard.resources()

    config = _build(
        ProjectConfig,
        name=name,
        description=description,
        language=lang.id,
        transport=transport,
        tools=tools,
        resources=resources,
        include_example_tool=include_example,
        skip_install=skip_install,
        init_git=not no_git,
    )

    project_dir = output or Path.cwd() / config.name
    if not is_empty_dir(project_dir):
        raise GenerationError(f"Directory {project_dir} already exists and is not empty.")

    console.title(f"Creating {config.name}")
    files = render_project(config, app.languages)
    write_project(project_dir, files)
    console.success(f"Generated {len(files)} files in {project_dir}")

    _finish(config, lang, project_dir)

    console.success(f"Project {config.name} created successfully!")
    console.next_steps(str(project_dir), " ".join(lang.install_command), lang.run_command)


@main.command()
@_language_options
@click.option("--transport", type=click.Choice(TRANSPORTS), default=None, help="Server transport.")
@click.option("--skip-install", is_flag=True, help="Do not install dependencies.")
@click.option("--force", is_flag=True, help="Overwrite files that already exist.")
@click.option("-y", "--yes", is_flag=True, help="Accept defaults instead of prompting.")
@click.pass_obj
def init(app: App, language: str | None, transport: str | None, skip_install: bool, force: bool, yes: bool):
    """Initialize an MCP server in the current directory."""
    project_dir = Path.cwd()

    if language:
        lang = app.languages.get(language)
    else:
        lang = app.languages.detect(project_dir)
        if lang:
            console.info(f"Detected existing {lang.display_name} project")
        else:
            lang = _choose_language(app, None, yes)

    config = _build(
        ProjectConfig,
        name=_name_from_directory(project_dir),
        language=lang.id,
        transport=_choose_transport(lang, transport, yes),
        include_example_tool=True if yes else wizard.include_example_tool(),
        skip_install=skip_install,
        init_git=False,
    )

    console.title(f"Initializing {config.name}")
    files = render_project(config, app.languages)
    skipped = write_project(project_dir, files, overwrite=force)
    for path in skipped:
        console.warning(f"{path} already exists; left unchanged (use --force to overwrite)")
    console.success(f"Generated {len(files) - len(skipped)} files in {project_dir}")

    _finish(config, lang, project_dir)
    console.next_steps(None, " ".join(lang.install_command), lang.run_command)


def _parse_param(value: str) -> ToolParameter:
    """``name[:type[:optional]]`` -> ToolParameter."""
    name, _, rest = value.partition(":")
    type_, _, flag = rest.partition(":")
    type_ = type_ or "string"
    if not name:
        raise click.BadParameter(f"Missing parameter name in {value!r}", param_hint="--param")
    if type_ not in PARAM_TYPES:
        raise click.BadParameter(
            f"Unknown type {type_!r} in {value!r}. Choose from: {', '.join(PARAM_TYPES)}",
            param_hint="--param",
        )
    if flag not in ("", "optional", "required"):
        raise click.BadParameter(f"Expected 'optional' or 'required' in {value!r}", param_hint="--param")
    return ToolParameter(name=name, type=type_, required=flag != "optional")


@main.command("add-tool")
@click.option("--name", default=None, help="Tool name (snake_case).")
@click.option("--description", default=None, help="Tool description.")
@click.option("--param", "params", multiple=True, metavar="NAME:TYPE[:optional]", help="Tool parameter; repeatable.")
@click.option("-d", "--directory", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".", help="Project directory.")
@click.pass_obj
def add_tool(app: App, name: str | None, description: str | None, params: tuple[str, ...], directory: Path):
    """Add a tool to an existing MCP server project."""
    lang = app.languages.detect(directory)
    if lang is None:
        manifests = ", ".join(lang_.manifest for lang_ in app.languages)
        raise GenerationError(f"No MCP project found in {directory}. Expected one of: {manifests}")

    parameters = [_parse_param(p) for p in params]
    try:
        if name and description:
            tool = ToolConfig(name=name, description=description, parameters=parameters)
        else:
            tool = wizard.tool(name, description, parameters)
    except ValidationError as e:
        raise McpNewError(_validation_message(e)) from e

    emitted = ToolEmitter(lang).render(tool)
    target = directory / emitted.path
    if target.exists():
        raise GenerationError(f"Tool file {emitted.path} already exists.")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(emitted.content, encoding="utf-8")

    console.success(f"Created {emitted.path}")
    console.info("Next steps:")
    console.bullets(list(emitted.next_steps))


@main.command("list-presets")
@click.pass_obj
def list_presets(app: App):
    """List the built-in presets and their tools."""
    console.title("Available Presets")
    for preset in app.presets:
        click.echo()
        click.secho(f"  {preset.id}", fg="yellow", bold=True)
        click.echo(f"  {preset.description}")
        click.echo("  Tools:")
        for tool in preset.tools:
            count = len(tool.parameters)
            params = "no params" if count == 0 else f"{count} param{'s' if count > 1 else ''}"
            click.echo(f"    • {tool.name} " + click.style(f"({params})", dim=True))
            click.echo(f"      {tool.description}")

    click.echo()
    click.secho("Usage:", bold=True)
    for example in ("mcp-new create my-db --preset database", "mcp-new create my-api --preset rest-api -p"):
        click.echo(f"  $ {example}")
