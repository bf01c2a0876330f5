"""Project renderer: turns a ProjectConfig into a complete starter codebase.

Shared files come from ``templates/projects/common``, language files from
``templates/projects/<language>``, and every tool file from the same
:class:`~mcp_new.generator.emitter.ToolEmitter` used by ``add-tool``.
"""

import jinja2

from mcp_new.errors import GenerationError
from mcp_new.generator.emitter import ToolEmitter, template_environment
from mcp_new.generator.languages import Language, LanguageRegistry
from mcp_new.models import ProjectConfig, ToolConfig, ToolParameter
from mcp_new.naming import to_pascal_case

COMMON_TEMPLATE_DIR = "projects/common"

# Template file names that cannot be shipped under their real name.
OUTPUT_RENAMES = {"gitignore": ".gitignore"}

EXAMPLE_TOOL = ToolConfig(
    name="hello_world",
    description="Say hello to someone",
    parameters=[ToolParameter(name="name", type="string", description="Name to greet", required=True)],
)


class ProjectRenderer:
    """Renders project files as ``{relative_path: content}``; never touches the disk."""

    def __init__(self, languages: LanguageRegistry, env: jinja2.Environment | None = None):
        self.languages = languages
        self.env = env or template_environment()

    def tools_for(self, config: ProjectConfig) -> list[ToolConfig]:
        tools = list(config.tools)
        if config.include_example_tool and all(t.name != EXAMPLE_TOOL.name for t in tools):
            tools.insert(0, EXAMPLE_TOOL)
        return tools

    def render(self, config: ProjectConfig) -> dict[str, str]:
        lang = self.languages.get(config.language)
        if config.transport not in lang.transports:
            raise GenerationError(
                f"{lang.display_name} projects support only the {', '.join(lang.transports)} transport."
            )

        emitter = ToolEmitter(lang, self.env)
        tools = self.tools_for(config)
        context = self._context(config, lang, tools)

        files: dict[str, str] = {}
        for template_dir in (COMMON_TEMPLATE_DIR, lang.project_template_dir):
            prefix = template_dir + "/"
            for name in self.env.list_templates(filter_func=lambda n: n.startswith(prefix) and n.endswith(".j2")):
                relative = name[len(prefix):-len(".j2")]
                head, _, tail = relative.rpartition("/")
                tail = OUTPUT_RENAMES.get(tail, tail)
                files[f"{head}/{tail}" if head else tail] = self.env.get_template(name).render(**context)

        for tool in tools:
            emitted = emitter.render(tool)
            files[emitted.path] = emitted.content

        return files

    def _context(self, config: ProjectConfig, lang: Language, tools: list[ToolConfig]) -> dict:
        return {
            "config": config,
            "language": lang,
            "sse": config.transport == "sse",
            "install_command": " ".join(lang.install_command),
            "tools": [
                {
                    "name": t.name,
                    "description": t.description,
                    "type_name": to_pascal_case(t.name),
                    "function_name": lang.function_name(t.name),
                    "schema_name": lang.schema_name(t.name),
                    "module": lang.module_name(t.name),
                    "path": lang.tool_path(t.name),
                }
                for t in tools
            ],
            "resources": [
                {
                    "uri": r.uri,
                    "name": r.name,
                    "description": r.description,
                    "mimeType": r.mime_type or "text/plain",
                }
                for r in config.resources
            ],
        }


def render_project(config: ProjectConfig, languages: LanguageRegistry) -> dict[str, str]:
    """Render a complete starter project for ``config`` as ``{relative_path: content}``."""
    return ProjectRenderer(languages).render(config)
