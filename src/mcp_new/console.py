"""Terminal output helpers.

Everything user-facing goes through ``click.echo``/``click.secho`` so that
``CliRunner`` captures it and colors are stripped when stdout is not a TTY.
"""

import click

RULE = "─" * 50


def info(message: str) -> None:
    click.echo(click.style("i", fg="blue") + f" {message}")


def success(message: str) -> None:
    click.echo(click.style("✓", fg="green") + f" {message}")


def warning(message: str) -> None:
    click.echo(click.style("⚠", fg="yellow") + f" {message}", err=True)


def title(message: str) -> None:
    click.echo()
    click.secho(message, bold=True)
    click.secho(RULE, dim=True)


def bullets(items: list[str]) -> None:
    for item in items:
        click.echo(click.style("  •", dim=True) + f" {item}")


def box(heading: str, lines: list[str]) -> None:
    click.echo()
    click.echo(click.style("┌─", fg="green") + " " + click.style(heading, fg="green", bold=True))
    for line in lines:
        click.echo(click.style("│", fg="green") + f" {line}")
    click.echo(click.style("└─", fg="green"))


def next_steps(directory: str | None, install_command: str, run_command: str) -> None:
    """Print the cd/install/run box shown after a project is generated."""
    lines = [""]
    if directory:
        lines.append(f"  cd {directory}")
    lines += [f"  {install_command}", f"  {run_command}", ""]
    box("Next steps:", lines)
