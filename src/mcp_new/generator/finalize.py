"""Writing a rendered project to disk, then installing dependencies and initializing git.

Install and git steps shell out to the relevant toolchain. A missing executable is a
warning, a failing command is a :class:`GenerationError`; files already
written are left in place either way.
"""

import shutil
import subprocess
from pathlib import Path

from mcp_new import console
from mcp_new.errors import GenerationError
from mcp_new.generator.languages import Language

INITIAL_COMMIT_MESSAGE = "Initial commit from mcp-new"


def is_empty_dir(path: Path) -> bool:
    return not path.exists() or (path.is_dir() and not any(path.iterdir()))


def write_project(root: Path, files: dict[str, str], overwrite: bool = True) -> list[str]:
    """Write rendered files under ``root``. Returns the paths skipped because they already existed."""
    skipped = []
    for relative, content in files.items():
        target = root / relative
        if target.exists() and not overwrite:
            skipped.append(relative)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return skipped


def _run(command: list[str], cwd: Path) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(command, cwd=cwd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or e.stdout or "").strip()
        raise GenerationError(f"`{' '.join(command)}` failed: {detail}") from e


def install_dependencies(project_dir: Path, language: Language) -> bool:
    """Run the language's install command. Returns False when it was skipped."""
    command = list(language.install_command)
    if shutil.which(command[0]) is None:
        console.warning(f"{command[0]} not found; skipping `{' '.join(command)}`. Run it manually.")
        return False

    console.info(f"Installing dependencies ({' '.join(command)})...")
    _run(command, project_dir)
    console.success("Dependencies installed")
    return True


def init_git(project_dir: Path) -> bool:
    """Initialize a repository and record an initial commit. Returns False when skipped."""
    if shutil.which("git") is None:
        console.warning("git not found; skipping repository initialization.")
        return False

    if not (project_dir / ".git").exists():
        _run(["git", "init"], project_dir)
    _run(["git", "add", "."], project_dir)
    try:
        _run(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], project_dir)
    except GenerationError as e:
        # Usually an unset user.name/user.email; the repository itself is fine.
        console.warning(f"Initialized git repository but could not commit: {e.message}")
        return True
    console.success("Initialized git repository")
    return True
