"""
Project creation from templates.

A new project is a directory with the template files plus the generated
.env.example, .gitignore, README.md and miniapp.config.json.
"""

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from miniapp.core.logging import logger
from miniapp.domain.exceptions import ProjectExistsError
from miniapp.scaffold.env_file import (
    ENV_EXAMPLE_FILENAME,
    build_project_config,
    render_env_example,
    write_project_config,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_TEMPLATE = "basic"
DEFAULT_PROJECT_NAME = "my-discord-miniapp"

TEMPLATES: dict[str, str] = {
    "basic": "Basic - Simple starter template",
    "react": "React - React with TypeScript",
    "game": "Game - Game-ready with canvas",
    "social": "Social - Voice/chat features",
}

FEATURES: dict[str, tuple[str, bool]] = {
    "voice": ("Voice Channel Integration", True),
    "avatar": ("User Avatar Display", True),
    "guild": ("Guild/Server Info", False),
    "multiplayer": ("Multiplayer Support", False),
}

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\-_\s]+$")

GITIGNORE = """# Python
__pycache__/
*.py[cod]
.venv/
*.egg-info/

# Build output
dist/
build/

# Environment files
.env
.env.local
.env.*.local

# IDE
.vscode/
.idea/
*.swp
*.swo

# OS
.DS_Store
Thumbs.db

# Logs
*.log

# Cloudflare tunnel
.cloudflared/
"""

README_TEMPLATE = """# {name}

A Discord Mini App (Activity) built with the Discord Mini App Framework.

## Quick Start

1. Copy `.env.example` to `.env` and fill in your Discord credentials
2. Run `pip install discord-miniapp-framework`
3. Run `miniapp serve` to start the server
4. Run `cloudflared tunnel --url http://localhost:3001` in another terminal to expose your app

## Commands

- `miniapp serve` - Start the token exchange server
- `miniapp check-env` - Verify your configuration
- `miniapp wizard` - Guided setup

## Getting Discord Credentials

1. Go to [Discord Developer Portal](https://discord.com/developers/applications)
2. Create a new application
3. Copy your Client ID and Client Secret
4. Enable Activities in the Activities tab

## Learn More

- [Discord Embedded App SDK](https://discord.com/developers/docs/activities/overview)
- [Discord Developer Portal](https://discord.com/developers/applications)
"""


@dataclass
class CreatedProject:
    """Result of create_project."""

    project_dir: Path
    name: str
    template: str
    features: list[str] = field(default_factory=list)


def slugify(name: str) -> str:
    """Lower-case the name and replace whitespace runs with dashes."""
    return re.sub(r"\s+", "-", name.strip().lower())


def validate_project_name(name: str) -> str | None:
    """Return an error message for an invalid name, None when valid."""
    if not name:
        return "Please enter a name"
    if not PROJECT_NAME_PATTERN.match(name):
        return "Name can only contain letters, numbers, dashes, and underscores"
    return None


def copy_directory(src: Path, dest: Path) -> None:
    """Copy src into dest recursively, creating dest as needed."""
    dest.mkdir(parents=True, exist_ok=True)
    for entry in src.iterdir():
        target = dest / entry.name
        if entry.is_dir():
            copy_directory(entry, target)
        else:
            shutil.copyfile(entry, target)


def template_path(template: str) -> Path:
    """
    Directory holding the files of a template.

    Templates without files of their own use the basic template.
    """
    path = TEMPLATES_DIR / template
    if path.is_dir():
        return path

    logger.warning(f"Template '{template}' has no files, using default template")
    return TEMPLATES_DIR / DEFAULT_TEMPLATE


def create_project(
    name: str = DEFAULT_PROJECT_NAME,
    template: str = DEFAULT_TEMPLATE,
    features: list[str] | None = None,
    target_dir: Path | None = None,
) -> CreatedProject:
    """
    Create a new Discord Mini App project.

    Args:
        name: Project name
        template: Template to use
        features: Features to record in miniapp.config.json
        target_dir: Parent directory of the project (current directory by default)

    Returns:
        CreatedProject describing the new project

    Raises:
        ValueError: If the name or template is invalid
        ProjectExistsError: If the project directory already exists
    """
    error = validate_project_name(name)
    if error:
        raise ValueError(error)
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template: {template}")

    project_dir = (target_dir or Path.cwd()) / slugify(name)
    if project_dir.exists():
        raise ProjectExistsError(f'Directory "{project_dir.name}" already exists!')

    logger.debug(f"Creating project {name!r} in {project_dir}")
    copy_directory(template_path(template), project_dir)

    (project_dir / ENV_EXAMPLE_FILENAME).write_text(
        render_env_example(name), encoding="utf-8"
    )
    (project_dir / ".gitignore").write_text(GITIGNORE, encoding="utf-8")
    (project_dir / "README.md").write_text(
        README_TEMPLATE.format(name=name), encoding="utf-8"
    )
    write_project_config(project_dir, build_project_config(name, template, features))

    return CreatedProject(
        project_dir=project_dir,
        name=name,
        template=template,
        features=list(features or []),
    )
