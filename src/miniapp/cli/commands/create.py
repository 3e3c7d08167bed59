from pathlib import Path
from typing import Optional

import typer

from ...domain.exceptions import ProjectExistsError
from ...scaffold.project import (
    DEFAULT_PROJECT_NAME,
    DEFAULT_TEMPLATE,
    TEMPLATES,
    create_project,
    slugify,
    validate_project_name,
)
from .. import output


def prompt_project_name(default: str = DEFAULT_PROJECT_NAME) -> str:
    while True:
        name = typer.prompt("Project name", default=default)
        error = validate_project_name(name)
        if error is None:
            return name
        output.error(error)


def prompt_template(default: str = DEFAULT_TEMPLATE) -> str:
    typer.echo("Choose a template:")
    for key, description in TEMPLATES.items():
        typer.echo(f"  {key:<8} {description}")
    while True:
        template = typer.prompt("Template", default=default).strip().lower()
        if template in TEMPLATES:
            return template
        output.error(f"Choose one of: {', '.join(TEMPLATES)}")


def register_create_commands(app: typer.Typer) -> None:
    @app.command("create")
    def create(
        name: Optional[str] = typer.Argument(None, help="Project name"),
        template: str = typer.Option(
            DEFAULT_TEMPLATE,
            "--template",
            "-t",
            help="Template to use (basic, react, game, social)",
        ),
        directory: Path = typer.Option(Path("."), "--dir", "-d", help="Target directory"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip prompts and use defaults"),
    ):
        """Create a new Discord Mini App project."""
        typer.secho("\nCreate Discord Mini App\n", fg=typer.colors.BLUE, bold=True)

        if not name and not yes:
            name = prompt_project_name()
            template = prompt_template(template)

        name = name or DEFAULT_PROJECT_NAME

        try:
            project = create_project(name=name, template=template, target_dir=directory)
        except ProjectExistsError as exc:
            output.error(str(exc))
            raise typer.Exit(code=1) from None
        except ValueError as exc:
            output.error(str(exc))
            raise typer.Exit(code=1) from None
        except OSError as exc:
            output.error(f"Failed to create project: {exc}")
            raise typer.Exit(code=1) from None

        output.success("Project created successfully!")
        typer.echo(typer.style("\nProject created at: ", fg=typer.colors.CYAN) + str(project.project_dir))

        typer.secho("\nNext steps:\n", fg=typer.colors.CYAN)
        output.code(
            f"cd {slugify(name)}\n"
            "cp .env.example .env\n"
            "# Edit .env with your Discord credentials\n"
            "pip install -r requirements.txt\n"
            "python app.py"
        )
        output.hint("\nFor guided setup, run: miniapp wizard\n")
