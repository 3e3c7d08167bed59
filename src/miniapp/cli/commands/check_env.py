import importlib.util
from pathlib import Path

import typer

from ...scaffold.env_file import (
    ENV_FILENAME,
    OPTIONAL_VARIABLES,
    REQUIRED_VARIABLES,
    is_placeholder,
    lookup,
    mask_value,
    read_env,
)
from .. import output

PROJECT_FILES: dict[str, str] = {
    "app.py": "Server entry point (app.py)",
    "static/index.html": "Client page (static/index.html)",
}

SERVER_PACKAGES: tuple[str, ...] = ("fastapi", "uvicorn", "httpx")


def _check_variables(root: Path) -> tuple[bool, bool]:
    """Report .env variables; returns (has_errors, has_warnings)."""
    env_path = root / ENV_FILENAME
    if not env_path.is_file():
        output.error(".env file not found")
        output.hint('Run "miniapp wizard" to create one')
        return True, False

    output.success(".env file found")
    try:
        env = read_env(env_path)
    except (OSError, UnicodeDecodeError):
        output.error("Failed to parse .env file")
        return True, False

    has_errors = False
    has_warnings = False

    for key, description in REQUIRED_VARIABLES.items():
        value = lookup(env, key)
        if not value or is_placeholder(value):
            output.error(f"{key} ({description}) is not configured")
            has_errors = True
        else:
            output.success(f"{key}: {mask_value(value)}")

    for key, (description, default) in OPTIONAL_VARIABLES.items():
        value = env.get(key)
        if not value:
            output.warning(f"{key} ({description}) not set, using default: {default}")
            has_warnings = True
        else:
            output.success(f"{key}: {value}")

    return has_errors, has_warnings


def _check_files(root: Path) -> bool:
    has_errors = False
    for relative_path, description in PROJECT_FILES.items():
        if (root / relative_path).is_file():
            output.success(description)
        else:
            output.error(f"{description} not found")
            has_errors = True
    return has_errors


def _check_dependencies() -> bool:
    missing = [name for name in SERVER_PACKAGES if importlib.util.find_spec(name) is None]
    if missing:
        output.warning(f"Missing packages: {', '.join(missing)}")
        output.hint('Run "pip install -r requirements.txt" to install dependencies')
        return True
    output.success("Server dependencies installed")
    return False


def register_check_env_commands(app: typer.Typer) -> None:
    @app.command("check-env")
    def check_env(
        root: Path = typer.Option(Path("."), "--root", help="Project root directory"),
    ):
        """Validate that all required configuration is in place."""
        typer.secho("\nDiscord Mini App - Environment Check\n", fg=typer.colors.BLUE, bold=True)

        has_errors, has_warnings = _check_variables(root)

        typer.secho("\nChecking project files...\n", fg=typer.colors.BLUE)
        has_errors = _check_files(root) or has_errors

        typer.secho("\nChecking dependencies...\n", fg=typer.colors.BLUE)
        has_warnings = _check_dependencies() or has_warnings

        typer.secho("\n" + "─" * 50, fg=typer.colors.BLUE)

        if has_errors:
            typer.secho("\nEnvironment check failed", fg=typer.colors.RED, bold=True)
            typer.secho("\nTo fix issues, run: miniapp wizard\n", fg=typer.colors.YELLOW)
            raise typer.Exit(code=1)

        if has_warnings:
            typer.secho(
                "\nEnvironment check passed with warnings", fg=typer.colors.YELLOW, bold=True
            )
            output.hint("Your app should work, but consider fixing the warnings.")
        else:
            typer.secho("\nEnvironment check passed!", fg=typer.colors.GREEN, bold=True)
            output.hint("Your Discord Mini App is ready to run.")
            typer.secho("\nStart the server with: miniapp serve\n", fg=typer.colors.CYAN)
