import subprocess
from pathlib import Path
from typing import Optional

import typer

from ...scaffold.env_file import (
    DEFAULT_APP_NAME,
    build_project_config,
    render_env,
    write_env_files,
    write_project_config,
)
from ...scaffold.prerequisites import install_dependencies
from .. import output

USAGE_HINT = "Usage: miniapp setup --client-id YOUR_ID --client-secret YOUR_SECRET"
DEFAULT_FEATURES = ["voice", "avatar"]


def register_setup_commands(app: typer.Typer) -> None:
    @app.command("setup")
    def setup(
        client_id: Optional[str] = typer.Option(
            None, "--client-id", "-c", help="Discord Client ID"
        ),
        client_secret: Optional[str] = typer.Option(
            None, "--client-secret", "-s", help="Discord Client Secret"
        ),
        name: str = typer.Option(DEFAULT_APP_NAME, "--name", "-n", help="App name"),
        skip_install: bool = typer.Option(
            False, "--skip-install", help="Skip dependency installation"
        ),
        root: Path = typer.Option(Path("."), "--root", help="Project root directory"),
    ):
        """Quick, non-interactive setup."""
        typer.secho("\nDiscord Mini App - Quick Setup\n", fg=typer.colors.BLUE, bold=True)

        if not client_id:
            output.error("Error: --client-id is required")
            output.hint(USAGE_HINT)
            output.hint("Or use the interactive wizard: miniapp wizard")
            raise typer.Exit(code=1)

        if not client_secret:
            output.error("Error: --client-secret is required")
            output.hint(USAGE_HINT)
            raise typer.Exit(code=1)

        total = 2 if skip_install else 3
        try:
            output.step(1, total, "Creating .env file")
            write_env_files(
                root,
                render_env(client_id, client_secret, app_name=name),
                app_name=name,
            )

            output.step(2, total, "Creating config file")
            write_project_config(
                root,
                build_project_config(
                    name, "basic", DEFAULT_FEATURES, client_id=client_id
                ),
            )

            if not skip_install:
                output.step(3, total, "Installing dependencies")
                install_dependencies(root)
        except (OSError, subprocess.CalledProcessError) as exc:
            output.error("Setup failed")
            output.hint(str(exc))
            raise typer.Exit(code=1) from None

        output.success("Setup complete!")
        typer.secho("\nNext steps:", fg=typer.colors.CYAN)
        typer.echo("  1. miniapp serve       - Start the token exchange server")
        typer.echo("  2. cloudflared tunnel --url http://localhost:3001")
        typer.echo("  3. miniapp check-env   - Verify configuration\n")
