from pathlib import Path
from typing import Optional

import typer

from ...config import Settings, ensure_credentials, get_settings
from ...domain.exceptions import ConfigurationError
from .. import output


def load_settings(env_file: Optional[Path]) -> Settings:
    if env_file is None:
        return get_settings()
    return Settings(_env_file=env_file)


def start_server(
    settings: Settings, host: Optional[str] = None, port: Optional[int] = None
) -> None:
    """Run the token exchange server, exiting with 1 when credentials are missing."""
    from ...main import run

    try:
        ensure_credentials(settings)
    except ConfigurationError as exc:
        output.error(f"Missing required environment variables: {', '.join(exc.missing)}")
        output.hint("Please run: miniapp wizard")
        output.hint("Or create a .env file with CLIENT_ID and CLIENT_SECRET")
        raise typer.Exit(code=1) from None

    run(settings, host=host, port=port)


def register_serve_commands(app: typer.Typer) -> None:
    @app.command("serve")
    def serve(
        host: Optional[str] = typer.Option(None, "--host", help="Listen host"),
        port: Optional[int] = typer.Option(None, "--port", help="Listen port"),
        env_file: Optional[Path] = typer.Option(
            None, "--env-file", help="Read configuration from this .env file"
        ),
    ):
        """Start the token exchange server."""
        start_server(load_settings(env_file), host=host, port=port)
