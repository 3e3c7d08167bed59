import typer

from .. import __version__
from .commands import (
    register_check_env_commands,
    register_create_commands,
    register_serve_commands,
    register_setup_commands,
    register_wizard_commands,
)

app = typer.Typer(
    add_completion=False,
    help="Discord Mini App Framework: build Discord Activities with ease.",
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"miniapp {__version__}")
    raise typer.Exit(code=0)


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    # `--version` is handled eagerly via `_version_callback`.
    return


def main() -> None:
    """Entrypoint for CLI execution."""
    app()


register_wizard_commands(app)
register_setup_commands(app)
register_create_commands(app)
register_check_env_commands(app)
register_serve_commands(app)
