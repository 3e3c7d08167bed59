"""
Console output helpers for the CLI.

Consistent symbols and colors across commands. These write to the
terminal for the user; diagnostics go through the loguru logger.
"""

import typer

RULE = "━"


def info(message: str) -> None:
    typer.secho(f"ℹ {message}", fg=typer.colors.BLUE)


def success(message: str) -> None:
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)


def warning(message: str) -> None:
    typer.secho(f"⚠ {message}", fg=typer.colors.YELLOW)


def error(message: str) -> None:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)


def hint(message: str) -> None:
    typer.secho(f"  {message}", dim=True)


def blank() -> None:
    typer.echo("")


def section(title: str, width: int = 60) -> None:
    """Section header between two horizontal rules."""
    typer.echo("")
    typer.secho(RULE * width, fg=typer.colors.BLUE)
    typer.secho(f"  {title}", bold=True)
    typer.secho(RULE * width, fg=typer.colors.BLUE)
    typer.echo("")


def step(current: int, total: int, message: str) -> None:
    typer.echo(typer.style(f"[{current}/{total}]", fg=typer.colors.CYAN) + f" {message}")


def code(content: str) -> None:
    for line in content.splitlines():
        typer.secho(f"  {line}", dim=True)


def info_box(title: str, content: str, width: int = 60) -> None:
    """Boxed block of text with a title on the top border."""
    top = f"┌─ {title} ".ljust(width + 1, "─") + "┐"
    typer.secho(top, fg=typer.colors.CYAN)
    for line in content.splitlines():
        typer.echo(
            typer.style("│ ", fg=typer.colors.CYAN)
            + line.ljust(width - 2)
            + typer.style("│", fg=typer.colors.CYAN)
        )
    typer.secho("└" + "─" * width + "┘", fg=typer.colors.CYAN)
