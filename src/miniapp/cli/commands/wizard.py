import subprocess
from pathlib import Path

import typer

from ...scaffold.env_file import (
    DEFAULT_APP_NAME,
    ENV_FILENAME,
    MIN_CREDENTIAL_LENGTH,
    build_project_config,
    render_env,
    write_env_files,
    write_project_config,
)
from ...scaffold.prerequisites import check_prerequisites, install_dependencies
from ...scaffold.project import FEATURES
from .. import output
from .create import prompt_template
from .serve import load_settings, start_server

DEVELOPER_PORTAL_URL = "https://discord.com/developers/applications"
DOCS_URL = "https://discord.com/developers/docs/activities/overview"

BANNER = """
╔═══════════════════════════════════════════════════════════════╗
║  Discord Mini App Framework                                   ║
║  Create Discord Activities with ease!                         ║
╚═══════════════════════════════════════════════════════════════╝
"""

PORTAL_STEPS = [
    f"1. Go to {DEVELOPER_PORTAL_URL}",
    '2. Click "New Application" button (top right)',
    '3. Enter a name for your app (e.g., "My Mini App")',
    '4. Accept the terms and click "Create"',
    '5. Go to "OAuth2" in the left sidebar',
    '6. Copy your "Client ID" (you\'ll need this)',
    '7. Click "Reset Secret" and copy your "Client Secret"',
    "8. Under \"Redirects\", add: http://localhost:3000",
    "",
    "IMPORTANT: For Activities, also do:",
    '9. Go to "Activities" in the left sidebar',
    '10. Enable "Activities" toggle',
    '11. Set "Default Activity URL" to your tunnel URL (we\'ll set this later)',
]

NEXT_STEPS = """1. Run "miniapp serve" to start the server
2. Run "cloudflared tunnel --url http://localhost:3001"
3. Copy the tunnel URL (looks like: https://xxx.trycloudflare.com)
4. Go to Discord Developer Portal > Your App > Activities
5. Set the tunnel URL as your Activity URL
6. Test your app in Discord!"""


def _check_prerequisites() -> None:
    output.section("Step 1: Checking Prerequisites")

    missing_required = []
    for status in check_prerequisites():
        prerequisite = status.prerequisite
        if status.installed:
            output.success(f"{prerequisite.name}: {status.version or 'installed'}")
        elif prerequisite.required:
            output.error(f"{prerequisite.name}: NOT FOUND (required)")
            missing_required.append(prerequisite)
        else:
            output.warning(f"{prerequisite.name}: NOT FOUND (optional)")
            if prerequisite.hint:
                output.hint(f"{prerequisite.name}: {prerequisite.hint}")

    if missing_required:
        output.error("Missing required dependencies:")
        for prerequisite in missing_required:
            output.hint(f"• {prerequisite.name}: Visit {prerequisite.hint}")
        raise typer.Exit(code=1)


def _guide_developer_portal() -> None:
    output.section("Step 2: Discord Developer Portal Setup")
    output.info_box(
        "What you need",
        "To create a Discord Mini App, you need:\n"
        "1. A Discord account\n"
        "2. A Discord Application (created at discord.com/developers)\n"
        "3. Client ID and Client Secret from your app",
    )

    if typer.confirm("Do you already have a Discord Application created?", default=False):
        return

    typer.secho(
        "\nLet me guide you through creating a Discord Application:\n",
        fg=typer.colors.CYAN,
        bold=True,
    )
    for line in PORTAL_STEPS:
        output.hint(line)

    if typer.confirm(
        "Would you like me to open the Discord Developer Portal in your browser?",
        default=True,
    ):
        typer.launch(DEVELOPER_PORTAL_URL)
        output.success("Opened Discord Developer Portal in your browser")

    typer.prompt(
        "Press Enter when you've created your application and have your credentials ready",
        default="",
        show_default=False,
    )


def _prompt_credential(label: str, error: str, hide_input: bool = False) -> str:
    while True:
        value = typer.prompt(label, hide_input=hide_input).strip()
        if len(value) >= MIN_CREDENTIAL_LENGTH:
            return value
        output.error(error)


def _prompt_features() -> list[str]:
    typer.echo("Select additional features:")
    for key, (description, _checked) in FEATURES.items():
        typer.echo(f"  {key:<12} {description}")
    default = ",".join(key for key, (_, checked) in FEATURES.items() if checked)

    while True:
        answer = typer.prompt("Features (comma-separated)", default=default)
        selected = [item.strip().lower() for item in answer.split(",") if item.strip()]
        unknown = [item for item in selected if item not in FEATURES]
        if not unknown:
            return selected
        output.error(f"Unknown features: {', '.join(unknown)}")


def _prompt_app_name() -> str:
    while True:
        name = typer.prompt(
            "What would you like to name your Mini App?", default=DEFAULT_APP_NAME
        ).strip()
        if name:
            return name
        output.error("Please enter a name")


def register_wizard_commands(app: typer.Typer) -> None:
    @app.command("wizard")
    def wizard(
        root: Path = typer.Option(Path("."), "--root", help="Project root directory"),
        skip_install: bool = typer.Option(
            False, "--skip-install", help="Skip dependency installation"
        ),
    ):
        """Guided setup: credentials, configuration and next steps."""
        typer.secho(BANNER, fg=typer.colors.BLUE)
        output.hint("Welcome! This wizard will help you set up everything you need")
        output.hint("to create Discord Mini Apps (Activities).")

        _check_prerequisites()
        _guide_developer_portal()

        output.section("Step 3: Configure Your Credentials")
        output.hint("Your credentials will be stored in a .env file.")
        client_id = _prompt_credential(
            "Enter your Discord Client ID",
            "Please enter a valid Client ID (it's a long number)",
        )
        client_secret = _prompt_credential(
            "Enter your Discord Client Secret",
            "Please enter a valid Client Secret",
            hide_input=True,
        )

        output.section("Step 4: Project Configuration")
        app_name = _prompt_app_name()
        template = prompt_template()
        features = _prompt_features()

        output.section("Step 5: Setting Up Your Project")
        try:
            write_env_files(
                root, render_env(client_id, client_secret, app_name=app_name), app_name
            )
            output.success("Created .env file")
            write_project_config(
                root,
                build_project_config(app_name, template, features, client_id=client_id),
            )
            output.success("Project files created!")

            if not skip_install:
                output.info("Installing dependencies (this may take a minute)...")
                if install_dependencies(root):
                    output.success("Dependencies installed!")
        except (OSError, subprocess.CalledProcessError) as exc:
            output.error("Failed to set up project")
            output.hint(str(exc))
            raise typer.Exit(code=1) from None

        output.section("Setup Complete!")
        typer.secho("Your Discord Mini App is ready!\n", fg=typer.colors.GREEN, bold=True)
        output.info_box("Next Steps", NEXT_STEPS)
        output.hint("Need help? Run: miniapp --help")
        output.hint(f"Documentation: {DOCS_URL}")

        if typer.confirm("Would you like to start the server now?", default=True):
            typer.secho("\nStarting server... (Press Ctrl+C to stop)\n", fg=typer.colors.CYAN)
            start_server(load_settings(root / ENV_FILENAME))
