"""
.env rendering and validation.

Writes the configuration files the server reads (.env, .env.example,
miniapp.config.json) and checks an existing .env for problems.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

ENV_FILENAME = ".env"
ENV_EXAMPLE_FILENAME = ".env.example"
PROJECT_CONFIG_FILENAME = "miniapp.config.json"

DEFAULT_APP_NAME = "My Discord Mini App"
PLACEHOLDER_MARKERS = ("your_", "_here")
MIN_CREDENTIAL_LENGTH = 10

REQUIRED_VARIABLES: dict[str, str] = {
    "CLIENT_ID": "Discord Client ID",
    "CLIENT_SECRET": "Discord Client Secret",
}

OPTIONAL_VARIABLES: dict[str, tuple[str, str]] = {
    "APP_NAME": ("Application Name", DEFAULT_APP_NAME),
    "PORT": ("Server Port", "3001"),
    "CLIENT_PORT": ("Client Port", "3000"),
}

# Variable names accepted in place of the canonical ones
VARIABLE_ALIASES: dict[str, str] = {"CLIENT_ID": "VITE_CLIENT_ID"}


@dataclass
class EnvValidationResult:
    """Outcome of validate_env."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def render_env(
    client_id: str,
    client_secret: str,
    app_name: str = DEFAULT_APP_NAME,
    port: int = 3001,
    client_port: int = 3000,
    environment: str = "development",
    header: str = "Generated by the Discord Mini App wizard",
) -> str:
    """Render the contents of a .env file."""
    return f"""# Discord Mini App Configuration
# {header}

# Your Discord Application Client ID (public)
CLIENT_ID={client_id}

# Your Discord Application Client Secret (keep this secret!)
CLIENT_SECRET={client_secret}

# App Configuration
APP_NAME="{app_name}"

# Server Configuration
PORT={port}
CLIENT_PORT={client_port}

# Development
ENVIRONMENT={environment}
"""


def render_env_example(app_name: str = DEFAULT_APP_NAME) -> str:
    """Render a .env.example with placeholder credentials."""
    return render_env(
        client_id="your_client_id_here",
        client_secret="your_client_secret_here",
        app_name=app_name,
        header="Copy this file to .env and fill in your values",
    )


def write_env_files(root: Path, content: str, app_name: str = DEFAULT_APP_NAME) -> Path:
    """
    Write .env and .env.example into root.

    Returns:
        Path of the written .env file
    """
    env_path = root / ENV_FILENAME
    env_path.write_text(content, encoding="utf-8")
    (root / ENV_EXAMPLE_FILENAME).write_text(
        render_env_example(app_name), encoding="utf-8"
    )
    return env_path


def build_project_config(
    app_name: str,
    template: str,
    features: list[str] | None = None,
    client_id: str | None = None,
) -> dict[str, Any]:
    """Contents of miniapp.config.json."""
    config: dict[str, Any] = {
        "appName": app_name,
        "template": template,
        "features": list(features or []),
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }
    if client_id:
        config["clientId"] = client_id
    return config


def write_project_config(root: Path, config: dict[str, Any]) -> Path:
    """Write miniapp.config.json into root."""
    path = root / PROJECT_CONFIG_FILENAME
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    return path


def is_placeholder(value: str) -> bool:
    return any(marker in value for marker in PLACEHOLDER_MARKERS)


def mask_value(value: str) -> str:
    """Show only the first and last four characters of a secret."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


def read_env(path: Path) -> dict[str, str]:
    """Parse a .env file, dropping keys without a value."""
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def lookup(env: dict[str, str], key: str) -> str:
    """Value of key, or of its alias, or an empty string."""
    return env.get(key) or env.get(VARIABLE_ALIASES.get(key, ""), "")


def validate_env(root: Path) -> EnvValidationResult:
    """
    Validate the .env file of a project.

    Args:
        root: Project root directory

    Returns:
        EnvValidationResult with errors for missing, placeholder or too-short
        credentials and warnings for unset optional variables
    """
    env_path = root / ENV_FILENAME
    if not env_path.is_file():
        return EnvValidationResult(valid=False, errors=[".env file not found"])

    try:
        env = read_env(env_path)
    except (OSError, UnicodeDecodeError) as e:
        return EnvValidationResult(
            valid=False, errors=[f"Failed to parse .env file: {e}"]
        )

    errors: list[str] = []
    warnings: list[str] = []

    for key, description in REQUIRED_VARIABLES.items():
        value = lookup(env, key)
        if not value:
            errors.append(f"Missing required variable: {key} ({description})")
        elif is_placeholder(value):
            errors.append(f"{key} appears to be a placeholder value")
        elif len(value) < MIN_CREDENTIAL_LENGTH:
            errors.append(f"{key} appears to be invalid (too short)")

    for key, (description, default) in OPTIONAL_VARIABLES.items():
        if not env.get(key):
            warnings.append(f"{key} ({description}) not set, using default: {default}")

    return EnvValidationResult(valid=not errors, errors=errors, warnings=warnings)
