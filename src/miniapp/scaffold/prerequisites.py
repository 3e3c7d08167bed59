"""Detection of the tools a Mini App project needs on the machine."""

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

CLOUDFLARED_INSTALL_URL = (
    "https://developers.cloudflare.com/cloudflare-one/connections/"
    "connect-apps/install-and-setup/installation/"
)


@dataclass(frozen=True)
class Prerequisite:
    name: str
    command: str
    version_args: tuple[str, ...]
    required: bool
    hint: str = ""


@dataclass(frozen=True)
class PrerequisiteStatus:
    prerequisite: Prerequisite
    installed: bool
    version: str | None = None


PREREQUISITES: tuple[Prerequisite, ...] = (
    Prerequisite("Python", "python3", ("--version",), True, "https://www.python.org/downloads/"),
    Prerequisite("pip", "pip", ("--version",), True, "https://pip.pypa.io/"),
    Prerequisite("Git", "git", ("--version",), False),
    Prerequisite(
        "Cloudflared",
        "cloudflared",
        ("--version",),
        False,
        f"Required for tunneling. Install from {CLOUDFLARED_INSTALL_URL}",
    ),
)


def check_prerequisite(prerequisite: Prerequisite) -> PrerequisiteStatus:
    """Look the command up on PATH and read its version line."""
    executable = shutil.which(prerequisite.command)
    if executable is None:
        return PrerequisiteStatus(prerequisite, installed=False)

    try:
        completed = subprocess.run(
            [executable, *prerequisite.version_args],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return PrerequisiteStatus(prerequisite, installed=True)

    output = (completed.stdout or completed.stderr).strip()
    version = output.splitlines()[0] if output else None
    return PrerequisiteStatus(prerequisite, installed=True, version=version)


def check_prerequisites(
    prerequisites: tuple[Prerequisite, ...] = PREREQUISITES,
) -> list[PrerequisiteStatus]:
    return [check_prerequisite(p) for p in prerequisites]


def install_dependencies(root: Path) -> bool:
    """
    Install the Python dependencies of the project at root.

    Uses pyproject.toml (editable install) when present, otherwise
    requirements.txt.

    Returns:
        False when the project declares no dependencies

    Raises:
        subprocess.CalledProcessError: If pip fails
    """
    if (root / "pyproject.toml").is_file():
        args = ["install", "-e", str(root)]
    elif (root / "requirements.txt").is_file():
        args = ["install", "-r", str(root / "requirements.txt")]
    else:
        return False

    subprocess.run(
        [sys.executable, "-m", "pip", *args],
        cwd=root,
        capture_output=True,
        text=True,
        check=True,
    )
    return True
