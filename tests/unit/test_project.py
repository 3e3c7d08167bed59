"""Unit tests for project creation and prerequisite detection."""

import json
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from miniapp.domain.exceptions import ProjectExistsError
from miniapp.scaffold.prerequisites import (
    Prerequisite,
    check_prerequisite,
    install_dependencies,
)
from miniapp.scaffold.project import (
    DEFAULT_TEMPLATE,
    create_project,
    slugify,
    template_path,
    validate_project_name,
)

# ===========================
# Project Creation Tests
# ===========================


def test_create_project(tmp_path):
    """Test a project is created from the basic template."""
    # Act
    project = create_project("My App", template="basic", target_dir=tmp_path)

    # Assert
    assert project.project_dir == tmp_path / "my-app"
    for name in (
        "app.py",
        "requirements.txt",
        "static/index.html",
        ".env.example",
        ".gitignore",
        "README.md",
        "miniapp.config.json",
    ):
        assert (project.project_dir / name).is_file(), name

    config = json.loads((project.project_dir / "miniapp.config.json").read_text())
    assert config["appName"] == "My App"
    assert config["template"] == "basic"
    assert "# My App" in (project.project_dir / "README.md").read_text()


def test_create_project_falls_back_to_basic_files(tmp_path):
    """Test templates without files of their own use the basic files."""
    project = create_project("game-app", template="game", target_dir=tmp_path)

    assert (project.project_dir / "app.py").is_file()
    config = json.loads((project.project_dir / "miniapp.config.json").read_text())
    assert config["template"] == "game"


def test_create_project_refuses_existing_directory(tmp_path):
    """Test an existing directory is never overwritten."""
    (tmp_path / "taken").mkdir()

    with pytest.raises(ProjectExistsError):
        create_project("taken", target_dir=tmp_path)


@pytest.mark.parametrize(
    ("name", "template"),
    [("bad/name", "basic"), ("", "basic"), ("ok", "unknown")],
)
def test_create_project_rejects_invalid_input(tmp_path, name, template):
    """Test invalid names and templates are rejected."""
    with pytest.raises(ValueError):
        create_project(name, template=template, target_dir=tmp_path)


def test_slugify():
    """Test names become directory names."""
    assert slugify("  My Cool   App ") == "my-cool-app"


def test_validate_project_name():
    """Test name validation messages."""
    assert validate_project_name("my_app-1") is None
    assert validate_project_name("") == "Please enter a name"
    assert validate_project_name("no!") is not None


def test_template_path_default():
    """Test the default template ships files."""
    assert (template_path(DEFAULT_TEMPLATE) / "app.py").is_file()


# ===========================
# Prerequisite Tests
# ===========================


def test_check_prerequisite_not_installed():
    """Test a command missing from PATH is reported."""
    prerequisite = Prerequisite("Nope", "definitely-not-a-command", ("--version",), True)

    with patch("miniapp.scaffold.prerequisites.shutil.which", return_value=None):
        status = check_prerequisite(prerequisite)

    assert not status.installed
    assert status.version is None


def test_check_prerequisite_reads_version():
    """Test the first output line is reported as the version."""
    prerequisite = Prerequisite("Git", "git", ("--version",), False)
    completed = MagicMock(stdout="git version 2.43.0\nextra\n", stderr="")

    with (
        patch("miniapp.scaffold.prerequisites.shutil.which", return_value="/usr/bin/git"),
        patch("miniapp.scaffold.prerequisites.subprocess.run", return_value=completed),
    ):
        status = check_prerequisite(prerequisite)

    assert status.installed
    assert status.version == "git version 2.43.0"


def test_check_prerequisite_version_failure_still_installed():
    """Test a failing version command still counts as installed."""
    prerequisite = Prerequisite("Tool", "tool", ("--version",), False)

    with (
        patch("miniapp.scaffold.prerequisites.shutil.which", return_value="/bin/tool"),
        patch(
            "miniapp.scaffold.prerequisites.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, "tool"),
        ),
    ):
        status = check_prerequisite(prerequisite)

    assert status.installed
    assert status.version is None


def test_install_dependencies_without_manifest(tmp_path):
    """Test nothing is installed when no manifest exists."""
    assert install_dependencies(tmp_path) is False


def test_install_dependencies_requirements(tmp_path):
    """Test requirements.txt is installed with pip."""
    (tmp_path / "requirements.txt").write_text("httpx\n", encoding="utf-8")

    with patch("miniapp.scaffold.prerequisites.subprocess.run") as mock_run:
        assert install_dependencies(tmp_path) is True

    args = mock_run.call_args[0][0]
    assert args[:4] == [sys.executable, "-m", "pip", "install"]
    assert args[-2:] == ["-r", str(tmp_path / "requirements.txt")]
