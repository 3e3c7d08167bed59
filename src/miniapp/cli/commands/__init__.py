from .check_env import register_check_env_commands
from .create import register_create_commands
from .serve import register_serve_commands
from .setup import register_setup_commands
from .wizard import register_wizard_commands

__all__ = [
    "register_check_env_commands",
    "register_create_commands",
    "register_serve_commands",
    "register_setup_commands",
    "register_wizard_commands",
]
