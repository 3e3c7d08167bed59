"""
Shared data models used across the application.
"""

from miniapp.models.errors import ErrorResponse

__all__ = ["ErrorResponse"]
