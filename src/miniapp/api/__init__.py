"""
API endpoints.

Route prefix constants for the endpoints the embedded client calls.
"""

API_PREFIX: str = "/api"

__all__ = ["API_PREFIX"]
