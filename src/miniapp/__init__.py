"""Discord Mini App framework: token-exchange server, embedded client and CLI."""

__version__ = "1.0.0"
