"""Project scaffolding: .env files, templates and prerequisite checks."""
