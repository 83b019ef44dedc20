"""Configuration — pydantic-settings models, TOML discovery, structlog setup."""
