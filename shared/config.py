"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server identity (reported by initialize and the status endpoint)
    server_name: str = "github-mcp-server"
    server_version: str = "1.0.0"

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    # GitHub API
    github_api_base_url: str = "https://api.github.com"
    github_user_agent: str = "GitHub-MCP-Server/1.0.0"
    github_request_timeout: float = 30.0
    # Fallback credential used when a request carries no X-GITHUB-TOKEN header.
    github_pat_for_project: str = ""

    # Inter-service auth for /execute and /manifest. Empty disables the check.
    service_auth_token: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
