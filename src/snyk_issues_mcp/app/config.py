from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "snyk_issues_mcp"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_state_dir)


class DirectoryConfig(BaseSettings):
    """Directory configuration with computed paths."""

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all snyk_issues_mcp data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Logs directory for tool call logs (created on first write)."""
        return self.home / "logs"


class SnykConfig(BaseSettings):
    """Snyk API and organization settings.

    Reads the plain SNYK_* variables:
        SNYK_API_KEY, SNYK_ORG_ID, SNYK_ORG_SLUG,
        SNYK_API_URL, SNYK_WEB_URL, SNYK_API_VERSION, SNYK_TIMEOUT
    """

    model_config = SettingsConfigDict(env_prefix="SNYK_")

    api_key: str | None = Field(
        default=None,
        description="Snyk API token",
    )

    org_id: str | None = Field(
        default=None,
        description="Organization id used to address the API",
    )

    org_slug: str | None = Field(
        default=None,
        description="Organization slug used for web links",
    )

    api_url: str = Field(
        default="https://api.snyk.io/rest",
        description="REST API base URL",
    )

    web_url: str = Field(
        default="https://app.snyk.io",
        description="Web UI base URL for issue links",
    )

    api_version: str = Field(
        default="2024-11-05",
        description="REST API version date",
    )

    timeout: float = Field(
        default=30.0,
        description="Per-request timeout in seconds",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    console_output: bool = Field(
        default=False,
        description="Log human-readable lines to stderr",
    )

    file_output: bool = Field(
        default=True,
        description="Write JSONL logs to <logs_dir>/tools.jsonl",
    )

    logger_name: str = Field(
        default="snyk_issues_mcp",
        description="Name of the structured logger",
    )

    max_bytes: int = Field(
        default=10_000_000,
        description="Rotate tools.jsonl at this size in bytes (0 disables rotation)",
    )

    backup_count: int = Field(
        default=3,
        description="Number of rotated log files to keep",
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    Snyk settings come from SNYK_* variables (see SnykConfig). Everything else
    uses the SNYK_MCP_ prefix, with double underscore for nesting.

    Example env vars:
        # Required
        export SNYK_API_KEY=xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx
        export SNYK_ORG_ID=xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx
        export SNYK_ORG_SLUG=my-org

        # Optional (with defaults)
        export SNYK_MCP_LOGGING__LEVEL=DEBUG
        export SNYK_MCP_LOGGING__CONSOLE_OUTPUT=true
        export SNYK_MCP_DIRECTORIES__HOME=/custom/path
    """

    model_config = SettingsConfigDict(
        env_prefix="SNYK_MCP_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    snyk: SnykConfig = Field(default_factory=SnykConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
