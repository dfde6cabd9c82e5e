"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from errorgen.models.options import (
    DEFAULT_ENUM_NAME,
    DuplicateIdPolicy,
    ExpansionOptions,
    Visibility,
)


class Settings(BaseSettings):
    """Configuration for errorgen expansions and the REST API server.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Expansion defaults
    enum_name: str = DEFAULT_ENUM_NAME
    visibility: Visibility = Visibility.PUBLIC
    error_type: str = "Error"
    severity_type: str = "Severity"
    duplicate_ids: DuplicateIdPolicy = DuplicateIdPolicy.REJECT

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # Cloud Run injects PORT; takes precedence over api_server_port
    max_source_chars: int = 1_000_000

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (Cloud Run PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port

    def expansion_options(self) -> ExpansionOptions:
        return ExpansionOptions(
            enum_name=self.enum_name,
            visibility=self.visibility,
            error_type=self.error_type,
            severity_type=self.severity_type,
            duplicate_ids=self.duplicate_ids,
        )
