"""Configuration management for the Omnivore MCP Server.

All configuration comes from environment variables. Uses pydantic-settings
so a missing API key fails at startup instead of on the first query.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "https://api-prod.omnivore.app/api/graphql"


class Config(BaseSettings):
    """Client and server configuration loaded from environment variables."""

    omnivore_api_key: SecretStr = Field(alias="OMNIVORE_API_KEY")
    omnivore_endpoint: str = Field(default=DEFAULT_ENDPOINT, alias="OMNIVORE_ENDPOINT")
    omnivore_client_name: str = Field(default="logseq-plugin", alias="OMNIVORE_CLIENT_NAME")
    omnivore_timeout: float = Field(default=30.0, alias="OMNIVORE_TIMEOUT")
    date_format: str = Field(default="yyyy-MM-dd", alias="OMNIVORE_DATE_FORMAT")
    server_host: str = Field(default="127.0.0.1", alias="MCP_SERVER_HOST")
    server_port: int = Field(default=8000, alias="MCP_SERVER_PORT")

    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


def load_config() -> Config:
    """Load and validate config from environment. Raises on missing required vars."""
    return Config()
