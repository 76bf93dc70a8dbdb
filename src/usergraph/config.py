"""
Configuration management for the usergraph server
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class ServerConfig:
    """Resolved listen address, built once at startup."""

    host: str
    port: int
    public: bool = False

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Hosting platforms (Render, Heroku, ...) hand the port over in a bare PORT
    # variable. Its presence also means the server must accept external traffic.
    port_override: str | None = Field(default=None, validation_alias="PORT")

    # Listen address
    default_port: int = 8080
    local_host: str = "127.0.0.1"
    public_host: str = "0.0.0.0"

    # GraphQL
    graphiql: bool = True

    # API Settings
    cors_origins: list[str] = ["*"]

    # Environment
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "USERGRAPH_"
        case_sensitive = False
        extra = "ignore"

    def server_config(self) -> ServerConfig:
        """Resolve the host/port pair the HTTP server binds to."""
        raw = (self.port_override or "").strip()
        if not raw:
            return ServerConfig(host=self.local_host, port=self.default_port)

        port = _parse_port(raw) or self.default_port
        return ServerConfig(host=self.public_host, port=port, public=True)


def _parse_port(raw: str) -> int | None:
    try:
        port = int(raw)
    except ValueError:
        return None
    if 0 < port < 65536:
        return port
    return None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    settings = Settings()

    if settings.debug:
        from .logging import get_logger

        get_logger(__name__).debug(
            "Settings initialized",
            server=settings.server_config(),
            graphiql=settings.graphiql,
        )

    return settings
