"""Runtime settings loaded from CLI options, environment variables and ``.env``."""

from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gmtracker.errors import ConfigError
from gmtracker.steam_api import DEFAULT_VERSION_MATCH, GMOD_APP_ID

API_KEY_URL = "https://steamcommunity.com/dev/apikey"


class TrackerSettings(BaseSettings):
    """Configuration for the gmtracker web service.

    Values are read from ``GMTRACKER_*`` environment variables
    (case-insensitive) and optionally from a ``.env`` file in the working
    directory. Explicit keyword arguments win over both.
    """

    apikey: str = ""
    addr: str = "0.0.0.0:8080"

    app_id: int = GMOD_APP_ID
    version_match: str = DEFAULT_VERSION_MATCH
    request_timeout: float = 30.0
    stale_warning_after: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="GMTRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_api_key(self) -> "TrackerSettings":
        if not self.apikey.strip():
            raise ValueError(f"an api key is required! get one at {API_KEY_URL}")
        return self

    def bind(self) -> tuple[str, int]:
        """Split ``addr`` into ``(host, port)``; ``[::1]:8080`` style is accepted."""
        host, sep, port = self.addr.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ConfigError(f"Invalid bind address {self.addr!r}, expected HOST:PORT")
        port_num = int(port)
        if not 0 < port_num < 65536:
            raise ConfigError(f"Invalid port in bind address {self.addr!r}")
        return host.strip("[]"), port_num


def load_settings(**overrides: object) -> TrackerSettings:
    """Build :class:`TrackerSettings`, turning validation failures into ``ConfigError``.

    ``None`` overrides are dropped so unset CLI options fall back to the
    environment.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return TrackerSettings(**values)  # type: ignore[arg-type]
    except ValidationError as exc:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in exc.errors())
        raise ConfigError(messages) from exc
