"""Game server listing – Steam ``IGameServersService/GetServerList``."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from gmtracker.errors import DecodeError, TransportError
from gmtracker.models import ServerListResponse, ServerRecord

logger = logging.getLogger(__name__)

STEAM_API_URL = "https://api.steampowered.com"
SERVER_LIST_URL = f"{STEAM_API_URL}/IGameServersService/GetServerList/v1/"

GMOD_APP_ID = 4000
# GMod 12 servers report 1.x versions; GMod 13 moved to a different scheme.
DEFAULT_VERSION_MATCH = "1.*"


def build_filter(app_id: int = GMOD_APP_ID, version_match: str = DEFAULT_VERSION_MATCH) -> str:
    r"""Return a master-server filter string, e.g. ``\appid\4000\version_match\1.*``."""
    return f"\\appid\\{app_id}\\version_match\\{version_match}"


def parse_server_list(data: object) -> list[ServerRecord]:
    """Validate a decoded ``GetServerList`` body and return its servers in order.

    Steam drops the ``servers`` key entirely when nothing matches the filter,
    which is treated as an empty list.
    """
    try:
        parsed = ServerListResponse.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected server list payload: {exc}") from exc
    return parsed.response.servers


class SteamServerListClient:
    """Fetches the filtered server list for one app from the Steam Web API.

    The client performs exactly one GET per :meth:`fetch` call and never
    retries; the caller decides when to try again.
    """

    def __init__(
        self,
        api_key: str,
        *,
        app_id: int = GMOD_APP_ID,
        version_match: str = DEFAULT_VERSION_MATCH,
        url: str = SERVER_LIST_URL,
        timeout: float = 30,
    ) -> None:
        self._api_key = api_key
        self.filter = build_filter(app_id, version_match)
        self.url = url
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"SteamServerListClient(url={self.url!r}, filter={self.filter!r})"

    def fetch(self) -> list[ServerRecord]:
        """Return the current server list.

        Raises :class:`TransportError` when upstream cannot be reached or
        answers with an HTTP error status, and :class:`DecodeError` when the
        body is not the expected JSON document.
        """
        params = {"filter": self.filter, "key": self._api_key}
        try:
            resp = requests.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            # requests echoes the full URL, API key included, in its messages.
            reason = _redact(exc, self._api_key)
            raise TransportError(f"Server list request failed: {reason}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(f"Server list response is not valid JSON: {exc}") from exc

        servers = parse_server_list(data)
        logger.debug("Fetched %d servers (filter=%s)", len(servers), self.filter)
        return servers


def _redact(exc: Exception, secret: str) -> str:
    message = str(exc)
    if secret:
        message = message.replace(secret, "***")
    return message
