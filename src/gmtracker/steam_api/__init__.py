"""Steam Web API helpers.

This package re-exports its public names so that callers can use
``from gmtracker.steam_api import X`` or ``from gmtracker import steam_api``.
"""

from gmtracker.steam_api.servers import (  # noqa: F401
    DEFAULT_VERSION_MATCH,
    GMOD_APP_ID,
    SERVER_LIST_URL,
    SteamServerListClient,
    build_filter,
    parse_server_list,
)
