"""Code → label tables used by the server list template."""

_REGIONS: dict[int, str] = {
    0: "US - East",
    1: "US - West",
    2: "South America",
    3: "Europe",
    4: "Asia",
    5: "Australia",
    6: "Middle East",
    7: "Africa",
}

_PLATFORMS: dict[str, str] = {
    "w": "Windows",
    "m": "Mac",
    "l": "Linux",
}


def region_label(code: int) -> str:
    """Return the display name of a Steam region code (``"World"`` if unknown)."""
    # 255 is what Steam reports for "world"; it falls through like any other unknown code.
    if isinstance(code, bool) or not isinstance(code, int):
        return "World"
    return _REGIONS.get(code, "World")


def platform_label(code: str) -> str:
    """Return the display name of a one-letter OS code (``"Other"`` if unknown)."""
    if not isinstance(code, str):
        return "Other"
    return _PLATFORMS.get(code, "Other")
