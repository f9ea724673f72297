"""Server list page rendering.

The template only ever sees the record sequence and the two label
functions; it has no access to the cache or the network.
"""

from collections.abc import Sequence
from pathlib import Path

import jinja2
from fastapi.templating import Jinja2Templates

from gmtracker.errors import RenderError
from gmtracker.lookups import platform_label, region_label
from gmtracker.models import ServerRecord

_PKG_DIR = Path(__file__).resolve().parent

LIST_TEMPLATE = "list.html"

templates = Jinja2Templates(directory=str(_PKG_DIR / "templates"))
templates.env.globals.update(region=region_label, platform=platform_label)
templates.env.undefined = jinja2.StrictUndefined


def render_server_list(servers: Sequence[ServerRecord], template: str = LIST_TEMPLATE) -> bytes:
    """Render *servers* to UTF-8 HTML, raising :class:`RenderError` on failure."""
    try:
        html = templates.get_template(template).render(servers=servers)
    except (jinja2.TemplateError, TypeError, AttributeError) as exc:
        raise RenderError(f"Template {template!r} failed: {exc}") from exc
    return html.encode("utf-8")
