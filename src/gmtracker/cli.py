"""Command-line entry point for gmtracker.

    gmtracker --apikey KEY [--addr HOST:PORT] [-v]

Options fall back to ``GMTRACKER_APIKEY`` and ``GMTRACKER_ADDR`` from the
environment or a ``.env`` file. Without an API key the process exits before
binding.
"""

import logging

import click

from gmtracker import __version__
from gmtracker.errors import ConfigError

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="gmtracker")
@click.option("--apikey", default=None, help="Steam Web API key.")
@click.option(
    "--addr",
    default=None,
    help="IP address and port for the web server.  [default: 0.0.0.0:8080]",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging.",
)
def cli(apikey: str | None, addr: str | None, verbose: bool) -> None:
    """The Garry's Mod 12 server browser."""
    import uvicorn

    from gmtracker.app import _setup_logging, create_app
    from gmtracker.settings import load_settings

    _setup_logging(level=logging.DEBUG if verbose else logging.INFO)

    try:
        settings = load_settings(apikey=apikey, addr=addr)
        host, port = settings.bind()
    except ConfigError as exc:
        logger.error("Refusing to start: %s", exc)
        raise click.ClickException(str(exc)) from exc

    app = create_app(settings)

    url = f"http://{host}:{port}"
    click.echo(f"✦ gmtracker running at {click.style(url, fg='cyan', bold=True)}")
    click.echo("  Press Ctrl+C to stop.\n")

    uvicorn.run(app, host=host, port=port, log_level="debug" if verbose else "info")
