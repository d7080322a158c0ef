"""Main entry point for the ghfetch application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from ghfetch.core.api_client import ApiClient
from ghfetch.core.command_handler import CommandHandler, EXIT_FAILURE
from ghfetch.core.transport import Transport, log_event

# --- Domain Layer ---
from ghfetch.domain.exceptions import ConfigError

# --- Infrastructure Layer ---
# Config
from ghfetch.infrastructure.config.settings import Settings, DEFAULT_CONFIG_FILE
# UI
from ghfetch.infrastructure.cli.display import ConsoleDisplay
# Cache
from ghfetch.infrastructure.cache.caching_service import DiskCacheStore
# HTTP
from ghfetch.infrastructure.http.network_fetcher import HttpxFetcher
# Resilience
from ghfetch.infrastructure.resilience.rate_limiter import RateLimiter
# Monitoring
from ghfetch.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(config_file: Path = DEFAULT_CONFIG_FILE, log_level: Optional[str] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.

    Raises:
        ConfigError: If a configuration value is unusable.
    """
    dependencies: Dict[str, Any] = {}

    # 1. Load Configuration First, then configure logging from it
    settings = Settings(config_file=config_file)
    setup_logging(
        log_level=log_level or settings.get('logging.level'),
        log_format=settings.get('logging.format'),
        log_file=settings.get('logging.file'),
    )
    dependencies['settings'] = settings
    logger.info("Configuration and logging initialized.")

    # Numeric settings are validated before any resource is opened
    reqrate, timeout, stale_age = settings.reqrate(), settings.timeout(), settings.cache_stale_age()

    # 2. Instantiate Infrastructure Adapters & Services
    dependencies['ui'] = ConsoleDisplay()
    dependencies['cache_store'] = DiskCacheStore(
        cache_dir=settings.cache_dir(),
        stale_age=stale_age,
    )
    dependencies['rate_limiter'] = RateLimiter(
        max_requests=reqrate,
        event_sink=log_event,
    )
    dependencies['fetcher'] = HttpxFetcher(
        attach_ip=settings.attach_ip(),
        token=settings.token(),
        user_agent=settings.user_agent(),
        timeout=timeout,
    )

    # 3. Instantiate Core Services (injecting dependencies)
    dependencies['transport'] = Transport(
        fetcher=dependencies['fetcher'],
        rate_limiter=dependencies['rate_limiter'],
        cache_store=dependencies['cache_store'],
    )
    dependencies['api_client'] = ApiClient(transport=dependencies['transport'], config=settings)

    # 4. Instantiate Command Handler
    dependencies['command_handler'] = CommandHandler(
        api_client=dependencies['api_client'],
        cache_store=dependencies['cache_store'],
        ui=dependencies['ui'],
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies

def close_dependencies(dependencies: Dict[str, Any]) -> None:
    """Releases the HTTP connection pool and the cache database."""
    dependencies['api_client'].close()
    dependencies['cache_store'].close()

# --- Typer App Definition ---
app = typer.Typer(
    name="ghfetch",
    help="ghfetch: rate-limited, cache-aware fetcher for paginated JSON APIs.",
    add_completion=False,
    no_args_is_help=True,
)

def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']

@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Annotated[Path, typer.Option("--config", "-c", help="Path to the YAML configuration file.")] = DEFAULT_CONFIG_FILE,
    log_level: Annotated[Optional[str], typer.Option("--log-level", "-l", help="Override the configured log level (e.g. DEBUG).")] = None,
):
    """Wires dependencies once before any command runs."""
    try:
        dependencies = create_dependencies(config_file=config, log_level=log_level)
    except ConfigError as e:
        ConsoleDisplay().display_error(f"Configuration error: {e}")
        raise typer.Exit(code=EXIT_FAILURE)
    ctx.obj = dependencies
    ctx.call_on_close(lambda: close_dependencies(dependencies))

# --- CLI Commands ---

@app.command()
def get(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL of the resource to fetch.")],
    cache: Annotated[bool, typer.Option("--cache/--no-cache", help="Consult and populate the response cache.")] = False,
):
    """Fetch a single, non-paginated resource and print its JSON."""
    raise typer.Exit(code=_handler(ctx).handle_get(url, cache=cache))

@app.command()
def paged(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL of the first page.")],
    pages: Annotated[int, typer.Option("--pages", "-n", help="Maximum pages to visit, -1 for all.")] = -1,
    cache: Annotated[bool, typer.Option("--cache/--no-cache", help="Consult and populate the response cache.")] = True,
):
    """Follow pagination links and print the merged JSON list."""
    raise typer.Exit(code=_handler(ctx).handle_paged(url, pages=pages, cache=cache))

@app.command(name="clear-cache")
def clear_cache_command(ctx: typer.Context):
    """Clears the response cache."""
    raise typer.Exit(code=_handler(ctx).handle_clear_cache())

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
