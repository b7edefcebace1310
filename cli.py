"""CLI entry point for http-relay."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from core.exceptions import ConfigurationError
from ui.dashboard import ConsoleLogger, Dashboard
from ui.log_utils import clear_logs, set_log_timezone, shutdown_log_executor, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    headless = False

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--headless":
            headless = True
        else:
            console.print(f"[red][ERROR][/red] Unknown option: {arg}")
            _print_help()
            sys.exit(2)

    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e.message}")
        console.print(f"[dim]Check {CONFIG_FILE} and HTTP_RELAY_* variables[/dim]")
        sys.exit(1)

    set_log_timezone(config.app.tzinfo)

    # Clear previous logs and pick the request logger
    clear_logs()
    dashboard = None if headless else Dashboard(config)
    logger = dashboard or ConsoleLogger(config)

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",
        timeout_keep_alive=config.server.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    else:
        console.print(f"[bold cyan]HTTP Relay[/bold cyan] listening on {config.server.address}")
    start_time = datetime.now(config.app.tzinfo)
    write_cli_log("STARTUP", "Relay started", address=config.server.address)
    try:
        server.run()
    finally:
        duration = datetime.now(config.app.tzinfo) - start_time
        write_cli_log("SHUTDOWN", "Relay stopped", duration=str(duration))
        shutdown_log_executor()
        if dashboard:
            dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]HTTP Relay[/bold cyan]

Performs HTTP requests described in JSON, optionally through an HTTP or
SOCKS5 proxy, and returns the upstream response.

[bold]Usage:[/bold]
    http-relay              Start with live dashboard
    http-relay --headless   Start with plain log lines
    http-relay --config     Show config location
    http-relay --help       Show this help

[bold]Endpoint:[/bold]
    POST /proxify   {"url": ..., "method": ..., "response_type": "json" | "binary",
                     "headers": {...}, "params": {...}, "body": ...,
                     "proxy": {"type": "http" | "socks5", "host": ..., "port": ...}}

[bold]Environment:[/bold]
    HTTP_RELAY_HOST, HTTP_RELAY_PORT, HTTP_RELAY_TIMEZONE override the config file.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
