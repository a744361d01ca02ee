"""CLI entry point for search-proxy."""

import logging
import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            console.print(f"[bold]Public:[/bold] {config.static.public_dir}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
        _print_help()
        sys.exit(2)

    if not (config.static.public_dir / "index.html").exists():
        console.print(f"[red][ERROR][/red] Shell assets not found in {config.static.public_dir}")
        console.print(f"[dim]Edit {CONFIG_FILE} and set static.public_dir[/dim]")
        sys.exit(1)

    # Clear previous logs and start dashboard
    clear_logs()
    if config.proxy.debug:
        _enable_debug_log()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", host=config.proxy.host, port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _enable_debug_log():
    """Send stdlib debug logging to a file beside the CLI log."""
    CLI_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=CLI_LOG_FILE.with_name("debug.log"),
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Search Proxy[/bold cyan]

Fetches pages server-side and rewrites Google result links to stay on the proxy.

[bold]Usage:[/bold]
    search-proxy              Start with live dashboard
    search-proxy --config     Show config locations
    search-proxy --help       Show this help

[bold]Routes:[/bold]
    /proxy?url=<absolute URL>     Fetch and return the page
    /url?q=<absolute URL>         Redirect to /proxy
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
