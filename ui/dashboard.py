"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import target_host, write_cli_log, write_request_log

console = Console()


class RequestInfo:
    """Info about a single proxied request."""

    def __init__(self, url: str, status: int, rewritten: bool, timestamp: datetime):
        self.host = target_host(url)
        self.url = url[:80] + "..." if len(url) > 80 else url
        self.status = status
        self.rewritten = rewritten
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent proxied pages and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._request_count = {"proxied": 0, "rewritten": 0, "redirects": 0, "errors": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    @property
    def counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._request_count)

    def log_proxy(self, url: str, status: int, *, rewritten: bool) -> None:
        """Log a page served through /proxy."""
        with self._lock:
            self._request_count["proxied"] += 1
            if rewritten:
                self._request_count["rewritten"] += 1
            self._remember(RequestInfo(url, status, rewritten, datetime.now()))

            write_request_log(url, status, rewritten=rewritten)
            write_cli_log("PROXY", "Proxying request to: " + url, rewritten=rewritten)

            self._refresh()

    def log_redirect(self, query: str, destination: str | None) -> None:
        """Log a hit on the legacy /url route."""
        with self._lock:
            write_cli_log("REDIRECT", "Fallback /url route received query", query=query)
            if destination:
                self._request_count["redirects"] += 1
            self._refresh()

    def log_error(self, url: str, status: int, message: str) -> None:
        """Log an upstream or transport failure."""
        with self._lock:
            self._request_count["errors"] += 1
            self._remember(RequestInfo(url, status, False, datetime.now()))
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{target_host(url)} {status}: {truncated}")
            self._errors = self._errors[:3]

            write_request_log(url, status, rewritten=False, message=message)
            write_cli_log("ERROR", message[:200], url=url, status=status)

            self._refresh()

    def _remember(self, info: RequestInfo) -> None:
        self._recent.insert(0, info)
        self._recent = self._recent[: self._max_recent]

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Search Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Proxied: {self._request_count['proxied']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Rewritten: {self._request_count['rewritten']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Redirects: {self._request_count['redirects']}", style="green")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Status", width=6)
            table.add_column("Host", width=24)
            table.add_column("URL", ratio=1)

            for req in self._recent:
                status_style = "green" if 200 <= req.status <= 299 else "red"
                marker = " *" if req.rewritten else ""
                table.add_row(
                    req.timestamp.strftime("%H:%M:%S"),
                    f"[{status_style}]{req.status}[/{status_style}]",
                    Text(req.host[:24] + marker),
                    Text(req.url),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Open http://{self.config.proxy.host}:{self.config.proxy.port}/ "
                "or call /proxy?url=<absolute URL>",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
