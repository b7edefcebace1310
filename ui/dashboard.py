"""Real-time CLI dashboard for relay monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from core.request_types import ForwardResult, RequestDescriptor
from ui.log_utils import describe_request, write_cli_log

console = Console()


class RequestInfo:
    """Info about a single relayed request."""

    def __init__(self, key: int, method: str, url: str, proxy: str, timestamp: datetime):
        self.key = key
        self.method = method.upper()
        self.url = url[:80] + "..." if len(url) > 80 else url
        self.proxy = proxy
        self.timestamp = timestamp
        self.status: int | None = None
        self.elapsed: float | None = None


def _proxy_label(descriptor: RequestDescriptor) -> str:
    if descriptor.proxy is None:
        return "direct"
    return f"{descriptor.proxy.type}://{descriptor.proxy.host}"


class Dashboard:
    """Real-time dashboard showing recent relayed requests."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._counts = {"relayed": 0, "proxied": 0, "errors": 0}
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

    def log_request(self, descriptor: RequestDescriptor) -> None:
        """Record an accepted descriptor before it is forwarded."""
        with self._lock:
            self._counts["relayed"] += 1
            if descriptor.proxy is not None:
                self._counts["proxied"] += 1
            info = RequestInfo(
                key=id(descriptor),
                method=descriptor.method,
                url=descriptor.url,
                proxy=_proxy_label(descriptor),
                timestamp=datetime.now(self.config.app.tzinfo),
            )
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]
            self._refresh()

        write_cli_log("RELAY", describe_request(descriptor.echo()))

    def log_response(self, descriptor: RequestDescriptor, result: ForwardResult) -> None:
        """Attach the upstream status to the matching recent entry."""
        with self._lock:
            for info in self._recent:
                if info.key == id(descriptor) and info.status is None:
                    info.status = result.status_code
                    info.elapsed = result.elapsed
                    break
            self._refresh()

        write_cli_log(
            "UPSTREAM",
            describe_request(descriptor.echo()),
            status=result.status_code,
            bytes=len(result.content),
            elapsed=f"{result.elapsed:.3f}s",
        )

    def log_error(self, kind: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._counts["errors"] += 1
            truncated = message[:60] + "..." if len(message) > 60 else message
            self._errors.insert(0, f"{kind} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
        write_cli_log("ERROR", message[:200], kind=kind, status=status)

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
        stats.append("HTTP Relay", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Relayed: {self._counts['relayed']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Via proxy: {self._counts['proxied']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Listening: {self.config.server.address}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build the recent requests table."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("URL", ratio=3)
            table.add_column("Route", ratio=1)
            table.add_column("Status", width=6)
            table.add_column("Took", width=8)

            for info in self._recent:
                if info.status is None:
                    status = "[dim]...[/dim]"
                elif info.status >= 400:
                    status = f"[yellow]{info.status}[/yellow]"
                else:
                    status = f"[green]{info.status}[/green]"
                took = f"{info.elapsed:.2f}s" if info.elapsed is not None else ""

                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    escape(info.url),
                    info.proxy,
                    status,
                    took,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent requests[/blue]", border_style="blue")

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
                f"POST request descriptors to http://{self.config.server.address}/proxify",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")


class ConsoleLogger:
    """Plain line-per-event logger for headless runs."""

    def __init__(self, config: Config, output: Console | None = None):
        self.config = config
        self._console = output or console

    def log_request(self, descriptor: RequestDescriptor) -> None:
        self._print("cyan", "RELAY", describe_request(descriptor.echo()))
        write_cli_log("RELAY", describe_request(descriptor.echo()))

    def log_response(self, descriptor: RequestDescriptor, result: ForwardResult) -> None:
        summary = f"{describe_request(descriptor.echo())} -> {result.status_code} ({result.elapsed:.3f}s)"
        self._print("green", "UPSTREAM", summary)
        write_cli_log("UPSTREAM", summary, bytes=len(result.content))

    def log_error(self, kind: str, status: int, message: str) -> None:
        self._print("red", "ERROR", f"{kind} {status}: {message}")
        write_cli_log("ERROR", message[:200], kind=kind, status=status)

    def _print(self, style: str, level: str, message: str) -> None:
        timestamp = datetime.now(self.config.app.tzinfo).strftime("%H:%M:%S")
        self._console.print(f"[dim]{timestamp}[/dim] [{style}]{level}[/{style}] {escape(message)}", highlight=False)
