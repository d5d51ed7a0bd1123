"""Base display utilities"""

from datetime import datetime, timezone
from typing import Optional

from rich.console import Console
from rich.panel import Panel


class BaseDisplay:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_cache_info(self, cache_info: Optional[dict]):
        if not cache_info:
            self.console.print("[yellow]Cache is empty[/]")
            return
        status = "[green]Valid[/]" if not cache_info["expired"] else "[red]Expired[/]"
        cached_at = datetime.fromtimestamp(
            cache_info["cached_at"] / 1000, tz=timezone.utc
        )
        self.console.print(
            Panel(
                f"[bold]Status:[/] {status}\n"
                f"[bold]Cached At:[/] {cached_at.strftime('%Y-%m-%d %H:%M:%S')} UTC\n"
                f"[bold]Age:[/] {cache_info['age_ms'] / 1000:.1f}s\n"
                f"[bold]Expiry:[/] {cache_info['expiry_ms'] / 1000:.0f}s\n"
                f"[bold]Instances:[/] {cache_info['count']}",
                title="📦 Cache Information",
            )
        )
