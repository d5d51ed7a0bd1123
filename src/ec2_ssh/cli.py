"""ec2-ssh CLI"""

import shlex
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .core import (
    BackgroundTask,
    PickerConfig,
    SnapshotCache,
    parse_ttl,
    setup_logging,
    wait_with_spinner,
)
from .modules.inventory import InventoryAggregator, InventoryClient
from .modules.prompt import InstancePrompt
from .modules.ranker import MatchRanker
from .modules.session import RemoteSessionLauncher

app = typer.Typer(
    name="ec2-ssh",
    help="Find an EC2 instance by (fuzzy) name and ssh into it",
    add_completion=False,
)
console = Console()

EXIT_INTERRUPTED = 130


def _run(
    config: PickerConfig,
    query: str,
    refresh: bool,
    limit: int,
    dry_run: bool,
) -> int:
    aggregator = InventoryAggregator(InventoryClient(), SnapshotCache(config))
    # Start downloading right away; the operator is still typing
    task = BackgroundTask(
        lambda: aggregator.get_all_instances(config.regions, refresh=refresh)
    )

    prompt = InstancePrompt(console)
    try:
        query = prompt.ask_query(default=query)
        user = prompt.ask_user(default=config.default_user)
    except (KeyboardInterrupt, EOFError):
        console.print()
        return EXIT_INTERRUPTED

    try:
        instances = wait_with_spinner(
            task, "Downloading instance data…", console=console
        )
    except Exception as e:
        console.print(
            f"[red]Couldn't retrieve instances from EC2:[/] {escape(str(e))}"
        )
        return 1

    if aggregator.degraded_regions:
        console.print(
            f"[yellow]No data from: {', '.join(aggregator.degraded_regions)}[/]"
        )
    if not instances:
        console.print("[red]No instances found in any region[/]")
        return 1

    candidates = MatchRanker(config).rank(instances, query)
    try:
        host = prompt.choose(candidates[:limit])
    except (KeyboardInterrupt, EOFError):
        console.print()
        return EXIT_INTERRUPTED

    launcher = RemoteSessionLauncher(console=console)
    if dry_run:
        cmd = launcher.build_command(host, user, config.key_file)
        console.print(shlex.join(cmd), markup=False)
        return 0
    return launcher.launch(host, user, config.key_file).exit_code


@app.command()
def main(
    query: Optional[list[str]] = typer.Argument(
        None, help="Pre-filled search text (joined with spaces)"
    ),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help="Remote user (default: $EC2_SSH_USER)"
    ),
    key_file: Optional[str] = typer.Option(
        None, "--key", "-i", help="Private key file (default: $EC2_SSH_KEY)"
    ),
    refresh: bool = typer.Option(
        False, "--refresh", help="Ignore the cached instance list"
    ),
    cache_ttl: Optional[str] = typer.Option(
        None, "--cache-ttl", help="Cache expiry, e.g. 300, 5m, 1h"
    ),
    cache_info: bool = typer.Option(
        False, "--cache-info", help="Show cache information and exit"
    ),
    limit: int = typer.Option(20, "--limit", min=1, help="Maximum choices shown"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the ssh command instead of running it"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log to file"),
):
    """Pick an EC2 instance across regions and open an ssh session to it"""
    log = setup_logging(debug=debug, log_file=log_file)

    try:
        expiry_ms = parse_ttl(cache_ttl) if cache_ttl else None
        config = PickerConfig.from_env(
            cache_expiry_ms=expiry_ms, default_user=user, key_file=key_file
        )
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise typer.Exit(1)

    if cache_info:
        InstancePrompt(console).print_cache_info(SnapshotCache(config).get_info())
        raise typer.Exit(0)

    try:
        code = _run(config, " ".join(query or []), refresh, limit, dry_run)
    except Exception as e:
        log.debug("Unexpected error", exc_info=True)
        console.print(f"[red]Unexpected error:[/] {escape(str(e))}")
        code = 1
    raise typer.Exit(code)
