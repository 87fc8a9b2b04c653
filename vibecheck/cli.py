"""Command-line interface for vibecheck."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from vibecheck import VibeCheck, VibeCheckConfig, save_json, __version__
from vibecheck.config import CacheBackend, LogFormat
from vibecheck.core.share import format_days, format_percent

app = typer.Typer(
    name="vibecheck",
    help="Farcaster reputation score and daily check-in streaks",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"vibecheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """vibecheck - Farcaster reputation score and daily check-in streaks."""
    pass


@app.command()
def score(
    fids: list[int] = typer.Argument(..., help="Farcaster user ids"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory for JSON files"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Force refresh, skip cache"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress output, only show errors"
    ),
):
    """Show the normalized score and tier for one or more users."""
    config = VibeCheckConfig(
        log_format=LogFormat.CONSOLE if not quiet else LogFormat.JSON,
    )

    async def run() -> int:
        async with VibeCheck(config) as vc:
            results = await vc.get_many(fids, force_refresh=force)

        for result in results:
            if result.success and result.profile:
                if not quiet:
                    _print_profile_table(result)
                if output:
                    filepath = output / f"{result.fid}.json"
                    save_json(result, filepath)
                    console.print(f"[dim]Saved to {filepath}[/dim]")
            else:
                reason = result.rejection.value if result.rejection else "unknown"
                console.print(
                    f"[red]✗[/red] Data unavailable for fid {result.fid} ({reason}): "
                    f"{result.error_message or 'no details'}"
                )

        success_count = sum(1 for r in results if r.success)
        console.print(f"\n[bold]Loaded {success_count}/{len(results)} profiles[/bold]")
        return 0 if success_count == len(results) else 1

    raise typer.Exit(asyncio.run(run()))


@app.command()
def checkin(
    fid: int = typer.Argument(..., help="Farcaster user id"),
):
    """Check in for today and show the updated streak."""
    config = VibeCheckConfig()

    async def run():
        async with VibeCheck(config) as vc:
            state = await vc.check_in(fid)
        console.print(
            f"[green]✓[/green] Checked in fid {fid} on {state.last_check_in.isoformat()}: "
            f"[bold]{format_days(state.count)}[/bold] streak"
        )

    asyncio.run(run())


@app.command()
def streak(
    fid: int = typer.Argument(..., help="Farcaster user id"),
):
    """Show the current streak without checking in."""
    config = VibeCheckConfig(cache_backend=CacheBackend.NONE)

    async def run():
        async with VibeCheck(config) as vc:
            count = await vc.peek_streak(fid)
        console.print(f"fid {fid}: {format_days(count)} streak")

    asyncio.run(run())


@app.command()
def share(
    fid: int = typer.Argument(..., help="Farcaster user id"),
):
    """Print the share message for a user."""
    config = VibeCheckConfig()

    async def run() -> str | None:
        async with VibeCheck(config) as vc:
            return await vc.share_text(fid)

    text = asyncio.run(run())
    if text is None:
        console.print(f"[red]Data unavailable for fid {fid}, nothing to share[/red]")
        raise typer.Exit(1)
    console.print(text)


@app.command()
def cache(
    action: str = typer.Argument(..., help="Action: clear, info"),
    fid: Optional[int] = typer.Option(None, "--fid", "-u", help="User id to invalidate"),
):
    """Manage the profile cache."""
    config = VibeCheckConfig()

    async def run():
        async with VibeCheck(config) as vc:
            if action == "clear":
                if fid is not None:
                    await vc.invalidate_cache(fid)
                    console.print(f"[green]✓[/green] Cleared cache for fid {fid}")
                else:
                    await vc.clear_cache()
                    console.print("[green]✓[/green] Cleared all cache")

            elif action == "info":
                if config.cache_backend == CacheBackend.NONE:
                    console.print("Cache is disabled")
                    return
                console.print(f"Cache backend: {config.cache_backend.value}")
                console.print(f"TTL: {config.cache_ttl_seconds}s")
                if config.cache_backend == CacheBackend.SQLITE:
                    cache_path = Path(config.sqlite_path)
                    console.print(f"Cache path: {cache_path}")
                    if cache_path.exists():
                        console.print(f"Cache size: {cache_path.stat().st_size / 1024:.1f} KB")
                    else:
                        console.print("Cache is empty")
                else:
                    console.print(f"Redis URL: {config.redis_url}")

            else:
                console.print(f"[red]Unknown action: {action}[/red]")
                console.print("Available actions: clear, info")
                raise typer.Exit(1)

    asyncio.run(run())


def _print_profile_table(result):
    """Print a profile result as a table."""
    p = result.profile
    cached_tag = " (cached)" if result.cached else ""

    table = Table(title=f"@{p.username}{cached_tag}", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("FID", str(p.fid))
    table.add_row("Display Name", p.display_name)
    table.add_row("Score", format_percent(p.score))
    table.add_row("Tier", p.tier.value)
    if result.score_delta is not None:
        table.add_row("Change", f"{result.score_delta * 100:+.1f} pts")
    table.add_row("Followers", f"{p.follower_count:,}")
    age = format_days(p.account_age_days)
    table.add_row("Account Age", f"~{age}" if p.account_age_estimated else age)
    table.add_row("Streak", format_days(result.streak))

    console.print(table)


if __name__ == "__main__":
    app()
