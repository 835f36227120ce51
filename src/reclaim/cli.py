"""CLI interface for Reclaim."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from reclaim.core.engine import ReclaimEngine
from reclaim.core.plugin_loader import load_plugins
from reclaim.core.registry import PluginRegistry
from reclaim.models.plugin import CleanPlugin, ItemizedPlugin
from reclaim.settings import Settings
from reclaim.utils import bytes_to_human, is_root, xdg_cache_home

log = logging.getLogger(__name__)


def _setup_logging(verbosity: int, log_file: Path | None = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    if log_file is None:
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        filename=str(log_file),
        format="%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s",
    )


def _default_log_file() -> Path:
    return xdg_cache_home() / "reclaim" / "reclaim.log"


def _build_engine() -> ReclaimEngine:
    registry = PluginRegistry()
    load_plugins(registry, Settings.instance())
    return ReclaimEngine(registry)


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write logs here")
@click.option("--no-tui", is_flag=True, help="Line-oriented mode instead of the interactive screen")
@click.option("--dry-run", is_flag=True, help="Scan and report only (implies --no-tui)")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation (implies --no-tui)")
@click.option("--include-large-files", is_flag=True, help="Also delete every large unused file in line mode")
@click.pass_context
def main(
    ctx: click.Context,
    verbose: int,
    log_file: Path | None,
    no_tui: bool,
    dry_run: bool,
    yes: bool,
    include_large_files: bool,
) -> None:
    """Reclaim: find and clean up reclaimable disk space on Linux."""
    line_mode = no_tui or dry_run or yes
    if ctx.invoked_subcommand is not None or line_mode:
        _setup_logging(verbose, log_file)
    else:
        # stderr belongs to the full-screen UI
        _setup_logging(verbose, log_file or _default_log_file())

    if ctx.invoked_subcommand is not None:
        return

    engine = _build_engine()
    if line_mode:
        ctx.exit(_run_line_mode(engine, dry_run=dry_run, yes=yes, include_large_files=include_large_files))

    from reclaim.tui.app import ReclaimApp

    try:
        status = ReclaimApp(engine, engine.plugins()).run()
    except KeyboardInterrupt:
        status = 130
    ctx.exit(status)


# ── line mode ────────────────────────────────────────────────────────────

def _run_line_mode(engine: ReclaimEngine, *, dry_run: bool, yes: bool, include_large_files: bool) -> int:
    """Scan everything, report, confirm once, then clean each non-empty row."""
    root = is_root()
    click.echo(click.style("Reclaim (line mode)", bold=True))
    click.echo("Scanning system...\n")

    cleanable: list[tuple[int, CleanPlugin]] = []
    total = 0
    for index, plugin in enumerate(engine.plugins()):
        if plugin.requires_root and not root:
            click.echo(f"  {click.style('-', fg='yellow')} {plugin.name:35s} {click.style('requires root', fg='yellow')}")
            continue
        event = engine.scan_unit(index, plugin)
        if event.error:
            click.echo(f"  {click.style('✗', fg='red')} {plugin.name:35s} {click.style(event.error, fg='red')}")
            continue
        if event.size_bytes <= 0:
            click.echo(f"  {click.style('·', fg='bright_black')} {plugin.name:35s} clean")
            continue
        skipped = isinstance(plugin, ItemizedPlugin) and not include_large_files
        note = click.style(" (skipped, use --include-large-files)", fg="bright_black") if skipped else ""
        size = click.style(bytes_to_human(event.size_bytes), fg="green", bold=True)
        click.echo(f"  {click.style('✓', fg='green')} {plugin.name:35s} {size}{note}")
        if not skipped:
            cleanable.append((index, plugin))
            total += event.size_bytes

    if not cleanable:
        click.echo(click.style("\nSystem is already clean!", fg="green"))
        return 0

    click.echo(f"\nTotal reclaimable space: {click.style(bytes_to_human(total), fg='green', bold=True)}")

    if dry_run:
        click.echo(click.style("\n[DRY RUN] No changes were made.", fg="yellow"))
        return 0

    if not yes:
        click.echo(click.style("\nWARNING: This will permanently delete the listed files.", fg="yellow"))
        if not click.confirm("Are you sure you want to proceed?", default=False):
            click.echo("Cleanup cancelled.")
            return 0

    click.echo("\nCleaning...\n")
    failures = 0
    freed = 0
    for index, plugin in cleanable:
        event = engine.clean_unit(index, plugin)
        freed += event.freed_bytes
        if event.error:
            failures += 1
            click.echo(f"  {click.style('✗', fg='red')} {plugin.name:35s} FAILED: {event.error}")
        else:
            click.echo(f"  {click.style('✓', fg='green')} {plugin.name:35s} done")

    click.echo(f"\nTotal freed: {click.style(bytes_to_human(freed), fg='green', bold=True)}")
    click.echo(click.style("Cleanup complete!", fg="green"))
    return 1 if failures else 0


# ── list ─────────────────────────────────────────────────────────────────

@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(as_json: bool) -> None:
    """List registered cleaning plugins."""
    engine = _build_engine()
    plugins = engine.registry.get_all()
    _, unavailable = engine.registry.partition()

    if as_json:
        data = [
            {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "category": p.category,
                "requires_root": p.requires_root,
                "available": p.id not in unavailable,
                "unavailable_reason": unavailable.get(p.id),
                "itemized": isinstance(p, ItemizedPlugin),
            }
            for p in plugins
        ]
        click.echo(json.dumps(data, indent=2))
        return

    if not plugins:
        click.echo("No plugins registered.")
        return

    for plugin in plugins:
        reason = unavailable.get(plugin.id)
        status = click.style("not available", fg="bright_black") if reason else click.style("available", fg="green")
        root_tag = click.style(" [root]", fg="yellow") if plugin.requires_root else ""
        click.echo(f"  {click.style(plugin.id, fg='cyan', bold=True):30s} {plugin.name:40s} {status}{root_tag}")
        if reason:
            click.echo(f"  {'':20s} {click.style(reason, fg='bright_black')}")
