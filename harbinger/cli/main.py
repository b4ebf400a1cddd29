"""Command-line interface for harbinger.

Commands:
    scan     Detect versions in a project directory (optionally save/recurse)
    show     Dashboard of tracked projects, or JSON/CSV export
    rescan   Rescan every tracked project
    remove   Stop tracking a project
    update   Refresh EOL data for every product
"""

import os
import sys
from pathlib import Path
from typing import Optional

import click

from harbinger import __version__
from harbinger._detection import DetectorRegistry, create_default_registry
from harbinger._eol import EolRegistry, create_registry
from harbinger.config import Settings, load_settings
from harbinger.console import console, print_dashboard, print_scan_report, print_summary_table
from harbinger.exceptions import ConfigurationError, ProjectStoreError
from harbinger.export import ExportFormat, build_export_data, export
from harbinger.logging_config import logger, set_log_level
from harbinger.scanner import find_projects, rescan_all, scan_project
from harbinger.shell import make_runner
from harbinger.store import ProjectStore
from harbinger.technology import EOL_PRODUCTS

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _detectors(settings: Settings) -> DetectorRegistry:
    return create_default_registry(make_runner(settings.probe_timeout))


def _eol_registry(settings: Settings) -> EolRegistry:
    return create_registry(settings)


def _store(settings: Settings) -> ProjectStore:
    return ProjectStore(settings.home_dir)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, "--version", "-V", prog_name="harbinger", message="%(prog)s version %(version)s")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Track end-of-life dates for the runtimes, frameworks and datastores your projects use."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[error]Configuration error: {e}[/error]")
        sys.exit(1)

    set_log_level("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option("--path", "-p", "path", default=None, help="Project directory (defaults to the current directory).")
@click.option("--save", "-s", is_flag=True, help="Save the project for the dashboard.")
@click.option("--recursive", "-r", is_flag=True, help="Scan every project found under the directory.")
@click.pass_obj
def scan(settings: Settings, path: Optional[str], save: bool, recursive: bool) -> None:
    """Scan a project directory and detect versions."""
    base = Path(path or os.getcwd()).expanduser()
    if not base.is_dir():
        console.print(f"[error]Error: {base} is not a valid directory[/error]")
        sys.exit(1)

    if recursive:
        console.print(f"[info]Scanning {base} recursively...[/info]")
        project_paths = find_projects(base)
        if not project_paths:
            console.print("[warning]No projects found[/warning]")
            return
        console.print(f"[success]Found {len(project_paths)} project(s)[/success]")
    else:
        project_paths = [base]

    detectors = _detectors(settings)
    eol = _eol_registry(settings)
    store = _store(settings)

    saved = 0
    for index, project_path in enumerate(project_paths, start=1):
        if recursive:
            console.rule(f"[{index}/{len(project_paths)}] {project_path}", style="cyan")

        report = scan_project(project_path, detectors)
        print_scan_report(report, eol)

        if save:
            try:
                store.save(report.to_record())
            except ProjectStoreError as e:
                console.print(f"[error]{e}[/error]")
                sys.exit(1)
            saved += 1
            if not recursive:
                console.print(f"\n[success]✓ Saved to config as '{report.name}'[/success]")

    if save:
        if recursive:
            console.print(f"\n[success]✓ Saved {saved} project(s) to config[/success]")
        console.print("[info]View all tracked projects with: harbinger show[/info]")


@cli.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write JSON/CSV to a file.")
@click.pass_obj
def show(settings: Settings, output_format: str, output: Optional[str]) -> None:
    """Show EOL status for tracked projects."""
    records = _store(settings).list_all()
    eol = _eol_registry(settings)

    if output_format == "table":
        if not records:
            console.print("[warning]No projects tracked yet.[/warning]")
            console.print("[info]Use 'harbinger scan --save' to add projects[/info]")
            return
        print_dashboard(records, eol)
        return

    text = export(ExportFormat(output_format), records, eol)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        exported = len(build_export_data(records, eol))
        console.print(f"[success]✓ Exported {exported} project(s) to {output}[/success]")
    else:
        click.echo(text, nl=not text.endswith("\n"))


@cli.command()
@click.pass_obj
def rescan(settings: Settings) -> None:
    """Rescan every tracked project and refresh its saved versions."""
    store = _store(settings)
    if store.count() == 0:
        console.print("[warning]No projects tracked yet.[/warning]")
        return

    try:
        summary = rescan_all(store, _detectors(settings))
    except ProjectStoreError as e:
        console.print(f"[error]{e}[/error]")
        sys.exit(1)

    for name in summary.removed:
        console.print(f"[warning]Removed {name}: directory no longer exists[/warning]")
    print_summary_table("Rescan", [("Updated", len(summary.updated)), ("Removed", len(summary.removed))])


@cli.command()
@click.argument("name")
@click.pass_obj
def remove(settings: Settings, name: str) -> None:
    """Stop tracking the project NAME."""
    try:
        removed = _store(settings).remove(name)
    except ProjectStoreError as e:
        console.print(f"[error]{e}[/error]")
        sys.exit(1)

    if not removed:
        console.print(f"[warning]No tracked project named '{name}'[/warning]")
        sys.exit(1)
    console.print(f"[success]✓ Removed '{name}'[/success]")


@cli.command()
@click.pass_obj
def update(settings: Settings) -> None:
    """Force refresh EOL data from endoflife.date."""
    console.print("[info]Updating EOL data...[/info]")
    eol = _eol_registry(settings)

    failures = 0
    for product in EOL_PRODUCTS:
        table = eol.refresh(product)
        if table:
            console.print(f"  [success]✓[/success] {product}: {len(table)} versions cached")
        else:
            failures += 1
            console.print(f"  [error]✗ {product}: Failed to fetch[/error]")

    if failures:
        logger.debug(f"{failures} product(s) could not be refreshed")
        console.print(f"\n[warning]EOL data updated with {failures} failure(s)[/warning]")
    else:
        console.print("\n[success]EOL data updated successfully![/success]")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
