"""Rich console utilities for harbinger.

This module provides a shared Rich Console instance and the renderers for
scan results and the tracked-project dashboard.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from ._eol import EolRegistry
from .ecosystem import ECOSYSTEM_PRIORITY, primary_ecosystem, relevant_technologies
from .scanner import ScanReport
from .status import (
    EOL,
    SAFE,
    UNKNOWN,
    WARNING,
    component_status,
    days_until,
    describe_days,
    is_gem_fallback,
    overall_status,
)
from .store import ProjectRecord
from .technology import Technology

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
        "muted": "dim",
    }
)

# Shared console instance
console = Console(theme=custom_theme)

STATUS_STYLES: Dict[str, str] = {
    EOL: "error",
    WARNING: "warning",
    SAFE: "success",
    UNKNOWN: "muted",
}

STATUS_LABELS: Dict[str, str] = {
    EOL: "✗ EOL",
    WARNING: "⚠ Ending soon",
    SAFE: "✓ Current",
    UNKNOWN: "? Unknown",
}

_SORT_ORDER = {EOL: 0, WARNING: 1, SAFE: 2, UNKNOWN: 3}


def styled(text: str, status: str) -> str:
    style = STATUS_STYLES.get(status, "muted")
    return f"[{style}]{text}[/{style}]"


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Item", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def _eol_cells(
    technology: Technology, version: str, registry: EolRegistry, today: Optional[date]
) -> Tuple[str, str, str]:
    """EOL date, countdown text and status for one component."""
    if is_gem_fallback(version):
        return "-", "Client gem version only", UNKNOWN
    eol = registry.eol_for(technology, version)
    if eol is False:
        return "None announced", "Supported", UNKNOWN
    days = days_until(eol, today)
    if days is None:
        return "Unknown", "Version not found in EOL data", UNKNOWN
    return str(eol), describe_days(days), component_status(days)


def print_scan_report(report: ScanReport, registry: EolRegistry, today: Optional[date] = None) -> None:
    """
    Print the detected versions of one project with their EOL status.

    Technologies that are present but whose version could not be determined
    are listed separately from those that are not used at all.
    """
    console.print(f"\n[info]Scanning {report.path}...[/info]")

    present = {tech: result for tech, result in report.results.items() if result.present}
    if not present:
        console.print("[warning]No supported technologies detected[/warning]")
        return

    table = Table(title="Detected versions", show_header=True, header_style="bold")
    table.add_column("Component", style="cyan")
    table.add_column("Version")
    table.add_column("EOL date")
    table.add_column("Status")

    for technology, result in present.items():
        if result.version is None:
            table.add_row(technology.display_name, "[warning]Present (version not specified)[/warning]", "-", "-")
            continue
        eol_text, countdown, status = _eol_cells(technology, result.version, registry, today)
        table.add_row(technology.display_name, result.version, eol_text, styled(countdown, status))

    console.print(table)

    ecosystem = report.ecosystem
    if ecosystem:
        console.print(f"Primary ecosystem: [highlight]{ecosystem.display_name}[/highlight]")


def _project_status(record: ProjectRecord, registry: EolRegistry, today: Optional[date]) -> str:
    statuses = []
    for technology, version in record.components.items():
        if is_gem_fallback(version):
            continue
        statuses.append(component_status(days_until(registry.eol_for(technology, version), today)))
    return overall_status(statuses)


def print_dashboard(records: Sequence[ProjectRecord], registry: EolRegistry, today: Optional[date] = None) -> None:
    """
    Print tracked projects grouped by primary ecosystem.

    Each group gets its own table showing the language (plus Rails for Ruby)
    and the datastores, worst status first. Projects without a primary
    ecosystem are not shown.
    """
    console.print(f"[info]Tracked Projects ({len(records)})[/info]")

    groups: Dict[Technology, List[ProjectRecord]] = {}
    for record in records:
        ecosystem = primary_ecosystem(record.components)
        if ecosystem is not None:
            groups.setdefault(ecosystem, []).append(record)

    for ecosystem in ECOSYSTEM_PRIORITY:
        members = groups.get(ecosystem)
        if not members:
            continue

        columns = [t for t in relevant_technologies(ecosystem) if any(t in r.components for r in members)]
        table = Table(title=f"{ecosystem.display_name} projects", show_header=True, header_style="bold")
        table.add_column("Project", style="cyan")
        for technology in columns:
            table.add_column(technology.display_name)
        table.add_column("Status")

        rows = []
        for record in members:
            status = _project_status(record, registry, today)
            cells = [record.components.get(t, "-") for t in columns]
            rows.append((_SORT_ORDER[status], record.name, cells, status))

        for _, name, cells, status in sorted(rows, key=lambda row: (row[0], row[1])):
            table.add_row(name, *cells, styled(STATUS_LABELS[status], status))

        console.print(table)

    console.print("\n[info]Use 'harbinger scan --path <project> --save' to update a project[/info]")
