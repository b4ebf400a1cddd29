"""JSON and CSV export of tracked projects with their EOL status."""

import csv
import io
import json
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ._eol import EolRegistry
from .ecosystem import primary_ecosystem
from .status import component_status, days_until, is_gem_fallback, overall_status
from .store import ProjectRecord
from .technology import Technology

CSV_HEADERS = [
    "project",
    "path",
    "component",
    "version",
    "eol_date",
    "days_remaining",
    "status",
    "overall_status",
]


class ExportFormat(str, Enum):
    """Machine-readable output formats."""

    JSON = "json"
    CSV = "csv"


def build_components(record: ProjectRecord, registry: EolRegistry, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Evaluate each component of a project against its EOL date.

    Gem-labelled fallback versions are skipped: a driver gem version says
    nothing about the server's support window.
    """
    components = []
    for technology in Technology:
        version = record.components.get(technology)
        if not version or is_gem_fallback(version):
            continue
        eol = registry.eol_for(technology, version)
        days = days_until(eol, today)
        components.append(
            {
                "name": technology.value,
                "version": version,
                "eol_date": eol,
                "days_remaining": days,
                "status": component_status(days),
            }
        )
    return components


def build_export_data(
    projects: Iterable[ProjectRecord], registry: EolRegistry, today: Optional[date] = None
) -> List[Dict[str, Any]]:
    """
    Build the export rows for tracked projects.

    Projects with no evaluable component are left out.

    Args:
        projects: Tracked projects
        registry: EOL registry for date lookups
        today: Reference date (default: today)

    Returns:
        One dict per project with name, path, ecosystem, components and overall_status
    """
    data = []
    for record in projects:
        components = build_components(record, registry, today)
        if not components:
            continue
        ecosystem = primary_ecosystem(record.components)
        data.append(
            {
                "name": record.name,
                "path": record.path,
                "ecosystem": ecosystem.value if ecosystem else None,
                "components": components,
                "overall_status": overall_status(c["status"] for c in components),
            }
        )
    return data


def export_json(
    projects: Iterable[ProjectRecord],
    registry: EolRegistry,
    today: Optional[date] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render projects as ``{generated_at, project_count, projects}`` JSON."""
    rows = build_export_data(projects, registry, today)
    generated_at = generated_at or datetime.now().astimezone()
    payload = {
        "generated_at": generated_at.isoformat(timespec="seconds"),
        "project_count": len(rows),
        "projects": rows,
    }
    return json.dumps(payload, indent=2)


def export_csv(projects: Iterable[ProjectRecord], registry: EolRegistry, today: Optional[date] = None) -> str:
    """Render projects as CSV, one row per component."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for project in build_export_data(projects, registry, today):
        for component in project["components"]:
            writer.writerow(
                [
                    project["name"],
                    project["path"],
                    component["name"],
                    component["version"],
                    component["eol_date"] or "",
                    "" if component["days_remaining"] is None else component["days_remaining"],
                    component["status"],
                    project["overall_status"],
                ]
            )
    return output.getvalue()


def export(
    export_format: ExportFormat,
    projects: Iterable[ProjectRecord],
    registry: EolRegistry,
    today: Optional[date] = None,
) -> str:
    """Render projects in the requested format."""
    if export_format == ExportFormat.JSON:
        return export_json(projects, registry, today)
    elif export_format == ExportFormat.CSV:
        return export_csv(projects, registry, today)
    raise ValueError(f"Unsupported export format: {export_format}")
