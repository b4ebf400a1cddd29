"""Version string normalization.

Detected versions arrive in many shapes: pinned files (``ruby-3.3.0``),
manifest constraints (``>=3.9,<4.0``, ``^18.0.0``), toolchain channels
(``1.75.0-2023-12-21``), Node.js aliases (``lts/hydrogen``) and so on.
``normalize_version`` reduces them to a dotted ``major[.minor[.patch]]``
string on a best-effort basis. It is not a parser: anything it does not
recognise is passed through unchanged.
"""

import re
from typing import Dict, Optional, Tuple

# Technology name prefixes written by version managers (rbenv, pyenv, rustup).
_TECH_PREFIX = re.compile(r"^(?:ruby|rust|python|node|nodejs|go|golang)-", re.IGNORECASE)

# Leading constraint operators: >=, <=, ~>, ^, ~, >, <, =, != and whitespace.
_CONSTRAINT_PREFIX = re.compile(r"^[><=~^!\s]+")

_V_PREFIX = re.compile(r"^v(?=\d)")
_WILDCARD_SUFFIX = re.compile(r"(?:\.[xX*])+$")
_RUBY_PATCH_LEVEL = re.compile(r"(?<=\d)p\d+$")
_CLAUSE_SEPARATOR = re.compile(r"[,\s]+")
_LEADING_NUMERIC = re.compile(r"^(\d+(?:\.\d+)*)")
_LTS_ALIAS = re.compile(r"^lts/(.+)$", re.IGNORECASE)

# Toolchain channels that do not correspond to a release cycle.
TOOLCHAIN_CHANNELS = frozenset({"stable", "beta", "nightly"})

# Node.js LTS codenames and their major versions.
NODE_LTS_CODENAMES: Dict[str, str] = {
    "argon": "4",
    "boron": "6",
    "carbon": "8",
    "dubnium": "10",
    "erbium": "12",
    "fermium": "14",
    "gallium": "16",
    "hydrogen": "18",
    "iron": "20",
    "jod": "22",
}


def _lts_alias(value: str) -> Tuple[bool, Optional[str]]:
    """
    Resolve a Node.js LTS alias.

    Returns:
        Tuple of (is_alias, major_version). ``lts/<unknown>`` is an alias
        with no major version.
    """
    match = _LTS_ALIAS.match(value)
    if match:
        return True, NODE_LTS_CODENAMES.get(match.group(1).lower())
    if value.lower() in NODE_LTS_CODENAMES:
        return True, NODE_LTS_CODENAMES[value.lower()]
    return False, None


def strip_constraint_operators(value: str) -> str:
    """Remove leading constraint operators and whitespace (``~> 3.2`` -> ``3.2``)."""
    return _CONSTRAINT_PREFIX.sub("", value)


def first_clause(value: str) -> str:
    """Keep the first clause of a range (``3.9,<4.0`` -> ``3.9``)."""
    parts = [p for p in _CLAUSE_SEPARATOR.split(value.strip()) if p]
    return parts[0] if parts else ""


def leading_numeric_version(value: str) -> Optional[str]:
    """Extract the leading dotted numeric version (``16-alpine`` -> ``16``)."""
    match = _LEADING_NUMERIC.match(value)
    return match.group(1) if match else None


def is_toolchain_channel(value: str) -> bool:
    """True for ``stable``, ``beta``, ``nightly`` and dated channels like ``nightly-2024-01-01``."""
    return value.split("-")[0].lower() in TOOLCHAIN_CHANNELS


def normalize_version(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a raw detected version string.

    Examples:
        ruby-3.3.0 -> 3.3.0
        v18.16.0 -> 18.16.0
        >=3.9,<4.0 -> 3.9
        >=14.0.0 <20.0.0 -> 14.0.0
        3.1.4p223 -> 3.1.4
        18.x -> 18
        lts/hydrogen -> 18
        1.75.0-2023-12-21 -> 1.75.0
        stable -> None

    Normalization is idempotent: normalizing an already normalized value
    returns it unchanged.

    Args:
        raw: Raw version string from a file, manifest or command output

    Returns:
        Normalized version, or None when nothing usable remains
    """
    if raw is None:
        return None

    value = raw.strip()
    if not value:
        return None

    is_alias, lts_major = _lts_alias(value)
    if is_alias:
        return lts_major

    value = strip_constraint_operators(value)
    value = first_clause(value)
    value = _TECH_PREFIX.sub("", value)
    value = _V_PREFIX.sub("", value)

    if not value or is_toolchain_channel(value):
        return None

    # Version/date composites and image-style qualifiers: 1.75.0-2023-12-21, 1.21-alpine
    if value[0].isdigit() and "-" in value:
        value = value.split("-")[0]

    value = _WILDCARD_SUFFIX.sub("", value)
    value = _RUBY_PATCH_LEVEL.sub("", value)

    return value or None
