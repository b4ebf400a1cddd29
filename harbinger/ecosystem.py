"""Primary ecosystem classification."""

from typing import Mapping, Optional, Tuple

from .technology import DATASTORES, Technology

# Languages in the order they claim a project
ECOSYSTEM_PRIORITY: Tuple[Technology, ...] = (
    Technology.RUBY,
    Technology.PYTHON,
    Technology.RUST,
    Technology.GO,
    Technology.NODEJS,
)


def primary_ecosystem(components: Mapping[Technology, Optional[str]]) -> Optional[Technology]:
    """
    Pick the single primary language of a project.

    A Rails app that also ships a package.json for its assets is a Ruby
    project, so languages are checked in a fixed priority order and the
    first one with a known version wins.

    Args:
        components: Detected versions keyed by technology

    Returns:
        The primary language, or None if no language version was detected
    """
    for technology in ECOSYSTEM_PRIORITY:
        if components.get(technology):
            return technology
    return None


def relevant_technologies(ecosystem: Optional[Technology]) -> Tuple[Technology, ...]:
    """
    Technologies shown for a project of the given ecosystem.

    The language itself, Rails for Ruby projects, and every datastore.
    """
    if ecosystem is None:
        return DATASTORES
    if ecosystem == Technology.RUBY:
        return (Technology.RUBY, Technology.RAILS) + DATASTORES
    return (ecosystem,) + DATASTORES
