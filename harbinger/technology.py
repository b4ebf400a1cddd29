"""Closed set of technologies harbinger tracks and their EOL product slugs."""

from enum import Enum
from typing import Dict, Tuple


class Technology(str, Enum):
    """A tracked runtime, framework or datastore.

    The value is the component key used in the project store and in exports.
    """

    RUBY = "ruby"
    RAILS = "rails"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    REDIS = "redis"
    MONGO = "mongo"
    PYTHON = "python"
    NODEJS = "nodejs"
    RUST = "rust"
    GO = "go"

    @property
    def product(self) -> str:
        """Slug of this technology in the endoflife.date registry."""
        return _EOL_PRODUCTS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_EOL_PRODUCTS: Dict[Technology, str] = {
    Technology.RUBY: "ruby",
    Technology.RAILS: "rails",
    Technology.POSTGRES: "postgresql",
    Technology.MYSQL: "mysql",
    Technology.REDIS: "redis",
    Technology.MONGO: "mongodb",
    Technology.PYTHON: "python",
    Technology.NODEJS: "nodejs",
    Technology.RUST: "rust",
    Technology.GO: "go",
}

_DISPLAY_NAMES: Dict[Technology, str] = {
    Technology.RUBY: "Ruby",
    Technology.RAILS: "Rails",
    Technology.POSTGRES: "PostgreSQL",
    Technology.MYSQL: "MySQL",
    Technology.REDIS: "Redis",
    Technology.MONGO: "MongoDB",
    Technology.PYTHON: "Python",
    Technology.NODEJS: "Node.js",
    Technology.RUST: "Rust",
    Technology.GO: "Go",
}

DATASTORES: Tuple[Technology, ...] = (
    Technology.POSTGRES,
    Technology.MYSQL,
    Technology.REDIS,
    Technology.MONGO,
)

# Every EOL product the registry is asked about, in display order.
EOL_PRODUCTS: Tuple[str, ...] = tuple(_EOL_PRODUCTS[t] for t in Technology)
