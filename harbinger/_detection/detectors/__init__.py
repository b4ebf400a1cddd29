"""Per-technology detector implementations."""

from .base import BaseDetector
from .database import DatabaseDetector, MysqlAdapter, PostgresAdapter
from .datastore import MongoDetector, RedisDetector, ServiceDetector
from .go import GoDetector
from .node import NodeDetector
from .python import PythonDetector
from .ruby import RailsDetector, RubyDetector
from .rust import RustDetector

__all__ = [
    "BaseDetector",
    "DatabaseDetector",
    "GoDetector",
    "MongoDetector",
    "MysqlAdapter",
    "NodeDetector",
    "PostgresAdapter",
    "PythonDetector",
    "RailsDetector",
    "RedisDetector",
    "RubyDetector",
    "RustDetector",
    "ServiceDetector",
]
