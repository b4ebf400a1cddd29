"""Shell probes that ask installed binaries for their version.

Each technology has a pure ``parse_*`` function for the command output and
a ``probe_*`` function that runs the command(s) through a CommandRunner.
A failed command, or output that does not match, yields None.
"""

import re
from typing import List, Optional

from harbinger.logging_config import logger
from harbinger.shell import CommandRunner

_PSQL = re.compile(r"PostgreSQL\)\s+(\d+(?:\.\d+)?)")
_MYSQL = re.compile(r"Ver\s+(?:\d+\.\d+\s+Distrib\s+)?(\d+\.\d+\.\d+)")
_REDIS_CLI = re.compile(r"redis-cli\s+(\d+\.\d+(?:\.\d+)?)")
_REDIS_SERVER = re.compile(r"v=(\d+\.\d+(?:\.\d+)?)")
_MONGOSH = re.compile(r"^(\d+\.\d+(?:\.\d+)?)")
_MONGO_SHELL = re.compile(r"MongoDB shell version v?(\d+\.\d+(?:\.\d+)?)")
_MONGOD = re.compile(r"db version v(\d+\.\d+(?:\.\d+)?)")
_GO = re.compile(r"go version go([\d.]+)")
_RUSTC = re.compile(r"rustc\s+(\d+\.\d+(?:\.\d+)?)")
_PYTHON = re.compile(r"Python\s+(\d+\.\d+(?:\.\d+)?)")
_NODE = re.compile(r"^v?(\d+\.\d+(?:\.\d+)?)")


def _search(pattern: re.Pattern, output: Optional[str]) -> Optional[str]:
    if not output:
        return None
    match = pattern.search(output.strip())
    return match.group(1) if match else None


def _probe(runner: CommandRunner, argv: List[str], pattern: re.Pattern) -> Optional[str]:
    """Run a command and extract a version from its output if it succeeded."""
    result = runner(argv)
    if not result.success:
        return None
    version = _search(pattern, result.output)
    if version is None:
        logger.debug(f"Unrecognized output from {' '.join(argv)}: {result.output.strip()[:80]!r}")
    return version


def parse_psql(output: Optional[str]) -> Optional[str]:
    """``psql (PostgreSQL) 15.3`` -> ``15.3``."""
    return _search(_PSQL, output)


def parse_mysql(output: Optional[str]) -> Optional[str]:
    """``mysql  Ver 8.0.33 for Linux`` -> ``8.0.33``; MariaDB reports its own version after ``Distrib``."""
    return _search(_MYSQL, output)


def parse_redis_cli(output: Optional[str]) -> Optional[str]:
    return _search(_REDIS_CLI, output)


def parse_redis_server(output: Optional[str]) -> Optional[str]:
    return _search(_REDIS_SERVER, output)


def parse_mongosh(output: Optional[str]) -> Optional[str]:
    """mongosh prints a bare version number (``2.1.1``)."""
    return _search(_MONGOSH, output)


def parse_mongo_shell(output: Optional[str]) -> Optional[str]:
    return _search(_MONGO_SHELL, output)


def parse_mongod(output: Optional[str]) -> Optional[str]:
    return _search(_MONGOD, output)


def parse_go(output: Optional[str]) -> Optional[str]:
    """``go version go1.21.0 darwin/amd64`` -> ``1.21.0``."""
    version = _search(_GO, output)
    return version.rstrip(".") if version else None


def parse_rustc(output: Optional[str]) -> Optional[str]:
    return _search(_RUSTC, output)


def parse_python(output: Optional[str]) -> Optional[str]:
    return _search(_PYTHON, output)


def parse_node(output: Optional[str]) -> Optional[str]:
    return _search(_NODE, output)


def probe_postgres(runner: CommandRunner) -> Optional[str]:
    return _probe(runner, ["psql", "--version"], _PSQL)


def probe_mysql(runner: CommandRunner) -> Optional[str]:
    return _probe(runner, ["mysql", "--version"], _MYSQL) or _probe(runner, ["mysqld", "--version"], _MYSQL)


def probe_redis(runner: CommandRunner) -> Optional[str]:
    return _probe(runner, ["redis-cli", "-v"], _REDIS_CLI) or _probe(
        runner, ["redis-server", "--version"], _REDIS_SERVER
    )


def probe_mongo(runner: CommandRunner) -> Optional[str]:
    # mongosh (MongoDB 5+), then the legacy shell, then the server binary
    return (
        _probe(runner, ["mongosh", "--version"], _MONGOSH)
        or _probe(runner, ["mongo", "--version"], _MONGO_SHELL)
        or _probe(runner, ["mongod", "--version"], _MONGOD)
    )


def probe_go(runner: CommandRunner) -> Optional[str]:
    version = _probe(runner, ["go", "version"], _GO)
    return version.rstrip(".") if version else None


def probe_rust(runner: CommandRunner) -> Optional[str]:
    return _probe(runner, ["rustc", "--version"], _RUSTC)


def probe_python(runner: CommandRunner) -> Optional[str]:
    return _probe(runner, ["python3", "--version"], _PYTHON) or _probe(runner, ["python", "--version"], _PYTHON)


def probe_node(runner: CommandRunner) -> Optional[str]:
    return _probe(runner, ["node", "--version"], _NODE)
