"""Subprocess execution for version probes.

Detectors never call ``subprocess`` directly. They receive a
``CommandRunner`` callable so tests can substitute canned output and the
CLI can apply the configured probe timeout.
"""

import functools
import subprocess
from dataclasses import dataclass
from typing import Callable, List

from .config import DEFAULT_PROBE_TIMEOUT
from .exceptions import CommandExecutionError
from .logging_config import logger


@dataclass(frozen=True)
class CommandResult:
    """Combined stdout/stderr of a probe command and whether it succeeded."""

    output: str
    success: bool


CommandRunner = Callable[[List[str]], CommandResult]


def run_command(argv: List[str], timeout: float = DEFAULT_PROBE_TIMEOUT, check: bool = False) -> CommandResult:
    """
    Run a probe command, capturing stdout and stderr together.

    A missing executable, a non-zero exit status and a timeout all produce
    an unsuccessful result rather than an exception.

    Args:
        argv: Command and arguments, executed without a shell
        timeout: Timeout in seconds
        check: Raise CommandExecutionError instead of returning a failed result

    Returns:
        CommandResult with the combined output

    Raises:
        CommandExecutionError: If check is True and the command failed
    """
    command_name = argv[0] if argv else "<empty>"
    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"{command_name} timed out after {timeout}s")
        if check:
            raise CommandExecutionError(f"{command_name} timed out")
        return CommandResult(output="", success=False)
    except (FileNotFoundError, PermissionError):
        logger.debug(f"{command_name} not found")
        if check:
            raise CommandExecutionError(f"{command_name} not found - is it installed?")
        return CommandResult(output="", success=False)
    except OSError as e:
        logger.debug(f"{command_name} could not be started: {e}")
        if check:
            raise CommandExecutionError(f"{command_name} could not be started: {e}")
        return CommandResult(output="", success=False)

    output = completed.stdout or ""
    if completed.returncode != 0:
        logger.debug(f"{command_name} exited with status {completed.returncode}")
        if check:
            raise CommandExecutionError(f"{command_name} command failed with return code {completed.returncode}")
        return CommandResult(output=output, success=False)

    return CommandResult(output=output, success=True)


def make_runner(timeout: float = DEFAULT_PROBE_TIMEOUT) -> CommandRunner:
    """Build a CommandRunner bound to the given probe timeout."""
    return functools.partial(run_command, timeout=timeout)
