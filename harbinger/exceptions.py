"""Custom exceptions for harbinger."""


class HarbingerError(Exception):
    """Base exception for all harbinger operations."""


class ConfigurationError(HarbingerError):
    """Raised when configuration validation fails."""


class EolFetchError(HarbingerError):
    """Raised when EOL data cannot be fetched or parsed from the registry."""


class ProjectStoreError(HarbingerError):
    """Raised when the tracked project store cannot be written."""


class CommandExecutionError(HarbingerError):
    """Raised when external command execution fails."""
