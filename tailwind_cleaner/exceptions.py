"""Domain exceptions raised below the CLI layer."""


class CleanerError(Exception):
    """Base class for errors raised by the cleanup engine."""
