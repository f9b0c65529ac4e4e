"""Tailwind Cleaner - rewrite arbitrary-value classes to named design tokens."""

__version__ = "1.0.0"

from .config import CleanerConfig, load_config
from .pipeline import CleanerPipeline, RunResult, RunStage
from .session import CleanerSession, RunStats

__all__ = [
    "CleanerConfig",
    "CleanerPipeline",
    "CleanerSession",
    "RunResult",
    "RunStage",
    "RunStats",
    "load_config",
]
