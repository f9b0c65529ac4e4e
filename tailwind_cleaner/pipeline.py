"""Run orchestration for a cleanup pass.

Coordinates the complete run:
- Loading tailwind.config.js and seeding the session
- Preloading the color catalog
- Collecting colors for the batched nearest lookup
- Rewriting source files
- Merging new tokens back into the config
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .cleaner_logging import get_logger
from .cli.errors import ColorServiceUnavailableError, ConfigWriteError
from .color_service.client import ColorServiceClient, ColorServiceError
from .color_service.offline import OfflineColorNamer
from .config.models import CleanerConfig
from .naming.color_namer import ColorNamer
from .naming.dimension_namer import DimensionNamer
from .replacement.engine import ReplacementEngine
from .scanner import find_files
from .session import CleanerSession, RunStats
from .tailwind_config.loader import LoadedConfig, load_tailwind_config
from .tailwind_config.merge import ConfigMergeError, TailwindConfigMerger
from .tokens import DiscoveredValue

logger = get_logger()


class RunStage(Enum):
    """Stages of a run, in order."""

    INIT = "init"
    LOAD_CONFIG = "load_config"
    FETCH_COLOR_CATALOG = "fetch_color_catalog"
    ENUMERATE_FILES = "enumerate_files"
    COLLECT_UNKNOWN_VALUES = "collect_unknown_values"
    RESOLVE_UNKNOWN_VALUES = "resolve_unknown_values"
    REWRITE_FILES = "rewrite_files"
    MERGE_CONFIG = "merge_config"
    REPORT = "report"
    DONE = "done"


@dataclass
class RunResult:
    """Complete result of a cleanup run."""

    stats: RunStats
    config_path: Path
    stage: RunStage = RunStage.INIT
    dry_run: bool = False
    config_updated: bool = False
    merge_mode: str | None = None
    merge_strategies: list[str] = field(default_factory=list)
    tokens_written: int = 0
    config_text: str | None = None
    discovered: list[DiscoveredValue] = field(default_factory=list)
    modified_files: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def has_errors(self) -> bool:
        """Check if the run recorded any non-fatal errors."""
        return len(self.errors) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "stats": self.stats.to_dict(),
            "config_path": str(self.config_path),
            "stage": self.stage.value,
            "dry_run": self.dry_run,
            "config_updated": self.config_updated,
            "merge_mode": self.merge_mode,
            "merge_strategies": self.merge_strategies,
            "tokens_written": self.tokens_written,
            "discovered": [item.to_dict() for item in self.discovered],
            "modified_files": [str(path) for path in self.modified_files],
            "errors": self.errors,
            "execution_time_ms": self.execution_time_ms,
        }


class CleanerPipeline:
    """Runs one cleanup pass over a project.

    Example:
        >>> pipeline = CleanerPipeline(Path("."), load_config(Path(".")))
        >>> result = pipeline.run()
        >>> result.stats.replacements
        12
    """

    def __init__(
        self,
        project_path: Path | str,
        config: CleanerConfig | None = None,
        client: ColorServiceClient | None = None,
        offline: OfflineColorNamer | None = None,
    ):
        """Initialize the pipeline.

        Args:
            project_path: Scan root.
            config: Run settings (defaults if omitted).
            client: Color service client; one is created from the settings
                when colors are handled and the service is enabled.
            offline: Offline namer, created lazily when needed.
        """
        self.project_path = Path(project_path)
        self.config = config or CleanerConfig()
        self._client = client
        self._offline = offline
        self.stage = RunStage.INIT

    @property
    def config_path(self) -> Path:
        return self.project_path / self.config.tailwind_config

    def _enter(self, stage: RunStage) -> None:
        self.stage = stage
        logger.debug(f"Stage: {stage.value}", extra={"stage": stage.value})

    def _make_client(self) -> tuple[ColorServiceClient | None, bool]:
        """Return (client, owned); owned clients are closed after the run."""
        if not (self.config.handle_colors and self.config.use_color_api):
            return None, False
        if self._client is not None:
            return self._client, False
        client = ColorServiceClient(
            base_url=self.config.color_api_url,
            timeout=self.config.color_api_timeout,
        )
        return client, True

    def _service_error(self, error: ColorServiceError) -> ColorServiceUnavailableError:
        return ColorServiceUnavailableError(
            url=self.config.color_api_url,
            original_error=str(error),
            stage=self.stage.value,
        )

    def run(self) -> RunResult:
        """Execute the run.

        Returns:
            RunResult with statistics, discovered tokens and any
            non-fatal errors.

        Raises:
            ColorServiceUnavailableError: If the catalog cannot be fetched,
                or a nearest lookup fails with the offline fallback off.
        """
        start_time = time.time()
        self._enter(RunStage.LOAD_CONFIG)
        loaded = load_tailwind_config(self.config_path)
        class_prefix = self.config.class_prefix or loaded.class_prefix

        session = CleanerSession(self.config, loaded.tokens)
        result = RunResult(
            stats=session.stats,
            config_path=self.config_path,
            dry_run=self.config.dry_run,
        )

        client, owned = self._make_client()
        try:
            color_namer = ColorNamer(session, client=client, offline=self._offline)
            engine = ReplacementEngine(
                session,
                color_namer=color_namer,
                dimension_namer=DimensionNamer(session),
                class_prefix=class_prefix,
            )

            self._enter(RunStage.FETCH_COLOR_CATALOG)
            if client is not None:
                try:
                    count = color_namer.preload_catalog()
                except ColorServiceError as e:
                    raise self._service_error(e) from e
                logger.info(f"Loaded {count} catalog colors")

            self._enter(RunStage.ENUMERATE_FILES)
            files = find_files(
                self.project_path,
                self.config.extensions,
                self.config.exclude_dirs,
                skip={self.config_path},
            )

            self._enter(RunStage.COLLECT_UNKNOWN_VALUES)
            colors: set[str] = set()
            if client is not None:
                for file_path in files:
                    colors |= engine.collect_file_colors(file_path)

            self._enter(RunStage.RESOLVE_UNKNOWN_VALUES)
            try:
                color_namer.resolve_nearest(colors)
            except ColorServiceError as e:
                raise self._service_error(e) from e

            self._enter(RunStage.REWRITE_FILES)
            for file_path in files:
                if engine.process_file(file_path):
                    result.modified_files.append(file_path)
        finally:
            if owned and client is not None:
                client.close()

        self._enter(RunStage.MERGE_CONFIG)
        self._merge_config(loaded, session, class_prefix, result)

        self._enter(RunStage.REPORT)
        result.discovered = list(session.discovered)
        result.execution_time_ms = (time.time() - start_time) * 1000

        self._enter(RunStage.DONE)
        result.stage = RunStage.DONE
        return result

    def _merge_config(
        self,
        loaded: LoadedConfig,
        session: CleanerSession,
        class_prefix: str | None,
        result: RunResult,
    ) -> None:
        """Merge new tokens into the config; failures are recorded, not raised."""
        if loaded.exists and not loaded.readable:
            error = ConfigWriteError(str(loaded.path), "the existing file could not be read")
            result.errors.append(error.message)
            logger.error(error.message)
            return

        merger = TailwindConfigMerger(write_mode=self.config.config_write_mode)
        try:
            merged = merger.merge(
                loaded.text,
                session.new_tokens(),
                known=loaded.tokens,
                class_prefix=class_prefix,
            )
        except ConfigMergeError as e:
            error = ConfigWriteError(str(loaded.path), str(e))
            result.errors.append(error.message)
            logger.error(error.message)
            return

        result.merge_mode = merged.mode
        result.merge_strategies = merged.strategies
        result.tokens_written = merged.tokens_written
        if not merged.changed:
            return
        result.config_text = merged.text

        if self.config.dry_run:
            logger.info(f"Dry run: {merged.tokens_written} tokens not written to {loaded.path}")
            return

        try:
            loaded.path.write_text(merged.text, encoding="utf-8")
        except OSError as e:
            error = ConfigWriteError(str(loaded.path), str(e))
            result.errors.append(error.message)
            logger.error(error.message)
            return
        result.config_updated = True
        logger.info(f"Wrote {merged.tokens_written} tokens to {loaded.path} ({merged.mode})")
