"""Source file discovery."""

import os
from pathlib import Path

from .cleaner_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.SCAN)


def find_files(
    root: Path,
    extensions: list[str],
    exclude_dirs: list[str],
    skip: set[Path] | None = None,
) -> list[Path]:
    """List files under ``root`` with a matching extension.

    Excluded directory names are pruned at any depth. Unreadable
    directories are logged and skipped.

    Args:
        root: Scan root.
        extensions: Dotted extensions, e.g. ``[".tsx", ".html"]``.
        exclude_dirs: Directory names never descended into.
        skip: Resolved paths to leave out (the Tailwind config itself).

    Returns:
        Matching files in sorted order.
    """
    wanted = {ext.lower() for ext in extensions}
    excluded = set(exclude_dirs)
    skipped = {path.resolve() for path in skip or ()}

    def on_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.suffix.lower() not in wanted or path.resolve() in skipped:
                continue
            files.append(path)

    files.sort()
    logger.debug(f"Found {len(files)} candidate files under {root}")
    return files
