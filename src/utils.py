"""
Shared utilities for the ScoreSaber PP re-ranking report.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any

from src.config import LOG_LEVEL, SNAPSHOT_INDENT


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = LOG_LEVEL) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: LOG_LEVEL from config)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- File Operations ---
def atomic_write_json(data: Any, path: Path, indent: int = SNAPSHOT_INDENT) -> None:
    """
    Write a JSON document atomically using a temporary file.

    The previous file at ``path`` is replaced only once the new content
    has been fully encoded and flushed.

    Args:
        data: JSON-serialisable object to write
        path: Destination path for the JSON file
        indent: Indentation width (default: 2)

    Raises:
        OSError: If the file cannot be created or moved into place
        TypeError: If ``data`` is not JSON-serialisable
    """
    logger = setup_logging(__name__)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            delete=False,
            suffix='.json',
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp_path = Path(tmp.name)
            json.dump(data, tmp, indent=indent, ensure_ascii=False)
            tmp.write("\n")

        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Atomically wrote snapshot to {path}")

    except Exception:
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


__all__ = [
    # Logging
    'setup_logging',
    # File operations
    'atomic_write_json',
]
