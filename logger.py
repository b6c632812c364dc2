"""Logging setup for the converter: colored console output, optional log file, batch progress."""

import logging
import logging.handlers
import time
from typing import Any, Dict, Optional

import colorlog

LOGGER_NAME = 'google_docs_markdown'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# -v shows INFO, -vv shows DEBUG
VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ``google_docs_markdown`` logger tree.

    Handlers are replaced on every call, so the CLI can first set up logging
    from its flags and then again once the config file's ``logging`` section
    is known.

    Args:
        verbosity: Count of -v flags (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Optional path of a rotating log file
        level: Explicit level name, overrides verbosity

    Returns:
        The package logger

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    if level:
        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Invalid log level '{level}'")
    else:
        log_level = VERBOSITY_LEVELS[min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)]

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + LOG_FORMAT,
        datefmt=DATE_FORMAT,
        log_colors=LOG_COLORS
    ))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        except OSError as e:
            logger.warning(f"Cannot write log file {log_file}: {e}")
        else:
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)
            logger.info(f"Logging to file: {log_file}")

    return logger


class ProgressTracker:
    """
    Counts exported documents and logs a summary line when the batch ends.

    Example:
        >>> with ProgressTracker(total_items=len(docs)) as tracker:
        ...     for doc in docs:
        ...         tracker.increment(success=write(doc))
    """

    LOG_EVERY = 10

    def __init__(self, total_items: int, item_type: str = "documents"):
        self.total_items = total_items
        self.item_type = item_type
        self.successful_items = 0
        self.failed_items = 0
        self.start_time: Optional[float] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    @property
    def processed_items(self) -> int:
        return self.successful_items + self.failed_items

    def __enter__(self) -> 'ProgressTracker':
        self.start_time = time.time()
        self.logger.info(f"Processing {self.total_items} {self.item_type}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - (self.start_time or time.time())
        summary = (
            f"{self.item_type.capitalize()}: {self.successful_items}/{self.total_items} succeeded, "
            f"{self.failed_items} failed in {self._format_elapsed(elapsed)}"
        )

        if self.failed_items:
            self.logger.warning(summary)
        else:
            self.logger.info(summary)

    def increment(self, success: bool = True) -> None:
        if success:
            self.successful_items += 1
        else:
            self.failed_items += 1

        if self.processed_items % self.LOG_EVERY == 0:
            self.logger.info(f"Processed {self.processed_items}/{self.total_items} {self.item_type}")

    @staticmethod
    def _format_elapsed(seconds: float) -> str:
        if seconds < 60:
            return f"{seconds:.1f}s"
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"


def log_section(title: str) -> None:
    """Log a section header."""
    logger = logging.getLogger(LOGGER_NAME)

    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {title.upper()}")
    logger.info(separator)


def log_config(config: Dict[str, Any]) -> None:
    """Log the effective, validated configuration."""
    logger = logging.getLogger(LOGGER_NAME)
    log_section("Configuration")

    conversion = config.get('conversion') or {}
    logger.info(f"Demote Headings: {conversion.get('demote_headings', False)}")
    logger.info(f"Indented Blockquotes: {conversion.get('indented_blockquotes', False)}")
    logger.info(f"Cross-link Paths: {len(conversion.get('crosslinks_paths') or {})}")
    logger.info(f"Code Fonts: {conversion.get('code_fonts', ['Consolas'])}")

    metadata = config.get('metadata') or {}
    logger.info(f"Default Fields: {sorted((metadata.get('fields_default') or {}).keys())}")
    logger.info(f"Field Mapping: {metadata.get('fields_mapper') or {}}")

    export_settings = config.get('export') or {}
    logger.info(f"Output Directory: {export_settings.get('output_directory') or 'stdout'}")


__all__ = [
    'LOGGER_NAME',
    'setup_logging',
    'ProgressTracker',
    'log_section',
    'log_config'
]
