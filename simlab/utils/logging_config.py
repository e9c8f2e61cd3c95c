"""
Minimal structured logging configuration for simlab.

Provides:
- File logging for errors and warnings
- Console logging for critical errors only
- Automatic log rotation
"""
import logging
import logging.handlers
from pathlib import Path
from datetime import datetime


def setup_logging(
    log_dir: "str | Path | None" = None,
    app_name: str = "simlab",
) -> logging.Logger:
    """
    Setup structured logging with file output.

    Args:
        log_dir: Directory for log files (created if missing). When *None*
                 logs go to <cwd>/logs.
        app_name: Application name for logger

    Returns:
        Configured logger instance
    """
    log_path = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(app_name)
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # File handler: rotating log (max 5MB, keep 3 backups)
    log_file = log_path / f"{app_name}_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding='utf-8',
    )
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.CRITICAL)
    console_handler.setFormatter(logging.Formatter('CRITICAL: %(message)s'))
    logger.addHandler(console_handler)

    return logger

