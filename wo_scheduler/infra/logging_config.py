# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from wo_scheduler.infra.path import default_log_path
from wo_scheduler.infra.settings import SchedulerSettings, load_settings


def setup_logging(settings: SchedulerSettings | None = None, log_file: Path | None = None) -> Path:
    """
    Configure application logging.
    Logs go to the per-user data directory; returns the log file path.
    """
    settings = settings or load_settings()
    log_file = Path(log_file) if log_file is not None else default_log_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Clear any existing handlers (setup may run more than once per process)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # File handler (rotating)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    return log_file
