import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - [%(name)s] - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str = "INFO", *, log_dir: Optional[Path] = None, to_file: bool = True) -> None:
    """Configure root logging once: console output plus a rotating file.

    The file rolls over at 5 MB and keeps five backups under ``logs/``.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if root.hasHandlers():
        root.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(stdout_handler)

    if to_file:
        log_dir = log_dir or Path("logs")
        log_dir.mkdir(exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "academic_records.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    _configured = True
    logging.getLogger(__name__).info("Logging configured (level=%s)", level)
