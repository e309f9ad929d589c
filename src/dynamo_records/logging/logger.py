import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

_INITIALIZED = False


def init_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB
    backup_count: int = 3,
) -> None:
    """Configure root logging once per process.

    Hosts such as Lambda usually have no writable disk, so the file handler is
    only attached when ``log_file`` is set.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(level=level, format=fmt, handlers=handlers)
    # botocore is chatty at DEBUG; keep it at WARNING unless asked otherwise.
    logging.getLogger("botocore").setLevel(max(level, logging.WARNING))
    _INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"dynamo_records.{name}")
