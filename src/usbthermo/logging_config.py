from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler

class ShortFormatter(logging.Formatter):
    """
    Formatter that exposes %(shortname)s = last component of logger name (e.g., AcquisitionSequencer)
    """
    def format(self, record: logging.LogRecord) -> str:
        record.shortname = record.name.rsplit('.', 1)[-1]
        return super().format(record)

def setup_logging(enabled: bool = True, level: str | int = "WARNING", log_file: str | None = None) -> None:
    """
    Configure root logging once. Format: timestamp level [logger.func] message
    Console output goes to stderr; stdout is reserved for readings.
    """
    # If already configured, do not duplicate handlers
    if getattr(setup_logging, "_configured", False):
        return

    if not enabled:
        logging.disable(logging.CRITICAL)
        setup_logging._configured = True
        return

    logging.disable(logging.NOTSET)
    lvl = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(lvl, int):
        lvl = logging.WARNING
    fmt = "%(asctime)s %(levelname)s [%(shortname)s.%(funcName)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = ShortFormatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []
    sh = logging.StreamHandler(stream=sys.stderr)
    sh.setFormatter(formatter)
    handlers.append(sh)

    file_error = None
    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            fh = RotatingFileHandler(log_file, maxBytes=512_000, backupCount=3)
            fh.setFormatter(formatter)
            handlers.append(fh)
        except OSError as e:
            # keep console logging when the file cannot be opened
            file_error = e

    logging.basicConfig(level=lvl, handlers=handlers, force=True)
    if file_error is not None:
        logging.getLogger(__name__).warning("log file %s unavailable: %s", log_file, file_error)
    setup_logging._configured = True

def resolve_logging_from_options(opts) -> tuple[bool, str, str | None]:
    """
    Determine enabled/level/file from parsed options.
      --log-level OFF disables logging entirely.
    """
    level = str(getattr(opts, "log_level", "WARNING") or "WARNING")
    enabled = level.upper() not in ("OFF", "NONE")
    return enabled, level, getattr(opts, "log_file", None)
