import logging
import logging.handlers

from smart_translate.paths import get_log_dir

# Console at INFO, files at DEBUG and INFO
log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
log_dir = get_log_dir()
debug_log_file = log_dir / "debug.log"
info_log_file = log_dir / "info.log"

root_logger = logging.getLogger()
root_logger.setLevel(logging.DEBUG)

QUIET_LOGGERS = ("urllib3", "urllib3.connectionpool", "requests")


class HttpConsoleFilter(logging.Filter):
    """Filter to silence HTTP client INFO/DEBUG chatter on the console."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name in QUIET_LOGGERS and record.levelno <= logging.INFO:
            return False
        return True


console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.addFilter(HttpConsoleFilter())
console_handler.setFormatter(logging.Formatter(log_format))

# Rotates daily at midnight, no backups (only current day)
debug_file_handler = logging.handlers.TimedRotatingFileHandler(
    debug_log_file, when="midnight", interval=1, backupCount=0
)
debug_file_handler.setLevel(logging.DEBUG)
debug_file_handler.setFormatter(logging.Formatter(log_format))

info_file_handler = logging.handlers.TimedRotatingFileHandler(
    info_log_file, when="midnight", interval=1, backupCount=0
)
info_file_handler.setLevel(logging.INFO)
info_file_handler.setFormatter(logging.Formatter(log_format))

root_logger.addHandler(console_handler)
root_logger.addHandler(debug_file_handler)
root_logger.addHandler(info_file_handler)
