import logging
import sys
from collections import deque
from typing import Deque, List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Handlers added by setup_logging, removed again on the next call
_installed_handlers: List[logging.Handler] = []


class LogBuffer:
    """Keeps the last `maxlen` formatted log entries in memory"""

    def __init__(self, maxlen: int = 2000):
        self.entries: Deque[dict] = deque(maxlen=maxlen)

    def add_log(self, message: str, level: str = "INFO"):
        self.entries.append({
            "message": message,
            "level": level,
        })

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [e["message"] for e in self.entries if level is None or e["level"] == level]

    def clear(self):
        self.entries.clear()


class BufferedLogHandler(logging.Handler):
    """Logging handler that pushes records into a LogBuffer"""

    def __init__(self, buffer: LogBuffer, level: int = logging.NOTSET):
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record):
        try:
            msg = self.format(record)
            self.buffer.add_log(msg, record.levelname)
        except Exception:
            self.handleError(record)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None, buffer: Optional[LogBuffer] = None) -> None:
    """
    Configure the `mythx_client` logger for applications and scripts.

    The library itself never calls this; it only logs through
    logging.getLogger(__name__).
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))
    if buffer is not None:
        handlers.append(BufferedLogHandler(buffer))

    package_logger = logging.getLogger("mythx_client")
    package_logger.setLevel(level)

    for old in _installed_handlers:
        package_logger.removeHandler(old)
        old.close()
    _installed_handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        _installed_handlers.append(handler)
