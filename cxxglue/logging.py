import logging as _logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

_LOGGER_NAMESPACE = "cxxglue"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingState:
    console_level: int
    text_log_path: Optional[str]


_state: Optional[LoggingState] = None


def _parse_level(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    level = _logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise ValueError(f"Unknown log level: {value}")
    return level


class _MaxLevelFilter(_logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: _logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def get_logger(name: Optional[str] = None) -> _logging.Logger:
    if name is None:
        return _logging.getLogger(_LOGGER_NAMESPACE)
    if name.startswith(_LOGGER_NAMESPACE):
        return _logging.getLogger(name)
    return _logging.getLogger(f"{_LOGGER_NAMESPACE}.{name}")


def configure_logging(
    config: Dict[str, Any],
    *,
    console_level_override: Optional[str] = None,
    log_dir_override: Optional[str] = None,
    force_reconfigure: bool = False,
) -> LoggingState:
    """Install the console (and optional file) handlers on the package logger.

    Values come from the ``[logging]`` table of the configuration; the
    overrides are what the command line passes in. Records below ERROR go
    to stdout, the rest to stderr.
    """
    global _state

    logging_cfg: Dict[str, Any] = config.get("logging", {}) if config else {}
    console_level = _parse_level(console_level_override or logging_cfg.get("console_level"), _logging.INFO)
    file_level = _parse_level(logging_cfg.get("file_level"), _logging.DEBUG)
    log_dir = log_dir_override or logging_cfg.get("dir") or None

    logger = get_logger()
    if logger.handlers and not force_reconfigure and _state is not None:
        return _state

    logger.handlers.clear()
    logger.setLevel(min(console_level, file_level) if log_dir else console_level)
    logger.propagate = False
    formatter = _logging.Formatter(_DEFAULT_FORMAT, _DEFAULT_DATEFMT)

    stdout_handler = _logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(console_level)
    stdout_handler.addFilter(_MaxLevelFilter(_logging.ERROR - 1))
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    stderr_handler = _logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(max(console_level, _logging.ERROR))
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    text_log_path = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        text_log_path = os.path.join(os.path.abspath(log_dir), "cxxglue.log")
        file_handler = _logging.FileHandler(text_log_path, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _state = LoggingState(console_level=console_level, text_log_path=text_log_path)
    return _state
