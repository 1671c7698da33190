"""
Logging configuration for the farm device mapper.

Console output is plain text or JSON lines depending on the configured format;
an optional rotating file handler mirrors the console. Client libraries for the
document store, AWS and HTTP are kept at WARNING so run logs stay readable.
"""

import functools
import json
import logging
import logging.handlers
import os
import sys
import time
from pathlib import Path
from typing import Optional

from ..exceptions import MapperConfigurationError

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RESERVED_RECORD_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage',
    'taskName', 'message', 'asctime',
])

_NOISY_LOGGERS = ("pymongo", "botocore", "boto3", "urllib3", "requests")

LOG_FORMATS = ("standard", "json")
STANDARD_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JSONFormatter(logging.Formatter):
    """One JSON object per line, including any ``extra`` fields of the record."""
    
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }
        
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        
        log_entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        )
        
        return json.dumps(log_entry, default=str)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JSONFormatter(datefmt='%Y-%m-%d %H:%M:%S')
    return logging.Formatter(STANDARD_FORMAT)


def setup_logging(environment: str = "development",
                  log_level: str = "INFO",
                  log_dir: Optional[str] = None,
                  log_format: Optional[str] = None) -> None:
    """
    Configure the root logger for a run.
    
    Args:
        environment: Environment name, used in the log file name
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR)
        log_dir: Directory for the rotating log file (optional)
        log_format: "standard" or "json"; defaults to json in production
    """
    if log_format is None:
        log_format = "json" if environment == "production" else "standard"
    if log_format not in LOG_FORMATS:
        raise MapperConfigurationError(
            f"Unknown log format '{log_format}', expected one of {LOG_FORMATS}",
            {"environment": environment}
        )
    
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper()))
    
    # Handlers from an earlier call (warm function containers) are replaced
    root.handlers = []
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_build_formatter(log_format))
    root.addHandler(console_handler)
    
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, f"farm_device_mapper_{environment}.log"),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(_build_formatter(log_format))
        root.addHandler(file_handler)
    
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(config_loader, environment: str, log_dir: Optional[str] = None) -> None:
    """
    Configure logging from the environment's ``logging`` section.
    
    Raises:
        MapperConfigurationError: If the configuration or its logging section is missing
    """
    logging_config = config_loader.get_section(environment, 'logging')
    setup_logging(
        environment=environment,
        log_level=logging_config.get('level', 'INFO'),
        log_dir=log_dir,
        log_format=logging_config.get('format'),
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(func):
    """Log start, duration and failure of the wrapped call at the callee's logger."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.time()
        
        logger.info(f"Starting {func.__name__}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Failed {func.__name__} after {time.time() - start_time:.3f}s: {e}")
            raise
        logger.info(f"Completed {func.__name__} in {time.time() - start_time:.3f}s")
        return result
    
    return wrapper
