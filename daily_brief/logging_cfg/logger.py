import logging
import os
import sys
import threading
from concurrent_log_handler import ConcurrentRotatingFileHandler
from datetime import datetime
from typing import Any, Dict
from dateutil import tz as dateutil_tz
from dotenv import load_dotenv

# Handlers are built at import time, so .env has to be loaded first
load_dotenv()

# Log timestamps and file names follow the brief's delivery timezone
DEFAULT_TZ = dateutil_tz.gettz(os.getenv('BRIEF_TIMEZONE', 'America/Los_Angeles')) or dateutil_tz.UTC

_metrics_lock = threading.Lock()


def _empty_metrics() -> Dict[str, Any]:
    return {
        'sources_checked': 0,
        'successful_sources': 0,
        'failed_sources': [],
        'empty_sources': [],
        'total_items': 0,
        'processing_time': 0,
    }


FETCH_METRICS = _empty_metrics()


def update_metrics(metric_name: str, value: Any) -> None:
    """Update the metrics dictionary with a new value."""
    with _metrics_lock:
        if isinstance(value, (int, float)):
            if metric_name not in FETCH_METRICS:
                FETCH_METRICS[metric_name] = 0
            FETCH_METRICS[metric_name] += value
        elif isinstance(value, (list, set, tuple)):
            if metric_name not in FETCH_METRICS:
                FETCH_METRICS[metric_name] = []
            FETCH_METRICS[metric_name].extend(value)
        else:
            FETCH_METRICS[metric_name] = value


def reset_metrics() -> None:
    """Reset all metrics to their default values."""
    with _metrics_lock:
        FETCH_METRICS.clear()
        FETCH_METRICS.update(_empty_metrics())


def print_metrics_summary() -> str:
    """Summary of the source metrics from the current run."""
    stats = []
    stats.append("Daily Brief Generation Summary:")
    stats.append(f"|- Sources checked: {FETCH_METRICS['sources_checked']}")
    stats.append(f"|- Successful sources: {FETCH_METRICS['successful_sources']}")
    stats.append(f"|- Feed items collected: {FETCH_METRICS['total_items']}")
    stats.append(f"|- Processing time: {FETCH_METRICS['processing_time']:.2f}s")

    if FETCH_METRICS['failed_sources']:
        stats.append(f"Failed sources ({len(FETCH_METRICS['failed_sources'])}):")
        for source in FETCH_METRICS['failed_sources'][:5]:
            stats.append(f"|- {source}")
    if FETCH_METRICS['empty_sources']:
        stats.append(f"Empty sources: {', '.join(FETCH_METRICS['empty_sources'])}")

    return "\n".join(stats)


class TimeZoneFormatter(logging.Formatter):
    """Formatter that renders record times in the brief timezone."""

    def converter(self, timestamp):
        dt = datetime.fromtimestamp(timestamp, dateutil_tz.UTC)
        return dt.astimezone(DEFAULT_TZ)

    def formatTime(self, record, datefmt=None):
        dt = self.converter(record.created)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.strftime('%Y-%m-%d %H:%M:%S,%f %Z')[:-3]


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _parse_level(level):
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _create_file_handler(log_dir, formatter):
    os.makedirs(log_dir, exist_ok=True)
    today = datetime.now(DEFAULT_TZ).strftime('%Y%m%d')
    log_filename = os.path.join(log_dir, f'brief_{today}.log')

    # Uvicorn workers may share the same log file
    file_handler = ConcurrentRotatingFileHandler(
        log_filename,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    return file_handler


def setup_logger(name='daily_brief', level=None, log_dir=None):
    """
    Set up and configure the logger with both console and file handlers.

    Args:
        name (str): Logger name
        level (str): Log level (DEBUG, INFO, WARNING, ERROR)
        log_dir (str): Directory for rotating log files, defaults to $LOG_DIR or ./logs

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers if logger was already set up
    if logger.handlers:
        return logger

    logger.setLevel(_parse_level(level or os.getenv('LOG_LEVEL', 'INFO')))

    formatter = TimeZoneFormatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.addHandler(_create_file_handler(log_dir or os.getenv('LOG_DIR', 'logs'), formatter))

    return logger


def configure_logging(level, log_dir, name='daily_brief'):
    """
    Apply runtime settings to an already created logger.

    Loggers are set up on import, before settings exist. This moves the file
    handler to log_dir when it points somewhere else and updates the level.

    Returns:
        logging.Logger: The reconfigured logger
    """
    logger = setup_logger(name)
    logger.setLevel(_parse_level(level))

    target_dir = os.path.abspath(log_dir)
    for handler in list(logger.handlers):
        if isinstance(handler, ConcurrentRotatingFileHandler):
            if os.path.dirname(os.path.abspath(handler.baseFilename)) == target_dir:
                return logger
            logger.removeHandler(handler)
            handler.close()

    logger.addHandler(_create_file_handler(log_dir, TimeZoneFormatter(LOG_FORMAT)))
    return logger
