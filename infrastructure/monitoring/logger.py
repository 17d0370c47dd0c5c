import json
import logging
import sys
import traceback
from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from domain.models.currency import ParseReport


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Decimal):
            return str(o)
        if isinstance(o, Enum):
            return o.value
        return super().default(o)


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs structured JSON logs.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if hasattr(record, 'extra_data'):
            log_entry['data'] = record.extra_data

        return json.dumps(log_entry, ensure_ascii=False, cls=CustomJSONEncoder)


class AppLogger:
    """
    Centralized logging configuration for the application.
    """
    def __init__(self,
                 log_directory: str = "logs",
                 console_level: str = "INFO",
                 file_level: str = "DEBUG",
                 max_file_size: int = 10 * 1024 * 1024,
                 backup_count: int = 5):
        self.log_directory = Path(log_directory)
        self.console_level = getattr(logging, console_level.upper())
        self.file_level = getattr(logging, file_level.upper())
        self.max_file_size = max_file_size
        self.backup_count = backup_count

        self.log_directory.mkdir(parents=True, exist_ok=True)
        self._setup_logging()

    def _setup_logging(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.DEBUG)

        logging.getLogger("httpx").setLevel(logging.WARNING)

        self._setup_console_handler(root_logger)
        root_logger.addHandler(self._file_handler("system", "app.log", self.file_level))
        root_logger.addHandler(self._file_handler("errors", "errors.log", logging.WARNING))
        self._setup_api_log_handler()

    def _setup_console_handler(self, logger: logging.Logger) -> None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.console_level)
        console_format = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
        console_handler.setFormatter(logging.Formatter(console_format, datefmt='%H:%M:%S'))
        logger.addHandler(console_handler)

    def _file_handler(self, subdirectory: str, filename: str, level: int) -> RotatingFileHandler:
        log_dir = self.log_directory / subdirectory
        log_dir.mkdir(exist_ok=True)

        handler = RotatingFileHandler(
            log_dir / filename,
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        handler.setLevel(level)
        handler.setFormatter(JSONFormatter())
        return handler

    def _setup_api_log_handler(self) -> None:
        api_logger = logging.getLogger('wallet.api')
        api_logger.handlers.clear()
        api_logger.propagate = False
        api_logger.addHandler(self._file_handler("api", "api_calls.log", logging.DEBUG))

        # Also add console handler for immediate feedback
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.console_level)
        console_format = '%(asctime)s | API | %(levelname)-8s | %(message)s'
        console_handler.setFormatter(logging.Formatter(console_format, datefmt='%H:%M:%S'))
        api_logger.addHandler(console_handler)


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EventType(Enum):
    API_CALL = "api_call"
    FEED_PARSE = "feed_parse"
    ENTRY_SKIPPED = "entry_skipped"


@dataclass
class LogEvent:
    event_type: EventType
    level: LogLevel
    message: str
    timestamp: datetime
    duration_ms: float | None = None
    api_context: dict[str, Any] | None = None
    feed_context: dict[str, Any] | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        data['event_type'] = self.event_type.value
        data['level'] = self.level.value
        return data


class ProductionLogger:
    def __init__(self):
        self.system_logger = logging.getLogger('wallet')
        self.api_logger = logging.getLogger('wallet.api')

    def log_event(self, event: LogEvent):
        logger = self.api_logger if event.event_type is EventType.API_CALL else self.system_logger

        extra = {"extra_data": event.to_dict()}

        level_map = {
            LogLevel.DEBUG: logger.debug,
            LogLevel.INFO: logger.info,
            LogLevel.WARNING: logger.warning,
            LogLevel.ERROR: logger.error,
            LogLevel.CRITICAL: logger.critical,
        }

        log_func = level_map.get(event.level, logger.info)
        log_func(event.message, extra=extra)

    def log_api_call(self, provider_name: str, url: str, success: bool, response_time_ms: float,
                     error_message: str | None = None):
        event = LogEvent(
            event_type=EventType.API_CALL,
            level=LogLevel.INFO if success else LogLevel.ERROR,
            message=f"API call to {provider_name}: {'SUCCESS' if success else 'FAILED'}",
            timestamp=datetime.now(),
            duration_ms=response_time_ms,
            api_context={
                "provider": provider_name,
                "url": url,
                "success": success,
                "response_time_ms": response_time_ms,
            },
            error_context={"error_message": error_message} if error_message else None
        )
        self.log_event(event)

    def log_feed_parse(self, report: ParseReport, duration_ms: float):
        counts = {reason.value: count for reason, count in report.skip_counts().items()}
        event = LogEvent(
            event_type=EventType.FEED_PARSE,
            level=LogLevel.INFO if report.entries else LogLevel.WARNING,
            message=f"Parsed {report.source or 'feed'}: {len(report.entries)} rates, {len(report.skipped)} skipped",
            timestamp=datetime.now(),
            duration_ms=duration_ms,
            feed_context={
                "source": report.source,
                "rates": len(report.entries),
                "skipped": len(report.skipped),
                "skip_counts": counts,
            }
        )
        self.log_event(event)

    def log_entry_skipped(self, source: str, currency_code: str, reason: str, detail: str):
        event = LogEvent(
            event_type=EventType.ENTRY_SKIPPED,
            level=LogLevel.DEBUG,
            message=f"Skipped {source} entry {currency_code}: {reason}",
            timestamp=datetime.now(),
            feed_context={
                "source": source,
                "currency_code": currency_code,
                "reason": reason,
                "detail": detail,
            }
        )
        self.log_event(event)


# Global logger instance
production_logger: ProductionLogger | None = None


def configure_logging(log_directory: str = "logs", console_level: str = "INFO") -> AppLogger:
    return AppLogger(log_directory=log_directory, console_level=console_level)


def get_production_logger() -> ProductionLogger:
    global production_logger
    if production_logger is None:
        production_logger = ProductionLogger()
    return production_logger
