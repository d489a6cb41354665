"""
Structured Logging with Analysis Correlation IDs.

Provides utilities for production-ready logging of engine invocations:
- Analysis ID correlation across log entries
- Structured JSON logging format
- Performance timing
"""
import json
import logging
import time
import uuid
import threading
from contextlib import contextmanager
from functools import wraps

from urge_analytics import settings

logger = logging.getLogger(__name__)

# Thread-local storage for analysis context
_analysis_context = threading.local()

_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'created', 'filename',
    'funcName', 'levelname', 'levelno', 'lineno',
    'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info',
    'thread', 'threadName', 'exc_info', 'exc_text',
    'message', 'taskName',
))


# ============================================================================
# ANALYSIS ID MANAGEMENT
# ============================================================================

def get_analysis_id() -> str:
    """Get current analysis ID or generate a new one."""
    return getattr(_analysis_context, 'analysis_id', None) or str(uuid.uuid4())[:8]


def set_analysis_id(analysis_id: str):
    """Set analysis ID in thread-local storage."""
    _analysis_context.analysis_id = analysis_id


def clear_analysis_context():
    """Clear all analysis context."""
    if hasattr(_analysis_context, 'analysis_id'):
        delattr(_analysis_context, 'analysis_id')


@contextmanager
def analysis_context(analysis_id: str = None):
    """
    Scope every log record inside the block to one analysis id.

    An id already set by the caller is reused unless one is passed in. The
    previous state is restored on exit.

    Usage:
        with analysis_context():
            AnalyticsFacade.calculate(habits, events)
    """
    previous = getattr(_analysis_context, 'analysis_id', None)
    set_analysis_id(analysis_id or previous or str(uuid.uuid4())[:8])
    try:
        yield get_analysis_id()
    finally:
        if previous is None:
            clear_analysis_context()
        else:
            set_analysis_id(previous)


def with_analysis_id(func):
    """Decorator form of analysis_context for engine entry points."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        with analysis_context():
            return func(*args, **kwargs)
    return wrapper


# ============================================================================
# STRUCTURED LOG FORMATTER
# ============================================================================

class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in format:
    {"timestamp": "...", "level": "DEBUG", "analysis_id": "abc123", "message": "..."}
    """

    def format(self, record):
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'analysis_id': get_analysis_id(),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, default=str)


def configure_logging(level: str = None, fmt: str = None) -> logging.Handler:
    """
    Attach a stream handler to the package logger.

    Defaults come from urge_analytics.settings. Calling it again replaces the
    handler it installed previously.
    """
    package_logger = logging.getLogger('urge_analytics')
    for handler in list(package_logger.handlers):
        if getattr(handler, '_urge_analytics_handler', False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._urge_analytics_handler = True
    if (fmt or settings.LOG_FORMAT) == 'json':
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))

    package_logger.addHandler(handler)
    package_logger.setLevel((level or settings.LOG_LEVEL).upper())
    return handler


# ============================================================================
# LOGGING UTILITIES
# ============================================================================

def log_with_context(level: str, message: str, **extra):
    """
    Log with current analysis context and extra fields.

    Usage:
        log_with_context('debug', 'Snapshot computed', event_count=42)
    """
    log_func = getattr(logger, level.lower(), logger.info)
    log_func(message, extra=extra)


# ============================================================================
# DECORATOR FOR FUNCTION LOGGING
# ============================================================================

def log_function_call(log_args: bool = False, log_result: bool = False):
    """
    Decorator to log function entry/exit with timing.

    Usage:
        @log_function_call(log_args=True)
        def my_function(arg1, arg2):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = f"{func.__module__}.{func.__qualname__}"

            if log_args:
                log_with_context('debug', f'Entering {func_name}',
                                 func_args=str(args)[:200], func_kwargs=str(kwargs)[:200])

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = (time.perf_counter() - start) * 1000
                log_with_context('error', f'Error in {func_name}: {e}',
                                 duration_ms=round(duration, 2),
                                 error_type=type(e).__name__)
                raise

            duration = (time.perf_counter() - start) * 1000
            if log_result:
                log_with_context('debug', f'Exited {func_name}',
                                 duration_ms=round(duration, 2),
                                 result=str(result)[:200])
            else:
                log_with_context('debug', f'Exited {func_name}',
                                 duration_ms=round(duration, 2))
            return result

        return wrapper
    return decorator
