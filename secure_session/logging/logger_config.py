"""
Logging Configuration
Structured session logs with secret and session id redaction
"""
import json
import logging
import logging.handlers
import re
from datetime import datetime
from typing import Dict, List, Optional

REDACTED = '[REDACTED]'


class SensitiveDataFilter(logging.Filter):
    """
    Redact secrets before a record reaches any handler

    Two kinds of patterns are applied, both keeping group 1 and replacing
    the value:

    - JSON fields, e.g. ``"password": "..."`` from decoded session payloads
    - ``KEY=value`` assignments, e.g. a ``SESSION_SECRET=...`` line echoed
      from .env
    """

    FIELD_PATTERNS = {
        'password': r'("password"\s*:\s*)"[^"]*"',
        'secret': r'("secret"\s*:\s*)"[^"]*"',
        'secret_key': r'("secret_key"\s*:\s*)"[^"]*"',
        'app_secret': r'("app_secret"\s*:\s*)"[^"]*"',
        'token': r'("token"\s*:\s*)"[^"]*"',
        'session_id': r'("session_id"\s*:\s*)"[^"]*"',
    }

    ASSIGNMENT_PATTERNS = {
        'session_secret_env': r'(SESSION_SECRET\s*=\s*)\S+',
        'secret_assignment': r'(secret\s*=\s*)\S+',
        'password_assignment': r'(password\s*=\s*)\S+',
    }

    def __init__(self, additional_patterns: Optional[Dict[str, str]] = None):
        """
        Args:
            additional_patterns: Extra JSON field patterns (name: regex with
                the kept prefix in group 1)
        """
        super().__init__()
        fields = dict(self.FIELD_PATTERNS, **(additional_patterns or {}))
        self._fields = [re.compile(p, re.IGNORECASE) for p in fields.values()]
        self._assignments = [re.compile(p, re.IGNORECASE) for p in self.ASSIGNMENT_PATTERNS.values()]

    def redact(self, text: str) -> str:
        for pattern in self._fields:
            text = pattern.sub(rf'\1"{REDACTED}"', text)
        for pattern in self._assignments:
            text = pattern.sub(rf'\1{REDACTED}', text)
        return text

    def _redact_value(self, value):
        return self.redact(value) if isinstance(value, str) else value

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite msg and string args in place; never drops a record"""
        if isinstance(record.msg, str):
            record.msg = self.redact(record.msg)

        if isinstance(record.args, dict):
            record.args = {k: self._redact_value(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._redact_value(arg) for arg in record.args)

        return True


def mask_session_id(session_id: Optional[str]) -> str:
    """
    Shorten a session id for log output

    Only the first 8 characters are kept, enough to correlate log lines
    without making the id replayable.
    """
    if not session_id:
        return '<none>'
    return f"{session_id[:8]}..."


class JSONFormatter(logging.Formatter):
    """One JSON object per line; ``extra={...}`` keys are merged in"""

    # LogRecord attributes that are never copied as extras
    RESERVED_ATTRS = frozenset([
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
        'getMessage', 'message', 'taskName',
    ])

    def __init__(self, include_fields: Optional[List[str]] = None):
        super().__init__()
        self.include_fields = include_fields or []

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = record.stack_info

        for field in self.include_fields:
            if hasattr(record, field):
                entry[field] = getattr(record, field)

        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in self.RESERVED_ATTRS
        )

        return json.dumps(entry, default=str)


class LoggerConfig:
    """Handler setup for the secure_session logger tree"""

    ENVIRONMENT_LEVELS = {
        'production': logging.WARNING,
        'staging': logging.INFO,
        'development': logging.DEBUG,
        'testing': logging.ERROR,
    }

    @staticmethod
    def setup_logger(
        name: str = 'secure_session',
        format_type: str = 'json',
        max_bytes: int = None,
        backup_count: int = None,
        filter_sensitive: bool = True,
        additional_sensitive_patterns: Optional[Dict[str, str]] = None,
        file_name: Optional[str] = None
    ) -> logging.Logger:
        """
        Attach a rotating file handler under storage/logs/

        The level follows ``app.APP_ENV``; ``app.APP_DEBUG`` adds a console
        handler. Both handlers share the redaction filter.

        Args:
            name: Logger name (configure 'secure_session' to cover every module)
            format_type: 'json' or 'text'
            max_bytes: Rotation size (default: DEFAULT_LOG_MAX_BYTES)
            backup_count: Rotated files kept (default: DEFAULT_LOG_BACKUP_COUNT)
            filter_sensitive: Attach SensitiveDataFilter
            additional_sensitive_patterns: Extra JSON field patterns
            file_name: Log file stem (default: the logger name)

        Example:
            LoggerConfig.setup_logger('secure_session', file_name='sessions')
        """
        from secure_session.defaults import DEFAULT_LOG_MAX_BYTES, DEFAULT_LOG_BACKUP_COUNT
        from secure_session.support import Config, Storage

        logger = logging.getLogger(name)
        logger.setLevel(LoggerConfig.get_level_by_environment(Config.get('app.APP_ENV', 'local')))
        logger.handlers.clear()

        if format_type == 'json':
            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        log_file = Storage.logs(f"{file_name or name}.log")
        Storage.ensure_directory(log_file.parent)
        handlers = [
            logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes if max_bytes is not None else DEFAULT_LOG_MAX_BYTES,
                backupCount=backup_count if backup_count is not None else DEFAULT_LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
        ]
        if Config.get('app.APP_DEBUG', False):
            handlers.append(logging.StreamHandler())

        redaction = SensitiveDataFilter(additional_sensitive_patterns) if filter_sensitive else None
        for handler in handlers:
            handler.setFormatter(formatter)
            if redaction is not None:
                handler.addFilter(redaction)
            logger.addHandler(handler)

        # Records stop here so a host root handler doesn't log them twice
        logger.propagate = False
        return logger

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """Unknown environments log at INFO"""
        return LoggerConfig.ENVIRONMENT_LEVELS.get(environment.lower(), logging.INFO)
