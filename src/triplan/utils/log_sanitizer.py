"""Log sanitization filter to keep intervals.icu credentials out of logs.

The intervals.icu API authenticates with HTTP Basic auth (username
``API_KEY``, password = the athlete's key), so a stray ``repr`` of a
request or settings object can leak the key. This filter redacts:
- Basic and Bearer authorization headers
- ``api_key=...`` style fields
- Any secret value explicitly registered at startup (the configured key)

Usage:
    from triplan.utils.log_sanitizer import configure_logging

    configure_logging("INFO", secrets=[settings.intervals_icu_api_key])
"""

import logging
import re
from typing import Any, Iterable, Optional


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts credentials from log messages."""

    # Order matters - header patterns come before the generic field patterns
    PATTERNS: list[tuple[re.Pattern, str]] = [
        (re.compile(r'Basic\s+[A-Za-z0-9+/=]+', re.IGNORECASE), 'Basic [REDACTED]'),
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),
        (re.compile(r'(Authorization["\']?\s*[:=]\s*["\']?)(?!Basic|Bearer)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(api_key["\']?\s*[:=]\s*["\']?)[^"\'&\s,)]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(apikey["\']?\s*[:=]\s*["\']?)[^"\'&\s,)]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)[^"\'&\s,)]+', re.IGNORECASE), r'\1[REDACTED]'),
    ]

    def __init__(self, secrets: Optional[Iterable[str]] = None) -> None:
        super().__init__()
        self._secrets = [s for s in (secrets or []) if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = self._sanitize(str(record.msg))
        if record.args:
            record.args = self._sanitize_args(record.args)
        return True

    def _sanitize(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, '[REDACTED_API_KEY]')
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        """Recursively sanitize log arguments.

        Non-string values are only replaced when their string form
        actually changed, so numeric ``%d`` args keep working.
        """
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        else:
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(
    logger_name: str | None = None,
    secrets: Optional[Iterable[str]] = None,
) -> LogSanitizationFilter:
    """Install the log sanitization filter.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.
        secrets: Literal secret values to redact wherever they appear.

    Returns:
        The installed filter.
    """
    sanitizer = LogSanitizationFilter(secrets)

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
    else:
        root_logger = logging.getLogger()
        root_logger.addFilter(sanitizer)
        for handler in root_logger.handlers:
            handler.addFilter(sanitizer)

    return sanitizer


def sanitize_string(text: str, secrets: Optional[Iterable[str]] = None) -> str:
    """Sanitize a string without going through the logging system."""
    return LogSanitizationFilter(secrets)._sanitize(text)


def configure_logging(level: str = "INFO", secrets: Optional[Iterable[str]] = None) -> None:
    """Configure root logging for the API server and CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    install_log_sanitizer(secrets=secrets)
