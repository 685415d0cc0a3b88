"""
Structured JSON logging for charlength

This module provides consistent structured logging for the rule loader,
the host registry and the CLI using python-json-logger.
"""
import logging
import os
import sys
import time

from pythonjsonlogger import jsonlogger

DEFAULT_LOGGER_NAME = "charlength"

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    Custom JSON formatter that adds additional context fields

    Adds: timestamp, level, logger_name, module and function
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        """
        Add custom fields to log record

        Args:
            log_record: Log record dictionary
            record: LogRecord object
            message_dict: Message dictionary
        """
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a logger

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL), default LOG_LEVEL
        format_type: "json" or "text", default LOG_FORMAT

    Returns:
        Configured logger instance
    """
    log_level_str = level or os.getenv("LOG_LEVEL", "WARNING")
    log_level = LOG_LEVELS.get(log_level_str.upper(), logging.WARNING)
    format_type = format_type or os.getenv("LOG_FORMAT", "json")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if format_type == "json":
        formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        # Text format for local development
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance

    Loggers below the package logger ("charlength.core.rules.registry")
    inherit its handler; anything else is set up on first use.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name == DEFAULT_LOGGER_NAME or not name.startswith(f"{DEFAULT_LOGGER_NAME}."):
        logger = logging.getLogger(name)
        if not logger.handlers:
            return setup_logger(name)
        return logger

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    if not root.handlers:
        setup_logger(DEFAULT_LOGGER_NAME)
    return logging.getLogger(name)


class log_operation:
    """
    Context manager for logging operation duration

    Usage:
        with log_operation("Loading rules", logger=logger, config_path="rules.yaml"):
            # do work
            pass
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        """
        Initialize operation logger

        Args:
            operation_name: Name of the operation
            logger: Logger instance (uses the package logger if None)
            **extra_fields: Additional fields to include in logs
        """
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time: float | None = None

    def __enter__(self):
        self.start_time = time.time()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields}
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.time() - self.start_time

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(duration, 3),
                    "status": "success",
                    **self.extra_fields
                }
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(duration, 3),
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **self.extra_fields
                },
            )
        return False  # Don't suppress exceptions
