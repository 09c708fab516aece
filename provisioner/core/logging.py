"""
Logging Setup.

structlog on top of stdlib logging, configured from
config/settings/logging.yaml. Console records go to stderr so stdout only
carries command output (tables, the id printed by `servers deploy`).
The optional file handler writes JSON lines.

Usage:
    setup_logging(level="DEBUG")
    logger = get_logger(__name__)
    log_with_source(logger, "cli", "info", "success", command="start")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import Processor

from provisioner.core.config import find_project_root, load_logging_settings
from provisioner.core.config_schema import FileHandlerSchema

# httpx logs every request at INFO, which APIClient already covers at DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _file_handler(settings: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    path = find_project_root() / settings.path
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments left as None take their value from logging.yaml.

    Raises:
        RuntimeError: Project root not found.
        FileNotFoundError: logging.yaml is missing.
        ValueError: logging.yaml fails validation, or level is unknown.
    """
    settings = load_logging_settings()
    level = level or settings.level
    format_type = format_type or settings.format
    if enable_console is None:
        enable_console = settings.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = settings.handlers.file.enabled

    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared,
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if enable_console:
        console = logging.StreamHandler(sys.stderr)
        if format_type == "console":
            console.setFormatter(structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
                foreign_pre_chain=shared,
            ))
        else:
            console.setFormatter(json_formatter)
        root.addHandler(console)

    if enable_file_logging:
        root.addHandler(_file_handler(settings.handlers.file, json_formatter))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log `message` at `level` with an explicit `source` field.

    Raises:
        AttributeError: If level is not a logger method.
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
