"""structlog setup for persistent-enum.

All events go through stdlib logging so that every configured output gets
its own handler, level and renderer (console or JSON). PersistentEnumError
values passed as ``error=`` are expanded into code/details fields.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from persistent_enum.core.errors import PersistentEnumError

if TYPE_CHECKING:
    from persistent_enum.config.models import LoggingConfig, LogOutputConfig

# First file output of the active configuration, shown in CLI error messages
_log_file_path: Path | None = None


def get_log_file_path() -> Path | None:
    return _log_file_path


def _level_number(name: str | None, fallback: int = logging.INFO) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


def expand_enum_errors(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace a PersistentEnumError under ``error`` with its structured fields."""
    error = event_dict.get("error")
    if isinstance(error, PersistentEnumError):
        payload = error.to_dict()
        event_dict["error"] = payload["error"]
        event_dict["error_code"] = payload["code"]
        event_dict["error_message"] = payload["message"]
        if payload["details"]:
            event_dict["error_details"] = payload["details"]
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        expand_enum_errors,
    ]


def _build_handler(
    output: LogOutputConfig, level: int, shared: list[structlog.types.Processor]
) -> logging.Handler:
    handler: logging.Handler
    if output.destination in ("stderr", "stdout"):
        stream = sys.stderr if output.destination == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)
        colors = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
        colors = False

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)

    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    )
    return handler


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog and the root logger.

    ``config`` wins over ``json_format``/``level``, which only describe a
    single stderr output.
    """
    global _log_file_path
    from persistent_enum.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created at import time
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    # SQL statement logging is governed by DatabaseConfig.echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _log_file_path = None
    for output in config.outputs:
        if output.destination not in ("stderr", "stdout") and _log_file_path is None:
            _log_file_path = Path(output.destination)
        root.addHandler(
            _build_handler(output, _level_number(output.level, root_level), shared)
        )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
