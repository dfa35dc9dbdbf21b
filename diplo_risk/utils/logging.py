"""
Logging setup for the diplomatic risk dashboard.

``configure_logging(config)`` is called once by each CLI command.  Library
modules only ever do ``logger = logging.getLogger(__name__)``.

Every record passing through the configured handlers carries a ``run_slug``
attribute.  Inside ``bind_run(slug)`` it is the orchestrator's run id, so the
interleaved lines of concurrent country fetches can be told apart; outside a
run it is ``"-"``.  The binding lives in a ``ContextVar`` and is therefore
inherited by the asyncio tasks spawned during the run.

Text lines look like::

    2025-03-31T09:12:44Z [WARNING] diplo_risk.pipeline.orchestrator [3f2c…]: news fetch failed ...

With ``json_format = true`` each line is one JSON object::

    {"ts": "...", "level": "WARNING", "logger": "...", "run_slug": "...", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diplo_risk.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(run_slug)s]: %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Loggers that are too chatty at INFO for a dashboard run
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")

_current_run: ContextVar[str] = ContextVar("diplo_risk_run_slug", default="-")

_BUILTIN_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "run_slug"}


@contextmanager
def bind_run(run_slug: str) -> Iterator[None]:
    """Tag log records emitted inside the block with ``run_slug``."""
    token = _current_run.set(run_slug)
    try:
        yield
    finally:
        _current_run.reset(token)


class RunSlugFilter(logging.Filter):
    """Copies the bound run slug onto each record that lacks one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_slug"):
            record.run_slug = _current_run.get()
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields are copied to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": stamp.strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "run_slug": getattr(record, "run_slug", _current_run.get()),
            "msg": record.getMessage(),
        }
        payload.update(
            (name, value)
            for name, value in vars(record).items()
            if name not in _BUILTIN_RECORD_FIELDS and not name.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(RunSlugFilter())
    return handler


def configure_logging(config: "LoggingConfig") -> None:
    """Install stderr (and optionally file) handlers on the root logger.

    stderr keeps stdout free for the console dashboard.  Calling this again
    replaces the previous handlers.

    Args:
        config: ``AppConfig.logging``.
    """
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.INFO

    formatter = (
        _JsonFormatter()
        if config.json_format
        else logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)
    )

    handlers = [_handler(logging.StreamHandler(sys.stderr), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(log_path, encoding="utf-8"), level, formatter))

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
