"""
Logging setup with structlog

Every event carries the service name and version; events logged while a
dispatched operation runs also carry the operation name.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.types import EventDict, Processor


def add_severity_level(_logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """severity field for log collectors that ignore 'level'"""
    event_dict["severity"] = "WARNING" if method_name == "warn" else method_name.upper()
    return event_dict


def service_context(service: str, version: Optional[str] = None) -> Processor:
    """Processor stamping events with the service identity"""
    def add_service(_logger: Any, _method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        if version:
            event_dict.setdefault("version", version)
        return event_dict

    return add_service


def setup_logging(
    log_level: str = "INFO",
    is_debug: bool = False,
    service: str = "vision-text-recognition",
    version: Optional[str] = None
) -> None:
    """
    Configure structured logging

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        is_debug: Console output instead of JSON
        service: Service name added to every event
        version: Service version added to every event
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    # third-party libraries (uvicorn, easyocr, paddle) log through stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        add_severity_level,
        service_context(service, version),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    # console output while debugging, JSON in production
    if is_debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


@contextmanager
def operation_context(operation: str) -> Iterator[None]:
    """Bind the operation name to every event logged inside the block"""
    with structlog.contextvars.bound_contextvars(operation=operation):
        yield


def get_logger(name: str) -> Any:
    """Get a logger for a module"""
    return structlog.get_logger(name)
