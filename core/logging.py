"""structlog setup for the predictor.

Engine modules only log facts worth diagnosing later: calendar rows that were
dropped, attendance courses missing from the timetable, projections that came
back invalid. Each module takes its logger from get_logger(__name__) and logs
snake_case events with keyword context, e.g.

    log.warning("calendar_row_dropped", line=4, reason="bad_date")
"""

import logging
import sys

import structlog


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Route predictor events to stdout.

    Args:
        json_output: Render one JSON object per event instead of console lines.
        log_level: Lowest level that is emitted; unknown names mean INFO.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # pandas and pydantic warnings go through stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)


def setup_logging_from_config() -> None:
    """Apply PREDICTOR_LOG_JSON / PREDICTOR_LOG_LEVEL."""
    from core.config import get_config

    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
