"""Structured logging for the Payment Gateway.

Card data redaction runs as a processor on every event: a full card number
is reduced to ``card_last_four`` and any CVV field is dropped before
rendering.
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from payment_gateway.config import settings

# Keys that may hold a full PAN
CARD_NUMBER_KEYS = frozenset({"card_number", "pan"})

# Keys that must never be rendered at all
SECRET_KEYS = frozenset({"cvv", "cvc", "card_cvv"})


def redact_card_data(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace full card numbers with their last four digits and drop CVVs."""
    for key in CARD_NUMBER_KEYS & event_dict.keys():
        number = str(event_dict.pop(key))
        event_dict.setdefault("card_last_four", number[-4:])

    for key in SECRET_KEYS & event_dict.keys():
        del event_dict[key]

    return event_dict


def build_processors(json_output: bool) -> list[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        redact_card_data,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        renderer,
    ]


def configure_logging() -> None:
    """Configure stdlib logging and structlog from settings.

    JSON lines in production, coloured console output everywhere else. The
    service name and environment are bound to every event.
    """
    level = logging.getLevelName(settings.log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=build_processors(json_output=settings.environment == "production"),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=settings.service_name,
        environment=settings.environment,
    )
