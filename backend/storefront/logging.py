"""structlog setup shared by the API process and the admin CLI.

Every record, whether it comes from a structlog logger or a stdlib logger
(uvicorn, botocore, aiosmtplib), passes through one ProcessorFormatter and is
rendered either as colored key/value lines or, with LOG_JSON=true, as one JSON
object per line.
"""

import logging
import sys
from typing import Final

import structlog
from structlog.typing import Processor

from storefront.config import settings

# Third-party loggers and the level they are capped at
QUIET_LOGGERS: Final[dict[str, int]] = {
    "httpx": logging.INFO,
    "httpcore": logging.WARNING,
    "aioboto3": logging.WARNING,
    "botocore": logging.WARNING,
    "aiosmtplib": logging.WARNING,
    "multipart": logging.WARNING,
    "python_multipart": logging.WARNING,
    "asyncio": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


def _renderer(json_output: bool) -> Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty(), exception_formatter=structlog.dev.plain_traceback)


def configure_logging(*, json_output: bool | None = None, level: str | None = None) -> None:
    """Route structlog and stdlib logging to stdout through a single formatter."""
    json_output = settings.log_json if json_output is None else json_output

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso" if json_output else "%Y-%m-%d %H:%M:%S", utc=json_output),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(json_output)],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))

    for name, cap in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(cap)


_configured = False


def setup_logging() -> None:
    """Configure logging on first call; later calls are no-ops."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
