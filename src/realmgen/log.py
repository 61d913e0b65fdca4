"""structlog setup for command-line use."""

import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Render log events to stderr with level and ISO timestamp.

    Stdout is left for the CLI's JSON output. Library code never calls this;
    generators log through whatever logger they are handed, or
    ``structlog.get_logger()``.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if verbose else 20),  # DEBUG / INFO
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
