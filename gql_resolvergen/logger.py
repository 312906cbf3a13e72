"""Console logging for the command-line interface.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers; the CLI calls :func:`configure_logging` once so their
records are rendered by rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "gql_resolvergen"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a RichHandler (on stderr) to the package logger.

    Args:
        verbose: Log DEBUG records instead of WARNING and above

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
