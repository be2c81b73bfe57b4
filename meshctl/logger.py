import logging
import sys
from typing import Optional, TextIO

logger = logging.getLogger("meshctl")

VERBOSE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logger(
    verbose: bool = False,
    format: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Sends meshctl log records to the terminal.

    Progress lines are shown as plain messages. With `verbose`, debug records
    are shown too, prefixed with their level and logger name.

    Args:
        verbose (bool, optional): Enable debug output. Defaults to False.
        format (Optional[str], optional): Overrides the record format.
        stream (Optional[TextIO], optional): Where to write. Defaults to the
            current sys.stderr.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(format or (VERBOSE_FORMAT if verbose else "%(message)s"))
    )
    logger.addHandler(handler)


setup_logger()
