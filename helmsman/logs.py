"""
logging setup for the helmsman logger tree.

every engine module logs through logging.getLogger(__name__); nothing is
emitted unless the host configures logging or calls configure().
configure() attaches a single rich handler to the "helmsman" logger and is
safe to call repeatedly (the level is updated, the handler is not duplicated).
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = (
    "configure",
)

logger = logging.getLogger("helmsman")
logger.addHandler(logging.NullHandler())


def configure(level=logging.WARNING, /, *, console=None):
    """
    route helmsman records to stderr through rich.

    parameters
    - level: int | str: logging level for the "helmsman" logger.
    - console: rich Console to render into (defaults to a stderr console).

    returns
    - the RichHandler in use.
    """
    for handler in logger.handlers:
        if isinstance(handler, RichHandler):
            break
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_path=False,
            show_time=True,
            show_level=True,
        )
        logger.addHandler(handler)
    logger.setLevel(level)
    return handler
