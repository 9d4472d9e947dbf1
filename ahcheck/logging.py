"""Log setup shared by the CLI, the web server and the weather client.

Every module logs through ``get_logger`` so that one handler on the
``ahcheck`` logger formats all of the package's output.
"""

import logging
import sys

_configured = False

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"


def configure(level: int | str = logging.INFO) -> None:
    """Attach the stderr handler at ``level``.

    Only the first call has an effect, so the CLI and the app factory can
    both call it.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("ahcheck")
    package_logger.setLevel(level)
    package_logger.addHandler(handler)

    # uvicorn access and error lines use the package format too
    uv_log = logging.getLogger("uvicorn")
    uv_log.handlers.clear()
    uv_log.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the ``ahcheck.<name>`` logger, e.g. ``ahcheck.lib.weather``."""
    return logging.getLogger(f"ahcheck.{name}")
