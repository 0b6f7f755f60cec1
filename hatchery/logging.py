"""Logger setup for applications embedding the engine.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``hatchery`` namespace; handlers are left to the application, which may call
:func:`init_logger` once at startup.
"""

import logging

log = logging.getLogger("hatchery")


def init_logger(debug: bool = False) -> logging.Handler:
    """Attach a stream handler to the ``hatchery`` logger and return it."""
    formatter = logging.Formatter(
        "[{asctime}] {levelname} {name}: {message}", datefmt="%Y-%m-%d %H:%M:%S", style="{"
    )
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if debug else logging.INFO)
    handler.setFormatter(formatter)

    log.addHandler(handler)
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    return handler
