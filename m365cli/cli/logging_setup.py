"""Console logging configuration for the m365 CLI."""

import logging
import sys

ROOT_LOGGER_NAME = "m365cli"


def configure_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Attach a stderr handler to the m365cli logger.

    Levels: --debug -> DEBUG, --verbose -> INFO, default WARNING.
    Calling it again replaces the handler it added before.

    Returns:
        The configured m365cli logger.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_m365cli_console", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    handler._m365cli_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.propagate = False
    return root
