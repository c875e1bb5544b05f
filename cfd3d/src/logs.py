"""
Logging setup for scripts.
"""

import logging
import sys


def configure_logging(verbose: bool = False, very_verbose: bool = False,
                      name: str = "cfd3d") -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    -v prints INFO to stdout, -vv prints DEBUG to stdout, otherwise only
    warnings reach stderr.
    """
    logger = logging.getLogger(name)

    if verbose:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.INFO)
    elif very_verbose:
        logger.setLevel(logging.DEBUG)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.WARNING)

    # Create formatter for message output
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    ch.setFormatter(formatter)
    logger.addHandler(ch)
    return logger
