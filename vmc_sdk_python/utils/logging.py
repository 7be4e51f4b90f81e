"""
Console logging setup for VMC receivers and servers.
"""

import sys
import logging


def setup_logging(verbose: bool = False, log_format: str = None) -> logging.Logger:
    """
    Setup console logging.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise INFO.
        log_format: Override log format string.

    Returns:
        Package logger
    """
    level = logging.DEBUG if verbose else logging.INFO

    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format))

    logging.basicConfig(level=level, format=log_format, handlers=[console_handler])

    logger = logging.getLogger("vmc_sdk_python")
    logger.setLevel(level)
    return logger
