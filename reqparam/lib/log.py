"""
Centralized library-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from library settings.

Features:
- A custom `LOG` function for resolution-pipeline debug logging.
- Dynamic checking of the `beQuiet` flag so that an embedding application
  only sees output when it asks for it.
- Consistent and customizable logging format.

Usage:
- Use `LOG` for debug logging inside the resolver and session.
- The `beQuiet` flag controls whether logs are displayed.

Example:
    from reqparam.lib.log import LOG
    LOG("Parameter (page) resolved to default")

Environment:
- Set `REQPARAM_BEQUIET=False` to see detailed resolution output.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the library; records without a
# parameter in scope are tagged "-"
app_logger = logger.bind(app="REQPARAM", parameter="-")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<magenta>{extra[parameter]: <16}</magenta> ║ "
    "<level>{message}</level>"
)


def record_isOwn(record: dict) -> bool:
    """Only format records emitted through `app_logger`."""
    return record["extra"].get("app") == "REQPARAM"


app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format, filter=record_isOwn)


def LOG(*args: Any, parameter: str | None = None, **kwargs: Any) -> None:
    """
    Library-specific logging function.

    Checks the `beQuiet` flag in `appsettings` and logs the message
    only if logging is enabled. When `parameter` is given the record is
    bound to that parameter name, so every resolution decision can be
    traced back to the parameter it concerns.

    :param args: Positional arguments for the log message.
    :param parameter: Name of the parameter being resolved, if any.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from reqparam.config.settings import appsettings  # Ensure up-to-date settings

        if not appsettings.beQuiet:
            target = app_logger.bind(parameter=parameter) if parameter else app_logger
            target.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")  # Fallback to standard output on failure
