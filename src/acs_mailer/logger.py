# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logging utilities for the ACS mailer.

Handlers, level and format are configured by the entry point (the CLI calls
``logging.basicConfig()``); library modules only ask for a named logger.

Example:
    Typical usage in a module::

        from acs_mailer.logger import get_logger

        logger = get_logger("client")
        logger.info("Email accepted")
"""

import logging


def get_logger(name: str = "AcsMailer") -> logging.Logger:
    """Retrieve a logger instance.

    Loggers are namespaced under ``acs_mailer`` so applications can tune
    the library's verbosity with a single ``logging.getLogger("acs_mailer")``.

    Args:
        name: The logger name. Defaults to "AcsMailer".

    Returns:
        A ``logging.Logger`` instance bound to the given name.
    """
    if name.startswith("acs_mailer"):
        return logging.getLogger(name)
    return logging.getLogger(f"acs_mailer.{name}")
