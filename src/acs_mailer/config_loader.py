# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration loader for the ACS mailer.

This module provides utilities for loading the endpoint, access key and
request settings from INI-style configuration files or environment
variables.

Example:
    Configuration file format (config.ini)::

        [mailer]
        endpoint = https://my-resource.communication.azure.com
        access_key = c2VjcmV0LWtleQ==
        api_version = 2023-03-31
        timeout_seconds = 30
        verify_ssl = true
        attachments_dir = /var/mail/attachments

    Loading the configuration::

        config = load_mailer_config("/etc/acs-mailer/config.ini")
        # Returns MailerConfig dataclass
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

from .logger import get_logger

DEFAULT_API_VERSION = "2023-03-31"
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class MailerConfig:
    """Connection settings for an Azure Communication Services resource.

    Attributes:
        endpoint: Resource endpoint, e.g. https://name.communication.azure.com
        access_key: Base64 access key of the resource.
        api_version: Email API version sent in the query string.
        timeout_seconds: Per-request timeout.
        verify_ssl: Verify the server TLS certificate.
        attachments_dir: Base directory for relative attachment paths.
    """

    endpoint: str | None = None
    access_key: str | None = None
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    verify_ssl: bool = True
    attachments_dir: str | None = None

    @property
    def is_complete(self) -> bool:
        """Check that both endpoint and access key are configured."""
        return bool(self.endpoint and self.access_key)

    def __repr__(self) -> str:
        key = "***" if self.access_key else None
        return (
            f"MailerConfig(endpoint={self.endpoint!r}, access_key={key!r}, "
            f"api_version={self.api_version!r}, timeout_seconds={self.timeout_seconds!r})"
        )


logger = get_logger("config_loader")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def load_mailer_config(config_path: str | None = None) -> MailerConfig:
    """Load mailer configuration from config file or environment.

    Priority: config file > environment variables > defaults.

    Environment variables:
        ACS_MAILER_ENDPOINT: Resource endpoint URI
        ACS_MAILER_ACCESS_KEY: Base64 access key
        ACS_MAILER_API_VERSION: Email API version
        ACS_MAILER_TIMEOUT_SECONDS: Request timeout in seconds
        ACS_MAILER_VERIFY_SSL: Verify TLS certificates (true/false)
        ACS_MAILER_ATTACHMENTS_DIR: Base directory for attachments

    Args:
        config_path: Optional path to config.ini file

    Returns:
        MailerConfig with parsed settings, using defaults for missing values.
    """
    config_values: dict = {}

    env_mapping = {
        "endpoint": ("ACS_MAILER_ENDPOINT", str, None),
        "access_key": ("ACS_MAILER_ACCESS_KEY", str, None),
        "api_version": ("ACS_MAILER_API_VERSION", str, DEFAULT_API_VERSION),
        "timeout_seconds": ("ACS_MAILER_TIMEOUT_SECONDS", float, DEFAULT_TIMEOUT_SECONDS),
        "verify_ssl": ("ACS_MAILER_VERIFY_SSL", _parse_bool, True),
        "attachments_dir": ("ACS_MAILER_ATTACHMENTS_DIR", str, None),
    }

    for key, (env_var, type_fn, default) in env_mapping.items():
        env_value = os.environ.get(env_var)
        if env_value is not None:
            try:
                config_values[key] = type_fn(env_value)
            except (ValueError, TypeError):
                logger.warning(f"Invalid value for {env_var}, using default")
                config_values[key] = default
        else:
            config_values[key] = default

    if config_path and Path(config_path).exists():
        config = configparser.ConfigParser()
        config.read(config_path)

        if config.has_section("mailer"):
            def get_float(key: str, default: float) -> float:
                try:
                    return config.getfloat("mailer", key, fallback=default)
                except ValueError:
                    logger.warning(f"Invalid value for [mailer] {key}, using default")
                    return default

            def get_bool(key: str, default: bool) -> bool:
                try:
                    return config.getboolean("mailer", key, fallback=default)
                except ValueError:
                    logger.warning(f"Invalid value for [mailer] {key}, using default")
                    return default

            def get_str(key: str, default: str | None = None) -> str | None:
                value = config.get("mailer", key, fallback=default)
                return value.strip() if value else default

            config_values["endpoint"] = get_str("endpoint", config_values["endpoint"])
            config_values["access_key"] = get_str("access_key", config_values["access_key"])
            config_values["api_version"] = get_str("api_version", config_values["api_version"])
            config_values["timeout_seconds"] = get_float("timeout_seconds", config_values["timeout_seconds"])
            config_values["verify_ssl"] = get_bool("verify_ssl", config_values["verify_ssl"])
            config_values["attachments_dir"] = get_str("attachments_dir", config_values["attachments_dir"])
    elif config_path:
        logger.warning(f"Config file {config_path} not found, using environment")

    return MailerConfig(**config_values)
