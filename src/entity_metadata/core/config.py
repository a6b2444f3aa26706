# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.constants import DEFAULT_LOG_LEVEL, DEFAULT_LOGGER_NAME


@dataclass(frozen=True)
class MetadataHelperConfig:
    """
    Configuration settings for :class:`~entity_metadata.helper.MetadataHelper`.

    :param default_namespace: Namespace assigned to type definitions that do not declare one.
    :type default_namespace: str or None
    :param enable_logging: Whether the helper emits log records (default: False).
    :type enable_logging: bool
    :param log_level: Level applied to the helper's logger when logging is enabled (default: "WARNING").
    :type log_level: str
    :param logger_name: Name of the logger used by the helper (default: "entity_metadata").
    :type logger_name: str
    """
    default_namespace: Optional[str] = None

    # Logging configuration
    enable_logging: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    logger_name: str = DEFAULT_LOGGER_NAME

    @classmethod
    def from_env(cls) -> "MetadataHelperConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~entity_metadata.core.config.MetadataHelperConfig
        """
        # Environment-free defaults
        return cls(
            default_namespace=None,
            enable_logging=False,
            log_level=DEFAULT_LOG_LEVEL,
            logger_name=DEFAULT_LOGGER_NAME,
        )
