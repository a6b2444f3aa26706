# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Opt-in logger setup for the metadata helpers."""

from __future__ import annotations

import logging
from typing import Optional

from .config import MetadataHelperConfig


def get_logger(config: MetadataHelperConfig) -> Optional[logging.Logger]:
    """Return the configured logger, or ``None`` when logging is disabled.

    :raises ValueError: If ``config.log_level`` is not a known logging level name.
    """
    if not config.enable_logging:
        return None
    level = getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level!r}")
    logger = logging.getLogger(config.logger_name)
    logger.setLevel(level)
    return logger
