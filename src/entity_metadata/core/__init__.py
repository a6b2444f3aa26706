# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the entity metadata helpers.

This module contains the foundational components including configuration,
logging setup and error handling.
"""

from .config import MetadataHelperConfig
from .errors import EntityMetadataError, MetadataError, ValidationError

__all__ = [
    "MetadataHelperConfig",
    "EntityMetadataError",
    "MetadataError",
    "ValidationError",
]
