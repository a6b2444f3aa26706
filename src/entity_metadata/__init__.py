# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Helpers for authoring entity type metadata by hand.

Import the helper from :mod:`entity_metadata.helper` and the metadata model
from the modules of :mod:`entity_metadata.models`.
"""

from .helper import MetadataHelper

__version__ = "1.0.1"

__all__ = ["MetadataHelper", "__version__"]
