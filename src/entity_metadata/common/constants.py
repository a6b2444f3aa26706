# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for entity type metadata.

These constants define the naming conventions and defaults shared by the
metadata model and the authoring helpers.
"""

# Separator between a type's short name and its namespace, e.g. "Customer:#Northwind.Models"
NAMESPACE_SEPARATOR = ":#"

# Data services always address a base URL or path ending with this suffix
SERVICE_NAME_SUFFIX = "/"

# Logging defaults
DEFAULT_LOGGER_NAME = "entity_metadata"
DEFAULT_LOG_LEVEL = "WARNING"
