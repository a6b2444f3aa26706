# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Common utilities and constants for the entity metadata helpers.

This package contains shared constants used across the package.
"""
