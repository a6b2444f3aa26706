# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for entity metadata tests.

This module provides common test fixtures and sample type definitions
that can be used across all test modules.
"""

import pytest

from entity_metadata.helper import MetadataHelper
from entity_metadata.core.config import MetadataHelperConfig
from entity_metadata.models.data_type import DataType
from entity_metadata.models.store import MetadataStore


@pytest.fixture
def store():
    """Empty metadata store."""
    return MetadataStore()


@pytest.fixture
def helper():
    """Helper with the Northwind default namespace."""
    return MetadataHelper("Northwind.Models")


@pytest.fixture
def logging_config():
    """Configuration with DEBUG logging enabled."""
    return MetadataHelperConfig(
        default_namespace="Northwind.Models",
        enable_logging=True,
        log_level="DEBUG",
        logger_name="entity_metadata.tests",
    )


@pytest.fixture
def customer_def():
    """Hand-written Customer type definition with short names and JSON validators."""
    return {
        "short_name": "Customer",
        "default_resource_name": "Customers",
        "data_properties": {
            "customer_id": {"data_type": DataType.GUID, "is_part_of_key": True},
            "company_name": {"max_length": 40, "is_nullable": False},
            "location": {"complex_type_name": "Location"},
            "phone": {"max_length": 24, "validators": [{"name": "phone"}]},
            "row_version": {"data_type": "Int32"},
        },
        "navigation_properties": {
            "orders": {"entity_type_name": "Order", "is_scalar": False},
        },
    }


@pytest.fixture
def location_def():
    """Hand-written Location complex type definition."""
    return {
        "short_name": "Location",
        "is_complex_type": True,
        "data_properties": {
            "address": {"max_length": 60},
            "city": {"max_length": 15, "is_nullable": False},
        },
    }
