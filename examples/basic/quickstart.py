# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Quickstart: describe a small Northwind model by hand.

Builds a metadata store with a complex type and two related entity types,
then prints the inferred validators and validates a sample customer.
"""

import logging
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[2] / "src"))

from entity_metadata.helper import MetadataHelper
from entity_metadata.core.config import MetadataHelperConfig
from entity_metadata.core.errors import ValidationError
from entity_metadata.models.data_type import AutoGeneratedKeyType, DataType
from entity_metadata.models.store import MetadataStore
from entity_metadata.models.validator import Validator


def build_store() -> MetadataStore:
    store = MetadataStore()
    helper = MetadataHelper(config=MetadataHelperConfig(default_namespace="Northwind.Models", enable_logging=True))

    helper.add_data_service(store, "api/northwind")

    helper.add_type_to_store(store, {
        "short_name": "Location",
        "is_complex_type": True,
        "data_properties": {
            "address": {"max_length": 60},
            "city": {"max_length": 15},
            "postal_code": {"max_length": 10},
        },
    })

    helper.add_type_to_store(store, {
        "short_name": "Customer",
        "default_resource_name": "Customers",
        "data_properties": {
            "customer_id": {"data_type": DataType.GUID, "is_part_of_key": True},
            "company_name": {"max_length": 40, "is_nullable": False},
            "location": {"complex_type_name": "Location"},
            "phone": {"max_length": 24, "validators": [{"name": "phone"}]},
            "email": {"validators": [Validator.email_address()]},
        },
        "navigation_properties": {
            "orders": {"entity_type_name": "Order", "is_scalar": False, "association_name": "Customer_Orders"},
        },
    })

    helper.add_type_to_store(store, {
        "short_name": "Order",
        "auto_generated_key_type": AutoGeneratedKeyType.IDENTITY,
        "default_resource_name": "Orders",
        "data_properties": {
            "order_id": {"data_type": DataType.INT32, "is_part_of_key": True},
            "customer_id": {"data_type": DataType.GUID},
            "order_date": {"data_type": DataType.DATE_TIME},
            "freight": {"data_type": DataType.DECIMAL},
        },
        "navigation_properties": {
            "customer": {
                "entity_type_name": "Customer",
                "association_name": "Customer_Orders",
                "foreign_key_names": ["customer_id"],
            },
        },
    })
    return store


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    store = build_store()
    print(store.to_dataframe().to_string(index=False))

    customer = store.get_entity_type(store.get_entity_type_name_for_resource_name("Customer"))
    failures = customer.validate_instance({"customer_id": "not-a-guid", "phone": "call me"})
    for failure in failures:
        print(f"{failure.validator_name}: {failure.message}")

    helper = MetadataHelper("Northwind.Models")
    try:
        helper.add_type_to_store(store, {
            "short_name": "Supplier",
            "data_properties": {"fax": {"validators": [{"name": "fax"}]}},
        })
    except ValidationError as exc:
        print(exc.to_dict())


if __name__ == "__main__":
    main()
