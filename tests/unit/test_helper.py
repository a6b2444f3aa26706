# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for MetadataHelper."""

import logging

import pytest

from entity_metadata.helper import MetadataHelper
from entity_metadata.core.config import MetadataHelperConfig
from entity_metadata.core.errors import MetadataError, ValidationError
from entity_metadata.core.error_codes import (
    METADATA_TYPE_ALREADY_EXISTS,
    VALIDATION_NAVIGATION_TARGET_MISSING,
    VALIDATION_UNKNOWN_KEY_TYPE,
    VALIDATION_VALIDATORS_NOT_LIST,
    VALIDATION_VALIDATOR_NOT_CONVERTIBLE,
)
from entity_metadata.models.data_type import AutoGeneratedKeyType, DataType
from entity_metadata.models.entity_type import ComplexType, EntityType
from entity_metadata.models.properties import DataProperty
from entity_metadata.models.validator import Validator


def _names(prop):
    return [v.name for v in prop.validators]


class TestConstruction:
    """Tests for the constructor and default namespace."""

    def test_default_namespace_argument(self):
        assert MetadataHelper("Sales").default_namespace == "Sales"

    def test_default_namespace_from_config(self):
        helper = MetadataHelper(config=MetadataHelperConfig(default_namespace="Sales"))
        assert helper.default_namespace == "Sales"

    def test_argument_overrides_config(self):
        helper = MetadataHelper("Inventory", config=MetadataHelperConfig(default_namespace="Sales"))
        assert helper.default_namespace == "Inventory"

    def test_no_namespace(self):
        assert MetadataHelper().default_namespace is None

    def test_set_default_namespace(self, helper):
        helper.set_default_namespace("Other.Models")
        type_def = {"short_name": "Region"}
        helper.patch_defaults(type_def)
        assert type_def["namespace"] == "Other.Models"


class TestPatchDefaults:
    """Tests for patch_defaults."""

    def test_assigns_default_namespace(self, helper, customer_def):
        helper.patch_defaults(customer_def)
        assert customer_def["namespace"] == "Northwind.Models"

    def test_keeps_declared_namespace(self, helper):
        type_def = {"short_name": "Region", "namespace": "Geo"}
        helper.patch_defaults(type_def)
        assert type_def["namespace"] == "Geo"

    def test_empty_namespace_falls_back_to_default(self, helper):
        type_def = {"short_name": "Region", "namespace": ""}
        helper.patch_defaults(type_def)
        assert type_def["namespace"] == "Northwind.Models"

    def test_qualifies_complex_type_name(self, helper, customer_def):
        helper.patch_defaults(customer_def)
        assert customer_def["data_properties"]["location"]["complex_type_name"] == "Location:#Northwind.Models"

    def test_qualified_complex_type_name_unchanged(self, helper):
        type_def = {
            "short_name": "Supplier",
            "data_properties": {"location": {"complex_type_name": "Location:#Shared"}},
        }
        helper.patch_defaults(type_def)
        assert type_def["data_properties"]["location"]["complex_type_name"] == "Location:#Shared"

    def test_complex_type_qualified_with_own_namespace(self, helper):
        type_def = {
            "short_name": "Supplier",
            "namespace": "Purchasing",
            "data_properties": {"location": {"complex_type_name": "Location"}},
        }
        helper.patch_defaults(type_def)
        assert type_def["data_properties"]["location"]["complex_type_name"] == "Location:#Purchasing"

    def test_qualifies_navigation_target(self, helper, customer_def):
        helper.patch_defaults(customer_def)
        assert customer_def["navigation_properties"]["orders"]["entity_type_name"] == "Order:#Northwind.Models"

    def test_qualified_navigation_target_unchanged(self, helper):
        type_def = {
            "short_name": "Order",
            "navigation_properties": {"employee": {"entity_type_name": "Employee:#HR"}},
        }
        helper.patch_defaults(type_def)
        assert type_def["navigation_properties"]["employee"]["entity_type_name"] == "Employee:#HR"

    def test_navigation_without_target_raises(self, helper):
        type_def = {"short_name": "Order", "navigation_properties": {"customer": {"is_scalar": True}}}
        with pytest.raises(ValidationError) as exc_info:
            helper.patch_defaults(type_def)
        assert exc_info.value.subcode == VALIDATION_NAVIGATION_TARGET_MISSING
        assert "Order.customer" in str(exc_info.value)

    def test_no_namespace_leaves_names_unqualified(self):
        helper = MetadataHelper()
        type_def = {
            "short_name": "Order",
            "data_properties": {"ship_to": {"complex_type_name": "Location"}},
            "navigation_properties": {"customer": {"entity_type_name": "Customer"}},
        }
        helper.patch_defaults(type_def)
        assert type_def["namespace"] is None
        assert type_def["data_properties"]["ship_to"]["complex_type_name"] == "Location"
        assert type_def["navigation_properties"]["customer"]["entity_type_name"] == "Customer"

    def test_key_part_defaults_to_non_nullable(self, helper, customer_def):
        helper.patch_defaults(customer_def)
        assert customer_def["data_properties"]["customer_id"]["is_nullable"] is False

    def test_non_key_defaults_to_nullable(self, helper, customer_def):
        helper.patch_defaults(customer_def)
        assert customer_def["data_properties"]["phone"]["is_nullable"] is True

    def test_explicit_nullability_coerced_to_bool(self, helper):
        type_def = {
            "short_name": "Region",
            "data_properties": {
                "region_id": {"data_type": DataType.INT32, "is_part_of_key": True, "is_nullable": 1},
                "description": {"is_nullable": 0},
            },
        }
        helper.patch_defaults(type_def)
        assert type_def["data_properties"]["region_id"]["is_nullable"] is True
        assert type_def["data_properties"]["description"]["is_nullable"] is False

    def test_converts_json_validators(self, helper, customer_def):
        helper.patch_defaults(customer_def)
        validators = customer_def["data_properties"]["phone"]["validators"]
        assert len(validators) == 1
        assert isinstance(validators[0], Validator)
        assert validators[0].name == "phone"

    def test_bad_validator_declaration_raises(self, helper):
        type_def = {"short_name": "Region", "data_properties": {"code": {"validators": [{"name": "nope"}]}}}
        with pytest.raises(ValidationError):
            helper.patch_defaults(type_def)

    def test_missing_properties_sections(self, helper):
        type_def = {"short_name": "Empty"}
        helper.patch_defaults(type_def)
        assert type_def == {"short_name": "Empty", "namespace": "Northwind.Models"}


class TestConvertValidators:
    """Tests for convert_validators."""

    def test_converts_dicts_in_place(self, helper):
        validators = [{"name": "maxLength", "maxLength": 10}, {"name": "emailAddress"}]
        prop_def = {"validators": validators}
        helper.convert_validators("Customer", "email", prop_def)
        assert prop_def["validators"] is validators
        assert [v.name for v in validators] == ["maxLength", "emailAddress"]
        assert validators[0].context == {"maxLength": 10}

    def test_keeps_validator_instances(self, helper):
        phone = Validator.phone()
        prop_def = {"validators": [phone, {"name": "required"}]}
        helper.convert_validators("Customer", "phone", prop_def)
        assert prop_def["validators"][0] is phone
        assert prop_def["validators"][1].name == "required"

    def test_not_a_list_raises(self, helper):
        with pytest.raises(ValidationError) as exc_info:
            helper.convert_validators("Customer", "phone", {"validators": {"name": "phone"}})
        assert exc_info.value.subcode == VALIDATION_VALIDATORS_NOT_LIST
        assert str(exc_info.value) == "Customer.phone.validators must be a list"

    def test_unknown_validator_raises_with_index(self, helper):
        prop_def = {"validators": [{"name": "phone"}, {"name": "fax"}]}
        with pytest.raises(ValidationError) as exc_info:
            helper.convert_validators("Customer", "fax", prop_def)
        err = exc_info.value
        assert err.subcode == VALIDATION_VALIDATOR_NOT_CONVERTIBLE
        assert err.details["index"] == 1
        assert str(err) == (
            "Customer.fax.validators[1] = '{\"name\": \"fax\"}' can't be converted to a known Validator."
        )

    def test_non_dict_entry_raises(self, helper):
        with pytest.raises(ValidationError) as exc_info:
            helper.convert_validators("Customer", "phone", {"validators": ["phone"]})
        assert exc_info.value.subcode == VALIDATION_VALIDATOR_NOT_CONVERTIBLE
        assert exc_info.value.__cause__ is None
        assert str(exc_info.value) == "Customer.phone.validators[0] = '\"phone\"' can't be converted to a known Validator."

    def test_server_style_declaration_with_extra_keys(self, helper):
        prop_def = {"validators": [{"name": "maxLength", "maxLength": 24, "messageTemplate": "too long"}]}
        helper.convert_validators("Customer", "phone", prop_def)
        converted = prop_def["validators"][0]
        assert converted.name == "maxLength"
        assert converted.context["maxLength"] == 24
        assert converted.context["messageTemplate"] == "too long"


class TestInferValidators:
    """Tests for infer_validators."""

    def _entity(self, *props):
        return EntityType(short_name="Region", namespace="Geo", data_properties=list(props))

    def test_required_for_non_nullable(self, helper):
        prop = DataProperty("name", is_nullable=False)
        helper.infer_validators(self._entity(prop))
        assert _names(prop) == ["required"]

    def test_nullable_string_gets_nothing(self, helper):
        prop = DataProperty("name")
        helper.infer_validators(self._entity(prop))
        assert prop.validators == []

    def test_data_type_validator(self, helper):
        prop = DataProperty("region_id", data_type=DataType.INT32)
        helper.infer_validators(self._entity(prop))
        assert _names(prop) == ["int32"]

    def test_max_length_for_strings(self, helper):
        prop = DataProperty("name", max_length=50)
        helper.infer_validators(self._entity(prop))
        assert _names(prop) == ["maxLength"]
        assert prop.validators[0].context == {"maxLength": 50}

    def test_max_length_ignored_for_non_strings(self, helper):
        prop = DataProperty("photo", data_type=DataType.BINARY, max_length=50)
        helper.infer_validators(self._entity(prop))
        assert prop.validators == []

    def test_order_required_type_length(self, helper):
        key = DataProperty("region_id", data_type=DataType.GUID, is_nullable=False, is_part_of_key=True)
        name = DataProperty("name", is_nullable=False, max_length=20)
        helper.infer_validators(self._entity(key, name))
        assert _names(key) == ["required", "guid"]
        assert _names(name) == ["required", "maxLength"]

    def test_does_not_duplicate_by_name(self, helper):
        custom = Validator.max_length(10)
        prop = DataProperty("name", is_nullable=False, max_length=50, validators=[Validator.required(), custom])
        helper.infer_validators(self._entity(prop))
        assert _names(prop) == ["required", "maxLength"]
        assert prop.validators[1] is custom

    def test_idempotent(self, helper):
        prop = DataProperty("quantity", data_type=DataType.INT16, is_nullable=False)
        entity = self._entity(prop)
        helper.infer_validators(entity)
        helper.infer_validators(entity)
        assert _names(prop) == ["required", "int16"]

    def test_complex_property_gets_no_type_validator(self, helper):
        prop = DataProperty("location", data_type=None, complex_type_name="Location:#Geo")
        helper.infer_validators(self._entity(prop))
        assert prop.validators == []

    def test_returns_type(self, helper):
        entity = self._entity()
        assert helper.infer_validators(entity) is entity

    def test_works_on_complex_types(self, helper):
        prop = DataProperty("city", is_nullable=False, max_length=15)
        complex_type = ComplexType(short_name="Location", namespace="Geo", data_properties=[prop])
        helper.infer_validators(complex_type)
        assert _names(prop) == ["required", "maxLength"]


class TestResources:
    """Tests for add_type_name_as_resource and add_data_service."""

    def test_registers_short_name(self, helper, store):
        entity = EntityType(short_name="Customer", namespace="Northwind.Models")
        helper.add_type_name_as_resource(store, entity)
        assert store.get_entity_type_name_for_resource_name("Customer") == "Customer:#Northwind.Models"

    def test_skips_complex_types(self, helper, store):
        complex_type = ComplexType(short_name="Location", namespace="Northwind.Models")
        helper.add_type_name_as_resource(store, complex_type)
        assert store.get_entity_type_name_for_resource_name("Location") is None

    def test_last_registration_wins(self, store, logging_config, caplog):
        helper = MetadataHelper(config=logging_config)
        helper.add_type_name_as_resource(store, EntityType(short_name="Customer", namespace="Sales"))
        with caplog.at_level(logging.WARNING, logger="entity_metadata.tests"):
            helper.add_type_name_as_resource(store, EntityType(short_name="Customer", namespace="Support"))
        assert store.get_entity_type_name_for_resource_name("Customer") == "Customer:#Support"
        assert "re-pointed" in caplog.text

    def test_add_data_service(self, helper, store):
        service = helper.add_data_service(store, "api/northwind")
        assert service.service_name == "api/northwind/"
        assert store.get_data_service("api/northwind") is service


class TestAddTypeToStore:
    """Tests for add_type_to_store."""

    def test_adds_patched_entity_type(self, helper, store, customer_def):
        customer = helper.add_type_to_store(store, customer_def)

        assert isinstance(customer, EntityType)
        assert customer.name == "Customer:#Northwind.Models"
        assert store.get_entity_type("Customer:#Northwind.Models") is customer
        assert customer.navigation_properties[0].entity_type_name == "Order:#Northwind.Models"
        assert customer.get_property("location").complex_type_name == "Location:#Northwind.Models"

    def test_infers_validators(self, helper, store, customer_def):
        customer = helper.add_type_to_store(store, customer_def)

        assert _names(customer.get_property("customer_id")) == ["required", "guid"]
        assert _names(customer.get_property("company_name")) == ["required", "maxLength"]
        assert _names(customer.get_property("phone")) == ["phone", "maxLength"]
        assert _names(customer.get_property("row_version")) == ["int32"]
        assert customer.get_property("location").validators == []

    def test_registers_resource_names(self, helper, store, customer_def):
        helper.add_type_to_store(store, customer_def)
        assert store.get_entity_type_name_for_resource_name("Customer") == "Customer:#Northwind.Models"
        assert store.get_entity_type_name_for_resource_name("Customers") == "Customer:#Northwind.Models"

    def test_adds_complex_type(self, helper, store, location_def):
        location = helper.add_type_to_store(store, location_def)

        assert isinstance(location, ComplexType)
        assert location.name == "Location:#Northwind.Models"
        assert _names(location.get_property("city")) == ["required", "maxLength"]
        assert store.get_entity_type_name_for_resource_name("Location") is None

    def test_key_type_name_any_case(self, helper, store):
        order = helper.add_type_to_store(store, {"short_name": "Order", "auto_generated_key_type": "identity"})
        assert order.auto_generated_key_type is AutoGeneratedKeyType.IDENTITY

    def test_unknown_key_type_raises_validation_error(self, helper, store):
        with pytest.raises(ValidationError) as exc_info:
            helper.add_type_to_store(store, {"short_name": "Order", "auto_generated_key_type": "sequence"})
        assert exc_info.value.subcode == VALIDATION_UNKNOWN_KEY_TYPE

    def test_missing_required_complex_value_fails(self, helper, store):
        supplier = helper.add_type_to_store(
            store,
            {
                "short_name": "Supplier",
                "data_properties": {"location": {"complex_type_name": "Location", "is_nullable": False}},
            },
        )
        assert _names(supplier.get_property("location")) == ["required"]
        failures = supplier.validate_instance({})
        assert [(f.property_name, f.validator_name) for f in failures] == [("location", "required")]

    def test_duplicate_type_raises(self, helper, store):
        helper.add_type_to_store(store, {"short_name": "Region"})
        with pytest.raises(MetadataError) as exc_info:
            helper.add_type_to_store(store, {"short_name": "Region"})
        assert exc_info.value.subcode == METADATA_TYPE_ALREADY_EXISTS

    def test_patches_definition_in_place(self, helper, store, customer_def):
        helper.add_type_to_store(store, customer_def)
        assert customer_def["namespace"] == "Northwind.Models"
        assert isinstance(customer_def["data_properties"]["phone"]["validators"][0], Validator)

    def test_validates_instances_with_inferred_validators(self, helper, store, customer_def):
        customer = helper.add_type_to_store(store, customer_def)
        failures = customer.validate_instance(
            {
                "customer_id": "c0ffee00-0000-4000-8000-000000000001",
                "company_name": "",
                "phone": "555-0100",
                "row_version": "seven",
            }
        )
        assert [(f.property_name, f.validator_name) for f in failures] == [
            ("company_name", "required"),
            ("row_version", "int32"),
        ]

    def test_logs_when_enabled(self, store, customer_def, logging_config, caplog):
        helper = MetadataHelper(config=logging_config)
        with caplog.at_level(logging.DEBUG, logger="entity_metadata.tests"):
            helper.add_type_to_store(store, customer_def)
        assert "Added type Customer:#Northwind.Models" in caplog.text
        assert "Inferred guid validator for Customer:#Northwind.Models.customer_id" in caplog.text

    def test_silent_when_logging_disabled(self, helper, store, customer_def, caplog):
        with caplog.at_level(logging.DEBUG):
            helper.add_type_to_store(store, customer_def)
        assert caplog.records == []
