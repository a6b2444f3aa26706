# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Entity type and complex type metadata.

Types are built from type definition dicts written by hand::

    EntityType.from_dict({
        "short_name": "Customer",
        "namespace": "Northwind.Models",
        "auto_generated_key_type": AutoGeneratedKeyType.NONE,
        "default_resource_name": "Customers",
        "data_properties": {
            "customer_id": {"data_type": DataType.GUID, "is_part_of_key": True},
            "company_name": {"max_length": 40, "is_nullable": False},
        },
        "navigation_properties": {
            "orders": {"entity_type_name": "Order:#Northwind.Models", "is_scalar": False},
        },
    })
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

from .data_type import AutoGeneratedKeyType
from .properties import DataProperty, NavigationProperty
from .validator import ValidationFailure
from ..common.constants import NAMESPACE_SEPARATOR
from ..core.errors import ValidationError
from ..core.error_codes import VALIDATION_TYPE_NAME_MISSING


def qualify_type_name(short_name: str, namespace: Optional[str]) -> str:
    """Return ``"{short_name}:#{namespace}"``, or ``short_name`` alone without a namespace."""
    if not namespace:
        return short_name
    return f"{short_name}{NAMESPACE_SEPARATOR}{namespace}"


def is_qualified(type_name: str) -> bool:
    return NAMESPACE_SEPARATOR in type_name


@dataclass
class _StructuralType:
    short_name: str
    namespace: Optional[str] = None
    data_properties: List[DataProperty] = field(default_factory=list)

    is_complex_type: ClassVar[bool] = False

    @property
    def name(self) -> str:
        """Namespace-qualified type name."""
        return qualify_type_name(self.short_name, self.namespace)

    def get_property(self, name: str) -> Optional[Union[DataProperty, NavigationProperty]]:
        """Return the data or navigation property with the given name, or ``None``."""
        for prop in self._all_properties():
            if prop.name == name:
                return prop
        return None

    def _all_properties(self) -> List[Union[DataProperty, NavigationProperty]]:
        return list(self.data_properties)

    def validate_instance(self, values: Mapping[str, Any]) -> List[ValidationFailure]:
        """
        Run every data property's validators over a mapping of values.

        Missing keys are validated as ``None``. Complex values are only checked by
        the complex property's own validators (e.g. ``required``); validate their
        contents against the complex type itself.

        :return: All failures, in property order.
        :rtype: list[~entity_metadata.models.validator.ValidationFailure]
        """
        failures: List[ValidationFailure] = []
        for prop in self.data_properties:
            value = values.get(prop.name)
            for validator in prop.validators:
                failure = validator.validate(value, prop.name)
                if failure is not None:
                    failures.append(failure)
        return failures

    @staticmethod
    def _short_name_from(type_def: Dict[str, Any]) -> str:
        short_name = type_def.get("short_name")
        if not short_name:
            raise ValidationError(
                "Type definition requires a 'short_name'",
                subcode=VALIDATION_TYPE_NAME_MISSING,
            )
        return short_name

    @staticmethod
    def _data_properties_from(type_def: Dict[str, Any]) -> List[DataProperty]:
        dps = type_def.get("data_properties") or {}
        return [DataProperty.from_dict(key, prop) for key, prop in dps.items()]


@dataclass
class EntityType(_StructuralType):
    """
    Metadata for an entity type.

    :param short_name: Unqualified type name (e.g. ``"Customer"``).
    :type short_name: str
    :param namespace: Namespace of the type (e.g. ``"Northwind.Models"``).
    :type namespace: str | None
    :param data_properties: Scalar and complex-valued properties.
    :type data_properties: List[~entity_metadata.models.properties.DataProperty]
    :param navigation_properties: Properties navigating to related entities.
    :type navigation_properties: List[~entity_metadata.models.properties.NavigationProperty]
    :param auto_generated_key_type: How keys of new entities are generated.
    :type auto_generated_key_type: ~entity_metadata.models.data_type.AutoGeneratedKeyType
    :param default_resource_name: Resource name registered when the type is added to a store.
    :type default_resource_name: str | None
    """

    navigation_properties: List[NavigationProperty] = field(default_factory=list)
    auto_generated_key_type: AutoGeneratedKeyType = AutoGeneratedKeyType.NONE
    default_resource_name: Optional[str] = None

    @property
    def key_properties(self) -> List[DataProperty]:
        return [p for p in self.data_properties if p.is_part_of_key]

    def _all_properties(self) -> List[Union[DataProperty, NavigationProperty]]:
        return [*self.data_properties, *self.navigation_properties]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a type definition dict."""
        result: Dict[str, Any] = {
            "short_name": self.short_name,
            "namespace": self.namespace,
            "auto_generated_key_type": self.auto_generated_key_type.value,
            "data_properties": {p.name: p.to_dict() for p in self.data_properties},
            "navigation_properties": {p.name: p.to_dict() for p in self.navigation_properties},
        }
        if self.default_resource_name:
            result["default_resource_name"] = self.default_resource_name
        return result

    @classmethod
    def from_dict(cls, type_def: Dict[str, Any]) -> "EntityType":
        """
        Create an EntityType from a type definition dict.

        :raises ~entity_metadata.core.errors.ValidationError: If ``short_name`` is missing
            or a property definition or ``auto_generated_key_type`` is invalid.
        """
        navs = type_def.get("navigation_properties") or {}
        key_type = type_def.get("auto_generated_key_type") or AutoGeneratedKeyType.NONE
        return cls(
            short_name=cls._short_name_from(type_def),
            namespace=type_def.get("namespace"),
            data_properties=cls._data_properties_from(type_def),
            navigation_properties=[NavigationProperty.from_dict(key, prop) for key, prop in navs.items()],
            auto_generated_key_type=(
                key_type if isinstance(key_type, AutoGeneratedKeyType) else AutoGeneratedKeyType.from_name(key_type)
            ),
            default_resource_name=type_def.get("default_resource_name"),
        )


@dataclass
class ComplexType(_StructuralType):
    """
    Metadata for a complex type: a named group of data properties with no key
    and no identity of its own, embedded in entity types through complex properties.
    """

    is_complex_type: ClassVar[bool] = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a type definition dict."""
        return {
            "short_name": self.short_name,
            "namespace": self.namespace,
            "is_complex_type": True,
            "data_properties": {p.name: p.to_dict() for p in self.data_properties},
        }

    @classmethod
    def from_dict(cls, type_def: Dict[str, Any]) -> "ComplexType":
        """
        Create a ComplexType from a type definition dict.

        :raises ~entity_metadata.core.errors.ValidationError: If ``short_name`` is missing
            or a property definition is invalid.
        """
        return cls(
            short_name=cls._short_name_from(type_def),
            namespace=type_def.get("namespace"),
            data_properties=cls._data_properties_from(type_def),
        )


__all__ = ["EntityType", "ComplexType", "qualify_type_name", "is_qualified"]
