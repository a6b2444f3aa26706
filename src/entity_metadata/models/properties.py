# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data and navigation property metadata.

Properties are usually built from the property definition dicts of a type
definition::

    {
        "customer_id": {"data_type": DataType.GUID, "is_part_of_key": True},
        "company_name": {"max_length": 40, "is_nullable": False},
        "address": {"complex_type_name": "Location:#Northwind.Models"},
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .data_type import DataType
from .validator import Validator
from ..core.errors import ValidationError
from ..core.error_codes import (
    VALIDATION_NAVIGATION_TARGET_MISSING,
    VALIDATION_VALIDATORS_NOT_LIST,
    VALIDATION_VALIDATOR_NOT_CONVERTIBLE,
)


@dataclass
class DataProperty:
    """
    Metadata for a scalar or complex-valued property.

    :param name: Property name.
    :type name: str
    :param data_type: Scalar data type; ``None`` for complex properties.
    :type data_type: ~entity_metadata.models.data_type.DataType | None
    :param is_nullable: Whether the property accepts ``None``.
    :type is_nullable: bool
    :param is_part_of_key: Whether the property is part of the entity key.
    :type is_part_of_key: bool
    :param max_length: Maximum length for string properties.
    :type max_length: int | None
    :param default_value: Value assigned to new instances.
    :type default_value: Any
    :param complex_type_name: Qualified name of the complex type for complex properties.
    :type complex_type_name: str | None
    :param validators: Validators applied to the property's values.
    :type validators: List[~entity_metadata.models.validator.Validator]
    """

    name: str
    data_type: Optional[DataType] = DataType.STRING
    is_nullable: bool = True
    is_part_of_key: bool = False
    max_length: Optional[int] = None
    default_value: Any = None
    complex_type_name: Optional[str] = None
    validators: List[Validator] = field(default_factory=list)

    @property
    def is_complex_property(self) -> bool:
        return self.complex_type_name is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a property definition dict with validators in JSON form."""
        result: Dict[str, Any] = {
            "is_nullable": self.is_nullable,
            "is_part_of_key": self.is_part_of_key,
            "validators": [v.to_json() for v in self.validators],
        }
        if self.complex_type_name is not None:
            result["complex_type_name"] = self.complex_type_name
        elif self.data_type is not None:
            result["data_type"] = self.data_type.value
        if self.max_length is not None:
            result["max_length"] = self.max_length
        if self.default_value is not None:
            result["default_value"] = self.default_value
        return result

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "DataProperty":
        """
        Create a DataProperty from a property definition dict.

        ``validators`` must already hold :class:`Validator` instances; use
        :meth:`MetadataHelper.convert_validators <entity_metadata.helper.MetadataHelper.convert_validators>`
        to convert JSON declarations first.

        :raises ~entity_metadata.core.errors.ValidationError: If ``validators`` is not a list of validators
            or ``data_type`` is not a known data type.
        """
        complex_type_name = data.get("complex_type_name")
        data_type = _parse_data_type(data.get("data_type"), complex_type_name)

        validators = data.get("validators") or []
        if not isinstance(validators, list):
            raise ValidationError(
                f"{name}.validators must be a list",
                subcode=VALIDATION_VALIDATORS_NOT_LIST,
            )
        for ix, val in enumerate(validators):
            if not isinstance(val, Validator):
                raise ValidationError(
                    f"{name}.validators[{ix}] is not a Validator: {val!r}",
                    subcode=VALIDATION_VALIDATOR_NOT_CONVERTIBLE,
                )

        is_nullable = data.get("is_nullable")
        return cls(
            name=name,
            data_type=data_type,
            is_nullable=True if is_nullable is None else bool(is_nullable),
            is_part_of_key=bool(data.get("is_part_of_key", False)),
            max_length=data.get("max_length"),
            default_value=data.get("default_value"),
            complex_type_name=complex_type_name,
            validators=list(validators),
        )


def _parse_data_type(value: Union[DataType, str, None], complex_type_name: Optional[str]) -> Optional[DataType]:
    if complex_type_name is not None:
        return None
    if value is None:
        return DataType.STRING
    if isinstance(value, DataType):
        return value
    return DataType.from_name(value)


@dataclass
class NavigationProperty:
    """
    Metadata for a property that navigates to related entities.

    :param name: Property name.
    :type name: str
    :param entity_type_name: Qualified name of the target entity type.
    :type entity_type_name: str
    :param is_scalar: ``True`` for a reference to one entity, ``False`` for a collection.
    :type is_scalar: bool
    :param association_name: Name shared by both ends of the relationship.
    :type association_name: str | None
    :param foreign_key_names: Names of the data properties holding the foreign key.
    :type foreign_key_names: List[str]
    :param inverse_name: Name of the navigation property at the other end of the relationship.
    :type inverse_name: str | None
    """

    name: str
    entity_type_name: str
    is_scalar: bool = True
    association_name: Optional[str] = None
    foreign_key_names: List[str] = field(default_factory=list)
    inverse_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "entity_type_name": self.entity_type_name,
            "is_scalar": self.is_scalar,
        }
        if self.association_name:
            result["association_name"] = self.association_name
        if self.foreign_key_names:
            result["foreign_key_names"] = list(self.foreign_key_names)
        if self.inverse_name:
            result["inverse_name"] = self.inverse_name
        return result

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "NavigationProperty":
        """
        Create a NavigationProperty from a navigation property definition dict.

        :raises ~entity_metadata.core.errors.ValidationError: If ``entity_type_name`` is missing.
        """
        entity_type_name = data.get("entity_type_name")
        if not entity_type_name:
            raise ValidationError(
                f"{name}.entity_type_name is required",
                subcode=VALIDATION_NAVIGATION_TARGET_MISSING,
            )
        return cls(
            name=name,
            entity_type_name=entity_type_name,
            is_scalar=bool(data.get("is_scalar", True)),
            association_name=data.get("association_name"),
            foreign_key_names=list(data.get("foreign_key_names") or []),
            inverse_name=data.get("inverse_name"),
        )


__all__ = ["DataProperty", "NavigationProperty"]
