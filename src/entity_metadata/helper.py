# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Helpers for authoring entity type metadata by hand.

The helpers reflect an opinion about developer workflow: type definitions are
written as plain dicts with short type names and JSON-style validator
declarations, and the helper fills in the rest before the types reach the
store.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

from .core._logging import get_logger
from .core.config import MetadataHelperConfig
from .core.errors import ValidationError
from .core.error_codes import (
    VALIDATION_NAVIGATION_TARGET_MISSING,
    VALIDATION_VALIDATORS_NOT_LIST,
    VALIDATION_VALIDATOR_NOT_CONVERTIBLE,
)
from .models.data_type import DataType
from .models.entity_type import ComplexType, EntityType, is_qualified, qualify_type_name
from .models.properties import DataProperty
from .models.store import DataService, MetadataStore
from .models.validator import Validator

__all__ = ["MetadataHelper"]

StructuralType = Union[EntityType, ComplexType]


class MetadataHelper:
    """Helpers for adding hand-written type definitions to a metadata store.

    :param default_namespace: Namespace assigned to type definitions that do not
        declare one. Overrides ``config.default_namespace`` when given.
    :type default_namespace: :class:`str` or None
    :param config: Optional helper configuration (logging, default namespace).
    :type config: ~entity_metadata.core.config.MetadataHelperConfig or None

    Example::

        store = MetadataStore()
        helper = MetadataHelper("Northwind.Models")

        helper.add_data_service(store, "api/northwind")
        helper.add_type_to_store(store, {
            "short_name": "Customer",
            "default_resource_name": "Customers",
            "data_properties": {
                "customer_id": {"data_type": DataType.GUID, "is_part_of_key": True},
                "company_name": {"max_length": 40, "is_nullable": False},
                "phone": {"max_length": 24, "validators": [{"name": "phone"}]},
            },
            "navigation_properties": {
                "orders": {"entity_type_name": "Order", "is_scalar": False},
            },
        })

        store.get_entity_type_name_for_resource_name("Customer")
        # 'Customer:#Northwind.Models'
    """

    def __init__(
        self,
        default_namespace: Optional[str] = None,
        *,
        config: Optional[MetadataHelperConfig] = None,
    ) -> None:
        self._config = config or MetadataHelperConfig.from_env()
        self.default_namespace = default_namespace if default_namespace is not None else self._config.default_namespace
        self._logger: Optional[logging.Logger] = get_logger(self._config)

    def set_default_namespace(self, namespace: Optional[str]) -> None:
        """Replace the namespace assigned to type definitions that do not declare one."""
        self.default_namespace = namespace

    # ----------------------------------------------------------- data service

    def add_data_service(self, store: MetadataStore, service_name: str) -> DataService:
        """Create a :class:`~entity_metadata.models.store.DataService` and add it to the store.

        :param store: Store receiving the service.
        :type store: ~entity_metadata.models.store.MetadataStore
        :param service_name: Base URL or path of the service.
        :type service_name: :class:`str`

        :return: The new data service.
        :rtype: ~entity_metadata.models.store.DataService
        """
        service = DataService(service_name)
        store.add_data_service(service)
        self._log(logging.DEBUG, "Added data service %s", service.service_name)
        return service

    # ----------------------------------------------------------- add type

    def add_type_to_store(self, store: MetadataStore, type_def: Dict[str, Any]) -> StructuralType:
        """Create a type from its definition dict and add it to the store.

        Patches the definition's defaults (see :meth:`patch_defaults`), builds an
        :class:`~entity_metadata.models.entity_type.EntityType` (or a
        :class:`~entity_metadata.models.entity_type.ComplexType` when
        ``is_complex_type`` is set), adds it to the store, infers its validators
        and registers its short name as a resource name.

        :param store: Store receiving the type.
        :type store: ~entity_metadata.models.store.MetadataStore
        :param type_def: Type definition dict. Patched in place.
        :type type_def: :class:`dict`

        :return: The type added to the store.
        :rtype: ~entity_metadata.models.entity_type.EntityType or
            ~entity_metadata.models.entity_type.ComplexType

        :raises ~entity_metadata.core.errors.ValidationError: If the definition is invalid.
        :raises ~entity_metadata.core.errors.MetadataError: If the store already has the type.
        """
        self.patch_defaults(type_def)
        if type_def.get("is_complex_type"):
            structural_type: StructuralType = ComplexType.from_dict(type_def)
        else:
            structural_type = EntityType.from_dict(type_def)
        store.add_entity_type(structural_type)
        self.infer_validators(structural_type)
        self.add_type_name_as_resource(store, structural_type)
        self._log(logging.DEBUG, "Added type %s", structural_type.name)
        return structural_type

    def add_type_name_as_resource(self, store: MetadataStore, structural_type: StructuralType) -> None:
        """Register the type's short name as one of its resource names.

        Handy when composing queries executed locally against cached entities.
        Complex types have no resource names and are skipped. Two types in
        different namespaces sharing a short name compete for the same resource
        name; the last one registered wins.
        """
        if structural_type.is_complex_type:
            return
        resource_name = structural_type.short_name
        previous = store.get_entity_type_name_for_resource_name(resource_name)
        if previous is not None and previous != structural_type.name:
            self._log(
                logging.WARNING,
                "Resource name %s re-pointed from %s to %s",
                resource_name,
                previous,
                structural_type.name,
            )
        store.set_entity_type_for_resource_name(resource_name, structural_type)

    # ----------------------------------------------------------- validators

    def convert_validators(self, type_name: Optional[str], prop_name: str, prop_def: Dict[str, Any]) -> None:
        """Convert JSON validator declarations of a property definition into validators.

        Validators may be declared as instances or in the JSON form used by
        server-supplied metadata::

            "phone": {"max_length": 24, "validators": [Validator.phone()]}
            "phone": {"max_length": 24, "validators": [{"name": "phone"}]}

        Entries of ``prop_def["validators"]`` that are not already
        :class:`~entity_metadata.models.validator.Validator` instances are replaced in place.

        :param type_name: Short name of the type owning the property, for error messages.
        :type type_name: :class:`str` or None
        :param prop_name: Name of the property, for error messages.
        :type prop_name: :class:`str`
        :param prop_def: Property definition dict holding ``validators``.
        :type prop_def: :class:`dict`

        :raises ~entity_metadata.core.errors.ValidationError: If ``validators`` is not a list
            or an entry cannot be converted to a known validator.
        """
        validators = prop_def.get("validators")
        if not isinstance(validators, list):
            raise ValidationError(
                f"{type_name}.{prop_name}.validators must be a list",
                subcode=VALIDATION_VALIDATORS_NOT_LIST,
                details={"type_name": type_name, "property": prop_name},
            )

        for ix, val in enumerate(validators):
            if isinstance(val, Validator):
                continue
            if not isinstance(val, dict):
                raise _not_convertible(type_name, prop_name, ix, val)
            try:
                validators[ix] = Validator.from_json(val)
            except ValidationError as exc:
                raise _not_convertible(type_name, prop_name, ix, val) from exc

    def infer_validators(self, structural_type: StructuralType) -> StructuralType:
        """Add the validators implied by each data property's declaration.

        - ``required`` when the property is not nullable;
        - the data type's validator (none for strings);
        - ``maxLength`` for strings declaring ``max_length``.

        A validator is skipped when the property already has one with the same name.

        :return: The same type, for chaining.
        """
        for prop in structural_type.data_properties:
            if not prop.is_nullable:
                self._add_validator(structural_type, prop, Validator.required())

            self._add_validator(structural_type, prop, _data_type_validator(prop))

            if prop.max_length is not None and prop.data_type is DataType.STRING:
                self._add_validator(structural_type, prop, Validator.max_length(prop.max_length))

        return structural_type

    def _add_validator(self, structural_type: StructuralType, prop: DataProperty, validator: Optional[Validator]) -> None:
        if validator is None:
            return
        if any(v.name == validator.name for v in prop.validators):
            return
        prop.validators.append(validator)
        self._log(logging.DEBUG, "Inferred %s validator for %s.%s", validator.name, structural_type.name, prop.name)

    # ----------------------------------------------------------- defaults

    def patch_defaults(self, type_def: Dict[str, Any]) -> None:
        """Patch defaults into a type definition dict, in place.

        - ``namespace`` falls back to :attr:`default_namespace`;
        - unqualified ``complex_type_name`` values of data properties and
          ``entity_type_name`` values of navigation properties are qualified
          with the type's own namespace;
        - ``is_nullable`` defaults to ``not is_part_of_key``, otherwise it is
          coerced to :class:`bool`;
        - JSON validator declarations are converted (see :meth:`convert_validators`).

        Names stay unqualified when neither the definition nor the helper has a namespace.

        :raises ~entity_metadata.core.errors.ValidationError: If a validator declaration
            cannot be converted or a navigation property has no ``entity_type_name``.
        """
        type_name = type_def.get("short_name")
        namespace = type_def.get("namespace") or self.default_namespace
        type_def["namespace"] = namespace

        dps = type_def.get("data_properties") or {}
        for key, prop in dps.items():
            complex_type_name = prop.get("complex_type_name")
            if complex_type_name and namespace and not is_qualified(complex_type_name):
                prop["complex_type_name"] = qualify_type_name(complex_type_name, namespace)
                self._log(logging.DEBUG, "Qualified %s.%s complex type as %s", type_name, key, prop["complex_type_name"])

            # key parts are non-nullable unless explicitly declared nullable
            is_nullable = prop.get("is_nullable")
            prop["is_nullable"] = not prop.get("is_part_of_key") if is_nullable is None else bool(is_nullable)

            if prop.get("validators"):
                self.convert_validators(type_name, key, prop)

        navs = type_def.get("navigation_properties") or {}
        for key, prop in navs.items():
            entity_type_name = prop.get("entity_type_name")
            if not entity_type_name:
                raise ValidationError(
                    f"{type_name}.{key}.entity_type_name is required",
                    subcode=VALIDATION_NAVIGATION_TARGET_MISSING,
                    details={"type_name": type_name, "property": key},
                )
            if namespace and not is_qualified(entity_type_name):
                prop["entity_type_name"] = qualify_type_name(entity_type_name, namespace)
                self._log(logging.DEBUG, "Qualified %s.%s target as %s", type_name, key, prop["entity_type_name"])

    # ----------------------------------------------------------- internal

    def _log(self, level: int, msg: str, *args: Any) -> None:
        if self._logger:
            self._logger.log(level, msg, *args)


def _data_type_validator(prop: DataProperty) -> Optional[Validator]:
    data_type = prop.data_type
    if data_type is None or data_type is DataType.STRING:
        return None
    ctor = data_type.validator_ctor
    return ctor() if ctor else None


def _not_convertible(type_name: Optional[str], prop_name: str, ix: int, val: Any) -> ValidationError:
    return ValidationError(
        f"{type_name}.{prop_name}.validators[{ix}] = '{json.dumps(val, default=str)}' "
        "can't be converted to a known Validator.",
        subcode=VALIDATION_VALIDATOR_NOT_CONVERTIBLE,
        details={"type_name": type_name, "property": prop_name, "index": ix},
    )
