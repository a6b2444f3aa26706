# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Metadata store: the registry of entity types, complex types, resource names
and data services.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from .entity_type import ComplexType, EntityType, is_qualified
from ..common.constants import SERVICE_NAME_SUFFIX
from ..core.errors import MetadataError
from ..core.error_codes import (
    METADATA_DATA_SERVICE_INVALID,
    METADATA_RESOURCE_NAME_INVALID,
    METADATA_TYPE_ALREADY_EXISTS,
    METADATA_TYPE_AMBIGUOUS,
    METADATA_TYPE_NOT_FOUND,
)

if TYPE_CHECKING:
    import pandas as pd

StructuralType = Union[EntityType, ComplexType]


@dataclass
class DataService:
    """
    A data service that entities are queried from and saved to.

    :param service_name: Base URL or path of the service; normalized to end with ``/``.
    :type service_name: str
    :param has_server_metadata: Whether the service can supply its own metadata.
    :type has_server_metadata: bool
    """

    service_name: str
    has_server_metadata: bool = False

    def __post_init__(self) -> None:
        if not self.service_name:
            raise MetadataError("DataService requires a service_name", subcode=METADATA_DATA_SERVICE_INVALID)
        if not self.service_name.endswith(SERVICE_NAME_SUFFIX):
            self.service_name += SERVICE_NAME_SUFFIX


class MetadataStore:
    """
    Registry of type metadata.

    Types are keyed by their namespace-qualified name. Resource names map the
    names used in queries (e.g. ``"Customers"``) to qualified type names.

    Example::

        store = MetadataStore()
        store.add_entity_type(EntityType.from_dict(customer_def))
        store.set_entity_type_for_resource_name("Customers", "Customer:#Northwind.Models")
        store.get_entity_type("Customer")
    """

    def __init__(self) -> None:
        self._types: Dict[str, StructuralType] = {}
        self._resource_names: Dict[str, str] = {}
        self._data_services: Dict[str, DataService] = {}

    # ----------------------------------------------------------------- types

    def add_entity_type(self, structural_type: StructuralType) -> None:
        """
        Add an entity or complex type to the store.

        An entity type's ``default_resource_name`` is registered as a resource name.

        :raises ~entity_metadata.core.errors.MetadataError: If a type with the same qualified name exists.
        """
        name = structural_type.name
        if name in self._types:
            raise MetadataError(
                f"Type '{name}' already exists in this store",
                subcode=METADATA_TYPE_ALREADY_EXISTS,
                details={"type_name": name},
            )
        self._types[name] = structural_type
        default_resource_name = getattr(structural_type, "default_resource_name", None)
        if default_resource_name:
            self._resource_names[default_resource_name] = name

    def get_entity_type(self, type_name: str) -> StructuralType:
        """
        Look up a type by qualified name, or by short name when it is unambiguous.

        :raises ~entity_metadata.core.errors.MetadataError: If no type matches, or
            the short name matches types in several namespaces.
        """
        found = self._types.get(type_name)
        if found is not None:
            return found
        if not is_qualified(type_name):
            matches = [t for t in self._types.values() if t.short_name == type_name]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise MetadataError(
                    f"Short name '{type_name}' is ambiguous; use a qualified name",
                    subcode=METADATA_TYPE_AMBIGUOUS,
                    details={"candidates": sorted(t.name for t in matches)},
                )
        raise MetadataError(
            f"Type '{type_name}' not found",
            subcode=METADATA_TYPE_NOT_FOUND,
            details={"type_name": type_name},
        )

    def get_entity_types(self) -> List[StructuralType]:
        """Return all types in insertion order."""
        return list(self._types.values())

    def has_entity_type(self, type_name: str) -> bool:
        return type_name in self._types

    # ---------------------------------------------------------- resource names

    def set_entity_type_for_resource_name(self, resource_name: str, entity_type: Union[EntityType, str]) -> None:
        """
        Associate a resource name with an entity type, replacing any previous association.

        :param resource_name: Name used in queries, e.g. ``"Customers"``.
        :param entity_type: The entity type, or its qualified name.
        :raises ~entity_metadata.core.errors.MetadataError: If ``resource_name`` is empty.
        """
        if not resource_name:
            raise MetadataError("Resource name must be a non-empty string", subcode=METADATA_RESOURCE_NAME_INVALID)
        type_name = entity_type if isinstance(entity_type, str) else entity_type.name
        self._resource_names[resource_name] = type_name

    def get_entity_type_name_for_resource_name(self, resource_name: str) -> Optional[str]:
        return self._resource_names.get(resource_name)

    def get_resource_names(self, type_name: str) -> List[str]:
        """Return every resource name mapped to the given qualified type name."""
        return [r for r, t in self._resource_names.items() if t == type_name]

    # ---------------------------------------------------------- data services

    def add_data_service(self, data_service: DataService) -> None:
        """Add or replace a data service, keyed by its normalized service name."""
        self._data_services[data_service.service_name] = data_service

    def get_data_service(self, service_name: str) -> Optional[DataService]:
        if not service_name.endswith(SERVICE_NAME_SUFFIX):
            service_name += SERVICE_NAME_SUFFIX
        return self._data_services.get(service_name)

    # ----------------------------------------------------------------- export

    def to_dataframe(self) -> "pd.DataFrame":
        """
        Summarize every data property in the store as a pandas DataFrame.

        Columns: ``entity_type``, ``property``, ``data_type``, ``is_nullable``,
        ``is_part_of_key``, ``max_length``, ``validators``.
        """
        from ..utils._pandas import store_to_dataframe

        return store_to_dataframe(self)


__all__ = ["MetadataStore", "DataService"]
