# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Metadata model for entity types.

This package provides the metadata objects the authoring helpers patch:

- :class:`~entity_metadata.models.data_type.DataType`: Scalar data types.
- :class:`~entity_metadata.models.validator.Validator`: Named property validators.
- :class:`~entity_metadata.models.properties.DataProperty` and
  :class:`~entity_metadata.models.properties.NavigationProperty`: Property metadata.
- :class:`~entity_metadata.models.entity_type.EntityType` and
  :class:`~entity_metadata.models.entity_type.ComplexType`: Type metadata.
- :class:`~entity_metadata.models.store.MetadataStore`: Registry of types and resource names.

Note:
    This ``__init__.py`` does NOT import/export models.
    Import directly from the specific module files.
"""

__all__ = []
