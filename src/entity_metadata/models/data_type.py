# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data types and key generation strategies for entity type metadata.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from .validator import Validator
from ..core.errors import ValidationError
from ..core.error_codes import VALIDATION_UNKNOWN_DATA_TYPE, VALIDATION_UNKNOWN_KEY_TYPE


class DataType(str, Enum):
    """
    Scalar data types of a data property.

    Each member knows the validator that checks values of that type via
    :attr:`validator_ctor`.
    """

    STRING = "String"
    INT64 = "Int64"
    INT32 = "Int32"
    INT16 = "Int16"
    BYTE = "Byte"
    DECIMAL = "Decimal"
    DOUBLE = "Double"
    SINGLE = "Single"
    DATE_TIME = "DateTime"
    DATE_TIME_OFFSET = "DateTimeOffset"
    TIME = "Time"
    BOOLEAN = "Boolean"
    GUID = "Guid"
    BINARY = "Binary"
    UNDEFINED = "Undefined"

    @property
    def validator_ctor(self) -> Optional[Callable[[], Validator]]:
        """Zero-argument factory for this type's validator, or ``None`` when the type has none."""
        return _VALIDATOR_CTORS.get(self)

    @classmethod
    def from_name(cls, name: str) -> "DataType":
        """
        Parse a data type from its name, case-insensitively.

        Accepts the value (``"DateTime"``) or the member name (``"DATE_TIME"``).

        :raises ~entity_metadata.core.errors.ValidationError: If the name is not a known data type.
        """
        if isinstance(name, str):
            key = name.replace("_", "").lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        raise ValidationError(
            f"Unknown data type: {name!r}",
            subcode=VALIDATION_UNKNOWN_DATA_TYPE,
            details={"data_type": name},
        )


_VALIDATOR_CTORS: Dict[DataType, Callable[[], Validator]] = {
    DataType.STRING: Validator.string,
    DataType.INT64: Validator.int64,
    DataType.INT32: Validator.int32,
    DataType.INT16: Validator.int16,
    DataType.BYTE: Validator.byte,
    DataType.DECIMAL: Validator.number,
    DataType.DOUBLE: Validator.number,
    DataType.SINGLE: Validator.number,
    DataType.DATE_TIME: Validator.date,
    DataType.DATE_TIME_OFFSET: Validator.date,
    DataType.TIME: Validator.duration,
    DataType.BOOLEAN: Validator.boolean,
    DataType.GUID: Validator.guid,
}


class AutoGeneratedKeyType(str, Enum):
    """How the key of a new entity is generated."""

    NONE = "None"
    IDENTITY = "Identity"
    KEY_GENERATOR = "KeyGenerator"

    @classmethod
    def from_name(cls, name: str) -> "AutoGeneratedKeyType":
        """
        Parse a key generation strategy from its name, case-insensitively.

        Accepts the value (``"KeyGenerator"``) or the member name (``"KEY_GENERATOR"``).

        :raises ~entity_metadata.core.errors.ValidationError: If the name is not a known strategy.
        """
        if isinstance(name, str):
            key = name.replace("_", "").lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        raise ValidationError(
            f"Unknown auto-generated key type: {name!r}",
            subcode=VALIDATION_UNKNOWN_KEY_TYPE,
            details={"auto_generated_key_type": name},
        )


__all__ = ["DataType", "AutoGeneratedKeyType"]
