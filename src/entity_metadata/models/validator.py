# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Property validators for entity type metadata.

A :class:`Validator` pairs a registered name with a predicate and the context
the predicate needs (e.g. ``maxLength``). Validators can be declared either as
instances built from the factory classmethods or as plain JSON-like dicts::

    Validator.phone()
    {"name": "phone"}

    Validator.max_length(24)
    {"name": "maxLength", "maxLength": 24}

:meth:`Validator.from_json` converts the dict form into instances.
"""

from __future__ import annotations

import datetime as _dt
import inspect
import re
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from ..core.errors import ValidationError
from ..core.error_codes import VALIDATION_VALIDATOR_MALFORMED, VALIDATION_VALIDATOR_UNKNOWN

_DURATION_RE = re.compile(
    r"^-?P(?!$)(\d+Y)?(\d+M)?(\d+W)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+(\.\d+)?S)?)?$"
)
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Loose international phone pattern: optional +, digits with common separators
_PHONE_RE = re.compile(r"^\+?(\(\d+\)|\d)[\d\s().-]{5,}\d$")
_URL_RE = re.compile(r"^(https?|ftp)://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

# JSON context keys mapped to factory keyword arguments
_JSON_CONTEXT_KEYS = {"maxLength": "max_length", "minLength": "min_length"}

_INT_RANGES = {
    "int64": (-(2**63), 2**63 - 1),
    "int32": (-(2**31), 2**31 - 1),
    "int16": (-(2**15), 2**15 - 1),
    "byte": (0, 255),
}


@dataclass(frozen=True)
class ValidationFailure:
    """
    A single failed validation.

    :param validator_name: Name of the validator that rejected the value.
    :type validator_name: str
    :param property_name: Name of the property being validated, if known.
    :type property_name: str | None
    :param message: Human-readable description of the failure.
    :type message: str
    """

    validator_name: str
    property_name: Optional[str]
    message: str


@dataclass
class Validator:
    """
    A named validation rule for a data property.

    :param name: Registered validator name (e.g. ``"required"``, ``"maxLength"``).
    :type name: str
    :param valid_fn: Predicate called as ``valid_fn(value, context)``.
    :type valid_fn: Callable[[Any, Dict[str, Any]], bool]
    :param context: Parameters of the rule, serialized alongside the name.
    :type context: Dict[str, Any]
    """

    name: str
    valid_fn: Callable[[Any, Dict[str, Any]], bool] = field(repr=False, compare=False)
    context: Dict[str, Any] = field(default_factory=dict)

    _factories: ClassVar[Dict[str, Callable[..., "Validator"]]] = {}

    def validate(self, value: Any, property_name: Optional[str] = None) -> Optional[ValidationFailure]:
        """
        Validate a single value.

        ``None`` passes every validator except ``required``.

        :return: ``None`` when valid, otherwise a :class:`ValidationFailure`.
        :rtype: ValidationFailure | None
        """
        if value is None and self.name != "required":
            return None
        if self.valid_fn(value, self.context):
            return None
        return ValidationFailure(self.name, property_name, self._message(property_name))

    def _message(self, property_name: Optional[str]) -> str:
        subject = f"'{property_name}'" if property_name else "Value"
        if self.name == "required":
            return f"{subject} is required"
        if self.name == "maxLength":
            return f"{subject} must be {self.context['maxLength']} characters or less"
        if self.name == "stringLength":
            return (
                f"{subject} must be between {self.context['minLength']} "
                f"and {self.context['maxLength']} characters"
            )
        return f"{subject} is not a valid {self.name}"

    # ----------------------------------------------------------- json form

    def to_json(self) -> Dict[str, Any]:
        """Convert to the JSON declaration form, e.g. ``{"name": "maxLength", "maxLength": 24}``."""
        result: Dict[str, Any] = {"name": self.name}
        result.update(self.context)
        return result

    @classmethod
    def from_json(cls, data: Union[Dict[str, Any], List[Dict[str, Any]]]) -> Union["Validator", List["Validator"]]:
        """
        Create validator(s) from the JSON declaration form.

        :param data: A dict with a ``name`` key plus the validator's context, or a list of such dicts.
        :return: A :class:`Validator`, or a list of them when ``data`` is a list.
        :raises ~entity_metadata.core.errors.ValidationError: If the declaration is malformed
            or names an unregistered validator.
        """
        if isinstance(data, list):
            return [cls.from_json(item) for item in data]
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise ValidationError(
                f"Validator declaration must be a dict with a 'name': {data!r}",
                subcode=VALIDATION_VALIDATOR_MALFORMED,
            )
        factory = cls._factories.get(data["name"])
        if factory is None:
            raise ValidationError(
                f"Unknown validator: {data['name']!r}",
                subcode=VALIDATION_VALIDATOR_UNKNOWN,
                details={"name": data["name"]},
            )

        # Keys the factory does not accept (e.g. "messageTemplate") stay in the context only
        params = inspect.signature(factory).parameters
        accepts_any = any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values())
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            if key == "name":
                continue
            arg = _JSON_CONTEXT_KEYS.get(key, key)
            if accepts_any or arg in params:
                kwargs[arg] = value
            else:
                extra[key] = value

        try:
            validator = factory(**kwargs)
        except TypeError as exc:
            raise ValidationError(
                f"Invalid context for validator {data['name']!r}: {exc}",
                subcode=VALIDATION_VALIDATOR_MALFORMED,
                details={"name": data["name"], "context": kwargs},
            ) from exc
        for key, value in extra.items():
            validator.context.setdefault(key, value)
        return validator

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "Validator"]) -> None:
        """
        Register a validator factory so that ``{"name": name, ...}`` declarations can be converted.

        The factory is called with the declaration's keys that match its parameters,
        with ``maxLength``/``minLength`` passed as ``max_length``/``min_length``.
        Other keys are kept in the validator's context.
        """
        cls._factories[name] = factory

    @classmethod
    def registered_names(cls) -> List[str]:
        return sorted(cls._factories)

    # ----------------------------------------------------------- factories

    @classmethod
    def required(cls) -> "Validator":
        return cls("required", _is_present)

    @classmethod
    def max_length(cls, max_length: int) -> "Validator":
        return cls("maxLength", _within_max_length, {"maxLength": max_length})

    @classmethod
    def string_length(cls, min_length: int, max_length: int) -> "Validator":
        return cls("stringLength", _within_string_length, {"minLength": min_length, "maxLength": max_length})

    @classmethod
    def string(cls) -> "Validator":
        return cls("string", lambda v, _: isinstance(v, str))

    @classmethod
    def guid(cls) -> "Validator":
        return cls("guid", _is_guid)

    @classmethod
    def duration(cls) -> "Validator":
        return cls("duration", _is_duration)

    @classmethod
    def number(cls) -> "Validator":
        return cls("number", _is_number)

    @classmethod
    def integer(cls) -> "Validator":
        return cls("integer", _is_integer)

    @classmethod
    def int64(cls) -> "Validator":
        return cls("int64", _int_range_check("int64"))

    @classmethod
    def int32(cls) -> "Validator":
        return cls("int32", _int_range_check("int32"))

    @classmethod
    def int16(cls) -> "Validator":
        return cls("int16", _int_range_check("int16"))

    @classmethod
    def byte(cls) -> "Validator":
        return cls("byte", _int_range_check("byte"))

    @classmethod
    def boolean(cls) -> "Validator":
        return cls("bool", lambda v, _: isinstance(v, bool))

    @classmethod
    def date(cls) -> "Validator":
        return cls("date", _is_date)

    @classmethod
    def regular_expression(cls, expression: str) -> "Validator":
        return cls("regularExpression", _matches_expression, {"expression": expression})

    @classmethod
    def email_address(cls) -> "Validator":
        return cls("emailAddress", _pattern_check(_EMAIL_RE))

    @classmethod
    def phone(cls) -> "Validator":
        return cls("phone", _pattern_check(_PHONE_RE))

    @classmethod
    def url(cls) -> "Validator":
        return cls("url", _pattern_check(_URL_RE))


# ----------------------------------------------------------------- predicates


def _is_present(value: Any, _context: Dict[str, Any]) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _within_max_length(value: Any, context: Dict[str, Any]) -> bool:
    return isinstance(value, str) and len(value) <= context["maxLength"]


def _within_string_length(value: Any, context: Dict[str, Any]) -> bool:
    return isinstance(value, str) and context["minLength"] <= len(value) <= context["maxLength"]


def _is_guid(value: Any, _context: Dict[str, Any]) -> bool:
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _is_duration(value: Any, _context: Dict[str, Any]) -> bool:
    if isinstance(value, _dt.timedelta):
        return True
    return isinstance(value, str) and _DURATION_RE.match(value) is not None


def _is_number(value: Any, _context: Dict[str, Any]) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def _is_integer(value: Any, _context: Dict[str, Any]) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        try:
            int(value)
        except ValueError:
            return False
        return True
    return False


def _int_range_check(kind: str) -> Callable[[Any, Dict[str, Any]], bool]:
    low, high = _INT_RANGES[kind]

    def check(value: Any, context: Dict[str, Any]) -> bool:
        if not _is_integer(value, context):
            return False
        return low <= int(value) <= high

    return check


def _is_date(value: Any, _context: Dict[str, Any]) -> bool:
    if isinstance(value, (_dt.date, _dt.datetime)):
        return True
    if not isinstance(value, str):
        return False
    try:
        _dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def _matches_expression(value: Any, context: Dict[str, Any]) -> bool:
    return isinstance(value, str) and re.search(context["expression"], value) is not None


def _pattern_check(pattern: "re.Pattern[str]") -> Callable[[Any, Dict[str, Any]], bool]:
    def check(value: Any, _context: Dict[str, Any]) -> bool:
        return isinstance(value, str) and pattern.match(value) is not None

    return check


for _name, _factory in (
    ("required", Validator.required),
    ("maxLength", Validator.max_length),
    ("stringLength", Validator.string_length),
    ("string", Validator.string),
    ("guid", Validator.guid),
    ("duration", Validator.duration),
    ("number", Validator.number),
    ("integer", Validator.integer),
    ("int64", Validator.int64),
    ("int32", Validator.int32),
    ("int16", Validator.int16),
    ("byte", Validator.byte),
    ("bool", Validator.boolean),
    ("date", Validator.date),
    ("regularExpression", Validator.regular_expression),
    ("emailAddress", Validator.email_address),
    ("phone", Validator.phone),
    ("url", Validator.url),
):
    Validator.register_factory(_name, _factory)
del _name, _factory


__all__ = ["Validator", "ValidationFailure"]
