"""Declarative request validation rules.

A rule checks one field of a request (a path parameter or a JSON body key)
and appends at most one :class:`FieldError` to a :class:`ValidationResult`.
Rules never stop at the first failure, so one field can report several
errors. Fields are compared through their string form, the way form
validators do::

    param("id").is_int("ID not valid")
    body("price").is_numeric("the value must be a number").custom(
        is_positive, "Price not valid"
    )
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

Location = Literal["params", "body"]

MISSING: Any = object()

_NUMERIC_RE = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
_INT_RE = re.compile(r"[-+]?[0-9]+")
_BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})


class FieldError(BaseModel):
    """One failed constraint. ``value`` is left unset when the field was absent."""

    type: Literal["field"] = "field"
    value: Any = None
    msg: str
    path: str
    location: Location

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump()
        if "value" not in self.model_fields_set:
            del data["value"]
        return data


@dataclass
class ValidationResult:
    """Per-request accumulator of field errors, in evaluation order."""

    errors: list[FieldError] = field(default_factory=list)

    def add(self, error: FieldError) -> None:
        self.errors.append(error)

    def is_empty(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class RequestData:
    """The parts of a request rules can inspect."""

    path: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)

    def get(self, location: Location, name: str) -> Any:
        source = self.path if location == "params" else self.body
        return source.get(name, MISSING)


def to_string(value: Any) -> str:
    """String form of a JSON value as seen by the rules."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_number(value: Any) -> float:
    """Loose numeric conversion.

    NaN when the value has no numeric reading or does not fit a finite float.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    elif not isinstance(value, (bool, int, float)):
        return math.nan
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return math.nan
    return number if math.isfinite(number) else math.nan


def is_positive(value: Any) -> bool:
    return to_number(value) > 0


class Rule(ABC):
    """A single constraint on one request field."""

    def __init__(self, location: Location, name: str, message: str) -> None:
        self.location = location
        self.name = name
        self.message = message

    def evaluate(self, data: RequestData, result: ValidationResult) -> None:
        value = data.get(self.location, self.name)
        if self.check(value):
            return
        fields: dict[str, Any] = {
            "msg": self.message,
            "path": self.name,
            "location": self.location,
        }
        if value is not MISSING:
            fields["value"] = value
        result.add(FieldError(**fields))

    @abstractmethod
    def check(self, value: Any) -> bool:
        """Return True when ``value`` satisfies the rule."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.location}.{self.name})"


class NotEmpty(Rule):
    def check(self, value: Any) -> bool:
        return to_string(value) != ""


class IsNumeric(Rule):
    def check(self, value: Any) -> bool:
        return _NUMERIC_RE.fullmatch(to_string(value)) is not None


class IsInt(Rule):
    def check(self, value: Any) -> bool:
        return _INT_RE.fullmatch(to_string(value)) is not None


class IsBoolean(Rule):
    def check(self, value: Any) -> bool:
        return to_string(value) in _BOOLEAN_STRINGS


class Custom(Rule):
    """Passes when ``predicate(value)`` is truthy. Predicate errors count as failures."""

    def __init__(
        self,
        location: Location,
        name: str,
        message: str,
        predicate: Callable[[Any], Any],
    ) -> None:
        super().__init__(location, name, message)
        self.predicate = predicate

    def check(self, value: Any) -> bool:
        try:
            return bool(self.predicate(None if value is MISSING else value))
        except (TypeError, ValueError, ArithmeticError):
            return False


class FieldChain:
    """Builder collecting rules for one field in declaration order."""

    def __init__(self, location: Location, name: str) -> None:
        self.location = location
        self.name = name
        self.rules: list[Rule] = []

    def _add(self, rule_cls: type[Rule], message: str, **kwargs: Any) -> FieldChain:
        self.rules.append(rule_cls(self.location, self.name, message, **kwargs))
        return self

    def not_empty(self, message: str) -> FieldChain:
        return self._add(NotEmpty, message)

    def is_numeric(self, message: str) -> FieldChain:
        return self._add(IsNumeric, message)

    def is_int(self, message: str) -> FieldChain:
        return self._add(IsInt, message)

    def is_boolean(self, message: str) -> FieldChain:
        return self._add(IsBoolean, message)

    def custom(self, predicate: Callable[[Any], Any], message: str) -> FieldChain:
        return self._add(Custom, message, predicate=predicate)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)


def param(name: str) -> FieldChain:
    return FieldChain("params", name)


def body(name: str) -> FieldChain:
    return FieldChain("body", name)


def rule_set(*chains: Iterable[Rule]) -> tuple[Rule, ...]:
    """Flatten chains into the ordered rule sequence of a route."""
    return tuple(rule for chain in chains for rule in chain)


def run_rules(rules: Iterable[Rule], data: RequestData) -> ValidationResult:
    result = ValidationResult()
    for rule in rules:
        rule.evaluate(data, result)
    return result
