"""Declarative field validation.

A :class:`RuleSet` is an ordered collection of :class:`Field` declarations.
Each field first runs its sanitizers (pure ``value -> value`` transforms)
and then evaluates every rule against the sanitized value. Rules never
short-circuit: a field with three failing rules yields three violations,
and the result lists them in field order, then rule order.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email

Sanitizer = Callable[[Any], Any]
Predicate = Callable[[Any], bool]

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)

_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
# largest value a 32-bit signed integer primary key can hold
MAX_INT_ID = 2**31 - 1
_GMAIL_DOMAINS = {"gmail.com", "googlemail.com"}
_OUTLOOK_DOMAINS = {
    "hotmail.com",
    "hotmail.co.uk",
    "hotmail.fr",
    "hotmail.de",
    "hotmail.it",
    "hotmail.es",
    "live.com",
    "live.co.uk",
    "live.fr",
    "msn.com",
    "outlook.com",
    "outlook.co.uk",
    "outlook.fr",
    "outlook.de",
}
_YAHOO_DOMAINS = {
    "yahoo.com",
    "yahoo.co.uk",
    "yahoo.fr",
    "yahoo.de",
    "yahoo.ca",
    "ymail.com",
    "rocketmail.com",
}
_ICLOUD_DOMAINS = {"icloud.com", "me.com"}
_YANDEX_DOMAINS = {"yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru"}


@dataclass(frozen=True, slots=True)
class Violation:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True, slots=True)
class Rule:
    predicate: Predicate
    message: str


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    sanitizers: tuple[Sanitizer, ...] = ()
    rules: tuple[Rule, ...] = ()
    optional: bool = False

    def sanitize(self, value: Any) -> Any:
        for sanitizer in self.sanitizers:
            value = sanitizer(value)
        return value

    def check(self, value: Any) -> list[Violation]:
        return [Violation(self.name, rule.message) for rule in self.rules if not rule.predicate(value)]


@dataclass(slots=True)
class ValidationResult:
    values: dict[str, Any] = field(default_factory=dict)
    errors: list[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class RuleSet:
    fields: tuple[Field, ...]

    def validate(self, data: Mapping[str, Any] | None) -> ValidationResult:
        data = data or {}
        result = ValidationResult()
        for declared in self.fields:
            value = declared.sanitize(data.get(declared.name))
            if declared.optional and value in (None, ""):
                result.values[declared.name] = None
                continue
            result.values[declared.name] = value
            result.errors.extend(declared.check(value))
        return result


# Sanitizers


def trim(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


def escape(value: Any) -> Any:
    if isinstance(value, str):
        return value.translate(_HTML_ESCAPES)
    return value


def normalize_email(value: Any) -> Any:
    if not isinstance(value, str) or "@" not in value:
        return value
    local, _, domain = value.lower().rpartition("@")
    if domain in _GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in _OUTLOOK_DOMAINS or domain in _ICLOUD_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in _YAHOO_DOMAINS:
        local = local.split("-", 1)[0]
    elif domain in _YANDEX_DOMAINS:
        domain = "yandex.ru"
    if not local:
        return value.lower()
    return f"{local}@{domain}"


# Predicates. Shape checks pass on non-strings; is_string reports those.


def not_empty(value: Any) -> bool:
    return value is not None and value != ""


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def max_length(limit: int) -> Predicate:
    return lambda value: not isinstance(value, str) or len(value) <= limit


def min_length(limit: int) -> Predicate:
    return lambda value: not isinstance(value, str) or len(value) >= limit


def length_between(low: int, high: int) -> Predicate:
    return lambda value: not isinstance(value, str) or low <= len(value) <= high


def matches(pattern: str) -> Predicate:
    compiled = re.compile(pattern)
    return lambda value: not isinstance(value, str) or compiled.search(value) is not None


def is_email(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 1 <= value <= MAX_INT_ID
    if not isinstance(value, str) or len(value) > 20 or _INT_RE.match(value) is None:
        return False
    return 1 <= int(value) <= MAX_INT_ID


def required_string(name: str, label: str | None = None) -> tuple[Rule, ...]:
    label = label or name
    return (
        Rule(not_empty, f"{label} is required"),
        Rule(is_string, f"{label} must be string"),
    )


__all__ = [
    "Field",
    "Rule",
    "RuleSet",
    "ValidationResult",
    "Violation",
    "escape",
    "is_email",
    "is_positive_int",
    "is_string",
    "length_between",
    "matches",
    "max_length",
    "min_length",
    "normalize_email",
    "not_empty",
    "required_string",
    "trim",
]
