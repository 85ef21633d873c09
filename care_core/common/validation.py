# care_core/common/validation.py
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Sequence
from uuid import UUID

from rest_framework.exceptions import ValidationError


class Rule:
    """
    A single named validation rule.

    check() returns a human readable message when the value violates the rule,
    or None when it passes. Rules other than Required are skipped for blank values.
    """

    def check(self, value: Any) -> str | None:
        raise NotImplementedError


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def parse_decimal(value: Any) -> Decimal | None:
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def parse_uuid(value: Any) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class Required(Rule):
    label: str

    def check(self, value: Any) -> str | None:
        if is_blank(value):
            return f"{self.label} is required"
        return None


@dataclass(frozen=True)
class MaxLength(Rule):
    label: str
    limit: int

    def check(self, value: Any) -> str | None:
        if len(str(value)) > self.limit:
            return f"{self.label} cannot exceed {self.limit} characters"
        return None


@dataclass(frozen=True)
class NumericRange(Rule):
    label: str
    min_value: Decimal | int | None = None
    max_value: Decimal | int | None = None
    message: str | None = None

    def check(self, value: Any) -> str | None:
        number = parse_decimal(value)
        if number is None or not number.is_finite():
            return f"{self.label} must be a valid number"
        if self.min_value is not None and number < Decimal(str(self.min_value)):
            return self.message or f"{self.label} must be at least {self.min_value}"
        if self.max_value is not None and number > Decimal(str(self.max_value)):
            return self.message or f"{self.label} must be at most {self.max_value}"
        return None


@dataclass(frozen=True)
class DateRange(Rule):
    """
    Calendar date bounds, both inclusive.
    """
    label: str
    min_date: date | None = None
    max_date: date | None = None
    min_message: str | None = None
    max_message: str | None = None

    def check(self, value: Any) -> str | None:
        d = parse_date(value)
        if d is None:
            return f"Please enter a valid {self.label.lower()}"
        if self.min_date is not None and d < self.min_date:
            return self.min_message or f"{self.label} cannot be before {self.min_date.isoformat()}"
        if self.max_date is not None and d > self.max_date:
            return self.max_message or f"{self.label} cannot be after {self.max_date.isoformat()}"
        return None


@dataclass(frozen=True)
class Pattern(Rule):
    label: str
    regex: str
    message: str | None = None

    def check(self, value: Any) -> str | None:
        if not re.fullmatch(self.regex, str(value).strip()):
            return self.message or f"{self.label} has an invalid format"
        return None


@dataclass(frozen=True)
class ValidUUID(Rule):
    label: str

    def check(self, value: Any) -> str | None:
        if parse_uuid(value) is None:
            return f"Please select a valid {self.label.lower()}"
        return None


PHONE_PATTERN = r"[0-9]{10}"


def collect_errors(fields: Mapping[str, tuple[Any, Sequence[Rule]]]) -> dict[str, list[str]]:
    """
    Run every rule for every field and return {field: [messages]}.

    A failed Required rule stops the remaining rules for that field.
    """
    errors: dict[str, list[str]] = {}
    for name, (value, rules) in fields.items():
        for rule in rules:
            if not isinstance(rule, Required) and is_blank(value):
                continue
            message = rule.check(value)
            if message is None:
                continue
            errors.setdefault(name, []).append(message)
            if isinstance(rule, Required):
                break
    return errors


def ensure_valid(fields: Mapping[str, tuple[Any, Sequence[Rule]]]) -> None:
    errors = collect_errors(fields)
    if errors:
        raise ValidationError(errors)
