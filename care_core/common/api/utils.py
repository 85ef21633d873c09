# care_core/common/api/utils.py
from __future__ import annotations

from datetime import date
from uuid import UUID

from rest_framework.exceptions import ValidationError

from care_core.common.validation import parse_date

# router lookup for UUID primary keys; anything else falls through to 404
UUID_LOOKUP_REGEX = "[0-9a-fA-F-]{36}"


def actor_user_id(request) -> int | None:
    return request.user.id if request.user and request.user.is_authenticated else None


def uuid_or_none(value: str | None, field_name: str) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError({field_name: ["Invalid UUID"]})


def date_param(request, name: str) -> date | None:
    raw = request.query_params.get(name)
    if not raw:
        return None
    d = parse_date(raw)
    if d is None:
        raise ValidationError({name: ["Please enter a valid date"]})
    return d
