from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..models.exceptions import ValidationError
from ..models.schemas import BrandRequest

REQUIRED_MESSAGE = "brandName and userId are required"


def _is_blank(value: Any) -> bool:
    # Falsy values (null, "", 0, false) count as absent
    return not value


def validate_brand_request(payload: Any) -> BrandRequest:
    """Turn a decoded JSON body into a BrandRequest or raise a 400 ValidationError.

    Only presence of ``brandName`` and ``userId`` is checked; optional fields
    are left as sent (absent ones are filled in later, at prompt time).
    A boolean ``userId`` is never coerced to a number.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    if _is_blank(payload.get("brandName")) or _is_blank(payload.get("userId")):
        raise ValidationError(REQUIRED_MESSAGE)

    try:
        return BrandRequest.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        raise ValidationError(f"Invalid value for '{field}': {first.get('msg')}", field=field) from None
