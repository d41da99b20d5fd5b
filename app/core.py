# app/core.py
import math
from typing import Any, Dict, Optional

from .errors import ValidationError
from .models import Product

# Payload checks shared by create and update. Order matters: the first
# failing field is the one reported.

PRODUCT_FIELDS = ("name", "description", "price", "category", "inStock")
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass but not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints compare exactly; isfinite would overflow on very large ones
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value > 0


def validate_product(payload: Any) -> None:
    """Raise ValidationError for the first invalid field of a product payload."""
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    if not _is_non_empty_string(payload.get("name")):
        raise ValidationError("Product name is required and must be a non-empty string.")
    if not _is_non_empty_string(payload.get("description")):
        raise ValidationError("Product description is required and must be a non-empty string.")
    if not _is_positive_number(payload.get("price")):
        raise ValidationError("Product price is required and must be a positive number.")
    if not _is_non_empty_string(payload.get("category")):
        raise ValidationError("Product category is required and must be a non-empty string.")
    if not isinstance(payload.get("inStock"), bool):
        raise ValidationError("Product inStock status is required and must be a boolean.")


def _make_product(product_id: str, payload: Dict[str, Any]) -> Product:
    # anything outside PRODUCT_FIELDS, a body "id" included, is dropped
    return Product(id=product_id, **{field: payload[field] for field in PRODUCT_FIELDS})


def parse_positive_int(raw: Optional[str], field: str, default: int, maximum: Optional[int] = None) -> int:
    """Coerce a query-string value; absent/empty means `default`."""
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip(), 10)
    except ValueError:
        raise ValidationError(f"Query parameter '{field}' must be a positive integer.")
    if value < 1:
        raise ValidationError(f"Query parameter '{field}' must be a positive integer.")
    if maximum is not None and value > maximum:
        raise ValidationError(f"Query parameter '{field}' must not exceed {maximum}.")
    return value
