"""Field rules for catalog entities.

Enforced by the services before anything is persisted, independently
of whatever the HTTP layer already checked.
"""

from decimal import Decimal, InvalidOperation

from catalog_api.domain.exceptions import InvalidCategoryError, InvalidProductError

PRODUCT_NAME_MAX_LENGTH = 200
CATEGORY_NAME_MAX_LENGTH = 100
PRICE_DECIMAL_PLACES = 2


def normalize_product_fields(
    name: str | None,
    price: Decimal | int | float | str | None,
    stock_quantity: int | None,
) -> tuple[str, Decimal, int]:
    """Validate and normalise the scalar product fields.

    Args:
        name: Raw product name.
        price: Raw price.
        stock_quantity: Raw stock quantity.

    Returns:
        Tuple of (trimmed name, price as Decimal, stock quantity).

    Raises:
        InvalidProductError: With every failing field listed.
    """
    errors: dict[str, list[str]] = {}

    trimmed = (name or "").strip()
    if not trimmed:
        errors.setdefault("name", []).append("Name is required.")
    elif len(trimmed) > PRODUCT_NAME_MAX_LENGTH:
        errors.setdefault("name", []).append(
            f"Name must not exceed {PRODUCT_NAME_MAX_LENGTH} characters."
        )

    amount: Decimal | None = None
    try:
        amount = Decimal(str(price)) if price is not None else None
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite() or amount <= 0:
        errors.setdefault("price", []).append("Price must be greater than 0.")
    elif amount.normalize().as_tuple().exponent < -PRICE_DECIMAL_PLACES:
        # Stored as NUMERIC(18, 2); more places would be rounded away
        errors.setdefault("price", []).append(
            f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places."
        )

    if stock_quantity is None or stock_quantity < 0:
        errors.setdefault("stockQuantity", []).append(
            "Stock quantity must be 0 or greater."
        )

    if errors:
        raise InvalidProductError(errors)

    return trimmed, amount, stock_quantity


def normalize_category_name(name: str | None) -> str:
    """Trim a category name and check it is usable.

    Raises:
        InvalidCategoryError: If the name is blank or too long.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise InvalidCategoryError({"name": ["Name is required."]})
    if len(trimmed) > CATEGORY_NAME_MAX_LENGTH:
        raise InvalidCategoryError(
            {"name": [f"Name must not exceed {CATEGORY_NAME_MAX_LENGTH} characters."]}
        )
    return trimmed


def distinct_ids(ids: list[int] | None) -> list[int]:
    """De-duplicate ids, keeping first-seen order."""
    return list(dict.fromkeys(ids or []))
