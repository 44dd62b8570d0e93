"""
Decimal precision utilities for Finovo.

Provides functions to work with database numeric precision and money rounding.
All money columns in the database use NUMERIC(18, 2).

Usage:
    from finovo.app.utils.decimal_utils import get_model_column_precision, truncate_to_db_precision

    # Get precision for a column
    precision, scale = get_model_column_precision(Expense, "amount")
    # Returns: (18, 2)

    # Truncate a decimal to match DB precision
    value = Decimal("1499.999")
    truncated = truncate_to_db_precision(value, Expense, "amount")
    # Returns: Decimal("1499.99")
"""
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Type, Tuple, Optional

from sqlalchemy import Numeric
from sqlmodel import SQLModel

MONEY_QUANTUM = Decimal("0.01")
UNIT_QUANTUM = Decimal("1")


def get_model_column_precision(model: Type[SQLModel], column_name: str) -> Tuple[int, int]:
    """
    Get (precision, scale) for a numeric column from SQLModel.

    Reads the column type definition from the model to get the actual
    precision and scale values, avoiding hardcoded constants.

    Args:
        model: SQLModel table class (e.g., Expense, Investment)
        column_name: Column name (e.g., "amount", "current_value")

    Returns:
        Tuple of (precision, scale)

    Raises:
        ValueError: If column not found or not a Numeric type

    Example:
        >>> get_model_column_precision(Expense, "amount")
        (18, 2)
    """
    if not hasattr(model, '__table__'):
        raise ValueError(f"Model {model.__name__} has no __table__ attribute")

    table = model.__table__

    if column_name not in table.columns:
        raise ValueError(f"Column '{column_name}' not found in {model.__name__}")

    column_type = table.columns[column_name].type

    if not isinstance(column_type, Numeric):
        raise ValueError(
            f"Column '{column_name}' in {model.__name__} is not Numeric type "
            f"(found: {type(column_type).__name__})"
            )

    precision = column_type.precision
    scale = column_type.scale

    if precision is None or scale is None:
        raise ValueError(f"Column '{column_name}' in {model.__name__} has undefined precision/scale")

    return precision, scale


def truncate_to_db_precision(value: Decimal, model: Type[SQLModel], column_name: str) -> Decimal:
    """
    Truncate decimal to match database column precision.

    Database truncates on write, so we truncate before storing to keep the
    in-memory object identical to what a reload returns.

    Example:
        >>> truncate_to_db_precision(Decimal("175.129"), Expense, "amount")
        Decimal("175.12")

    Note:
        Uses ROUND_DOWN to match SQLite truncation behavior.
    """
    _, scale = get_model_column_precision(model, column_name)
    quantizer = Decimal(10) ** -scale
    return value.quantize(quantizer, rounding=ROUND_DOWN)


def truncate_optional(value: Optional[Decimal], model: Type[SQLModel], column_name: str) -> Optional[Decimal]:
    """Same as truncate_to_db_precision, passing None through."""
    if value is None:
        return None
    return truncate_to_db_precision(value, model, column_name)


def quantize_money(value: Decimal) -> Decimal:
    """Round a money value to cents (half up), used for API responses."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def round_to_unit(value: Decimal) -> Decimal:
    """Round a money value to the nearest whole currency unit, for display."""
    return value.quantize(UNIT_QUANTUM, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, currency: str = "INR") -> str:
    """
    Format a money value rounded to whole units with thousands separators.

    Example:
        >>> format_money(Decimal("4995739.6"))
        'INR 4,995,740'
    """
    return f"{currency} {round_to_unit(value):,}"
