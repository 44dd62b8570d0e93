"""
Common schemas shared across subsystems.

**Domain Coverage**:
- MoneyModel: Base for responses carrying Decimal money values
- MessageResponse: Plain acknowledgement payload
"""
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer

from finovo.app.utils.decimal_utils import quantize_money

# Smallest positive amount that survives truncation to a Numeric(18, 2) column
MIN_AMOUNT = Decimal("0.01")


class MoneyModel(BaseModel):
    """
    Base for result models holding Decimal amounts.

    Attributes keep full precision; every Decimal field is quantized to
    cents when serialized to JSON.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_serializer("*", when_used="json")
    def _quantize_decimals(self, value):
        if isinstance(value, Decimal):
            return quantize_money(value)
        return value


class MessageResponse(BaseModel):
    """Acknowledgement for operations without a payload."""
    message: str
