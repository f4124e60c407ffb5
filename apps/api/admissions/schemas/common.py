"""Shared schema types."""

import re
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer, StringConstraints
from pydantic.networks import validate_email

# Fixed-point amount as accepted by the API ("1500" or "1500.50")
DECIMAL_STRING_PATTERN = r"^\d+(\.\d{1,2})?$"

# Money held as Decimal, rendered in JSON as a two-decimal string
MoneyStr = Annotated[
    Decimal,
    PlainSerializer(lambda v: f"{v:.2f}", return_type=str, when_used="json"),
]

# Money held as Decimal, rendered in JSON as a float rounded to cents
MoneyFloat = Annotated[
    Decimal,
    PlainSerializer(lambda v: round(float(v), 2), return_type=float, when_used="json"),
]


def _check_email(value: str) -> str:
    # Validate only; the address is stored as entered
    validate_email(value)
    return value


# Contact fields keep what the prospect typed, minus surrounding whitespace
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
ContactEmail = Annotated[str, StringConstraints(strip_whitespace=True), AfterValidator(_check_email)]


def parse_decimal_string(value: str | None, field_name: str) -> Decimal | None:
    """Validate a fixed-point amount string and convert it to Decimal."""
    if value is None:
        return None
    if not re.match(DECIMAL_STRING_PATTERN, value):
        raise ValueError(f"{field_name} must be a valid amount (e.g. 1500 or 1500.50)")
    return Decimal(value)
