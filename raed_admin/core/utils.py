"""
Shared utility functions for the admin dashboard.
"""

import re
from datetime import datetime, date, timezone
from decimal import Decimal
from typing import Any, Optional

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)


def from_store(obj: Any) -> Any:
    """
    Recursively convert a DynamoDB item into plain Python values.
    Decimals become int when integral, float otherwise.

    Args:
        obj: Item, list or scalar as returned by the boto3 resource API

    Returns:
        Plain Python version of the object
    """
    if obj is None:
        return None

    if isinstance(obj, Decimal):
        if obj == obj.to_integral_value():
            return int(obj)
        return float(obj)

    if isinstance(obj, dict):
        return {str(k): from_store(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [from_store(item) for item in obj]

    if isinstance(obj, set):
        return [from_store(item) for item in obj]

    return obj


def to_store(obj: Any) -> Any:
    """
    Recursively convert plain Python values into DynamoDB-safe values.
    Floats become Decimal, dates become ISO strings.
    """
    if isinstance(obj, bool) or obj is None:
        return obj

    if isinstance(obj, float):
        return Decimal(str(obj))

    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, date):
        return obj.strftime('%Y-%m-%d')

    if isinstance(obj, dict):
        return {str(k): to_store(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [to_store(item) for item in obj]

    return obj


def is_uuid(value: str) -> bool:
    """Check whether a string is a syntactically valid UUID."""
    return bool(UUID_PATTERN.match(value or ""))


def category_slug(value: str) -> str:
    """Lowercase a category id and turn whitespace runs into underscores."""
    return re.sub(r'\s+', '_', (value or "").strip().lower())


def parse_float(value: Any) -> Optional[float]:
    """Parse a form value as float; None when blank or not numeric."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    try:
        text = str(value).strip()
        if not text:
            return None
        return float(text)
    except ValueError:
        return None


def parse_int(value: Any, default: int = 0) -> int:
    """Parse a form value as int, falling back to default."""
    number = parse_float(value)
    if number is None:
        return default
    return int(number)


def format_currency(amount: Any) -> str:
    """Format an amount in riyals."""
    try:
        return f"{float(amount or 0):,.2f} ر.س"
    except (TypeError, ValueError):
        return "0.00 ر.س"


def short_id(value: Any) -> str:
    """First eight characters of an id, for display."""
    return str(value or "")[:8]


def utc_now_iso() -> str:
    """Current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()
