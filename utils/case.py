"""
Response normalization: snake_case ORM fields to camelCase JSON.
Request bodies accept either case through schema aliases; responses are always camelCase.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic.alias_generators import to_camel


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def serialize_record(fields: dict[str, Any]) -> dict[str, Any]:
    """Turn a snake_case field mapping into a JSON-ready camelCase response dict."""
    return {to_camel(k): _json_value(v) for k, v in fields.items()}
