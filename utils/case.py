"""
Response shaping: database rows use snake_case, the web client reads camelCase.
Uses Pydantic's alias_generators so keys match the request schemas' aliases.
"""
from datetime import date, datetime
from typing import Any, Mapping

from pydantic.alias_generators import to_camel


def to_camel_key(s: str) -> str:
    """Convert a single snake_case key to camelCase (first letter lower)."""
    return to_camel(s)


def dict_keys_to_camel(obj: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase."""
    if isinstance(obj, dict):
        return {to_camel_key(k): dict_keys_to_camel(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [dict_keys_to_camel(x) for x in obj]
    return obj


def row_to_camel(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Flat result row -> JSON-ready dict with camelCase keys and ISO-8601 dates."""
    out: dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        out[to_camel_key(key)] = value
    return out
