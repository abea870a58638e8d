"""
Structural decoding helpers for raw JSON records.

These only check shape (presence of required keys, JSON types). They do not
validate values against any schema. Errors are raised as KeyError/TypeError
and converted to DataLoadError by the loader.
"""

from typing import Any

Record = dict[str, Any]


def require(record: Record, key: str) -> Any:
    """Return a required key's value, raising KeyError naming the key."""
    if key not in record:
        raise KeyError(f"missing required field '{key}'")
    return record[key]


def str_field(record: Record, key: str, default: str = "") -> str:
    value = record.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(f"field '{key}' must be a string, got {type(value).__name__}")
    # Upstream occasionally encodes numeric stats as JSON numbers
    return str(value)


def optional_str(record: Record, key: str) -> str | None:
    if record.get(key) is None:
        return None
    return str_field(record, key)


def bool_field(record: Record, key: str) -> bool:
    value = record.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"field '{key}' must be a boolean, got {type(value).__name__}")
    return value


def int_field(record: Record, key: str, default: int = 0) -> int:
    value = record.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field '{key}' must be an integer, got {type(value).__name__}")
    return value


def str_tuple(record: Record, key: str) -> tuple[str, ...]:
    value = record.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"field '{key}' must be an array, got {type(value).__name__}")
    return tuple(str(item) for item in value)


def record_list(record: Record, key: str) -> list[Record]:
    value = record.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise TypeError(f"field '{key}' must be an array of objects")
    return value
