"""
JSON serialization of data sizes.

Wire form is a JSON object with the quantity as float and the unit as its stable Unit ordinal:

    {"quantity": 1024.0, "unit": 1}

The hooks plug into the stdlib json module for data sizes nested in larger documents:

    >>> text = json.dumps({"disk": DataSize(2, Unit.GIGABYTE)}, default=json_default)
    >>> json.loads(text, object_hook=json_object_hook)["disk"] == DataSize(2, Unit.GIGABYTE)
    True
"""

# Standard library -----------------------------------------------------------------------------------------------------
import json
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type
from .size import DataSize

_FIELDS = frozenset({"quantity", "unit"})


# Methods --------------------------------------------------------------------------------------------------------------

def to_json(size: DataSize, **kwargs) -> str:
    """
    Serialize a data size to a JSON string.

    Keyword arguments are passed to json.dumps().

    Examples:
        >>> to_json(DataSize(1024))
        '{"quantity": 1024.0, "unit": 1}'
    """
    if not isinstance(size, DataSize):
        raise TypeError(f"DataSize expected, but got {fmt_type(size)}")
    return json.dumps(size.to_dict(), **kwargs)


def from_json(text: str | bytes) -> DataSize:
    """
    Deserialize a data size from a JSON string.

    Raises:
        json.JSONDecodeError: If text is not valid JSON.
        TypeError: If the document is not a JSON object.
        ValueError: If a field is missing.
        InvalidUnitError: If the unit ordinal is out of range.
    """
    return DataSize.from_dict(json.loads(text))


def json_default(obj: Any) -> Any:
    """Hook for json.dumps(default=...) that serializes data sizes."""
    if isinstance(obj, DataSize):
        return obj.to_dict()
    raise TypeError(f"Object of type {fmt_type(obj)} is not JSON serializable")


def json_object_hook(data: dict[str, Any]) -> Any:
    """Hook for json.loads(object_hook=...) that restores objects with exactly the data size fields."""
    if data.keys() == _FIELDS:
        return DataSize.from_dict(data)
    return data
