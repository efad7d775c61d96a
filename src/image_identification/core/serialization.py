"""JSON rendering of classification results that tolerates unknown value types."""

import datetime
import json
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional
from pydantic import BaseModel

from .logging_config import get_logger

logger = get_logger("serialization")

_SKIP = object()


def _to_jsonable(value: Any, path: str) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
        if math.isfinite(number):
            return number
        # NaN and Infinity have no JSON representation
        logger.debug(f"Replacing non-finite number at {path or '<root>'} with null")
        return None
    if isinstance(value, Enum):
        return _to_jsonable(value.value, path)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return _to_jsonable(value.model_dump(mode="json"), path)
    if isinstance(value, Mapping):
        converted = {}
        for key, item in value.items():
            item_path = f"{path}.{key}" if path else str(key)
            item_value = _to_jsonable(item, item_path)
            if item_value is not _SKIP:
                converted[str(key)] = item_value
        return converted
    if isinstance(value, (list, tuple)):
        items = (_to_jsonable(item, f"{path}[{i}]") for i, item in enumerate(value))
        return [item for item in items if item is not _SKIP]

    logger.debug(f"Skipping unrecognized field {path or '<root>'} ({type(value).__name__})")
    return _SKIP


def to_jsonable(result: Any) -> Any:
    """Convert a classification result to plain JSON types, dropping what is unknown."""
    converted = _to_jsonable(result, "")
    return {} if converted is _SKIP else converted


def serialize_result(result: Any, indent: Optional[int] = 2) -> str:
    """Render a classification result as indented JSON text."""
    return json.dumps(to_jsonable(result), indent=indent, allow_nan=False)
