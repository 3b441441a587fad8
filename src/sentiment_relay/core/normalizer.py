"""
Response normalizer for inference payloads.

The inference router does not return a stable shape. Depending on the model
and pipeline it answers with a bare object, a list of objects, or a list
wrapped one or more times in single-element lists (e.g. `[[{...}, {...}]]`).
This module decodes every one of those shapes into a flat list of
PredictionRecord and defaults anything it cannot read.

Accepted shapes:
- `{...}`                  -> one record
- `[{...}, {...}]`         -> one record per item
- `[[...]]`, `[[[...]]]`   -> unwrapped, then as above
- anything else            -> records built from defaults

normalize() never raises: an unreadable payload is expected input, not a bug.
"""

import json
import math
from collections.abc import Mapping
from typing import Any

from sentiment_relay.models.predictions import UNKNOWN_PREDICTION_LABEL, PredictionRecord


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def unwrap(raw: Any) -> Any:
    """
    Strip redundant single-element list wrapping.
    
    Unwraps while the value is a list of exactly one element and that element
    is itself a list. A single-element list holding an object is left as is,
    and unwrapping stops at a list already seen (self-referencing input).
    
    Examples:
        >>> unwrap([[[{"label": "pos"}]]])
        [{'label': 'pos'}]
        >>> unwrap([{"label": "pos"}])
        [{'label': 'pos'}]
    """
    value = raw
    seen: set[int] = set()
    while _is_array(value) and len(value) == 1 and _is_array(value[0]):
        if id(value) in seen:
            break
        seen.add(id(value))
        value = value[0]
    return value


def _stringify(value: Any) -> str:
    """Render a label value the way it would appear in the JSON payload."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, default=str, separators=(",", ":"))
        except (TypeError, ValueError, RecursionError):
            # Non-string keys or self-referencing containers
            return str(value)
    return str(value)


def _extract_label(item: Any) -> str:
    if isinstance(item, Mapping):
        value = item.get("label")
        if value is None:
            value = item.get("0")
        if value is None:
            value = item.get(0)
    else:
        # Positional items such as ["positive", 0.93]
        value = item[0] if len(item) else None
    
    if value is None:
        return UNKNOWN_PREDICTION_LABEL
    label = _stringify(value)
    return label if label else UNKNOWN_PREDICTION_LABEL


def coerce_score(value: Any) -> float:
    """
    Coerce an untrusted score into a finite float.
    
    Numbers pass through, booleans become 0/1, numeric strings are parsed and
    blank strings count as 0. Everything else, and any non-finite result
    (NaN, +/-inf, overflow), becomes 0.
    """
    if value is None:
        return 0.0
    
    try:
        if isinstance(value, (bool, int, float)):
            number = float(value)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return 0.0
            number = float(text)
        else:
            return 0.0
    except (OverflowError, ValueError):
        return 0.0
    
    return number if math.isfinite(number) else 0.0


def _extract_score(item: Any) -> float:
    if isinstance(item, Mapping):
        return coerce_score(item.get("score"))
    # Positional items carry no named score
    return 0.0


def sanitize_item(item: Any) -> PredictionRecord:
    """
    Build a PredictionRecord from a single payload item.
    
    Items that are neither objects nor lists (None, numbers, strings) yield
    the default record `{"label": "unknown", "score": 0}`.
    """
    if item is None or not (isinstance(item, Mapping) or _is_array(item)):
        return PredictionRecord(label=UNKNOWN_PREDICTION_LABEL, score=0.0)
    
    return PredictionRecord(label=_extract_label(item), score=_extract_score(item))


def normalize(raw: Any) -> list[PredictionRecord]:
    """
    Normalize a raw inference payload into canonical prediction records.
    
    Args:
        raw: Decoded JSON body returned by the inference endpoint
        
    Returns:
        One PredictionRecord per payload item, in payload order. A bare
        (non-list) payload is treated as a single item.
    """
    value = unwrap(raw)
    items = list(value) if _is_array(value) else [value]
    return [sanitize_item(item) for item in items]
