"""Utility functions for timestamp handling, record shaping, and logging."""

import hashlib
import json
import logging
from datetime import UTC, datetime
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

LOGGER = logging.getLogger(__name__)


def coerce_timestamp_s(raw: Any) -> Optional[int]:
    """Convert various timestamp formats to whole seconds since epoch.

    Handles:
    - Integer/float seconds or milliseconds (auto-detected by magnitude)
    - ISO 8601 strings (e.g., "2024-01-15T10:30:00Z")
    - String representations of numbers

    Examples
    --------
    >>> coerce_timestamp_s(1705318200)
    1705318200
    >>> coerce_timestamp_s(1705318200000)  # milliseconds -> seconds
    1705318200
    >>> coerce_timestamp_s("2024-01-15T10:30:00Z")
    1705318200
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            try:
                dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            except ValueError:
                return None
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=UTC)
            return int(dt.timestamp())
    else:
        return None

    # Heuristic: treat numbers greater than seconds threshold as milliseconds
    if value > 1_000_000_000_000:
        return int(value / 1000)
    return int(value)


def json_dumps(record: Any) -> str:
    """Serialize record to stable JSON string with sorted keys."""
    return json.dumps(record, sort_keys=True, separators=(",", ":"))


def content_key(element: Mapping[str, Any]) -> str:
    """Return a stable SHA-256 hex key for records that carry no id of their own."""
    return hashlib.sha256(json_dumps(element).encode("utf-8")).hexdigest()


def initial_since(start_timestamp: Optional[str], state: MutableMapping[str, Any]) -> Optional[int]:
    """Determine the initial 'since' (seconds) from resource state or parameter."""
    if state.get("last_timestamp"):
        return int(state["last_timestamp"])
    if not start_timestamp:
        return None
    return coerce_timestamp_s(start_timestamp)


def with_raw_data(element: Mapping[str, Any], **extra: Any) -> Dict[str, Any]:
    record = dict(element)
    record.update(extra)
    record["raw_data"] = json_dumps(element)
    return record


def rows_from_payload(payload: Any) -> List[Mapping[str, Any]]:
    """Flatten a decoded private response into a list of row mappings.

    Objects become a single row, lists one row per element. Scalars are
    wrapped as ``{"value": ...}``. Error payloads are passed through as rows.
    """
    if payload is None:
        return []
    if isinstance(payload, Mapping):
        return [payload]
    if isinstance(payload, list):
        return [item if isinstance(item, Mapping) else {"value": item} for item in payload]
    return [{"value": payload}]


def log_resource_stats(name: str, count: int, last_timestamp: Optional[Any]) -> None:
    """Log resource loading summary.

    Parameters
    ----------
    name:
        Resource name.
    count:
        Number of records loaded.
    last_timestamp:
        Last timestamp cursor value (if applicable).
    """
    LOGGER.info(
        "Resource %s loaded %s rows%s",
        name,
        count,
        f" (last_timestamp={last_timestamp})" if last_timestamp is not None else "",
    )


__all__ = [
    "coerce_timestamp_s",
    "json_dumps",
    "content_key",
    "initial_since",
    "with_raw_data",
    "rows_from_payload",
    "log_resource_stats",
]
