"""Serializers used by the body builder."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from .errors import BodyEncodingError
from .types import Err, Ok, Result


def encode_json(value: Any) -> Result[str, BodyEncodingError]:
    """Encode ``value`` as compact, strict JSON (no NaN or Infinity)."""
    try:
        return Ok(json.dumps(value, separators=(",", ":"), allow_nan=False))
    except (TypeError, ValueError) as exc:
        return Err(BodyEncodingError(f"cannot encode body as JSON: {exc}"))


def encode_query(
    pairs: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> Result[str, BodyEncodingError]:
    """Form URL-encode key/value pairs (``+`` for spaces).

    Sequence values expand to one pair per item.
    """
    try:
        return Ok(urlencode(pairs, doseq=True))
    except (TypeError, ValueError) as exc:
        return Err(BodyEncodingError(f"cannot form-encode body: {exc}"))
