"""
doc_auditor/llm/schema.py
─────────────────────────
JSON Schema definition and validation for a single-rule verdict.

Expected model output structure:
  {
    "rule": "The document must mention at least one date.",
    "status": "pass",
    "evidence": "Effective 01/03/2024",
    "reasoning": "A date is stated in the header.",
    "confidence": 92
  }
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Tuple

import jsonschema

# ──────────────────────────────────────────────────────────────────────────────
# JSON Schema (strict)
# ──────────────────────────────────────────────────────────────────────────────

VERDICT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["rule", "status", "evidence", "reasoning", "confidence"],
    "properties": {
        "rule":       {"type": "string"},
        "status":     {"type": "string", "enum": ["pass", "fail"]},
        "evidence":   {"type": "string"},
        "reasoning":  {"type": "string"},
        "confidence": {"type": "number", "minimum": 0, "maximum": 100},
    },
}

_VALIDATOR = jsonschema.Draft7Validator(VERDICT_SCHEMA)

# One fence wrapping the whole reply: ```json\n ... \n```
_FENCE_RE = re.compile(r"\A```[A-Za-z0-9_+-]*[ \t]*\n?(.*?)\n?[ \t]*```\Z", re.DOTALL)


# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def _reject_constant(name: str) -> Any:
    # NaN and +/-Infinity are not JSON and slip past minimum/maximum
    raise ValueError(f"non-finite number {name} is not allowed")


def strip_fences(raw: str) -> str:
    """
    Trim the reply and remove a Markdown code fence if, and only if, it wraps
    the entire trimmed text. Backticks inside the payload are left alone.
    """
    text = (raw or "").strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


def validate_verdict(raw: str) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Strip fences, parse, and validate raw model text against VERDICT_SCHEMA.

    Returns
    -------
    (parsed_dict, None)      on success, the dict exactly as decoded
    (None, error_message)    on failure
    """
    cleaned = strip_fences(raw)
    if not cleaned:
        return None, "Empty model response."

    try:
        data = json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as e:  # includes json.JSONDecodeError
        return None, f"JSON decode error: {e}"

    errors = list(_VALIDATOR.iter_errors(data))
    if errors:
        msgs = "; ".join(e.message for e in errors[:3])
        return None, f"Schema validation failed: {msgs}"

    return data, None
