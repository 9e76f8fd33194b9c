import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import InvalidRulesError


def parse_rules(payload: Optional[Union[str, List[Any]]]) -> List[str]:
    """Decode and validate a serialized rule list.

    ``None`` or an empty string means no rules. Anything else must be a JSON
    array of strings (or an already decoded list of strings).
    """
    if payload is None or payload == "":
        return []

    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidRulesError(f"rules is not valid JSON: {e}") from e
    else:
        data = payload

    if not isinstance(data, list):
        raise InvalidRulesError(
            f"rules must be a JSON array, got {type(data).__name__}"
        )
    for i, rule in enumerate(data):
        if not isinstance(rule, str):
            raise InvalidRulesError(
                f"rule at index {i} must be a string, got {type(rule).__name__}"
            )
    return list(data)


def load_rules(rules_path: str) -> List[str]:
    rpath = Path(rules_path)
    if not rpath.exists():
        raise FileNotFoundError(f"Rules file not found: {rpath}")
    return parse_rules(rpath.read_text(encoding="utf-8"))


def load_gold(gold_path: str) -> Dict[str, Dict[str, str]]:
    gpath = Path(gold_path)
    if not gpath.exists():
        print(f"Warning: {gpath} does not exist.")
        return {}

    return json.loads(gpath.read_text(encoding="utf-8"))


def write_results(out_path: str, record: Dict[str, Any]) -> Path:
    out_file = Path(out_path)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(
        json.dumps(record, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
    )
    return out_file
