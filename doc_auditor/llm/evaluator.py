"""
doc_auditor/llm/evaluator.py
────────────────────────────
Evaluate one rule against one document: prompt, call the model once,
validate the reply, fall back to a fixed low-confidence failure.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from ..common.schema import Verdict
from .base import LLMClient
from .prompt import build_prompt
from .schema import validate_verdict

log = logging.getLogger(__name__)


def evaluate_rule(client: LLMClient, document_text: str, rule: str) -> Dict[str, Any]:
    """
    Return the model's verdict for ``rule`` as decoded, or the fallback verdict
    when the reply is not a schema-valid verdict object.

    Errors raised by ``client.generate`` are not caught.
    """
    system_msg, user_msg = build_prompt(document_text, rule)
    raw = client.generate(system_msg, user_msg)

    parsed, error_msg = validate_verdict(raw)
    if parsed is not None:
        return parsed

    log.warning("Unusable model reply for rule %r: %s | raw reply: %s", rule, error_msg, raw)
    return Verdict.fallback(rule).to_dict()
