"""
doc_auditor/llm/orchestrator.py
───────────────────────────────
Run the rule evaluator over a batch of rules.

With max_workers <= 1 rules are evaluated one after another in the calling
thread. With more workers the calls fan out over a bounded thread pool; the
result list keeps the input order either way.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Sequence

from .base import LLMClient
from .evaluator import evaluate_rule

log = logging.getLogger(__name__)


def evaluate_rules(
    client: LLMClient,
    document_text: str,
    rules: Sequence[str],
    max_workers: int = 1,
) -> List[Dict[str, Any]]:
    if not rules:
        return []

    log.info("Evaluating %d rule(s) with %s (workers=%d)",
             len(rules), getattr(client, "tag", type(client).__name__), max(max_workers, 1))

    if max_workers <= 1:
        results = []
        for i, rule in enumerate(rules, 1):
            log.info("  rule %d/%d", i, len(rules))
            results.append(evaluate_rule(client, document_text, rule))
        return results

    with ThreadPoolExecutor(max_workers=min(max_workers, len(rules))) as pool:
        # map() yields in submission order and re-raises the first failure
        return list(pool.map(lambda rule: evaluate_rule(client, document_text, rule), rules))
