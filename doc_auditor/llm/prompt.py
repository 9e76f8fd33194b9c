"""
doc_auditor/llm/prompt.py
─────────────────────────
Prompt builder for a single (document, rule) evaluation.

Usage:
    from doc_auditor.llm.prompt import build_prompt
    system_msg, user_msg = build_prompt(document_text, rule)
"""

from __future__ import annotations

from typing import Tuple

# ──────────────────────────────────────────────────────────────────────────────
# System prompt (document auditor persona)
# ──────────────────────────────────────────────────────────────────────────────

SYSTEM_PROMPT = """\
You are an AI document auditor.
Analyze the document you are given and evaluate it against exactly one rule.
Return STRICT VALID JSON only: no prose, no markdown, no code fences.
"""

# ──────────────────────────────────────────────────────────────────────────────
# Output format directive
# ──────────────────────────────────────────────────────────────────────────────

OUTPUT_FORMAT = """\
{
  "rule": "...",
  "status": "pass" or "fail",
  "evidence": "...",
  "reasoning": "...",
  "confidence": number (0-100)
}"""

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────


def build_prompt(document_text: str, rule: str) -> Tuple[str, str]:
    """
    Build the (system_message, user_message) pair for one rule.

    The document text is appended verbatim, so its size is bounded only by
    the model's input budget.
    """
    user_msg = f"""\
Evaluate the document given below against the following rule:

Rule: "{rule}"

Return STRICT VALID JSON in this format:
{OUTPUT_FORMAT}

Document Text:
{document_text}
"""

    return SYSTEM_PROMPT, user_msg
