"""
doc_auditor/check.py
────────────────────
Request boundary: PDF + rule list in, result set (or an error body) out.

    body, status = handle_upload("uploads/3f2a.pdf", '["Must mention a date."]', client)

``status`` follows HTTP conventions so a web layer can pass it straight through.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .common.errors import InvalidRulesError, MissingUploadError
from .common.io import parse_rules
from .llm.base import LLMClient
from .llm.orchestrator import evaluate_rules
from .pdf.extract import extract_text

log = logging.getLogger(__name__)


def check_document(
    pdf_bytes: bytes,
    rules: Sequence[str],
    client: LLMClient,
    max_workers: int = 1,
) -> List[Dict[str, Any]]:
    """Extract the PDF text and evaluate every rule against it, in order."""
    document_text = extract_text(pdf_bytes)
    return evaluate_rules(client, document_text, rules, max_workers=max_workers)


def _require_upload(upload_path: Optional[Union[str, Path]]) -> Path:
    if not upload_path or not Path(upload_path).is_file():
        raise MissingUploadError("No PDF uploaded")
    return Path(upload_path)


def _remove_upload(upload_path: Path) -> None:
    try:
        os.remove(upload_path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        log.warning("Could not remove upload %s: %s", upload_path, exc)


def handle_upload(
    upload_path: Optional[Union[str, Path]],
    rules_payload: Optional[Union[str, List[Any]]],
    client: LLMClient,
    max_workers: int = 1,
) -> Tuple[Dict[str, Any], int]:
    """
    Run one check for an uploaded file and remove the file afterwards.

    Returns ``(body, status)``: ``{"results": [...]}`` with 200, or an
    ``{"error": ..., "details": ...}`` body with 400/500. No partial results
    are ever returned.
    """
    try:
        path = _require_upload(upload_path)
    except MissingUploadError as exc:
        return {"error": str(exc)}, 400

    try:
        rules = parse_rules(rules_payload)
    except InvalidRulesError as exc:
        _remove_upload(path)
        return {"error": "Invalid rules", "details": str(exc)}, 400

    try:
        results = check_document(path.read_bytes(), rules, client, max_workers=max_workers)
    except Exception as exc:
        log.exception("Processing failed for %s", path)
        return {"error": "Processing failed", "details": str(exc)}, 500
    finally:
        _remove_upload(path)

    return {"results": results}, 200
