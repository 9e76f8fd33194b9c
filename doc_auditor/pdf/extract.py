"""
doc_auditor/pdf/extract.py
──────────────────────────
Plain-text extraction from PDF bytes (PyPDF2).

A PDF with no text layer (scanned pages, blank pages) yields "" and is not an
error. A PDF the library cannot parse raises ExtractionError.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import List

import PyPDF2

from ..common.errors import ExtractionError

log = logging.getLogger(__name__)


def extract_text(pdf_bytes: bytes) -> str:
    if not pdf_bytes:
        raise ExtractionError("PDF is empty")

    try:
        reader = PyPDF2.PdfReader(BytesIO(pdf_bytes))
        parts: List[str] = []
        for page in reader.pages:
            parts.append(page.extract_text() or "")
    except Exception as exc:
        raise ExtractionError(f"Could not read PDF: {exc}") from exc

    text = "\n".join(parts).strip()
    log.info("Extracted %d chars from %d page(s)", len(text), len(parts))
    return text
