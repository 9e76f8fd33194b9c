"""
Test configuration and fixtures
"""
import json
from io import BytesIO

import pytest
from PyPDF2 import PdfWriter

from doc_auditor.llm.base import LLMClient


class FakeLLMClient(LLMClient):
    """Returns scripted replies in order; records every prompt it receives."""

    name = "fake"
    model = "scripted"

    def __init__(self, replies=None, reply_for=None):
        self.replies = list(replies or [])
        self.reply_for = reply_for
        self.calls = []

    def generate(self, system, user):
        self.calls.append((system, user))
        if self.reply_for is not None:
            reply = self.reply_for(system, user)
        else:
            reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def verdict_json(rule, status="pass", evidence="Owner: Dana.", reasoning="Stated.", confidence=90):
    return json.dumps({
        "rule": rule,
        "status": status,
        "evidence": evidence,
        "reasoning": reasoning,
        "confidence": confidence,
    })


def _escape(text):
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_text_pdf(text):
    """Single-page PDF with one line of Helvetica text."""
    content = f"BT /F1 12 Tf 72 720 Td ({_escape(text)}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(content)).encode() + b" >>\nstream\n" + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for i, body in enumerate(objects, 1):
        offsets.append(out.tell())
        out.write(f"{i} 0 obj\n".encode() + body + b"\nendobj\n")

    xref_at = out.tell()
    out.write(f"xref\n0 {len(objects) + 1}\n".encode())
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(f"{offset:010d} 00000 n \n".encode())
    out.write(
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    )
    return out.getvalue()


def make_blank_pdf(pages=1):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


@pytest.fixture
def text_pdf():
    return make_text_pdf("Project X purpose: reduce latency. Owner: Dana.")


@pytest.fixture
def blank_pdf():
    return make_blank_pdf()
