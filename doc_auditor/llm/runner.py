"""
doc_auditor/llm/runner.py
─────────────────────────
CLI runner: extracts a PDF, evaluates every rule with an LLM provider (or the
TF-IDF baseline), and saves the result set as one JSON file.

Usage examples
--------------
# Gemini (default provider):
  python -m doc_auditor.llm.runner \\
      --pdf data/policy.pdf \\
      --rules data/rules.json \\
      --out results/predictions/gemini_policy.json

# Ollama (mistral), four concurrent calls:
  python -m doc_auditor.llm.runner \\
      --provider ollama \\
      --model mistral:latest \\
      --pdf data/policy.pdf \\
      --rule "The document must mention at least one date." \\
      --workers 4

# Dry-run (extract and list rules, no API calls):
  python -m doc_auditor.llm.runner --dry-run --pdf data/policy.pdf
"""
from __future__ import annotations

from typing import List, Optional

import argparse
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from ..baselines.tfidf_ir import tfidf_ir_predict
from ..check import check_document
from ..common.errors import AuditError
from ..common.io import load_rules, write_results
from ..pdf.extract import extract_text
from .providers import PROVIDERS, get_provider

log = logging.getLogger(__name__)


def run(
    provider_name: str,
    model_override: Optional[str],
    pdf_path: str,
    rules: List[str],
    out_path: str,
    max_workers: int = 1,
    temperature: Optional[float] = None,
    threshold: float = 0.10,
    dry_run: bool = False,
) -> Optional[Path]:
    pdf_bytes = Path(pdf_path).read_bytes()
    log.info("Loaded %s (%d bytes) | %d rules", pdf_path, len(pdf_bytes), len(rules))

    if dry_run:
        text = extract_text(pdf_bytes)
        log.info("DRY-RUN mode — no API calls will be made.")
        log.info("  extracted %d chars", len(text))
        for i, rule in enumerate(rules, 1):
            log.info("  [%d] %s", i, rule)
        return None

    if provider_name == "tfidf":
        model_tag = "tfidf_ir"
        results = tfidf_ir_predict(extract_text(pdf_bytes), rules, threshold=threshold)
    else:
        kwargs: dict = {}
        if model_override:
            kwargs["model"] = model_override
        if temperature is not None:
            kwargs["temperature"] = temperature

        provider = get_provider(provider_name, **kwargs)
        model_tag = provider.tag
        results = check_document(pdf_bytes, rules, provider, max_workers=max_workers)

    record = {
        "document": Path(pdf_path).stem,
        "model": model_tag,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "results": results,
    }
    out_file = write_results(out_path, record)

    n_pass = sum(1 for r in results if r.get("status") == "pass")
    log.info("Done. pass=%d  fail=%d → %s", n_pass, len(results) - n_pass, out_file)
    return out_file


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="python -m doc_auditor.llm.runner",
        description="doc_auditor — check a PDF against natural-language rules.",
    )
    parser.add_argument("--provider",    default=os.getenv("AUDIT_PROVIDER", "gemini"),
                        choices=list(PROVIDERS) + ["tfidf"],
                        help="LLM provider to use, or 'tfidf' for the offline baseline.")
    parser.add_argument("--model",       default=None,
                        help="Model name override (e.g. 'gemini-2.0-flash', 'mistral:latest').")
    parser.add_argument("--pdf",         required=True,
                        help="PDF file to check.")
    parser.add_argument("--rules",       default=None,
                        help="Path to a JSON array of rule strings.")
    parser.add_argument("--rule",        action="append", default=[],
                        help="Rule text; may be repeated. Appended after --rules.")
    parser.add_argument("--out",         default=None,
                        help="Output .json file path.")
    parser.add_argument("--workers",     type=int, default=int(os.getenv("AUDIT_MAX_WORKERS", 1)),
                        help="Concurrent model calls (default: 1, sequential).")
    parser.add_argument("--temperature", type=float, default=None,
                        help="Override generation temperature.")
    parser.add_argument("--threshold",   type=float, default=0.10,
                        help="Similarity threshold for the tfidf baseline.")
    parser.add_argument("--dry-run",     action="store_true",
                        help="Extract the PDF and list rules but make no API calls.")
    args = parser.parse_args()

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        level=logging.INFO,
        stream=sys.stderr,
    )

    # Default output path based on provider+model+document
    if args.out is None:
        model_slug = (args.model or "default").replace(":", "_").replace("/", "_")
        args.out = f"results/predictions/{args.provider}_{model_slug}_{Path(args.pdf).stem}.json"

    try:
        rules = load_rules(args.rules) if args.rules else []
        rules += args.rule
        run(
            provider_name=args.provider,
            model_override=args.model,
            pdf_path=args.pdf,
            rules=rules,
            out_path=args.out,
            max_workers=args.workers,
            temperature=args.temperature,
            threshold=args.threshold,
            dry_run=args.dry_run,
        )
    except (AuditError, OSError) as exc:
        log.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
