"""
doc_auditor/eval/eval_llm.py
────────────────────────────
CLI evaluator: loads one or more result files written by the runner, compares
each verdict with the gold labels, and saves per-rule and overall CSVs.

Usage
-----
  python -m doc_auditor.eval.eval_llm \\
      --predictions results/predictions/gemini_policy.json \\
      --gold data/gold_labels.json \\
      --out-dir results/metrics \\
      --model-tag gemini
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import pandas as pd

from ..common.io import load_gold
from ..common.schema import VerdictStatus
from .metrics import Prediction, evaluate, is_fallback


def load_predictions(paths: list[str]) -> list[Prediction]:
    """
    Flatten result files into one Prediction per verdict.
    Files holding an "error" body instead of "results" are skipped.
    """
    preds: list[Prediction] = []

    for path_str in paths:
        path = Path(path_str)
        if not path.exists():
            print(f"[ERROR] Predictions file not found: {path}", file=sys.stderr)
            sys.exit(1)

        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as ex:
            print(f"[WARN] {path}: JSON decode error — {ex}", file=sys.stderr)
            continue

        if "results" not in record:
            print(f"[WARN] skipping {path} — {record.get('error', 'no results')}", file=sys.stderr)
            continue

        document = record.get("document", path.stem)
        model = record.get("model", "unknown")

        for verdict in record["results"]:
            status = verdict.get("status")
            if status not in (VerdictStatus.PASS.value, VerdictStatus.FAIL.value):
                status = VerdictStatus.FAIL.value
            try:
                confidence = float(verdict.get("confidence", 0))
            except (TypeError, ValueError):
                confidence = 0.0

            preds.append(Prediction(
                document=document,
                model=model,
                rule=verdict.get("rule", "?"),
                status=status,
                confidence=confidence,
                fallback=is_fallback(verdict),
            ))

    return preds


def run_eval(
    predictions_paths: list[str],
    gold_path: str,
    out_dir: str,
    model_tag: str,
) -> None:
    preds = load_predictions(predictions_paths)
    gold  = load_gold(gold_path)

    if not preds:
        print("[ERROR] No usable predictions found.", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(preds)} predictions for model '{model_tag}'.")

    results  = evaluate(preds, gold)
    per_rule = results["per_rule"]
    overall  = results["overall"]

    if not per_rule:
        print("[ERROR] No prediction matched a gold label.", file=sys.stderr)
        sys.exit(1)

    # ── per-rule CSV ───────────────────────────────────────────────────────────
    per_rule_rows = []
    for rule, metrics in sorted(per_rule.items()):
        per_rule_rows.append({
            "model":           model_tag,
            "rule":            rule,
            "n":               metrics["n"],
            "tp":              metrics["tp"],
            "fp":              metrics["fp"],
            "fn":              metrics["fn"],
            "accuracy":        round(metrics["accuracy"],        4),
            "precision":       round(metrics["precision"],       4),
            "recall":          round(metrics["recall"],          4),
            "f1":              round(metrics["f1"],              4),
            "fallback_rate":   round(metrics["fallback_rate"],   4),
            "mean_confidence": round(metrics["mean_confidence"], 2),
        })
    df_per_rule = pd.DataFrame(per_rule_rows)

    # ── overall CSV ────────────────────────────────────────────────────────────
    overall_row = {
        "model":           model_tag,
        "accuracy":        round(overall["accuracy"],        4),
        "macro_precision": round(overall["macro_precision"], 4),
        "macro_recall":    round(overall["macro_recall"],    4),
        "macro_f1":        round(overall["macro_f1"],        4),
        "fallback_rate":   round(sum(p.fallback for p in preds) / len(preds), 4),
        "n_predictions":   len(preds),
    }
    df_overall = pd.DataFrame([overall_row])

    # ── save ───────────────────────────────────────────────────────────────────
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    per_rule_csv = out / f"{model_tag}_per_rule.csv"
    overall_csv  = out / f"{model_tag}_overall.csv"

    df_per_rule.to_csv(per_rule_csv, index=False)
    df_overall.to_csv(overall_csv,   index=False)

    print(f"\nOverall results for '{model_tag}':")
    print(df_overall.to_string(index=False))
    print(f"\nPer-rule results:\n{df_per_rule.to_string(index=False)}")
    print(f"\nSaved:\n  {per_rule_csv}\n  {overall_csv}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="python -m doc_auditor.eval.eval_llm",
        description="doc_auditor — evaluate result sets against gold labels.",
    )
    parser.add_argument("--predictions", required=True, nargs="+",
                        help="One or more result .json files written by the runner.")
    parser.add_argument("--gold",        default="data/gold_labels.json",
                        help="Path to gold_labels.json.")
    parser.add_argument("--out-dir",     default="results/metrics",
                        help="Directory to save CSV results.")
    parser.add_argument("--model-tag",   required=True,
                        help="Short identifier for this model run (used in filenames).")
    args = parser.parse_args()

    run_eval(
        predictions_paths=args.predictions,
        gold_path=args.gold,
        out_dir=args.out_dir,
        model_tag=args.model_tag,
    )


if __name__ == "__main__":
    main()
