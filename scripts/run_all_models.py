"""
scripts/run_all_models.py
─────────────────────────
Read configs/models.yaml and, for every configured model:
  1. Run python -m doc_auditor.llm.runner once per PDF  (prediction)
  2. Run python -m doc_auditor.eval.eval_llm           (evaluation)
then aggregate overall metrics into results/metrics/summary.csv.

Usage
-----
  # Full run (requires API keys / Ollama running):
  python scripts/run_all_models.py

  # Dry-run (prints the commands, no API calls):
  python scripts/run_all_models.py --dry-run

  # Skip PDFs whose result file already exists:
  python scripts/run_all_models.py --skip-existing
"""
from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

import pandas as pd
import yaml


REPO_ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = REPO_ROOT / "configs" / "models.yaml"
METRICS_DIR = REPO_ROOT / "results" / "metrics"
SUMMARY_PATH = METRICS_DIR / "summary.csv"


def load_config(path: Path = CONFIG_PATH) -> dict:
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def run_cmd(cmd: list[str], dry_run: bool = False) -> int:
    """Run a command as a subprocess; return exit code."""
    display = " ".join(str(c) for c in cmd)
    print(f"\n>>> {display}")
    if dry_run:
        print("    [DRY-RUN] skipped.")
        return 0
    result = subprocess.run(cmd, cwd=str(REPO_ROOT))
    return result.returncode


def main() -> None:
    parser = argparse.ArgumentParser(
        description="doc_auditor — run all models defined in configs/models.yaml"
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Print commands without executing them.")
    parser.add_argument("--skip-existing", action="store_true",
                        help="Skip prediction for PDFs whose result file already exists.")
    parser.add_argument("--eval-only", action="store_true",
                        help="Skip prediction step, only run evaluation.")
    args = parser.parse_args()

    cfg   = load_config()
    runs  = cfg.get("runs", [])
    pdfs  = cfg.get("pdfs", [])
    rules = cfg.get("rules", "data/rules.json")
    gold  = cfg.get("gold",  "data/gold_labels.json")

    if not runs or not pdfs:
        print("[ERROR] configs/models.yaml needs both 'runs' and 'pdfs'", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(runs)} run(s) x {len(pdfs)} PDF(s) from {CONFIG_PATH}")
    overall_records: list[dict] = []
    failed: list[str] = []

    for run in runs:
        tag      = run["tag"]
        provider = run["provider"]
        model    = run.get("model", "")
        workers  = str(run.get("workers", 1))
        temp     = str(run.get("temperature", 0))
        out_dir  = f"results/predictions/{tag}"

        print(f"\n{'='*60}")
        print(f"  Model: {tag}  ({provider} / {model or 'default'})")
        print(f"{'='*60}")

        # ── Step 1: prediction ─────────────────────────────────────────────────
        out_paths = []
        for pdf in pdfs:
            out_path = f"{out_dir}/{Path(pdf).stem}.json"
            out_paths.append(out_path)

            if args.eval_only or (args.skip_existing and (REPO_ROOT / out_path).exists()):
                print(f"  Skipping prediction for {pdf} (output exists or eval-only).")
                continue

            runner_cmd = [
                sys.executable, "-m", "doc_auditor.llm.runner",
                "--provider",    provider,
                "--pdf",         pdf,
                "--rules",       rules,
                "--out",         out_path,
                "--workers",     workers,
                "--temperature", temp,
            ]
            if model:
                runner_cmd += ["--model", model]

            rc = run_cmd(runner_cmd, dry_run=args.dry_run)
            if rc != 0:
                print(f"[WARN] Runner exited with code {rc} for '{tag}' on {pdf}. Continuing.")
                failed.append(f"{tag} (runner: {pdf})")

        # ── Step 2: evaluation ─────────────────────────────────────────────────
        if args.dry_run:
            print(f"  [DRY-RUN] Would run eval for '{tag}'.")
            continue

        existing = [p for p in out_paths if (REPO_ROOT / p).exists()]
        if not existing:
            print(f"[WARN] No predictions found for '{tag}'. Skipping eval.")
            failed.append(f"{tag} (eval — no predictions)")
            continue

        eval_cmd = [
            sys.executable, "-m", "doc_auditor.eval.eval_llm",
            "--predictions", *existing,
            "--gold",        gold,
            "--out-dir",     "results/metrics",
            "--model-tag",   tag,
        ]
        rc = run_cmd(eval_cmd)
        if rc != 0:
            print(f"[WARN] Eval exited with code {rc} for '{tag}'.")
            failed.append(f"{tag} (eval)")
            continue

        overall_csv = METRICS_DIR / f"{tag}_overall.csv"
        if overall_csv.exists():
            df = pd.read_csv(overall_csv)
            overall_records.append(df.iloc[0].to_dict())

    # ── Aggregate summary ──────────────────────────────────────────────────────
    if overall_records:
        METRICS_DIR.mkdir(parents=True, exist_ok=True)
        summary = pd.DataFrame(overall_records)
        if "accuracy" in summary.columns:
            summary = summary.sort_values("accuracy", ascending=False)
        summary.to_csv(SUMMARY_PATH, index=False)
        print(f"\n{'='*60}")
        print("SUMMARY (all models):")
        print(summary.to_string(index=False))
        print(f"\nSaved to {SUMMARY_PATH}")
    elif not args.dry_run:
        print("\n[INFO] No completed evaluations to aggregate.")

    if failed:
        print(f"\n[WARN] Failed steps: {failed}")
        sys.exit(1)

    print("\nAll done.")


if __name__ == "__main__":
    main()
