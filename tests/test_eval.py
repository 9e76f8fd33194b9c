"""Tests for result-set evaluation."""

import json

import pandas as pd
import pytest

from doc_auditor.common.schema import Verdict
from doc_auditor.eval.eval_llm import load_predictions, run_eval
from doc_auditor.eval.metrics import Prediction, evaluate, is_fallback, precision_recall_f1

GOLD = {
    "policy": {"Rule A": "pass", "Rule B": "fail"},
    "memo": {"Rule A": "fail", "Rule B": "fail"},
}


def _pred(document, rule, status, confidence=80, fallback=False):
    return Prediction(document=document, model="m", rule=rule, status=status,
                      confidence=confidence, fallback=fallback)


class TestMetrics:
    """Tests for evaluate."""

    def test_precision_recall_f1_zero_division(self):
        assert precision_recall_f1(0, 0, 0) == (0.0, 0.0, 0.0)

    def test_perfect_predictions(self):
        preds = [
            _pred("policy", "Rule A", "pass"),
            _pred("policy", "Rule B", "fail"),
            _pred("memo", "Rule A", "fail"),
            _pred("memo", "Rule B", "fail"),
        ]

        results = evaluate(preds, GOLD)

        assert results["overall"]["accuracy"] == 1.0
        assert results["per_rule"]["Rule A"]["f1"] == 1.0

    def test_mixed_predictions(self):
        preds = [
            _pred("policy", "Rule A", "fail", confidence=10, fallback=True),
            _pred("memo", "Rule A", "pass", confidence=50),
        ]

        rule_a = evaluate(preds, GOLD)["per_rule"]["Rule A"]

        assert rule_a["accuracy"] == 0.0
        assert rule_a["fp"] == 1
        assert rule_a["fn"] == 1
        assert rule_a["fallback_rate"] == 0.5
        assert rule_a["mean_confidence"] == 30.0

    def test_unlabelled_predictions_ignored(self):
        preds = [_pred("other", "Rule A", "pass"), _pred("policy", "Rule Z", "pass")]

        results = evaluate(preds, GOLD)

        assert results["per_rule"] == {}
        assert results["overall"]["accuracy"] == 0.0

    def test_is_fallback(self):
        assert is_fallback(Verdict.fallback("Rule A").to_dict())
        assert not is_fallback({"rule": "Rule A", "status": "fail", "evidence": "N/A",
                                "reasoning": "No date found.", "confidence": 40})


class TestEvalCli:
    """Tests for load_predictions and run_eval."""

    def _write(self, path, document, results):
        path.write_text(json.dumps({"document": document, "model": "fake_scripted",
                                    "results": results}), encoding="utf-8")
        return str(path)

    def test_load_predictions_skips_error_bodies(self, tmp_path):
        good = self._write(tmp_path / "policy.json", "policy", [
            {"rule": "Rule A", "status": "pass", "evidence": "x", "reasoning": "y", "confidence": 90},
            Verdict.fallback("Rule B").to_dict(),
        ])
        bad = tmp_path / "broken.json"
        bad.write_text(json.dumps({"error": "Processing failed"}), encoding="utf-8")

        preds = load_predictions([good, str(bad)])

        assert [(p.rule, p.status, p.fallback) for p in preds] == [
            ("Rule A", "pass", False),
            ("Rule B", "fail", True),
        ]

    def test_missing_predictions_file_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            load_predictions([str(tmp_path / "nope.json")])

    def test_run_eval_writes_csvs(self, tmp_path):
        preds = self._write(tmp_path / "policy.json", "policy", [
            {"rule": "Rule A", "status": "pass", "evidence": "x", "reasoning": "y", "confidence": 90},
            {"rule": "Rule B", "status": "pass", "evidence": "x", "reasoning": "y", "confidence": 70},
        ])
        gold = tmp_path / "gold.json"
        gold.write_text(json.dumps(GOLD), encoding="utf-8")
        out_dir = tmp_path / "metrics"

        run_eval([preds], str(gold), str(out_dir), "fake")

        overall = pd.read_csv(out_dir / "fake_overall.csv")
        per_rule = pd.read_csv(out_dir / "fake_per_rule.csv")
        assert overall.loc[0, "accuracy"] == 0.5
        assert overall.loc[0, "n_predictions"] == 2
        assert sorted(per_rule["rule"]) == ["Rule A", "Rule B"]
