from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..common.schema import FALLBACK_REASONING, VerdictStatus


@dataclass
class Prediction:
    document: str
    model: str
    rule: str
    status: str
    confidence: float
    fallback: bool = False


def to_binary(status: str) -> int:
    """Binary label: 1 if fail (rule violated) else 0."""
    return 1 if status == VerdictStatus.FAIL.value else 0


def precision_recall_f1(tp: int, fp: int, fn: int) -> Tuple[float, float, float]:
    p = tp / (tp + fp) if (tp + fp) else 0.0
    r = tp / (tp + fn) if (tp + fn) else 0.0
    f1 = 2 * p * r / (p + r) if (p + r) else 0.0
    return p, r, f1


def is_fallback(verdict: Dict) -> bool:
    return verdict.get("reasoning") == FALLBACK_REASONING and verdict.get("evidence") == "N/A"


def evaluate(preds: List[Prediction], gold: Dict[str, Dict[str, str]]) -> Dict:
    """
    Returns:
      - per_rule: {rule: {n, correct, tp, fp, fn, accuracy, precision, recall, f1,
                          fallback_rate, mean_confidence}}
      - overall: micro accuracy and macro P/R/F1 over rules
    Predictions whose document or rule has no gold label are ignored.
    """
    by_rule = defaultdict(list)
    for pr in preds:
        if pr.rule in gold.get(pr.document, {}):
            by_rule[pr.rule].append(pr)

    per_rule = {}
    macro_p = macro_r = macro_f1 = 0.0
    n_correct = n_total = 0

    for rule, rule_preds in by_rule.items():
        tp = fp = fn = correct = fallbacks = 0
        conf_sum = 0.0

        for pr in rule_preds:
            gold_is_fail = to_binary(gold[pr.document][pr.rule])
            pred_is_fail = to_binary(pr.status)

            if pred_is_fail == gold_is_fail:
                correct += 1
            if pred_is_fail == 1 and gold_is_fail == 1:
                tp += 1
            elif pred_is_fail == 1 and gold_is_fail == 0:
                fp += 1
            elif pred_is_fail == 0 and gold_is_fail == 1:
                fn += 1
            if pr.fallback:
                fallbacks += 1
            conf_sum += pr.confidence

        n = len(rule_preds)
        p, r, f1 = precision_recall_f1(tp, fp, fn)
        per_rule[rule] = {
            "n": n, "correct": correct, "tp": tp, "fp": fp, "fn": fn,
            "accuracy": correct / n,
            "precision": p, "recall": r, "f1": f1,
            "fallback_rate": fallbacks / n,
            "mean_confidence": conf_sum / n,
        }

        macro_p += p
        macro_r += r
        macro_f1 += f1
        n_correct += correct
        n_total += n

    n_rules = len(per_rule)
    overall = {
        "accuracy": n_correct / n_total if n_total else 0.0,
        "macro_precision": macro_p / n_rules if n_rules else 0.0,
        "macro_recall": macro_r / n_rules if n_rules else 0.0,
        "macro_f1": macro_f1 / n_rules if n_rules else 0.0,
    }

    return {"per_rule": per_rule, "overall": overall}
