from typing import Any, Dict, List, Sequence
import re

from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from ..common.schema import Verdict, VerdictStatus


def normalize_text(s: str) -> str:
    s = s.lower()
    s = re.sub(r"\s+", " ", s)
    return s.strip()


def tfidf_ir_predict(
    document_text: str,
    rules: Sequence[str],
    threshold: float = 0.10,
) -> List[Dict[str, Any]]:
    """
    For each rule compute cosine similarity between the document text and the
    rule text. If similarity >= threshold => pass else fail.
    Confidence is the similarity scaled to 0-100.
    """
    if not rules:
        return []

    doc = normalize_text(document_text)
    if not doc:
        return [
            Verdict(
                rule=r,
                status=VerdictStatus.FAIL,
                evidence="N/A",
                reasoning="Document has no extractable text.",
                confidence=0,
            ).to_dict()
            for r in rules
        ]

    # Fit on document + rules to share vocabulary
    corpus = [doc] + [normalize_text(r) for r in rules]

    vect = TfidfVectorizer(ngram_range=(1, 2), min_df=1)
    X = vect.fit_transform(corpus)

    sim = cosine_similarity(X[:1], X[1:])  # shape: (1, n_rules)

    verdicts = []
    for j, rule in enumerate(rules):
        score = float(sim[0, j])
        status = VerdictStatus.PASS if score >= threshold else VerdictStatus.FAIL
        verdicts.append(Verdict(
            rule=rule,
            status=status,
            evidence=f"cosine_tfidf={score:.3f} (thr={threshold})",
            reasoning="Lexical similarity between rule and document text.",
            confidence=int(round(score * 100)),
        ).to_dict())

    return verdicts
