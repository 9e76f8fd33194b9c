from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Union


class VerdictStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"


FALLBACK_EVIDENCE = "N/A"
FALLBACK_REASONING = "Invalid JSON returned by model"
FALLBACK_CONFIDENCE = 10


@dataclass
class Verdict:
    rule: str
    status: VerdictStatus
    evidence: str
    reasoning: str
    confidence: Union[int, float]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def fallback(cls, rule: str) -> "Verdict":
        """Low-confidence failure used when the model reply cannot be used."""
        return cls(
            rule=rule,
            status=VerdictStatus.FAIL,
            evidence=FALLBACK_EVIDENCE,
            reasoning=FALLBACK_REASONING,
            confidence=FALLBACK_CONFIDENCE,
        )
