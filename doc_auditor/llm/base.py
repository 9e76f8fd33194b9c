"""Model client interface shared by every inference provider."""
from abc import ABC, abstractmethod


class LLMClient(ABC):
    name: str = "unknown"
    model: str = ""

    @abstractmethod
    def generate(self, system: str, user: str) -> str:
        """Send the auditor framing and the rule prompt, return the raw reply."""
        raise NotImplementedError

    @property
    def tag(self) -> str:
        """Short identifier used in result files, e.g. ``gemini_gemini-2.0-flash``."""
        model = (self.model or "default").replace(":", "_").replace("/", "_")
        return f"{self.name}_{model}"
