"""
ThresholdEvaluator - Compares a star count against the configured thresholds.

The error threshold is checked first; a repository below it is never
additionally reported as a warning.
"""

from dataclasses import dataclass
from typing import Optional

from models import Configuration, Severity


@dataclass(frozen=True)
class Verdict:
    """Threshold crossed by one import."""
    severity: Severity
    threshold: int
    stars: int

    def describe(self, import_path: str) -> str:
        """Human readable reason naming the import and the threshold."""
        level = "error" if self.severity is Severity.ERROR else "warn"
        return (
            f"{import_path} has {self.stars} stars, "
            f"below the {level} threshold of {self.threshold}"
        )


class ThresholdEvaluator:
    """
    Evaluates popularity metrics against a Configuration.

    Comparisons are strict: a count equal to a threshold passes.
    """

    def __init__(self, config: Configuration):
        """
        Initialize evaluator.

        Args:
            config: Run configuration with warn/error thresholds
        """
        self.config = config

    def evaluate(self, stars: int) -> Optional[Verdict]:
        """
        Evaluate a star count.

        Args:
            stars: Non-negative star count

        Returns:
            Verdict for the crossed threshold, or None
        """
        if stars < self.config.error:
            return Verdict(Severity.ERROR, self.config.error, stars)

        if stars < self.config.warn:
            return Verdict(Severity.WARN, self.config.warn, stars)

        return None
