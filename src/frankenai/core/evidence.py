"""Ordered confidence accumulation.

Detection heuristics record named steps instead of mutating a running
float. The final confidence is a fixed-order fold over the steps,
clamped to [0, 1] once at the end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from frankenai.core.models import DetectionResult


@dataclass(frozen=True)
class EvidenceStep:
    """One weighted check. ``scale`` steps multiply instead of add."""

    label: str
    weight: float
    scale: bool = False


class EvidenceCollector:
    """Collects weighted evidence for one ``detect`` call."""

    def __init__(self) -> None:
        self._steps: List[EvidenceStep] = []

    @property
    def steps(self) -> List[EvidenceStep]:
        return list(self._steps)

    def add(self, weight: float, label: str) -> None:
        self._steps.append(EvidenceStep(label=label, weight=weight))

    def add_if(self, condition: Any, weight: float, label: str) -> bool:
        """Add ``weight`` when ``condition`` is truthy; return the condition."""
        if condition:
            self.add(weight, label)
            return True
        return False

    def scale(self, factor: float, label: str) -> None:
        self._steps.append(EvidenceStep(label=label, weight=factor, scale=True))

    @property
    def raw_score(self) -> float:
        score = 0.0
        for step in self._steps:
            if step.scale:
                score *= step.weight
            else:
                score += step.weight
        return score

    @property
    def confidence(self) -> float:
        return min(max(self.raw_score, 0.0), 1.0)

    @property
    def evidence(self) -> List[str]:
        return [step.label for step in self._steps]

    def result(
        self,
        threshold: float,
        *,
        inclusive: bool = False,
        excludes: Optional[Iterable[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> DetectionResult:
        """Build the final DetectionResult against a module threshold.

        Args:
            threshold: Module-specific detection threshold.
            inclusive: Detect at ``confidence >= threshold`` instead of ``>``.
            excludes: Module ids made redundant when this one is detected.
            metadata: Free-form diagnostic detail.
        """
        confidence = self.confidence
        passed = confidence >= threshold if inclusive else confidence > threshold
        detected = passed and confidence > 0.0
        return DetectionResult(
            detected=detected,
            confidence=confidence,
            evidence=self.evidence,
            excludes=list(excludes) if detected and excludes else None,
            metadata=dict(metadata or {}),
        )
