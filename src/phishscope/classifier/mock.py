"""Mock classifier for demo/testing.

Returns a fixed or hash-derived verdict without calling a real model, so
the scan pipeline and dashboard can be exercised offline.
"""

from __future__ import annotations

import hashlib

from phishscope.classifier.base import ClassifierBase
from phishscope.models.domain import RISK_LEVELS, ScanType
from phishscope.models.types import ClassificationResult, IndicatorOut


class MockClassifier(ClassifierBase):
    """Deterministic classifier.

    With a preset result every call returns it. Otherwise the verdict is
    derived from a hash of the input, so the same content always gets the
    same verdict.
    """

    def __init__(self, result: ClassificationResult | None = None):
        """Initialize mock classifier.

        Args:
            result: Optional verdict to return for every call.
        """
        self.result = result
        self.calls: list[tuple[str, ScanType]] = []

    def classify(self, content: str, scan_type: ScanType) -> ClassificationResult:
        self.calls.append((content, scan_type))
        if self.result is not None:
            return self.result.model_copy(deep=True)

        digest = hashlib.sha256(f"{scan_type}:{content}".encode()).digest()
        risk_level = RISK_LEVELS[digest[0] % len(RISK_LEVELS)]
        confidence = digest[1] % 101

        indicators = []
        if risk_level != "safe":
            indicators.append(
                IndicatorOut(
                    type="mock_indicator",
                    severity="danger" if risk_level in ("high", "critical") else "warning",
                    description=f"Synthetic {risk_level} indicator",
                )
            )

        return ClassificationResult(
            risk_level=risk_level,
            confidence_score=confidence,
            indicators=indicators,
            summary=f"Mock verdict for {scan_type} content",
            recommendations="No action required (mock classifier)",
        )
