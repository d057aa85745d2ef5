"""Base classifier interface.

- Classifier adapter: narrow interface `classify(content, scan_type) -> verdict`
- Forbidden: DB writes, aggregation logic, UI shaping
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from phishscope.models.domain import ScanType
from phishscope.models.types import ClassificationResult


class ClassificationError(Exception):
    """Classification failed with a user-facing message.

    status_code follows the HTTP status the API should answer with:
    400 malformed input, 401 unauthenticated, 402 quota exhausted,
    429 rate limited, 500 anything else.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ClassifierBase(ABC):
    """Abstract base class for phishing classifiers.

    Classifiers are opaque oracles: they return a verdict for a piece of
    content and must NOT persist anything.
    """

    @abstractmethod
    def classify(self, content: str, scan_type: ScanType) -> ClassificationResult:
        """Classify content for phishing risk.

        Args:
            content: Sanitized content, at most MAX_CONTENT_LENGTH chars.
            scan_type: Kind of content being analyzed.

        Returns:
            ClassificationResult with risk level, confidence and indicators.

        Raises:
            ClassificationError: If the verdict could not be produced.
        """
        pass
