"""Classifier adapters for the external classification service.

Structure:
- classifier/base.py    - interface and ClassificationError
- classifier/gateway.py - hosted LLM gateway over HTTP
- classifier/mock.py    - deterministic offline verdicts
"""

import os

from phishscope.classifier.base import ClassificationError, ClassifierBase
from phishscope.classifier.gateway import GatewayClassifier
from phishscope.classifier.mock import MockClassifier


def get_classifier() -> ClassifierBase:
    """Build the classifier selected by PHISHSCOPE_CLASSIFIER.

    "mock" selects MockClassifier; anything else the gateway client.
    """
    if os.environ.get("PHISHSCOPE_CLASSIFIER", "gateway").lower() == "mock":
        return MockClassifier()
    return GatewayClassifier()


__all__ = [
    "ClassificationError",
    "ClassifierBase",
    "GatewayClassifier",
    "MockClassifier",
    "get_classifier",
]
