"""Classifier core: normalization, similarity, catalog index and decision rule."""

from intent_matcher.services.catalog_index import CatalogIndex, IndexCache, build_index
from intent_matcher.services.intent_classifier import (
    ClassificationOptions,
    ClassificationResult,
    classify,
    classify_batch,
    classify_intent,
)

__all__ = [
    "CatalogIndex",
    "ClassificationOptions",
    "ClassificationResult",
    "IndexCache",
    "build_index",
    "classify",
    "classify_batch",
    "classify_intent",
]
